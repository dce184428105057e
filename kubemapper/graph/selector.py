"""Label selector matching.

Only equality-based ``matchLabels`` selectors are supported, which is what a
Service's ``spec.selector`` carries. An empty selector selects nothing: a
Service without a selector has its endpoints managed by hand, not by label.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol, TypeVar


class Labeled(Protocol):
    @property
    def labels(self) -> Mapping[str, str]: ...


_T = TypeVar("_T", bound=Labeled)


def selector_matches(selector: Mapping[str, str], labels: Mapping[str, str]) -> bool:
    """Return True if *labels* satisfy every key/value pair of *selector*."""
    if not selector:
        return False
    return all(key in labels and labels[key] == value for key, value in selector.items())


def match_selector(selector: Mapping[str, str], objects: Iterable[_T]) -> list[_T]:
    """Return the objects whose labels satisfy *selector*.

    The result keeps input order, which carries no meaning; callers sort
    before presenting it.
    """
    if not selector:
        return []
    return [obj for obj in objects if selector_matches(selector, obj.labels)]


def format_selector(selector: Mapping[str, str]) -> str:
    """Format a selector as ``k1=v1,k2=v2`` sorted by key."""
    return ",".join(f"{key}={selector[key]}" for key in sorted(selector))
