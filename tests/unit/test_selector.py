"""Tests for label selector matching."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from kubemapper.graph.selector import format_selector, match_selector, selector_matches
from kubemapper.models.resources import PodRecord


def _make_pod(name: str, **labels: str) -> PodRecord:
    return PodRecord(name=name, labels=labels)


class TestSelectorMatches:
    def test_exact_labels_match(self) -> None:
        assert selector_matches({"app": "web"}, {"app": "web"}) is True

    def test_superset_labels_match(self) -> None:
        assert selector_matches({"app": "web"}, {"app": "web", "tier": "frontend"}) is True

    def test_value_mismatch(self) -> None:
        assert selector_matches({"app": "web"}, {"app": "cache"}) is False

    def test_missing_key(self) -> None:
        assert selector_matches({"app": "web", "tier": "frontend"}, {"app": "web"}) is False

    def test_empty_selector_matches_nothing(self) -> None:
        assert selector_matches({}, {"app": "web"}) is False
        assert selector_matches({}, {}) is False

    def test_values_are_case_sensitive(self) -> None:
        assert selector_matches({"app": "Web"}, {"app": "web"}) is False


class TestMatchSelector:
    def test_returns_only_matching_pods(self) -> None:
        pods = [_make_pod("web-1", app="web"), _make_pod("cache-1", app="cache"), _make_pod("web-2", app="web")]
        matched = match_selector({"app": "web"}, pods)
        assert [p.name for p in matched] == ["web-1", "web-2"]

    def test_no_matches_is_empty_not_error(self) -> None:
        assert match_selector({"app": "db"}, [_make_pod("web-1", app="web")]) == []

    def test_empty_selector_selects_nothing(self) -> None:
        pods = [_make_pod("web-1", app="web"), _make_pod("bare")]
        assert match_selector({}, pods) == []

    def test_unlabeled_pod_never_matches(self) -> None:
        assert match_selector({"app": "web"}, [_make_pod("bare")]) == []


class TestFormatSelector:
    def test_sorted_by_key(self) -> None:
        assert format_selector({"tier": "frontend", "app": "web"}) == "app=web,tier=frontend"

    def test_empty(self) -> None:
        assert format_selector({}) == ""


_label_maps = st.dictionaries(
    keys=st.sampled_from(["app", "tier", "env", "team"]),
    values=st.sampled_from(["web", "cache", "prod", "dev"]),
    max_size=4,
)


class TestSelectorProperties:
    @given(selector=_label_maps, label_sets=st.lists(_label_maps, max_size=12))
    def test_match_is_exactly_the_superset_pods(self, selector: dict[str, str], label_sets: list[dict[str, str]]) -> None:
        pods = [PodRecord(name=f"pod-{i}", labels=labels) for i, labels in enumerate(label_sets)]
        matched = match_selector(selector, pods)
        if not selector:
            assert matched == []
        else:
            expected = [p for p in pods if all(p.labels.get(k) == v for k, v in selector.items())]
            assert matched == expected

    @given(label_sets=st.lists(_label_maps, max_size=12))
    def test_empty_selector_always_empty(self, label_sets: list[dict[str, str]]) -> None:
        pods = [PodRecord(name=f"pod-{i}", labels=labels) for i, labels in enumerate(label_sets)]
        assert match_selector({}, pods) == []
