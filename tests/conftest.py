"""Fixtures shared by every kubemapper test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test (e.g. via the CLI) installed."""
    yield
    structlog.reset_defaults()
