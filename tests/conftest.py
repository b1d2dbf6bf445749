"""Shared fixtures and helpers for tests."""

import random
from pathlib import Path

import pytest

from matchingref.core.demo import DemoValues

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rng() -> random.Random:
    """Return a seeded generator so example values repeat between runs."""
    return random.Random(1234)


@pytest.fixture
def demo(rng: random.Random) -> DemoValues:
    return DemoValues(rng)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MATCHINGREF_EMBEDDED", raising=False)
    monkeypatch.delenv("MATCHINGREF_BASE_URL", raising=False)
