"""Pytest fixtures and configuration."""

from collections.abc import Callable

import pytest

from violeta.processing.models import TechnicalSnapshot


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests by default unless -m integration is specified."""
    # Check if user explicitly requested integration tests
    markexpr = config.getoption("-m", default="")
    if "integration" in markexpr:
        return

    skip_integration = pytest.mark.skip(reason="Integration test - run with: pytest -m integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def make_snapshot() -> Callable[..., TechnicalSnapshot]:
    """Build a TechnicalSnapshot with neutral defaults."""

    def _make(**kwargs: object) -> TechnicalSnapshot:
        data: dict[str, object] = {"symbol": "NVDA", "price": 100.0, "volume": 0}
        data.update(kwargs)
        return TechnicalSnapshot(**data)  # type: ignore[arg-type]

    return _make
