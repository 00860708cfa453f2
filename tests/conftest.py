"""
Shared pytest fixtures and configuration for switchyard tests.

This module provides:
- Registry, settings and logging-context cleanup for test isolation
- Sample strategies and a pre-wired registry

Usage:
    Fixtures are auto-discovered by pytest. Use them as function
    arguments (pytest injects them automatically).
"""

import sys
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure switchyard package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from switchyard.core.logging import clear_context
from switchyard.core.settings import reset_settings
from switchyard.strategies import (
    FixedStrategy,
    PercentageStrategy,
    StrategyRegistry,
    reset_default_registry,
)


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.path).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        # Mark all tests without explicit markers as unit tests
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_global_state() -> Generator[None, None, None]:
    """
    Reset the default registry, cached settings and log context.

    This ensures test isolation - no test can affect another by leaving
    strategies registered or environment-derived settings cached.
    """
    reset_default_registry()
    reset_settings()
    clear_context()
    yield
    reset_default_registry()
    reset_settings()
    clear_context()


# =============================================================================
# Sample Strategies
# =============================================================================


class RecordingStrategy:
    """Duck-typed strategy that records every input it sees."""

    def __init__(self, result: Any = "ok"):
        self.result = result
        self.calls: list[Any] = []

    def apply(self, value: Any) -> Any:
        self.calls.append(value)
        return self.result


@pytest.fixture
def recording_strategy() -> RecordingStrategy:
    return RecordingStrategy()


@pytest.fixture
def percentage() -> PercentageStrategy:
    """Ten percent, rejecting negative amounts."""
    return PercentageStrategy(0.10)


@pytest.fixture
def fixed() -> FixedStrategy:
    return FixedStrategy(15)


@pytest.fixture
def registry(percentage: PercentageStrategy, fixed: FixedStrategy) -> StrategyRegistry:
    """Registry with ``percentage`` and ``fixed`` registered."""
    reg = StrategyRegistry("test")
    reg.register("percentage", percentage)
    reg.register("fixed", fixed)
    return reg
