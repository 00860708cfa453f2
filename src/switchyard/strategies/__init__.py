"""Strategy dispatch: capability interface, registry and dispatchers.

Usage:
    from switchyard.strategies import Dispatcher, StrategyRegistry, PercentageStrategy

    registry = StrategyRegistry("pricing")
    registry.register("percentage", PercentageStrategy(0.10))
    registry.freeze()

    Dispatcher.from_registry(registry, "percentage").process(100)  # 10.0
"""

from switchyard.strategies.base import (
    CallableStrategy,
    Capability,
    Strategy,
    ensure_capability,
    require_non_negative,
)
from switchyard.strategies.builtin import FixedStrategy, PercentageStrategy
from switchyard.strategies.dispatcher import CapabilityDispatcher, Dispatcher
from switchyard.strategies.registry import (
    StrategyRegistry,
    get_default_registry,
    register_strategy,
    reset_default_registry,
)

__all__ = [
    # Capability interface
    "Capability",
    "Strategy",
    "CallableStrategy",
    "ensure_capability",
    "require_non_negative",
    # Built-in strategies
    "PercentageStrategy",
    "FixedStrategy",
    # Registry
    "StrategyRegistry",
    "get_default_registry",
    "reset_default_registry",
    "register_strategy",
    # Dispatchers
    "Dispatcher",
    "CapabilityDispatcher",
]
