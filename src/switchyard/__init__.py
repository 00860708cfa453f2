"""Switchyard -- pluggable strategy registry and dispatcher.

A coordinator delegates behavior to an interchangeable strategy that is
either injected at construction time or resolved by key from a registry.
Adding a variant means registering it, never editing the dispatch code.

Architecture::

    switchyard.core          errors, settings, logging, Result envelope
    switchyard.strategies    Capability, StrategyRegistry, Dispatcher
"""

from switchyard.core.errors import (
    CapabilityNotSupportedError,
    ConfigError,
    InvalidInputError,
    InvalidStrategyError,
    MissingStrategyError,
    StrategyNotFoundError,
    SwitchyardError,
)
from switchyard.strategies import (
    CallableStrategy,
    Capability,
    CapabilityDispatcher,
    Dispatcher,
    FixedStrategy,
    PercentageStrategy,
    Strategy,
    StrategyRegistry,
    register_strategy,
)

__version__ = "0.1.0"

__all__ = [
    "Capability",
    "Strategy",
    "CallableStrategy",
    "PercentageStrategy",
    "FixedStrategy",
    "StrategyRegistry",
    "register_strategy",
    "Dispatcher",
    "CapabilityDispatcher",
    "SwitchyardError",
    "InvalidInputError",
    "StrategyNotFoundError",
    "CapabilityNotSupportedError",
    "ConfigError",
    "MissingStrategyError",
    "InvalidStrategyError",
]
