"""Capability interface: the one contract every strategy satisfies.

Manifesto:
    Callers hold a ``Capability`` and call ``apply``. They never ask which
    concrete strategy they hold, so adding a variant never touches them.

    A strategy is a small, self-contained unit: it owns its construction
    parameters (a rate, a constant) and nothing else. There is no shared
    base-class state; ``Strategy`` only fixes the method signature.

Architecture:
    ::

        Capability (Protocol)          ← structural: anything with apply()
          ├── Strategy (ABC)           ← nominal base for class strategies
          │     ├── PercentageStrategy
          │     └── FixedStrategy
          └── CallableStrategy         ← adapts a plain function

        ensure_capability(obj)         ← seam validation (registry, dispatcher)
        require_non_negative(value)    ← shared input guard for strategies

Tags:
    switchyard, strategy, protocol, capability, interface
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, fields, is_dataclass
from numbers import Real
from typing import Any, Protocol, runtime_checkable

from switchyard.core.errors import InvalidInputError, InvalidStrategyError, MissingStrategyError


@runtime_checkable
class Capability(Protocol):
    """Structural contract: a single ``apply`` taking one domain value."""

    def apply(self, value: Any) -> Any:
        """Compute a result from ``value`` or perform the strategy's side effect."""
        ...


class Strategy(ABC):
    """
    Nominal base for class-based strategies.

    Subclasses implement ``apply`` and may set ``key`` to the name they are
    usually registered under. Strategies are immutable after construction;
    the built-in ones are frozen dataclasses.

    Raises:
        InvalidInputError: From ``apply`` when the input is outside the
            strategy's accepted range. Any other failure is a bug.
    """

    key: str | None = None

    @abstractmethod
    def apply(self, value: Any) -> Any:
        """Apply the strategy to ``value``."""

    def describe(self) -> dict[str, Any]:
        """Summarize the strategy for registry introspection."""
        info: dict[str, Any] = {"key": self.key, "type": type(self).__name__}
        if is_dataclass(self):
            info["params"] = {
                f.name: getattr(self, f.name) for f in fields(self) if f.name != "key"
            }
        return info


@dataclass(frozen=True)
class CallableStrategy(Strategy):
    """Wrap a plain function as a strategy: ``apply(value) == func(value)``."""

    func: Callable[[Any], Any]
    key: str | None = None

    def apply(self, value: Any) -> Any:
        return self.func(value)

    def describe(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "type": type(self).__name__,
            "func": getattr(self.func, "__qualname__", repr(self.func)),
        }


def ensure_capability(obj: Any, *, key: str | None = None) -> Any:
    """
    Check that ``obj`` can be bound as a strategy and return it unchanged.

    Args:
        obj: Candidate strategy
        key: Key being registered/bound, used in the error context

    Raises:
        MissingStrategyError: ``obj`` is None
        InvalidStrategyError: ``obj`` has no callable ``apply``
    """
    if obj is None:
        error = MissingStrategyError()
        if key is not None:
            error.with_context(strategy_key=key)
        raise error
    if not callable(getattr(obj, "apply", None)):
        error = InvalidStrategyError(obj)
        if key is not None:
            error.with_context(strategy_key=key)
        raise error
    return obj


def require_non_negative(value: Any, *, field: str = "amount") -> Any:
    """
    Reject anything that is not a non-negative real number.

    ``bool`` is refused even though it is an ``int`` subclass.

    Raises:
        InvalidInputError: ``value`` is not a real number or is negative
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            value=value,
            constraint="numeric",
        )
    if value < 0:
        raise InvalidInputError(
            f"{field} must be non-negative, got {value}",
            field=field,
            value=value,
            constraint=">= 0",
        )
    return value


__all__ = [
    "Capability",
    "Strategy",
    "CallableStrategy",
    "ensure_capability",
    "require_non_negative",
]
