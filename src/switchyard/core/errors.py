"""
Structured error types for switchyard.

Every failure the dispatch core can signal is a typed ``SwitchyardError``
subclass carrying a category and structured context, so calling code can
tell a bad input apart from a missing registration or a wiring mistake
without parsing messages.

Manifesto:
    - **Typed Error Hierarchy:** One class per failure kind, never a bare
      ``Exception``
    - **Distinguishable outcomes:** Invalid input, unknown key and missing
      binding live in separate branches of the tree
    - **Rich Context:** Errors carry the strategy key and registry name
    - **Pass-through:** The core raises these, it never catches them

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      SwitchyardError                          │
        │              (category, context, cause)                       │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  InvalidInputError      StrategyNotFoundError   ConfigError   │
        │  (VALIDATION,           (LOOKUP,                (CONFIG)      │
        │   ValueError)            LookupError)               │         │
        │                              │              MissingStrategy   │
        │                  CapabilityNotSupported     InvalidStrategy   │
        │                                             DuplicateStrategy │
        │                                             RegistryFrozen    │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = StrategyNotFoundError("unknown", available=["fixed"])
    >>> error.category
    <ErrorCategory.LOOKUP: 'LOOKUP'>
    >>> error.with_context(registry="pricing").context.registry
    'pricing'

Guardrails:
    ❌ DON'T: Raise ``KeyError`` from a lookup - callers can't tell it apart
    ✅ DO: Raise ``StrategyNotFoundError`` with the available keys

    ❌ DON'T: Catch and log errors inside the dispatch path
    ✅ DO: Let them propagate to the composition root

Tags:
    error-handling, exception-hierarchy, error-context, switchyard
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories for classification and reporting."""

    VALIDATION = "VALIDATION"  # Input outside a strategy's accepted range
    CONFIG = "CONFIG"          # Wiring mistakes (missing/invalid binding)
    LOOKUP = "LOOKUP"          # Unknown strategy key or capability
    INTERNAL = "INTERNAL"      # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        strategy_key: Key that was being registered or resolved
        registry: Name of the registry involved
        capability: Capability name for multi-capability dispatchers
        metadata: Additional key-value pairs
    """

    strategy_key: str | None = None
    registry: str | None = None
    capability: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["strategy_key", "registry", "capability"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


def format_key(key: Hashable) -> str:
    """Render a strategy key (str or Enum member) for messages and logs."""
    if isinstance(key, Enum):
        return f"{type(key).__name__}.{key.name}"
    return str(key)


class SwitchyardError(Exception):
    """
    Base exception for all switchyard errors.

    Subclasses set ``default_category``; callers may override it per
    instance. ``cause`` is chained as ``__cause__`` so tracebacks keep the
    original failure.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SwitchyardError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StrategyNotFoundError(key).with_context(registry="pricing")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# INVALID INPUT
# =============================================================================


class InvalidInputError(SwitchyardError, ValueError):
    """
    A strategy received a value outside its accepted range.

    Raised by strategies themselves, never by the dispatcher, and
    propagated to the caller unchanged.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


# =============================================================================
# NOT FOUND
# =============================================================================


class StrategyNotFoundError(SwitchyardError, LookupError):
    """No strategy is registered under the requested key."""

    default_category = ErrorCategory.LOOKUP

    def __init__(
        self,
        key: Hashable,
        *,
        available: Iterable[Hashable] = (),
        message: str | None = None,
        **kwargs: Any,
    ):
        self.key = key
        self.available = sorted(format_key(k) for k in available)
        if message is None:
            message = (
                f"No strategy registered for {format_key(key)!r}. "
                f"Available: {', '.join(self.available) or 'none'}"
            )
        super().__init__(message, **kwargs)
        self.context.strategy_key = format_key(key)


class CapabilityNotSupportedError(StrategyNotFoundError):
    """A multi-capability dispatcher has nothing bound for the capability."""

    def __init__(self, capability: str, *, available: Iterable[str] = (), **kwargs: Any):
        names = sorted(available)
        super().__init__(
            capability,
            available=names,
            message=f"Capability {capability!r} is not supported. Available: {', '.join(names) or 'none'}",
            **kwargs,
        )
        self.capability = capability
        self.context.capability = capability


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(SwitchyardError):
    """Wiring mistake made by the composition root. Never recoverable at runtime."""

    default_category = ErrorCategory.CONFIG


class MissingStrategyError(ConfigError):
    """A dispatcher or registry was handed no strategy at all."""

    def __init__(self, message: str | None = None, **kwargs: Any):
        super().__init__(message or "A strategy must be bound; got None", **kwargs)


class InvalidStrategyError(ConfigError):
    """The object offered as a strategy does not expose a callable ``apply``."""

    def __init__(self, obj: Any, message: str | None = None, **kwargs: Any):
        self.obj = obj
        super().__init__(
            message or f"{type(obj).__name__} does not implement apply(value)",
            **kwargs,
        )


class DuplicateStrategyError(ConfigError):
    """Re-registration attempted on a registry that forbids overwrites."""

    def __init__(self, key: Hashable, **kwargs: Any):
        self.key = key
        super().__init__(f"Strategy {format_key(key)!r} is already registered", **kwargs)
        self.context.strategy_key = format_key(key)


class RegistryFrozenError(ConfigError):
    """Mutation attempted on a registry after ``freeze()``."""

    def __init__(self, registry: str, operation: str = "register", **kwargs: Any):
        self.operation = operation
        super().__init__(f"Registry {registry!r} is frozen; cannot {operation}", **kwargs)
        self.context.registry = registry


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SwitchyardError",
    "InvalidInputError",
    "StrategyNotFoundError",
    "CapabilityNotSupportedError",
    "ConfigError",
    "MissingStrategyError",
    "InvalidStrategyError",
    "DuplicateStrategyError",
    "RegistryFrozenError",
    "format_key",
]
