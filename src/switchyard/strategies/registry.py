"""Strategy Registry: injectable key → strategy lookup.

Manifesto:
    A branching conditional keyed on a string tag has to be edited every
    time a variant is added. The registry replaces it with a table: adding
    a strategy is one ``register`` call, and the registry's own code never
    changes. Unknown keys fail loudly with ``StrategyNotFoundError`` so a
    typo in the wiring never turns into a silent default.

ARCHITECTURE
────────────
::

    StrategyRegistry
      ├── .register(key, strategy)   ─ insert or overwrite (last write wins)
      ├── .resolve(key)              ─ identity-preserving lookup
      ├── .keys()                    ─ snapshot of registered keys
      ├── .has(key) / in             ─ existence check
      ├── .unregister(key) / .clear()
      └── .freeze()                  ─ end of startup; mutations now raise

    Decorator (default registry unless one is passed):
      register_strategy(key, **params)

    get_default_registry()     ─ module-level singleton
    reset_default_registry()   ─ clear for testing

CONCURRENCY
───────────
Every method holds the registry's ``RLock``, so registration racing with
resolution is safe. Calling ``freeze()`` once startup wiring is complete
makes the read-only phase explicit.

BEST PRACTICES
──────────────
- Build a ``StrategyRegistry`` in the composition root and pass it in;
  use the default registry only for decorator-driven plugins.
- Call ``reset_default_registry()`` in test fixtures.

Tags:
    switchyard, registry, strategy, lookup, open-closed
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from enum import Enum
from typing import Any

from switchyard.core.errors import (
    DuplicateStrategyError,
    RegistryFrozenError,
    StrategyNotFoundError,
    format_key,
)
from switchyard.core.logging import get_logger
from switchyard.core.settings import get_settings
from switchyard.strategies.base import CallableStrategy, Strategy, ensure_capability

logger = get_logger(__name__)


def _check_key(key: Hashable) -> Hashable:
    if isinstance(key, Enum):
        return key
    if not isinstance(key, str) or not key:
        raise TypeError(f"Strategy key must be a non-empty str or Enum member, got {key!r}")
    return key


class StrategyRegistry:
    """Thread-safe registry of named strategies.

    Keys are strings or Enum members compared by exact match. Values are
    the strategy instances themselves; ``resolve`` hands back the very
    object that was registered.

    Example:
        >>> registry = StrategyRegistry("pricing")
        >>> registry.register("fixed", FixedStrategy(15))
        >>> registry.resolve("fixed").apply(100)
        15
    """

    def __init__(self, name: str = "default", allow_overwrite: bool | None = None):
        self.name = name
        if allow_overwrite is None:
            allow_overwrite = get_settings().allow_overwrite
        self.allow_overwrite = allow_overwrite
        self._strategies: dict[Hashable, Any] = {}
        self._metadata: dict[Hashable, dict[str, Any]] = {}
        self._frozen = False
        self._lock = threading.RLock()

    def register(
        self,
        key: Hashable,
        strategy: Any,
        *,
        description: str | None = None,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Register ``strategy`` under ``key``, replacing any previous binding.

        Args:
            key: Non-empty string or Enum member
            strategy: Object with a callable ``apply``
            description: Optional description for introspection
            tags: Optional tags for filtering/categorization

        Raises:
            MissingStrategyError: ``strategy`` is None
            InvalidStrategyError: ``strategy`` has no callable ``apply``
            DuplicateStrategyError: ``key`` exists and overwrites are disabled
            RegistryFrozenError: The registry has been frozen
        """
        _check_key(key)
        label = format_key(key)
        ensure_capability(strategy, key=label)

        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(self.name, "register").with_context(strategy_key=label)

            replaced = key in self._strategies
            if replaced and not self.allow_overwrite:
                raise DuplicateStrategyError(key).with_context(registry=self.name)

            self._strategies[key] = strategy
            self._metadata[key] = {
                "key": key,
                "type": type(strategy).__name__,
                "description": description or (type(strategy).__doc__ or "").strip().split("\n")[0] or None,
                "tags": dict(tags or {}),
            }

        logger.debug(
            "strategy.overwritten" if replaced else "strategy.registered",
            registry=self.name,
            key=label,
            strategy=type(strategy).__name__,
        )

    def resolve(self, key: Hashable) -> Any:
        """Return the strategy registered under ``key``.

        Raises:
            StrategyNotFoundError: ``key`` is not registered
        """
        with self._lock:
            try:
                return self._strategies[key]
            except (KeyError, TypeError):
                available = list(self._strategies)
        raise StrategyNotFoundError(key, available=available).with_context(registry=self.name)

    def keys(self) -> frozenset[Hashable]:
        """Snapshot of the registered keys."""
        with self._lock:
            return frozenset(self._strategies)

    def has(self, key: Hashable) -> bool:
        """Check if a strategy is registered under ``key``."""
        with self._lock:
            try:
                return key in self._strategies
            except TypeError:
                return False

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._strategies)

    def get_metadata(self, key: Hashable) -> dict[str, Any] | None:
        """Get registration metadata (type, description, tags), or None if absent."""
        with self._lock:
            try:
                metadata = self._metadata.get(key)
            except TypeError:
                return None
            return dict(metadata) if metadata is not None else None

    def list_with_metadata(self) -> list[dict[str, Any]]:
        """List every registration with its metadata, sorted by key."""
        with self._lock:
            result = [dict(m) for m in self._metadata.values()]
        return sorted(result, key=lambda m: format_key(m["key"]))

    def unregister(self, key: Hashable) -> bool:
        """Remove ``key``.

        Returns:
            True if a strategy was removed, False if ``key`` was absent

        Raises:
            RegistryFrozenError: The registry has been frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(self.name, "unregister")
            if not self.has(key):
                return False
            del self._strategies[key]
            del self._metadata[key]
        logger.debug("strategy.unregistered", registry=self.name, key=format_key(key))
        return True

    def clear(self) -> None:
        """Remove every strategy (for testing)."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(self.name, "clear")
            self._strategies.clear()
            self._metadata.clear()

    def freeze(self) -> None:
        """Reject further mutation. Idempotent; there is no unfreeze."""
        with self._lock:
            if self._frozen:
                return
            self._frozen = True
            count = len(self._strategies)
        logger.debug("registry.frozen", registry=self.name, strategies=count)

    @property
    def frozen(self) -> bool:
        with self._lock:
            return self._frozen

    def __repr__(self) -> str:
        return f"StrategyRegistry(name={self.name!r}, strategies={len(self)}, frozen={self.frozen})"


# === GLOBAL DEFAULT REGISTRY ===

_default_registry: StrategyRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> StrategyRegistry:
    """Get the global default registry.

    Creates it lazily on first access.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = StrategyRegistry("default")
        return _default_registry


def reset_default_registry() -> None:
    """Reset the global registry (for testing)."""
    global _default_registry
    with _default_lock:
        _default_registry = None


# === DECORATOR API ===


def register_strategy(
    key: Hashable,
    *,
    registry: StrategyRegistry | None = None,
    description: str | None = None,
    tags: dict[str, str] | None = None,
    **params: Any,
) -> Callable[[Any], Any]:
    """Decorator to register a strategy class or function.

    A ``Strategy`` subclass is instantiated with ``**params`` and the
    instance registered; a plain function is wrapped in
    ``CallableStrategy``. The decorated object is returned unchanged.

    Example:
        >>> @register_strategy("double", registry=registry)
        ... def double(value):
        ...     return value * 2
        >>> registry.resolve("double").apply(4)
        8
    """

    def decorator(target: Any) -> Any:
        # An empty registry is falsy (__len__), so compare against None
        target_registry = registry if registry is not None else get_default_registry()
        if isinstance(target, type) and issubclass(target, Strategy):
            strategy = target(**params)
        elif isinstance(target, type):
            raise TypeError(f"{target.__name__} is not a Strategy subclass")
        else:
            if params:
                raise TypeError("Constructor parameters only apply to Strategy subclasses")
            strategy = CallableStrategy(target, key=format_key(key))
        target_registry.register(
            key,
            strategy,
            description=description or (target.__doc__ or "").strip().split("\n")[0] or None,
            tags=tags,
        )
        return target

    return decorator


__all__ = [
    "StrategyRegistry",
    "get_default_registry",
    "reset_default_registry",
    "register_strategy",
]
