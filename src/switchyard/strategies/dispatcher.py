"""Dispatcher: delegates work to an injected strategy.

Manifesto:
    The dispatcher is handed its strategy by the composition root and
    never builds or looks one up on its own. ``process`` forwards the
    input to ``strategy.apply`` and returns the result untouched: no type
    checks, no branching on which strategy is bound, no error handling.
    Whatever the strategy raises, the caller sees.

ARCHITECTURE
────────────
::

    composition root
        │  Dispatcher(strategy)            ← fails fast on None
        ▼
    Dispatcher ── process(x) ──► strategy.apply(x)
        │
        └── bind(other)                    ← affects later calls only

    CapabilityDispatcher(print=..., scan=...)
        └── process("scan", x) ──► strategies["scan"].apply(x)

Tags:
    switchyard, dispatcher, strategy, dependency-injection
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from switchyard.core.errors import CapabilityNotSupportedError, MissingStrategyError, format_key
from switchyard.core.logging import get_logger
from switchyard.core.result import Result, try_result
from switchyard.strategies.base import ensure_capability
from switchyard.strategies.registry import StrategyRegistry

logger = get_logger(__name__)


class Dispatcher:
    """
    Coordinator bound to exactly one strategy.

    The strategy reference is shared, not owned: the same instance may be
    bound to other dispatchers or held by a registry.

    Example:
        >>> dispatcher = Dispatcher(PercentageStrategy(0.10))
        >>> dispatcher.process(100)
        10.0
    """

    __slots__ = ("_strategy",)

    def __init__(self, strategy: Any):
        self._strategy = ensure_capability(strategy)
        logger.debug("dispatcher.bound", strategy=type(strategy).__name__)

    @classmethod
    def from_registry(cls, registry: StrategyRegistry, key: Hashable) -> Dispatcher:
        """Resolve ``key`` in ``registry`` and bind the result.

        Raises:
            StrategyNotFoundError: ``key`` is not registered
        """
        return cls(registry.resolve(key))

    @property
    def strategy(self) -> Any:
        """The currently bound strategy."""
        return self._strategy

    def bind(self, strategy: Any) -> None:
        """Replace the bound strategy. Results already returned are unaffected."""
        self._strategy = ensure_capability(strategy)
        logger.debug("dispatcher.rebound", strategy=type(strategy).__name__)

    def process(self, value: Any) -> Any:
        """Return ``strategy.apply(value)`` unchanged; errors propagate."""
        return self._strategy.apply(value)

    def process_many(self, values: Iterable[Any]) -> list[Any]:
        """Process each value in order, stopping at the first error."""
        return [self.process(value) for value in values]

    def try_process(self, value: Any) -> Result[Any]:
        """Like ``process`` but returns ``Ok(result)`` or ``Err(exception)``."""
        return try_result(lambda: self.process(value))

    def __repr__(self) -> str:
        return f"Dispatcher({self._strategy!r})"


class CapabilityDispatcher:
    """
    Coordinator for clients that need several independent capabilities.

    Each capability name (``"print"``, ``"scan"``) is bound to its own
    strategy, so a client depends only on the capabilities it was given.

    Example:
        >>> device = CapabilityDispatcher(print=printer, scan=scanner)
        >>> device.process("scan", page)
    """

    def __init__(self, strategies: Mapping[str, Any] | None = None, /, **named: Any):
        bound = {**(strategies or {}), **named}
        if not bound:
            raise MissingStrategyError("CapabilityDispatcher needs at least one capability")
        self._strategies = {
            capability: ensure_capability(strategy, key=capability)
            for capability, strategy in bound.items()
        }
        logger.debug("dispatcher.bound", capabilities=sorted(self._strategies))

    def capabilities(self) -> frozenset[str]:
        """Names of the bound capabilities."""
        return frozenset(self._strategies)

    def supports(self, capability: str) -> bool:
        return capability in self._strategies

    def strategy(self, capability: str) -> Any:
        """Return the strategy bound to ``capability``.

        Raises:
            CapabilityNotSupportedError: Nothing is bound to ``capability``
        """
        try:
            return self._strategies[capability]
        except KeyError:
            raise CapabilityNotSupportedError(
                format_key(capability), available=self._strategies
            ) from None

    def bind(self, capability: str, strategy: Any) -> None:
        """Bind or replace the strategy for ``capability``."""
        self._strategies[capability] = ensure_capability(strategy, key=capability)
        logger.debug("dispatcher.rebound", capability=capability, strategy=type(strategy).__name__)

    def process(self, capability: str, value: Any) -> Any:
        """Return ``strategy(capability).apply(value)`` unchanged; errors propagate."""
        return self.strategy(capability).apply(value)

    def __repr__(self) -> str:
        return f"CapabilityDispatcher(capabilities={sorted(self._strategies)})"


__all__ = ["Dispatcher", "CapabilityDispatcher"]
