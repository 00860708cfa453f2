"""Reference strategies: a rate applied to an amount, and a constant.

Both are frozen dataclasses, so a strategy can be shared by several
dispatchers and registries without anyone mutating it.

Examples:
    >>> PercentageStrategy(0.10).apply(100)
    10.0
    >>> FixedStrategy(15).apply(100)
    15
    >>> PercentageStrategy(0.10, non_negative=False).apply(-5)
    -0.5
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from switchyard.strategies.base import Strategy, require_non_negative


@dataclass(frozen=True)
class PercentageStrategy(Strategy):
    """
    Return ``amount * rate``.

    Attributes:
        rate: Fraction applied to the amount (``0.10`` for ten percent)
        non_negative: Reject negative amounts with ``InvalidInputError``
        key: Registration name
    """

    rate: float
    non_negative: bool = True
    key: str | None = "percentage"

    def __post_init__(self) -> None:
        require_non_negative(self.rate, field="rate")

    def apply(self, value: Any) -> Any:
        if self.non_negative:
            require_non_negative(value)
        return value * self.rate


@dataclass(frozen=True)
class FixedStrategy(Strategy):
    """Return ``amount`` whatever the input is. The input is not validated."""

    amount: Any
    key: str | None = "fixed"

    def apply(self, value: Any) -> Any:
        return self.amount


__all__ = ["PercentageStrategy", "FixedStrategy"]
