"""Exceptions raised by the yield solver."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Bracket

__all__ = [
    "YTMError",
    "InvalidPeriodsError",
    "InvalidPriceError",
    "UnbracketableRootError",
]


class YTMError(ValueError):
    """Base class for yield-to-maturity failures."""


class InvalidPeriodsError(YTMError):
    """Raised when maturity and frequency round to fewer than one period."""

    def __init__(self, n_periods: int) -> None:
        super().__init__(
            f"Number of periods must be positive (got {n_periods} after rounding)"
        )
        self.n_periods = n_periods


class InvalidPriceError(YTMError):
    """Raised when a zero-coupon bond is quoted at a non-positive price."""

    def __init__(self, market_price: float) -> None:
        super().__init__(
            f"Price must be positive for zero-coupon bonds (got {market_price})"
        )
        self.market_price = market_price


class UnbracketableRootError(YTMError):
    """Raised when no sign change is found after expanding the search interval.

    The final interval that was searched is kept on ``bracket``.
    """

    def __init__(self, bracket: Bracket) -> None:
        super().__init__(
            "Unable to bracket root for YTM in "
            f"[{bracket.low:g}, {bracket.high:g}] after {bracket.expansions} expansions. "
            "Check inputs (price, coupon, face, years)."
        )
        self.bracket = bracket
