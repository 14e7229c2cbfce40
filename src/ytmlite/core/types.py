"""Dataclass value types used across ytmlite.

All inputs and results are frozen dataclasses for immutability,
dot-access, and clear ``repr`` output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = [
    "DEFAULT_PERIODS_PER_YEAR",
    "BondSpec",
    "SolverConfig",
    "YTMResult",
    "Bracket",
]

DEFAULT_PERIODS_PER_YEAR = 2


@dataclass(frozen=True)
class BondSpec:
    """A plain fixed-coupon bullet bond.

    Attributes:
        face_value: Par value repaid at maturity.
        annual_coupon_rate: Annual coupon rate as a decimal (0.08 = 8%).
            Zero means a zero-coupon bond.
        years_to_maturity: Time to maturity in years. Whether it yields at
            least one whole period is checked by the solver.
        periods_per_year: Coupon and compounding frequency
            (1=annual, 2=semi-annual, 4=quarterly).
    """

    face_value: float
    annual_coupon_rate: float
    years_to_maturity: float
    periods_per_year: int = DEFAULT_PERIODS_PER_YEAR

    def __post_init__(self) -> None:
        if not self.face_value > 0:
            raise ValueError("face_value must be positive")
        if int(self.periods_per_year) != self.periods_per_year or self.periods_per_year < 1:
            raise ValueError("periods_per_year must be a positive integer")

    @property
    def n_periods(self) -> int:
        """Number of discrete coupon periods, halves rounded away from zero."""
        periods = self.periods_per_year * self.years_to_maturity
        return int(math.copysign(math.floor(abs(periods) + 0.5), periods))

    @property
    def coupon(self) -> float:
        """Coupon paid each period."""
        return self.face_value * self.annual_coupon_rate / self.periods_per_year

    def __repr__(self) -> str:
        return (
            f"BondSpec(face={self.face_value:,.2f}, coupon={self.annual_coupon_rate:.4%}, "
            f"years={self.years_to_maturity:g}, m={self.periods_per_year})"
        )


@dataclass(frozen=True)
class SolverConfig:
    """Tuning parameters for the yield solver.

    Attributes:
        tolerance: Absolute pricing error at which bisection stops.
        max_iterations: Hard cap on bisection steps.
        lower_bound: Initial lower periodic-rate bound. Must exceed -1.
        upper_bound: Initial upper periodic-rate bound.
        max_expansions: Number of times the upper bound may be grown
            before the root is declared unbracketable.
        expansion_factor: Multiplier applied to the upper bound on each
            expansion.
    """

    tolerance: float = 1e-9
    max_iterations: int = 200
    lower_bound: float = -0.999999
    upper_bound: float = 10.0
    max_expansions: int = 100
    expansion_factor: float = 2.0

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError("tolerance must be positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if not self.lower_bound > -1.0:
            raise ValueError("lower_bound must be greater than -1")
        if not self.upper_bound > self.lower_bound:
            raise ValueError("upper_bound must be greater than lower_bound")
        if self.max_expansions < 0:
            raise ValueError("max_expansions must be non-negative")
        if not self.expansion_factor > 1.0:
            raise ValueError("expansion_factor must be greater than 1")


@dataclass(frozen=True)
class YTMResult:
    """Solved yield to maturity.

    Attributes:
        periodic_rate: Yield per compounding period.
        annual_effective_rate: ``(1 + periodic_rate) ** m - 1``.
        nominal_apr: ``periodic_rate * m``.
        periods_per_year: Compounding frequency ``m`` used to annualise.
        converged: ``False`` when bisection ran out of iterations and the
            bracket midpoint was returned instead.
        iterations: Bisection steps taken (0 for the closed form).
        method: ``"closed_form"`` or ``"bisection"``.
    """

    periodic_rate: float
    annual_effective_rate: float
    nominal_apr: float
    periods_per_year: int
    converged: bool = True
    iterations: int = 0
    method: str = "bisection"

    def __repr__(self) -> str:
        status = "converged" if self.converged else "exhausted"
        return (
            f"YTMResult(periodic={self.periodic_rate:.6%}, "
            f"effective={self.annual_effective_rate:.6%}, apr={self.nominal_apr:.6%}, "
            f"{self.method}, {status})"
        )


@dataclass(frozen=True)
class Bracket:
    """A periodic-rate interval and the pricing error at each end."""

    low: float
    high: float
    f_low: float
    f_high: float
    expansions: int = 0

    @property
    def contains_root(self) -> bool:
        return not self.f_low * self.f_high > 0

    @property
    def width(self) -> float:
        return self.high - self.low

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.low + self.high)
