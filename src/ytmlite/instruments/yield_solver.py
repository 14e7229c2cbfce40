"""Yield to maturity: invert the bond pricing function for a market price.

Coupon bonds are solved by bisection on the pricing error
``f(r) = price_at_rate(r) - market_price``, which is strictly decreasing
in ``r`` for non-negative coupons. The default interval spans almost
total loss (``-0.999999``) to 1000% per period; when it does not straddle
a sign change, the upper bound is doubled until it does or the expansion
budget runs out. Zero-coupon bonds skip the search and use the closed
form ``(face / price) ** (1 / N) - 1``.

Example::

    from ytmlite import BondSpec, solve_ytm

    bond = BondSpec(face_value=1000, annual_coupon_rate=0.08,
                    years_to_maturity=10, periods_per_year=2)
    result = solve_ytm(bond, market_price=950)
    result.periodic_rate  # ~0.04381
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from ..core.errors import InvalidPeriodsError, InvalidPriceError, UnbracketableRootError
from ..core.types import DEFAULT_PERIODS_PER_YEAR, BondSpec, Bracket, SolverConfig, YTMResult
from .bond_pricing import price_at_rate

__all__ = [
    "ZERO_COUPON_EPSILON",
    "annual_effective_rate",
    "nominal_apr",
    "find_bracket",
    "bisect",
    "solve_ytm",
    "yield_to_maturity",
]

logger = logging.getLogger(__name__)

ZERO_COUPON_EPSILON = 1e-12

PricingError = Callable[[float], float]


def annual_effective_rate(periodic_rate: float, periods_per_year: int) -> float:
    """Compound a periodic rate over one year. Overflow gives ``inf``."""
    with np.errstate(over="ignore"):
        growth = np.power(1.0 + periodic_rate, periods_per_year)
    return float(growth) - 1.0


def nominal_apr(periodic_rate: float, periods_per_year: int) -> float:
    """Annualise a periodic rate without compounding."""
    return periodic_rate * periods_per_year


def _make_result(
    periodic_rate: float,
    periods_per_year: int,
    *,
    converged: bool,
    iterations: int,
    method: str,
) -> YTMResult:
    return YTMResult(
        periodic_rate=periodic_rate,
        annual_effective_rate=annual_effective_rate(periodic_rate, periods_per_year),
        nominal_apr=nominal_apr(periodic_rate, periods_per_year),
        periods_per_year=periods_per_year,
        converged=converged,
        iterations=iterations,
        method=method,
    )


def find_bracket(func: PricingError, config: SolverConfig | None = None) -> Bracket:
    """Search for an interval over which ``func`` changes sign.

    Starts from ``[config.lower_bound, config.upper_bound]`` and multiplies
    the upper bound by ``config.expansion_factor`` while both ends share a
    sign, at most ``config.max_expansions`` times. The lower bound never
    moves.

    Args:
        func: Pricing error as a function of the periodic rate.
        config: Solver settings. Defaults to :class:`SolverConfig`.

    Returns:
        The last interval examined. Check ``contains_root`` before use;
        it is ``False`` only when the expansion budget was exhausted.
    """
    config = config or SolverConfig()
    low, high = config.lower_bound, config.upper_bound
    bracket = Bracket(low, high, func(low), func(high))

    while not bracket.contains_root and bracket.expansions < config.max_expansions:
        high = bracket.high * config.expansion_factor
        bracket = Bracket(
            bracket.low, high, bracket.f_low, func(high), bracket.expansions + 1
        )
        logger.debug("Expanded bracket to [%g, %g] (f_high=%g)", bracket.low, high, bracket.f_high)

    return bracket


def bisect(
    func: PricingError,
    bracket: Bracket,
    config: SolverConfig | None = None,
) -> tuple[float, int, bool]:
    """Bisect a sign-changing bracket until ``|func(mid)| < tolerance``.

    Args:
        func: Pricing error as a function of the periodic rate.
        bracket: Interval with ``contains_root`` true.
        config: Solver settings. Defaults to :class:`SolverConfig`.

    Returns:
        Tuple of (rate, iterations, converged). When ``max_iterations``
        is reached first, the midpoint of the final interval is returned
        with ``converged=False``.
    """
    config = config or SolverConfig()
    low, high = bracket.low, bracket.high
    f_low = bracket.f_low

    for iteration in range(1, config.max_iterations + 1):
        mid = 0.5 * (low + high)
        f_mid = func(mid)
        if abs(f_mid) < config.tolerance:
            logger.debug("Bisection converged at iter %s: rate=%s", iteration, mid)
            return mid, iteration, True
        # An exact zero lands in the else branch; either half still holds the root.
        if f_low * f_mid < 0:
            high = mid
        else:
            low, f_low = mid, f_mid

    logger.warning(
        "Bisection did not reach tolerance %g in %s iterations; "
        "returning midpoint of [%r, %r]",
        config.tolerance, config.max_iterations, low, high,
    )
    return 0.5 * (low + high), config.max_iterations, False


def solve_ytm(
    bond: BondSpec,
    market_price: float,
    config: SolverConfig | None = None,
) -> YTMResult:
    """Solve for the periodic yield that prices ``bond`` at ``market_price``.

    Args:
        bond: The bond being quoted.
        market_price: Observed price. Must be finite.
        config: Solver settings. Defaults to :class:`SolverConfig`.

    Returns:
        :class:`YTMResult` with the periodic, annual effective and
        nominal annual yields.

    Raises:
        InvalidPeriodsError: If maturity and frequency round to no period.
        InvalidPriceError: If a zero-coupon bond has a non-positive price.
        UnbracketableRootError: If no rate in the searched range
            reproduces the price.
    """
    config = config or SolverConfig()
    n = bond.n_periods
    if n < 1:
        raise InvalidPeriodsError(n)

    m = bond.periods_per_year
    if abs(bond.coupon) < ZERO_COUPON_EPSILON:
        if market_price <= 0:
            raise InvalidPriceError(market_price)
        periodic = (bond.face_value / market_price) ** (1.0 / n) - 1.0
        return _make_result(periodic, m, converged=True, iterations=0, method="closed_form")

    def pricing_error(rate: float) -> float:
        return price_at_rate(rate, bond) - market_price

    bracket = find_bracket(pricing_error, config)
    if not bracket.contains_root:
        raise UnbracketableRootError(bracket)

    periodic, iterations, converged = bisect(pricing_error, bracket, config)
    return _make_result(
        periodic, m, converged=converged, iterations=iterations, method="bisection"
    )


def yield_to_maturity(
    face_value: float,
    annual_coupon_rate: float,
    years: float,
    market_price: float,
    periods_per_year: int = DEFAULT_PERIODS_PER_YEAR,
    tolerance: float = 1e-9,
    max_iterations: int = 200,
) -> YTMResult:
    """Flat-argument form of :func:`solve_ytm`.

    Args:
        face_value: Par value of the bond.
        annual_coupon_rate: Annual coupon rate as a decimal.
        years: Years to maturity.
        market_price: Observed market price.
        periods_per_year: Coupon frequency.
        tolerance: Absolute pricing error accepted as converged.
        max_iterations: Bisection step cap.

    Returns:
        :class:`YTMResult` for the bond.
    """
    bond = BondSpec(face_value, annual_coupon_rate, years, periods_per_year)
    config = SolverConfig(tolerance=tolerance, max_iterations=max_iterations)
    return solve_ytm(bond, market_price, config)
