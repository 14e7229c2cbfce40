"""Fixed-income pricing: present value of a bullet bond at a periodic rate."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..core.types import DEFAULT_PERIODS_PER_YEAR, BondSpec

__all__ = [
    "price_at_rate",
    "bond_price_at_rate",
    "cash_flow_schedule",
]


def _discount_factors(rate: float, n_periods: int) -> np.ndarray:
    if rate <= -1.0:
        raise ValueError("rate must be greater than -1")
    t = np.arange(1, n_periods + 1, dtype=float)
    # Rates near -1 underflow the growth factor; the PV then goes to +inf.
    with np.errstate(divide="ignore", over="ignore"):
        return 1.0 / np.power(1.0 + rate, t)


def price_at_rate(rate: float, bond: BondSpec) -> float:
    """Present value of a bond's coupons and principal at a periodic rate.

    Args:
        rate: Discount rate per coupon period. Must be greater than -1.
        bond: The bond to price.

    Returns:
        Present value. ``0.0`` when the bond has no whole coupon period.
    """
    n = bond.n_periods
    if n <= 0:
        return 0.0

    discount = _discount_factors(rate, n)
    with np.errstate(invalid="ignore"):
        pv_coupons = bond.coupon * discount.sum() if bond.coupon else 0.0
        pv_face = bond.face_value * discount[-1]
    return float(pv_coupons + pv_face)


def bond_price_at_rate(
    rate: float,
    face_value: float,
    annual_coupon_rate: float,
    years: float,
    periods_per_year: int = DEFAULT_PERIODS_PER_YEAR,
) -> float:
    """Flat-argument form of :func:`price_at_rate`.

    Args:
        rate: Discount rate per coupon period.
        face_value: Par value of the bond.
        annual_coupon_rate: Annual coupon rate as a decimal.
        years: Years to maturity.
        periods_per_year: Coupon frequency.

    Returns:
        Present value of the bond.
    """
    bond = BondSpec(face_value, annual_coupon_rate, years, periods_per_year)
    return price_at_rate(rate, bond)


def cash_flow_schedule(bond: BondSpec, rate: float | None = None) -> pd.DataFrame:
    """Tabulate the bond's cash flows, optionally discounted at ``rate``.

    Args:
        bond: The bond to lay out.
        rate: Optional periodic discount rate. When given, the table also
            carries ``discount_factor`` and ``present_value`` columns whose
            total equals :func:`price_at_rate`.

    Returns:
        DataFrame indexed from 0 with columns ``period``, ``time`` (years)
        and ``cash_flow``; empty when the bond has no whole period.
    """
    n = max(bond.n_periods, 0)
    periods = np.arange(1, n + 1)
    flows = np.full(n, bond.coupon, dtype=float)
    if n:
        flows[-1] += bond.face_value

    schedule = pd.DataFrame({
        "period": periods,
        "time": periods / bond.periods_per_year,
        "cash_flow": flows,
    })
    if rate is not None:
        schedule["discount_factor"] = _discount_factors(rate, n)
        schedule["present_value"] = schedule["cash_flow"] * schedule["discount_factor"]
    return schedule
