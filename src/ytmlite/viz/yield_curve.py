"""Price/yield chart for a single bond.

Muted palette, horizontal gridlines only, no top/right spines, and
direct labels on the market price and solved yield instead of a legend.
Styling is applied through a local ``rc_context`` so the caller's global
matplotlib settings are left untouched.
"""

from __future__ import annotations

from typing import Any

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..core.types import BondSpec, YTMResult
from ..instruments.bond_pricing import price_at_rate

__all__ = ["PRICE_YIELD_COLOURS", "PRICE_YIELD_STYLE", "plot_price_yield"]

PRICE_YIELD_COLOURS: dict[str, str] = {
    "curve": "#4E79A7",
    "market": "#999999",
    "yield": "#E15759",
    "text": "#4E4E4E",
    "grid": "#E8E8E8",
}

PRICE_YIELD_STYLE: dict[str, Any] = {
    "axes.edgecolor": PRICE_YIELD_COLOURS["market"],
    "axes.labelcolor": PRICE_YIELD_COLOURS["text"],
    "text.color": PRICE_YIELD_COLOURS["text"],
    "xtick.color": PRICE_YIELD_COLOURS["market"],
    "ytick.color": PRICE_YIELD_COLOURS["market"],
    "axes.grid": True,
    "axes.grid.axis": "y",
    "grid.color": PRICE_YIELD_COLOURS["grid"],
    "axes.spines.top": False,
    "axes.spines.right": False,
    "lines.linewidth": 1.8,
    "savefig.bbox": "tight",
}


def _default_rates(result: YTMResult | None, n_points: int) -> np.ndarray:
    centre = result.periodic_rate if result is not None else 0.03
    span = max(abs(centre), 0.02) * 2.0
    low = max(centre - span, -0.5)
    return np.linspace(low, centre + span, n_points)


def _label(ax: Axes, x: float, y: float, text: str, colour: str, ha: str = "left",
           va: str = "center") -> None:
    ax.annotate(text, xy=(x, y), xytext=(6, 0), textcoords="offset points",
                fontsize=10, color=colour, ha=ha, va=va)


def plot_price_yield(
    bond: BondSpec,
    market_price: float | None = None,
    result: YTMResult | None = None,
    rates: np.ndarray | Any | None = None,
    n_points: int = 200,
    figsize: tuple[float, float] = (8, 4.5),
) -> tuple[Figure, Axes]:
    """Plot present value against the periodic discount rate.

    The curve is strictly decreasing for non-negative coupons; the solved
    yield sits where it crosses the market price.

    Args:
        bond: Bond to price.
        market_price: Optional quoted price, drawn as a horizontal line.
        result: Optional solved yield, marked on the curve.
        rates: Periodic rates to evaluate. Defaults to a window around
            ``result`` (or 3% when no result is given).
        n_points: Number of points for the default window.
        figsize: Figure size.

    Returns:
        Tuple of (Figure, Axes).
    """
    grid = _default_rates(result, n_points) if rates is None else np.asarray(rates, dtype=float)
    prices = np.array([price_at_rate(r, bond) for r in grid])

    with mpl.rc_context(PRICE_YIELD_STYLE):
        fig, ax = plt.subplots(1, 1, figsize=figsize)
        ax.plot(grid * 100, prices, color=PRICE_YIELD_COLOURS["curve"])

        if market_price is not None:
            ax.axhline(market_price, color=PRICE_YIELD_COLOURS["market"], linewidth=1, linestyle="--")
            _label(ax, grid[-1] * 100, market_price, f"Price {market_price:,.2f}",
                   PRICE_YIELD_COLOURS["text"], ha="right", va="bottom")

        if result is not None:
            x = result.periodic_rate * 100
            y = price_at_rate(result.periodic_rate, bond)
            ax.plot(x, y, "o", color=PRICE_YIELD_COLOURS["yield"], markersize=6)
            _label(ax, x, y, f"YTM {result.periodic_rate:.4%} / period",
                   PRICE_YIELD_COLOURS["yield"])

        ax.set_xlabel("Periodic rate (%)")
        ax.set_ylabel("Present value")
        ax.set_title(
            f"Price/yield: {bond.annual_coupon_rate:.2%} coupon, "
            f"{bond.years_to_maturity:g}y, {bond.periods_per_year}x per year"
        )
    return fig, ax
