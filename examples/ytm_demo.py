"""Yield to maturity demonstration.

Solves a discount coupon bond and a zero-coupon bond, prints the
discounted cash-flow schedule, shows what happens when bisection is
starved of iterations, and saves a price/yield chart.
"""

from __future__ import annotations

import matplotlib.pyplot as plt

from ytmlite import (
    BondSpec,
    SolverConfig,
    UnbracketableRootError,
    cash_flow_schedule,
    price_at_rate,
    solve_ytm,
)
from ytmlite.viz.yield_curve import plot_price_yield

# ---------------------------------------------------------------------------
# 1. 8% semi-annual 10y bond quoted at 95
# ---------------------------------------------------------------------------
bond = BondSpec(face_value=1000, annual_coupon_rate=0.08, years_to_maturity=10, periods_per_year=2)
result = solve_ytm(bond, market_price=950)

print("Coupon bond")
print("-" * 40)
print(f"  Periodic yield:        {result.periodic_rate:.6%}")
print(f"  Annual effective:      {result.annual_effective_rate:.6%}")
print(f"  Nominal APR:           {result.nominal_apr:.6%}")
print(f"  Bisection iterations:  {result.iterations}")
print(f"  Repriced:              {price_at_rate(result.periodic_rate, bond):.9f}")
print()

# ---------------------------------------------------------------------------
# 2. Zero-coupon bond: closed form, no search
# ---------------------------------------------------------------------------
zcb = BondSpec(face_value=1000, annual_coupon_rate=0.0, years_to_maturity=5, periods_per_year=1)
print(f"Zero-coupon yield: {solve_ytm(zcb, 800).periodic_rate:.6%}")
print()

# ---------------------------------------------------------------------------
# 3. Cash-flow schedule at the solved yield
# ---------------------------------------------------------------------------
schedule = cash_flow_schedule(bond, result.periodic_rate)
print(schedule.tail(4).round(4).to_string(index=False))
print(f"  Sum of PVs: {schedule['present_value'].sum():.6f}")
print()

# ---------------------------------------------------------------------------
# 4. Iteration cap and infeasible prices
# ---------------------------------------------------------------------------
coarse = solve_ytm(bond, 950, SolverConfig(tolerance=1e-12, max_iterations=10))
print(f"10 iterations: {coarse.periodic_rate:.6%} (converged={coarse.converged})")

try:
    solve_ytm(BondSpec(1000, 0.08, 1, 1), market_price=1e10)
except UnbracketableRootError as exc:
    print(f"Infeasible price: {exc}")

# ---------------------------------------------------------------------------
# 5. Price/yield chart
# ---------------------------------------------------------------------------
fig, ax = plot_price_yield(bond, market_price=950, result=result)
fig.savefig("price_yield.png")
plt.close(fig)
print("\nSaved price_yield.png")
