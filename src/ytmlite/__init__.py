"""ytmlite: yield to maturity for fixed-coupon bonds.

Provides a bullet-bond pricing model, a bisection yield solver with
automatic bracket expansion and a zero-coupon closed form, a cash-flow
schedule table, a price/yield chart, and a command-line
front end.
"""

__version__ = "0.1.0"

from .core.errors import (
    InvalidPeriodsError,
    InvalidPriceError,
    UnbracketableRootError,
    YTMError,
)
from .core.types import BondSpec, Bracket, SolverConfig, YTMResult
from .instruments.bond_pricing import bond_price_at_rate, cash_flow_schedule, price_at_rate
from .instruments.yield_solver import (
    annual_effective_rate,
    bisect,
    find_bracket,
    nominal_apr,
    solve_ytm,
    yield_to_maturity,
)

__all__ = [
    # Types
    "BondSpec",
    "SolverConfig",
    "YTMResult",
    "Bracket",
    # Errors
    "YTMError",
    "InvalidPeriodsError",
    "InvalidPriceError",
    "UnbracketableRootError",
    # Pricing
    "price_at_rate",
    "bond_price_at_rate",
    "cash_flow_schedule",
    # Solver
    "solve_ytm",
    "yield_to_maturity",
    "find_bracket",
    "bisect",
    "annual_effective_rate",
    "nominal_apr",
]
