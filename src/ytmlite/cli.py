"""Command-line front end for the yield solver.

Takes the bond and price as flags, or prompts for each value when run
without arguments, and prints the periodic, annual effective and nominal
yields. Exit code 0 on success, 1 on missing or invalid input and on
solver failures.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Callable

from .core.errors import YTMError
from .core.types import DEFAULT_PERIODS_PER_YEAR, BondSpec, SolverConfig, YTMResult
from .instruments.bond_pricing import cash_flow_schedule
from .instruments.yield_solver import solve_ytm

logger = logging.getLogger(__name__)

EXAMPLE = "ytmlite --face-value 1000 --coupon-rate 8 --years 10 --price 950 --periods-per-year 2"


# ---------- helpers ----------
def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _prompt_float(prompt: str, read: Callable[[str], str]) -> float:
    raw = read(prompt).strip()
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"not a number: {raw!r}") from None


def _prompt_inputs(args: argparse.Namespace, read: Callable[[str], str] = input) -> None:
    print("Yield-to-Maturity (YTM) calculator")
    args.face_value = _prompt_float("Enter face/par value (e.g., 1000): ", read)
    args.coupon_rate = _prompt_float("Enter annual coupon rate in percent (e.g., 8 for 8%): ", read)
    args.years = _prompt_float("Enter years to maturity (e.g., 10): ", read)
    args.price = _prompt_float("Enter current market price: ", read)
    raw = read(
        "Enter periods per year (1=annual, 2=semiannual, 4=quarterly) "
        f"[default={DEFAULT_PERIODS_PER_YEAR}]: "
    ).strip()
    try:
        args.periods_per_year = int(raw)
    except ValueError:
        args.periods_per_year = DEFAULT_PERIODS_PER_YEAR


def _print_result(bond: BondSpec, price: float, result: YTMResult) -> None:
    print(
        f"Inputs: face={bond.face_value:.2f}, coupon={bond.annual_coupon_rate * 100:.6f}%, "
        f"years={bond.years_to_maturity:.6f}, price={price:.2f}, "
        f"periods/year={bond.periods_per_year}"
    )
    print(f"Periodic YTM (per period): {result.periodic_rate * 100:.9f}%")
    print(f"Annualized effective YTM: {result.annual_effective_rate * 100:.9f}%")
    print(f"Nominal APR (periodic * m): {result.nominal_apr * 100:.9f}%")
    if not result.converged:
        print(
            f"Note: bisection stopped after {result.iterations} iterations "
            "without reaching the tolerance; the result is the final bracket midpoint."
        )


# ---------- cli ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ytmlite",
        description="Yield to maturity of a fixed-coupon bond. "
                    "Run without arguments to be prompted for each input.",
        epilog=f"Example: {EXAMPLE}",
    )
    p.add_argument("-f", "--face-value", type=float, help="Face/par value (e.g. 1000)")
    p.add_argument("-c", "--coupon-rate", type=float, help="Annual coupon rate in percent (e.g. 8)")
    p.add_argument("-y", "--years", type=float, help="Years to maturity")
    p.add_argument("-p", "--price", type=float, help="Current market price")
    p.add_argument("-m", "--periods-per-year", type=int, default=DEFAULT_PERIODS_PER_YEAR,
                   help=f"Coupon periods per year (default: {DEFAULT_PERIODS_PER_YEAR})")
    p.add_argument("--tolerance", type=float, default=SolverConfig.tolerance,
                   help=f"Pricing tolerance (default: {SolverConfig.tolerance:g})")
    p.add_argument("--max-iterations", type=int, default=SolverConfig.max_iterations,
                   help=f"Bisection iteration cap (default: {SolverConfig.max_iterations})")
    p.add_argument("--schedule", action="store_true",
                   help="Print the cash-flow schedule discounted at the solved yield")
    p.add_argument("--plot", default=None, metavar="PATH",
                   help="Save a price/yield chart to PATH")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Increase log verbosity (-v info, -vv debug)")
    return p


def main(argv: list[str] | None = None, read: Callable[[str], str] = input) -> int:
    argv = sys.argv[1:] if argv is None else argv
    p = build_parser()
    args = p.parse_args(argv)

    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not argv:
        try:
            _prompt_inputs(args, read)
        except ValueError as exc:
            return _fail(f"Error: {exc}")
        except EOFError:
            return _fail("Error: input ended before all values were entered.")

    inputs = (args.face_value, args.coupon_rate, args.years, args.price)
    if any(v is None or not math.isfinite(v) for v in inputs):
        return _fail(
            "Missing required inputs. Use --help for usage or run without args for interactive mode."
        )
    if args.periods_per_year <= 0:
        return _fail("periods-per-year must be positive integer")

    try:
        bond = BondSpec(args.face_value, args.coupon_rate / 100.0, args.years, args.periods_per_year)
        config = SolverConfig(tolerance=args.tolerance, max_iterations=args.max_iterations)
    except ValueError as exc:
        return _fail(f"Error: {exc}")

    logger.info("Solving %r at price %s", bond, args.price)
    try:
        result = solve_ytm(bond, args.price, config)
    except YTMError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _fail("Failed to compute YTM.")

    _print_result(bond, args.price, result)

    if args.schedule:
        table = cash_flow_schedule(bond, result.periodic_rate)
        print("\nCash-flow schedule:")
        print(table.round(6).to_string(index=False))

    if args.plot:
        # matplotlib is only imported when a chart is requested.
        from .viz.yield_curve import plot_price_yield

        fig, _ = plot_price_yield(bond, market_price=args.price, result=result)
        fig.savefig(args.plot)
        print(f"\nSaved plot: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
