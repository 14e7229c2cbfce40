"""Tests for ytmlite.instruments.yield_solver."""

import logging
import math

import pytest
from scipy.optimize import brentq

from ytmlite.core.errors import (
    InvalidPeriodsError,
    InvalidPriceError,
    UnbracketableRootError,
    YTMError,
)
from ytmlite.core.types import BondSpec, Bracket, SolverConfig
from ytmlite.instruments.bond_pricing import price_at_rate
from ytmlite.instruments.yield_solver import (
    annual_effective_rate,
    bisect,
    find_bracket,
    nominal_apr,
    solve_ytm,
    yield_to_maturity,
)


@pytest.fixture()
def bond():
    return BondSpec(face_value=1000, annual_coupon_rate=0.08, years_to_maturity=10, periods_per_year=2)


class TestCouponBond:
    def test_discount_bond_scenario(self, bond):
        res = solve_ytm(bond, 950)
        assert res.periodic_rate == pytest.approx(0.04381, abs=1e-4)
        assert price_at_rate(res.periodic_rate, bond) == pytest.approx(950, abs=1e-9)
        assert res.nominal_apr == pytest.approx(2 * res.periodic_rate)
        assert res.annual_effective_rate == pytest.approx((1 + res.periodic_rate) ** 2 - 1)
        assert res.converged
        assert res.method == "bisection"
        assert 0 < res.iterations <= 200

    def test_par_bond_yields_coupon_rate(self, bond):
        res = solve_ytm(bond, 1000)
        assert res.periodic_rate == pytest.approx(0.04, abs=1e-9)

    def test_agrees_with_brent(self, bond):
        res = solve_ytm(bond, 1100)
        expected = brentq(lambda r: price_at_rate(r, bond) - 1100, -0.5, 1.0, xtol=1e-14)
        assert res.periodic_rate == pytest.approx(expected, abs=1e-10)

    @pytest.mark.parametrize("rate", [-0.02, 0.0, 0.01, 0.04381, 0.15, 3.0])
    def test_round_trip(self, bond, rate):
        price = price_at_rate(rate, bond)
        res = solve_ytm(bond, price)
        assert res.periodic_rate == pytest.approx(rate, abs=1e-8)

    def test_round_trip_beyond_default_bracket(self, bond):
        price = price_at_rate(50.0, bond)
        res = solve_ytm(bond, price)
        assert res.periodic_rate == pytest.approx(50.0, abs=1e-6)

    def test_flat_form(self):
        res = yield_to_maturity(1000, 0.08, 10, 950, periods_per_year=2)
        assert price_at_rate(res.periodic_rate, BondSpec(1000, 0.08, 10, 2)) == pytest.approx(950, abs=1e-9)


class TestZeroCoupon:
    def test_closed_form(self):
        res = solve_ytm(BondSpec(1000, 0.0, 5, 1), 800)
        assert res.periodic_rate == pytest.approx((1000 / 800) ** (1 / 5) - 1)
        assert res.periodic_rate == pytest.approx(0.04564, abs=1e-5)
        assert res.method == "closed_form"
        assert res.iterations == 0
        assert res.converged

    def test_closed_form_reprices(self):
        zcb = BondSpec(1000, 0.0, 7, 4)
        res = solve_ytm(zcb, 731.5)
        assert price_at_rate(res.periodic_rate, zcb) == pytest.approx(731.5)
        assert res.annual_effective_rate == pytest.approx((1 + res.periodic_rate) ** 4 - 1)

    @pytest.mark.parametrize("price", [0.0, -10.0])
    def test_non_positive_price(self, price):
        with pytest.raises(InvalidPriceError):
            solve_ytm(BondSpec(1000, 0.0, 5, 1), price)


class TestFailures:
    def test_no_whole_period(self):
        with pytest.raises(InvalidPeriodsError) as info:
            solve_ytm(BondSpec(1000, 0.05, 0.01, 1), 990)
        assert info.value.n_periods == 0

    def test_non_positive_years(self):
        with pytest.raises(InvalidPeriodsError):
            yield_to_maturity(1000, 0.05, 0.0, 990, periods_per_year=2)

    def test_price_above_any_attainable_value(self):
        one_period = BondSpec(1000, 0.08, 1, 1)
        with pytest.raises(UnbracketableRootError) as info:
            solve_ytm(one_period, 1e10)
        assert info.value.bracket.expansions == 100
        assert not info.value.bracket.contains_root

    def test_negative_price_on_coupon_bond(self, bond):
        with pytest.raises(UnbracketableRootError):
            solve_ytm(bond, -5.0)

    def test_errors_share_base_class(self):
        for exc in (InvalidPeriodsError, InvalidPriceError, UnbracketableRootError):
            assert issubclass(exc, YTMError)
            assert issubclass(exc, ValueError)


class TestExhaustion:
    def test_midpoint_returned_when_iterations_run_out(self, bond, caplog):
        config = SolverConfig(tolerance=1e-12, max_iterations=5)
        with caplog.at_level(logging.WARNING, logger="ytmlite.instruments.yield_solver"):
            res = solve_ytm(bond, 950, config)
        assert not res.converged
        assert res.iterations == 5
        exact = solve_ytm(bond, 950).periodic_rate
        assert abs(res.periodic_rate - exact) <= (10.0 + 0.999999) / 2 ** 6
        assert res.nominal_apr == pytest.approx(2 * res.periodic_rate)
        assert "did not reach tolerance" in caplog.text


class TestExpandedRange:
    def test_round_trip_near_top_of_expanded_bracket(self, bond):
        rate = 1e20
        config = SolverConfig(tolerance=1e-30)
        res = solve_ytm(bond, price_at_rate(rate, bond), config)
        assert res.converged
        assert res.periodic_rate == pytest.approx(rate, rel=1e-9)
        assert res.annual_effective_rate == pytest.approx((1 + res.periodic_rate) ** 2 - 1)
        assert res.nominal_apr == pytest.approx(2 * res.periodic_rate)

    def test_tiny_price_on_monthly_coupon_bond(self):
        res = solve_ytm(BondSpec(1000, 0.12, 1, 12), 1e-29)
        assert res.method == "bisection"
        assert 1e29 < res.periodic_rate < 10.0 * 2 ** 100
        assert math.isinf(res.annual_effective_rate)
        assert res.nominal_apr == pytest.approx(12 * res.periodic_rate)

    def test_tiny_price_on_zero_coupon_bond(self):
        res = solve_ytm(BondSpec(1000, 0.0, 0.5, 2), 1e-160)
        assert res.method == "closed_form"
        assert res.periodic_rate == pytest.approx(1e163)
        assert math.isinf(res.annual_effective_rate)
        assert res.nominal_apr == pytest.approx(2e163)


class TestBracket:
    def test_default_bracket_kept_when_it_straddles(self):
        bracket = find_bracket(lambda r: 1.0 - r)
        assert bracket.low == -0.999999
        assert bracket.high == 10.0
        assert bracket.expansions == 0
        assert bracket.contains_root

    def test_upper_bound_doubles(self):
        bracket = find_bracket(lambda r: 100.0 - r)
        assert bracket.high == 160.0
        assert bracket.expansions == 4
        assert bracket.contains_root

    def test_gives_up_after_budget(self):
        bracket = find_bracket(lambda r: 1.0, SolverConfig(max_expansions=3))
        assert bracket.expansions == 3
        assert bracket.high == 80.0
        assert not bracket.contains_root


class TestBisect:
    def test_linear_root(self):
        func = lambda r: 0.5 - r  # noqa: E731
        root, iterations, converged = bisect(func, Bracket(0.0, 2.0, func(0.0), func(2.0)))
        assert root == 0.5
        assert iterations == 2
        assert converged

    def test_cap_returns_midpoint(self):
        func = lambda r: 0.3 - r  # noqa: E731
        root, iterations, converged = bisect(
            func, Bracket(0.0, 1.0, func(0.0), func(1.0)), SolverConfig(max_iterations=1)
        )
        # mid 0.5 is above the root, so the bracket narrows to [0, 0.5]
        assert root == 0.25
        assert iterations == 1
        assert not converged


def test_annualisation_helpers():
    assert nominal_apr(0.02, 4) == pytest.approx(0.08)
    assert annual_effective_rate(0.02, 4) == pytest.approx(1.02 ** 4 - 1)
    assert annual_effective_rate(0.0, 12) == 0.0
    assert math.isinf(annual_effective_rate(1e30, 12))
