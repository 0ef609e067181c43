"""Unit tests for arbitrage diagnostics."""

import math

from fxvanilla.core.black_scholes import compute_premium
from fxvanilla.diagnostics.arbitrage import (
    check_price_bounds,
    check_put_call_parity,
    describe_bound_violation,
    premium_bounds,
)


def test_model_premiums_within_bounds(standard_params):
    """Model premiums always satisfy the no-arbitrage bounds."""
    pair = compute_premium(standard_params)
    result = check_price_bounds(pair.call, pair.put, standard_params)

    assert result.is_valid
    assert result.details == {"call_within_bounds": True, "put_within_bounds": True}


def test_price_bounds_violation(itm_call_params):
    result = check_price_bounds(call_price=5.0, put_price=1.0, params=itm_call_params)

    assert not result.is_valid
    assert result.details["call_within_bounds"] is False
    assert len(result.violations) == 1


def test_premium_bounds_values(standard_params):
    discount_spot = 100.0 * math.exp(-0.01 * 0.25)
    discount_strike = 100.0 * math.exp(-0.03 * 0.25)

    call_lower, call_upper = premium_bounds("call", standard_params)
    put_lower, put_upper = premium_bounds("put", standard_params)

    assert abs(call_lower - (discount_spot - discount_strike)) < 1e-12
    assert abs(call_upper - discount_spot) < 1e-12
    assert put_lower == 0.0
    assert abs(put_upper - discount_strike) < 1e-12


def test_describe_bound_violation(standard_params):
    assert describe_bound_violation("put", 3.0, standard_params) is None
    assert "above upper bound" in describe_bound_violation("put", 150.0, standard_params)


def test_put_call_parity_valid(with_foreign_rate_params):
    pair = compute_premium(with_foreign_rate_params)
    result = check_put_call_parity(pair.call, pair.put, with_foreign_rate_params)

    assert result.is_valid
    assert result.details["difference"] < 1e-12


def test_put_call_parity_violated(standard_params):
    result = check_put_call_parity(5.0, 5.0, standard_params)

    assert not result.is_valid
    assert "Put-call parity violated" in result.violations[0]
