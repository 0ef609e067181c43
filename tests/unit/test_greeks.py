"""
Unit tests for the Greeks engine.

Each analytical Greek is cross-checked against a central finite
difference of the premium, for both the call and the put. Theta is
checked with the sign convention Θ = -∂V/∂T.
"""

import math

import pytest

from fxvanilla.core.black_scholes import compute_premium
from fxvanilla.core.greeks import compute_greeks, delta, gamma, q_rho, rho, theta, vega
from fxvanilla.utils.errors import DomainError
from fxvanilla.utils.types import GREEK_FIELDS, GREEK_NAMES, OptionParameters, OptionSide

SIDES = ["call", "put"]

PARAMETER_SETS = [
    OptionParameters(100.0, 100.0, 0.03, 0.25, 0.20, 0.01),
    OptionParameters(110.0, 100.0, 0.05, 1.0, 0.20, 0.0),
    OptionParameters(1.10, 1.15, 0.02, 1.0, 0.10, 0.04),
    OptionParameters(100.0, 90.0, -0.01, 0.5, 0.35, 0.02),
]


def _premium(params, side):
    return compute_premium(params).for_side(side)


def _central_difference(params, field, h, side):
    value = getattr(params, field)
    up = _premium(params.replace(**{field: value + h}), side)
    down = _premium(params.replace(**{field: value - h}), side)
    return (up - down) / (2 * h)


# ===========================
# Finite-Difference Validation
# ===========================


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_delta_finite_difference(params, side):
    h = params.spot * 1e-4
    numerical = _central_difference(params, "spot", h, side)
    assert abs(delta(params).for_side(side) - numerical) < 1e-5


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_gamma_finite_difference(params, side):
    S = params.spot
    h = S * 1e-3

    price = _premium(params, side)
    price_up = _premium(params.replace(spot=S + h), side)
    price_down = _premium(params.replace(spot=S - h), side)
    numerical = (price_up - 2 * price + price_down) / (h * h)

    analytical = gamma(params).for_side(side)
    assert abs(analytical - numerical) < 1e-3 * max(1.0, analytical)


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_vega_finite_difference(params, side):
    numerical = _central_difference(params, "volatility", 1e-4, side)
    assert abs(vega(params).for_side(side) - numerical) < 1e-4


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_theta_finite_difference(params, side):
    """Theta is the value change as the contract ages: -∂V/∂T."""
    numerical = -_central_difference(params, "time_to_maturity", 1e-5, side)
    assert abs(theta(params).for_side(side) - numerical) < 1e-4


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_rho_finite_difference(params, side):
    numerical = _central_difference(params, "domestic_rate", 1e-5, side)
    assert abs(rho(params).for_side(side) - numerical) < 1e-4


@pytest.mark.parametrize("params", PARAMETER_SETS)
@pytest.mark.parametrize("side", SIDES)
def test_q_rho_finite_difference(params, side):
    numerical = _central_difference(params, "foreign_rate", 1e-5, side)
    assert abs(q_rho(params).for_side(side) - numerical) < 1e-4


# ===========================
# Structural Properties
# ===========================


@pytest.mark.parametrize("params", PARAMETER_SETS)
def test_delta_relationship(params):
    """Δ_c - Δ_p = e^(-r_f·T) and |Δ_c| <= e^(-r_f·T)."""
    pair = delta(params)
    discount = math.exp(-params.foreign_rate * params.time_to_maturity)

    assert abs((pair.call - pair.put) - discount) < 1e-12
    assert abs(pair.call) <= discount


def test_scenario_delta(standard_params):
    """Δ_c = e^(-0.0025)·N(0.1) ≈ 0.5385, Δ_p ≈ -0.4590."""
    pair = delta(standard_params)
    assert abs(pair.call - 0.5385) < 0.001
    assert abs(pair.put + 0.4590) < 0.001


@pytest.mark.parametrize("params", PARAMETER_SETS)
def test_gamma_and_vega_identical_for_both_sides(params):
    bundle = compute_greeks(params)
    assert bundle.gamma.call == bundle.gamma.put
    assert bundle.vega.call == bundle.vega.put
    assert bundle.gamma.call > 0
    assert bundle.vega.call > 0


def test_rho_signs(standard_params):
    pair = rho(standard_params)
    assert pair.call > 0
    assert pair.put < 0


def test_q_rho_signs(standard_params):
    pair = q_rho(standard_params)
    assert pair.call < 0
    assert pair.put > 0


def test_atm_call_theta_negative(standard_params):
    assert theta(standard_params).call < 0


def test_gamma_at_zero_spot():
    pair = gamma(OptionParameters(0.0, 100.0, 0.03, 0.5, 0.2, 0.01))
    assert pair.call == 0.0 and pair.put == 0.0


# ===========================
# compute_greeks() Tests
# ===========================


def test_compute_greeks_consistency(standard_params):
    """The bundle matches the individual functions."""
    bundle = compute_greeks(standard_params)

    assert bundle.delta == delta(standard_params)
    assert bundle.gamma == gamma(standard_params)
    assert bundle.theta == theta(standard_params)
    assert bundle.vega == vega(standard_params)
    assert bundle.rho == rho(standard_params)
    assert bundle.q_rho == q_rho(standard_params)


def test_compute_greeks_computes_d1_d2_once(standard_params, monkeypatch):
    import fxvanilla.core.greeks as greeks_module

    calls = []
    original = greeks_module.log_moneyness_terms

    def counting(params):
        calls.append(params)
        return original(params)

    monkeypatch.setattr(greeks_module, "log_moneyness_terms", counting)
    greeks_module.compute_greeks(standard_params)

    assert len(calls) == 1


def test_bundle_items_follow_fixed_field_list(standard_params):
    bundle = compute_greeks(standard_params)
    names = [name for name, _ in bundle.items()]

    assert names == list(GREEK_NAMES)
    assert [name for name, _ in GREEK_FIELDS] == list(GREEK_NAMES)
    for name, accessor in GREEK_FIELDS:
        assert accessor(bundle) is getattr(bundle, name)


def test_for_side_accepts_enum_and_aliases(standard_params):
    pair = delta(standard_params)
    assert pair.for_side(OptionSide.CALL) == pair.call
    assert pair.for_side("P") == pair.put


def test_greeks_undefined_at_expiry(standard_params):
    with pytest.raises(DomainError):
        compute_greeks(standard_params.replace(time_to_maturity=0.0))


def test_greeks_carry_rate_diagnostics(negative_rate_params):
    bundle = compute_greeks(negative_rate_params)
    assert [d.field for d in bundle.diagnostics] == ["domestic_rate"]
