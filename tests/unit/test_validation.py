"""Unit tests for parameter validation and side parsing."""

import logging
import math

import pytest

from fxvanilla.core.black_scholes import compute_premium
from fxvanilla.core.validation import validate_parameters
from fxvanilla.utils.errors import InvalidOptionSide, PricingError, ValidationError
from fxvanilla.utils.types import OptionSide


@pytest.mark.parametrize("field", ["spot", "strike", "time_to_maturity", "volatility"])
def test_negative_field_rejected(standard_params, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(standard_params.replace(**{field: -0.5}))

    assert excinfo.value.field == field
    assert excinfo.value.value == -0.5


def test_zero_values_accepted(standard_params):
    params = standard_params.replace(spot=0.0, strike=0.0, time_to_maturity=0.0, volatility=0.0)
    assert validate_parameters(params) == ()


def test_negative_rates_are_diagnostics(standard_params, caplog):
    params = standard_params.replace(domestic_rate=-0.01, foreign_rate=-0.02)

    with caplog.at_level(logging.WARNING, logger="fxvanilla.core.validation"):
        diagnostics = validate_parameters(params)

    assert [d.code for d in diagnostics] == ["negative_foreign_rate", "negative_domestic_rate"]
    assert [d.field for d in diagnostics] == ["foreign_rate", "domestic_rate"]
    assert "negative domestic risk-free rate" in caplog.text


def test_errors_are_value_errors():
    assert issubclass(PricingError, ValueError)
    with pytest.raises(ValueError):
        OptionSide.parse("straddle")


@pytest.mark.parametrize(
    "token, expected",
    [("call", OptionSide.CALL), ("C", OptionSide.CALL), ("Put", OptionSide.PUT), ("p", OptionSide.PUT)],
)
def test_side_aliases(token, expected):
    assert OptionSide.parse(token) is expected


def test_invalid_side_keeps_token():
    with pytest.raises(InvalidOptionSide) as excinfo:
        OptionSide.parse("x")
    assert excinfo.value.token == "x"


@pytest.mark.parametrize("field", ["spot", "strike", "time_to_maturity", "volatility"])
@pytest.mark.parametrize("value", [math.nan, math.inf])
def test_non_finite_field_rejected(standard_params, field, value):
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(standard_params.replace(**{field: value}))

    assert excinfo.value.field == field


@pytest.mark.parametrize("field", ["domestic_rate", "foreign_rate"])
def test_nan_rate_rejected(standard_params, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_parameters(standard_params.replace(**{field: math.nan}))

    assert excinfo.value.field == field


def test_nan_spot_does_not_price(standard_params):
    with pytest.raises(ValidationError):
        compute_premium(standard_params.replace(spot=math.nan))
