"""
Pytest configuration and shared fixtures.
"""

import pytest

from fxvanilla.utils.types import OptionParameters


@pytest.fixture
def standard_params():
    """Three-month at-the-money FX option, r_d = 3%, r_f = 1%, σ = 20%."""
    return OptionParameters(
        spot=100.0,
        strike=100.0,
        domestic_rate=0.03,
        time_to_maturity=0.25,
        volatility=0.20,
        foreign_rate=0.01,
    )


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return OptionParameters(
        spot=110.0,
        strike=100.0,
        domestic_rate=0.05,
        time_to_maturity=1.0,
        volatility=0.20,
        foreign_rate=0.0,
    )


@pytest.fixture
def with_foreign_rate_params():
    """One-year option with a foreign rate above the domestic rate."""
    return OptionParameters(
        spot=1.10,
        strike=1.15,
        domestic_rate=0.02,
        time_to_maturity=1.0,
        volatility=0.10,
        foreign_rate=0.04,
    )


@pytest.fixture
def negative_rate_params():
    """Otherwise valid parameters with a negative domestic rate."""
    return OptionParameters(
        spot=100.0,
        strike=100.0,
        domestic_rate=-0.01,
        time_to_maturity=0.25,
        volatility=0.20,
        foreign_rate=0.01,
    )
