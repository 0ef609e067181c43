"""
FX option quotation conventions.

FX option markets quote volatility against delta rather than strike: the
at-the-money quote is the delta-neutral straddle, and wings are quoted at
fixed deltas (25Δ, 10Δ), either as forward deltas or as spot deltas. This
module converts those quotes into strikes and normalizes put deltas to
their call-delta equivalents.
"""

import math
from typing import Sequence, Union

import numpy as np

from fxvanilla.core.distributions import normal_ppf
from fxvanilla.core.validation import validate_parameters
from fxvanilla.utils.errors import DomainError
from fxvanilla.utils.types import OptionParameters

# Call delta of the delta-neutral straddle
ATM_CALL_DELTA = 0.5


def _scaled_exp(base: float, exponent: float) -> float:
    """base · e^exponent, saturating to inf instead of raising OverflowError."""
    try:
        growth = math.exp(exponent)
    except OverflowError:
        return math.inf if base > 0 else 0.0
    return base * growth


def atm_forward_strike(params: OptionParameters) -> float:
    """
    Strike of the delta-neutral straddle.

    Formula:
        K_atm = S · e^((r_d - r_f + σ²/2)·T)

    Args:
        params: Market state; the strike field is ignored

    Returns:
        The at-the-money strike

    Raises:
        ValidationError: If spot, ttm or volatility is negative
    """
    params = params.replace(strike=0.0)
    validate_parameters(params)

    sigma = params.volatility
    drift = params.domestic_rate - params.foreign_rate + 0.5 * sigma * sigma

    return _scaled_exp(params.spot, drift * params.time_to_maturity)


def strike_from_quoted_delta(
    params: OptionParameters,
    delta: float,
    use_forward_delta: bool = True,
) -> float:
    """
    Translate a quoted delta and volatility into a strike.

    Negative deltas are put quotes, non-negative deltas call quotes.

    Formulas (F = S·e^((r_d - r_f)·T), m the delta multiplier):
        Call: K = F · e^(-σ√T · N⁻¹(m·Δ) + σ²T/2)
        Put:  K = F · e^( σ√T · N⁻¹(-m·Δ) + σ²T/2)

    Args:
        params: Market state with the quoted volatility; strike is ignored
        delta: Quoted delta, |delta| <= 1
        use_forward_delta: True (default) for forward-delta quotes (m = 1),
            False for spot-delta quotes (m = e^(r_f·T))

    Returns:
        The strike. A call delta of exactly 0 maps to an infinite strike
        and a call delta of 1 to a zero strike.

    Raises:
        DomainError: If |delta| > 1, or if a spot delta exceeds the
            foreign discount factor e^(-r_f·T)
        ValidationError: If spot, ttm or volatility is negative
    """
    if abs(delta) > 1:
        raise DomainError(f"Delta absolute value cannot be more than one, got delta={delta}")

    params = params.replace(strike=0.0)
    validate_parameters(params)

    T = params.time_to_maturity
    sigma = params.volatility
    multiplier = 1.0 if use_forward_delta else _scaled_exp(1.0, params.foreign_rate * T)
    forward_delta = multiplier * delta if delta else 0.0

    if abs(forward_delta) > 1:
        raise DomainError(
            f"Spot delta {delta} exceeds the foreign discount factor {1.0 / multiplier:.6f}"
        )

    carry = (params.domestic_rate - params.foreign_rate) * T
    exponent = carry + 0.5 * sigma * sigma * T
    diffusion = sigma * math.sqrt(T)

    # At expiry or zero vol every delta quotes the forward
    if diffusion == 0:
        return _scaled_exp(params.spot, exponent)

    if delta < 0:
        exponent += diffusion * normal_ppf(-forward_delta)
    else:
        exponent -= diffusion * normal_ppf(forward_delta)

    return _scaled_exp(params.spot, exponent)


def harmonize_delta(
    deltas: Union[float, Sequence[float], np.ndarray],
) -> Union[float, np.ndarray]:
    """
    Convert deltas to call-delta equivalents.

    Negative (put) deltas map to 1 + delta, since absolute forward call
    and put deltas sum to one. A delta of exactly 0 is the at-the-money
    delta-neutral straddle quote and maps to 0.5. Positive deltas are
    already call deltas.

    Args:
        deltas: A scalar or a sequence of deltas

    Returns:
        A float for scalar input, otherwise a numpy array of the same shape

    Raises:
        DomainError: If any |delta| > 1

    Examples:
        >>> harmonize_delta(-0.25)
        0.75
        >>> harmonize_delta([0.0, -0.1, 0.1]).tolist()
        [0.5, 0.9, 0.1]
    """
    values = np.asarray(deltas, dtype=float)
    if np.any(np.abs(values) > 1):
        raise DomainError("Delta absolute value cannot be more than 1")

    call_deltas = np.where(values < 0, 1.0 + values, values)
    call_deltas = np.where(values == 0, ATM_CALL_DELTA, call_deltas)

    if call_deltas.ndim == 0:
        return float(call_deltas)
    return call_deltas
