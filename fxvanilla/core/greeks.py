"""
Closed-form Greeks for European options under Garman-Kohlhagen.

Every Greek is returned for the call and the put together as an
OptionPair. The public functions validate their inputs; the underscored
variants take precomputed d1/d2 so that compute_greeks() evaluates them
only once.

Greeks are undefined at expiry: d1/d2 divide by σ√T, so calling any of
these with ttm = 0 raises DomainError.
"""

import math

from fxvanilla.core.black_scholes import log_moneyness_terms
from fxvanilla.core.distributions import normal_cdf, normal_pdf
from fxvanilla.core.validation import validate_parameters
from fxvanilla.utils.types import (
    Diagnostics,
    GreeksBundle,
    LogMoneynessTerms,
    OptionPair,
    OptionParameters,
)


def _delta(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    discount_factor = math.exp(-params.foreign_rate * params.time_to_maturity)
    cdf_d1 = normal_cdf(terms.d1)
    return OptionPair(call=discount_factor * cdf_d1, put=discount_factor * (cdf_d1 - 1.0))


def _gamma(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    S = params.spot
    T = params.time_to_maturity

    # φ(d1) vanishes faster than S as S → 0
    if S == 0:
        return OptionPair(call=0.0, put=0.0)

    value = (normal_pdf(terms.d1) * math.exp(-params.foreign_rate * T)) / (
        S * params.volatility * math.sqrt(T)
    )
    return OptionPair(call=value, put=value)


def _theta(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    S = params.spot
    K = params.strike
    T = params.time_to_maturity
    rd = params.domestic_rate
    rf = params.foreign_rate
    d1, d2 = terms

    discount_spot = S * math.exp(-rf * T)
    discount_strike = K * math.exp(-rd * T)

    # Diffusion contribution, same for call and put
    diffusion = -(discount_spot * normal_pdf(d1) * params.volatility) / (2.0 * math.sqrt(T))

    call = diffusion + rf * discount_spot * normal_cdf(d1) - rd * discount_strike * normal_cdf(d2)
    put = diffusion - rf * discount_spot * normal_cdf(-d1) + rd * discount_strike * normal_cdf(-d2)

    return OptionPair(call=call, put=put)


def _vega(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    T = params.time_to_maturity
    value = params.spot * math.exp(-params.foreign_rate * T) * normal_pdf(terms.d1) * math.sqrt(T)
    return OptionPair(call=value, put=value)


def _rho(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    T = params.time_to_maturity
    scale = params.strike * T * math.exp(-params.domestic_rate * T)
    return OptionPair(call=scale * normal_cdf(terms.d2), put=-scale * normal_cdf(-terms.d2))


def _q_rho(params: OptionParameters, terms: LogMoneynessTerms) -> OptionPair:
    T = params.time_to_maturity
    scale = params.spot * T * math.exp(-params.foreign_rate * T)
    return OptionPair(call=-scale * normal_cdf(terms.d1), put=scale * normal_cdf(-terms.d1))


def delta(params: OptionParameters) -> OptionPair:
    """
    Calculate option delta (∂V/∂S).

    Formulas:
        Call delta: Δ_c = e^(-r_f·T) · N(d1)
        Put delta:  Δ_p = e^(-r_f·T) · (N(d1) - 1)

    The two always differ by the foreign discount factor:
        Δ_c - Δ_p = e^(-r_f·T)
    """
    validate_parameters(params)
    return _delta(params, log_moneyness_terms(params))


def gamma(params: OptionParameters) -> OptionPair:
    """
    Calculate option gamma (∂²V/∂S²), identical for call and put.

    Formula:
        Γ = e^(-r_f·T) · φ(d1) / (S · σ · √T)
    """
    validate_parameters(params)
    return _gamma(params, log_moneyness_terms(params))


def theta(params: OptionParameters) -> OptionPair:
    """
    Calculate option theta, the value change per year of calendar time.

    Formulas:
        Call theta:
            Θ_c = -S·e^(-r_f·T)·φ(d1)·σ/(2√T) + r_f·S·e^(-r_f·T)·N(d1) - r_d·K·e^(-r_d·T)·N(d2)

        Put theta:
            Θ_p = -S·e^(-r_f·T)·φ(d1)·σ/(2√T) - r_f·S·e^(-r_f·T)·N(-d1) + r_d·K·e^(-r_d·T)·N(-d2)

    Notes:
        Theta equals -∂V/∂T: it is the change as the contract ages, so a
        long ATM option typically has negative theta.
    """
    validate_parameters(params)
    return _theta(params, log_moneyness_terms(params))


def vega(params: OptionParameters) -> OptionPair:
    """
    Calculate option vega (∂V/∂σ) per unit of volatility.

    Formula:
        ν = S · e^(-r_f·T) · φ(d1) · √T
    """
    validate_parameters(params)
    return _vega(params, log_moneyness_terms(params))


def rho(params: OptionParameters) -> OptionPair:
    """
    Calculate domestic rho (∂V/∂r_d).

    Formulas:
        Call rho: ρ_c = K·T·e^(-r_d·T)·N(d2)
        Put rho:  ρ_p = -K·T·e^(-r_d·T)·N(-d2)
    """
    validate_parameters(params)
    return _rho(params, log_moneyness_terms(params))


def q_rho(params: OptionParameters) -> OptionPair:
    """
    Calculate foreign rho (∂V/∂r_f), the dividend-yield rho for equities.

    Formulas:
        Call: -S·T·e^(-r_f·T)·N(d1)
        Put:   S·T·e^(-r_f·T)·N(-d1)
    """
    validate_parameters(params)
    return _q_rho(params, log_moneyness_terms(params))


def greeks_bundle(
    params: OptionParameters, diagnostics: Diagnostics = ()
) -> GreeksBundle:
    """All Greeks without validation, for callers that validated up front."""
    terms = log_moneyness_terms(params)

    return GreeksBundle(
        delta=_delta(params, terms),
        gamma=_gamma(params, terms),
        theta=_theta(params, terms),
        vega=_vega(params, terms),
        rho=_rho(params, terms),
        q_rho=_q_rho(params, terms),
        diagnostics=diagnostics,
    )


def compute_greeks(params: OptionParameters) -> GreeksBundle:
    """
    Calculate all Greeks for both sides in one pass.

    d1 and d2 are computed once and shared by every formula.

    Args:
        params: Option parameters, with ttm > 0 and volatility > 0

    Returns:
        GreeksBundle with delta, gamma, theta, vega, rho and q_rho pairs
        and any negative-rate diagnostics

    Example:
        >>> greeks = compute_greeks(OptionParameters(100, 100, 0.03, 0.25, 0.2, 0.01))
        >>> print(f"Delta: {greeks.delta.call:.4f}")
        Delta: 0.5385
    """
    diagnostics = validate_parameters(params)
    return greeks_bundle(params, diagnostics)
