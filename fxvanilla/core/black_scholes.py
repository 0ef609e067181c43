"""
Black-Scholes / Garman-Kohlhagen kernel for European options.

This module computes the normalized log-moneyness terms d1 and d2 and the
call/put premium pair. With the foreign rate read as a continuous dividend
yield the same formulas price options on dividend-paying stocks.

Mathematical Background:
    d1 = [ln(S/K) + (r_d - r_f + σ²/2)T] / (σ√T)
    d2 = d1 - σ√T
    C  = S·e^(-r_f·T)·N(d1) - K·e^(-r_d·T)·N(d2)
    P  = K·e^(-r_d·T)·N(-d2) - S·e^(-r_f·T)·N(-d1)

References:
    Garman, M. B., & Kohlhagen, S. W. (1983). Foreign Currency Option Values.
    Journal of International Money and Finance, 2(3), 231-237.
"""

import math

from fxvanilla.core.distributions import normal_cdf
from fxvanilla.core.validation import validate_parameters
from fxvanilla.utils.errors import DomainError
from fxvanilla.utils.types import LogMoneynessTerms, OptionParameters, PremiumPair


def _log_moneyness(S: float, K: float) -> float:
    """ln(S/K) in log space, with the infinite limits at zero spot or strike."""
    if S == 0 and K == 0:
        raise DomainError("Log-moneyness is undefined when both spot and strike are zero")
    if K == 0:
        return math.inf
    if S == 0:
        return -math.inf

    # log(S) - log(K) avoids overflow for extreme S/K
    return math.log(S) - math.log(K)


def log_moneyness_terms(params: OptionParameters) -> LogMoneynessTerms:
    """
    d1 and d2 without validation.

    Used inside solver loops where the parameters were validated once on
    entry. Everyone else should call compute_log_moneyness_terms().

    Raises:
        DomainError: If σ√T is zero
    """
    T = params.time_to_maturity
    sigma = params.volatility
    diffusion = sigma * math.sqrt(T)

    if diffusion == 0:
        raise DomainError(
            f"d1/d2 are undefined for volatility*sqrt(ttm) = 0 "
            f"(volatility={sigma}, ttm={T})"
        )

    drift = (params.domestic_rate - params.foreign_rate + 0.5 * sigma * sigma) * T
    d1 = (_log_moneyness(params.spot, params.strike) + drift) / diffusion

    return LogMoneynessTerms(d1=d1, d2=d1 - diffusion)


def compute_log_moneyness_terms(params: OptionParameters) -> LogMoneynessTerms:
    """
    Calculate d1 and d2.

    Args:
        params: Option parameters

    Returns:
        LogMoneynessTerms(d1, d2)

    Raises:
        ValidationError: If any sign constraint is violated
        DomainError: If volatility·√ttm is zero (including at expiry)

    Notes:
        For a call, N(d2) is the risk-neutral probability of exercise and
        e^(-r_f·T)·N(d1) is the spot delta.
    """
    validate_parameters(params)
    return log_moneyness_terms(params)


def premium_pair(params: OptionParameters) -> tuple[float, float]:
    """
    (call, put) premiums without validation.

    At expiry the premiums are the intrinsic values, which avoids the
    division by zero in d1/d2.
    """
    S = params.spot
    K = params.strike
    T = params.time_to_maturity

    if T == 0:
        return max(0.0, S - K), max(0.0, K - S)

    d1, d2 = log_moneyness_terms(params)
    discount_spot = S * math.exp(-params.foreign_rate * T)
    discount_strike = K * math.exp(-params.domestic_rate * T)

    call = discount_spot * normal_cdf(d1) - discount_strike * normal_cdf(d2)
    put = discount_strike * normal_cdf(-d2) - discount_spot * normal_cdf(-d1)

    return call, put


def compute_premium(params: OptionParameters) -> PremiumPair:
    """
    Calculate European call and put premiums.

    Args:
        params: Option parameters

    Returns:
        PremiumPair with both premiums and any negative-rate diagnostics

    Examples:
        >>> pair = compute_premium(OptionParameters(100, 100, 0.03, 0.25, 0.2, 0.01))
        >>> round(pair.call, 2), round(pair.put, 2)
        (4.22, 3.72)

    Edge Cases:
        - T = 0: Returns (max(S - K, 0), max(K - S, 0)) exactly
        - T > 0, σ = 0: Raises DomainError (d1/d2 undefined)
    """
    diagnostics = validate_parameters(params)
    call, put = premium_pair(params)
    return PremiumPair(call=call, put=put, diagnostics=diagnostics)
