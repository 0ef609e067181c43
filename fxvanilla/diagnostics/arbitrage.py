"""
Arbitrage diagnostics for option premiums.

This module implements the model-free no-arbitrage checks that bracket
any European premium under continuous foreign yield:
- Price bounds validation
- Put-call parity

The implied volatility solver uses premium_bounds() to explain why a
target premium has no solution.
"""

import math
from typing import Optional

from fxvanilla.utils.constants import ARBITRAGE_TOLERANCE, PARITY_TOLERANCE
from fxvanilla.utils.types import ArbitrageCheck, OptionParameters, OptionSide, SideLike


def _discounted_legs(params: OptionParameters) -> tuple[float, float]:
    T = params.time_to_maturity
    discount_spot = params.spot * math.exp(-params.foreign_rate * T)
    discount_strike = params.strike * math.exp(-params.domestic_rate * T)
    return discount_spot, discount_strike


def premium_bounds(side: SideLike, params: OptionParameters) -> tuple[float, float]:
    """
    No-arbitrage (lower, upper) bounds on a premium.

    Call: max(S·e^(-r_f·T) - K·e^(-r_d·T), 0) <= C <= S·e^(-r_f·T)
    Put:  max(K·e^(-r_d·T) - S·e^(-r_f·T), 0) <= P <= K·e^(-r_d·T)
    """
    discount_spot, discount_strike = _discounted_legs(params)

    if OptionSide.parse(side) is OptionSide.CALL:
        return max(discount_spot - discount_strike, 0.0), discount_spot
    return max(discount_strike - discount_spot, 0.0), discount_strike


def describe_bound_violation(
    side: SideLike,
    premium: float,
    params: OptionParameters,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> Optional[str]:
    """
    Explain how a premium breaks its no-arbitrage bounds.

    Returns:
        None if the premium lies within its bounds, a message otherwise
    """
    option_side = OptionSide.parse(side)
    lower, upper = premium_bounds(option_side, params)
    label = option_side.value.capitalize()

    if premium < lower - tolerance:
        return f"{label} premium {premium:.4f} below lower bound {lower:.4f}"
    if premium > upper + tolerance:
        return f"{label} premium {premium:.4f} above upper bound {upper:.4f}"

    return None


def check_price_bounds(
    call_price: float,
    put_price: float,
    params: OptionParameters,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate a call/put premium pair against no-arbitrage bounds.

    Args:
        call_price, put_price: Observed premiums
        params: Contract parameters (volatility is not used)
        tolerance: Tolerance for floating point comparisons

    Returns:
        ArbitrageCheck with one detail flag per side
    """
    violations = []
    details = {}

    for side, price in ((OptionSide.CALL, call_price), (OptionSide.PUT, put_price)):
        violation = describe_bound_violation(side, price, params, tolerance)
        details[f"{side.value}_within_bounds"] = violation is None
        if violation:
            violations.append(violation)

    return ArbitrageCheck(is_valid=not violations, violations=violations, details=details)


def check_put_call_parity(
    call_price: float,
    put_price: float,
    params: OptionParameters,
    tolerance: float = PARITY_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate put-call parity.

    Put-call parity:
        C - P = S·e^(-r_f·T) - K·e^(-r_d·T)
    """
    discount_spot, discount_strike = _discounted_legs(params)
    lhs = call_price - put_price
    rhs = discount_spot - discount_strike

    diff = abs(lhs - rhs)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Put-call parity violated: C - P = {lhs:.6f}, "
            f"S·e^(-r_f·T) - K·e^(-r_d·T) = {rhs:.6f}, diff = {diff:.6f}"
        )

    details = {"parity_lhs": lhs, "parity_rhs": rhs, "difference": diff}

    return ArbitrageCheck(is_valid=is_valid, violations=violations, details=details)
