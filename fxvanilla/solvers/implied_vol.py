"""
Implied volatility solver.

Inverts the premium formula: find σ in [0, 2] such that the model premium
of the requested side equals a target premium. The search is a bounded
least-squares solve seeded at 20% volatility; if the premium is too flat
there for the solver to move, a coarse scan over the volatility range
finds a bracketing interval and the solve is repeated inside it.

A target the model cannot reach (below intrinsic value, above the
no-arbitrage upper bound, or beyond 200% volatility) is a normal outcome
reported as an unsuccessful SolverResult, never as an exception.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from fxvanilla.core.black_scholes import premium_pair
from fxvanilla.core.validation import validate_parameters
from fxvanilla.diagnostics.arbitrage import describe_bound_violation
from fxvanilla.solvers.least_squares import solve_bounded
from fxvanilla.utils.constants import (
    IV_INITIAL_GUESS,
    IV_MAX_VOL,
    IV_MIN_VOL,
    IV_PRICE_TOLERANCE,
    IV_SCAN_FLOOR,
    IV_SCAN_POINTS,
)
from fxvanilla.utils.types import OptionParameters, OptionSide, SideLike, SolverResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PremiumObjective:
    """
    Objective f(σ) = premium(side, σ) - target_premium.

    Owns a copy of the fixed contract parameters; the volatility stored
    in ``params`` is ignored.
    """

    side: OptionSide
    target_premium: float
    params: OptionParameters

    def __call__(self, sigma: float) -> float:
        call, put = premium_pair(self.params.replace(volatility=sigma))
        model_premium = call if self.side is OptionSide.CALL else put
        return model_premium - self.target_premium


def _find_bracket(
    objective: PremiumObjective,
    lower: float,
    upper: float,
    points: int = IV_SCAN_POINTS,
) -> Optional[tuple[float, float]]:
    """
    First sub-interval of [lower, upper] on which the objective changes sign.

    The premium is increasing in σ, so a reachable target has exactly one
    crossing. Samples are geometrically spaced from IV_SCAN_FLOOR, since
    vega varies most at low volatility.

    Returns:
        (low, high) bracketing the root, or None if no crossing was seen
    """
    start = max(lower, IV_SCAN_FLOOR)
    if start >= upper:
        grid = np.linspace(lower, upper, points)
    else:
        grid = np.geomspace(start, upper, points)
        if lower < start:
            grid = np.concatenate(([lower], grid))

    signs = np.sign([objective(float(sigma)) for sigma in grid])
    crossings = np.flatnonzero(signs[:-1] != signs[1:])
    if crossings.size == 0:
        return None

    i = int(crossings[0])
    return float(grid[i]), float(grid[i + 1])


def implied_volatility(
    side: SideLike,
    target_premium: float,
    params: OptionParameters,
    initial_guess: float = IV_INITIAL_GUESS,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
    tolerance: float = IV_PRICE_TOLERANCE,
) -> SolverResult:
    """
    Solve for the volatility that reproduces a premium.

    Args:
        side: "call" or "put" (or OptionSide)
        target_premium: Observed premium
        params: Contract parameters; the volatility field is ignored
        initial_guess: Starting volatility, default 20%
        vol_lower: Lower bound of the search
        vol_upper: Upper bound of the search, default 200%
        tolerance: Largest premium residual accepted

    Returns:
        SolverResult with ``value`` set to the implied volatility, or
        ``value=None`` and ``success=False`` when no solution was found

    Raises:
        InvalidOptionSide: If side is not recognized (before solving)
        ValidationError: If spot, strike or ttm is negative

    Examples:
        >>> params = OptionParameters(100, 100, 0.03, 0.25, 0.0, 0.01)
        >>> result = implied_volatility("call", 4.2216, params)
        >>> round(result.value, 3)
        0.2
    """
    option_side = OptionSide.parse(side)
    params = params.replace(volatility=initial_guess)
    diagnostics = validate_parameters(params)

    if params.time_to_maturity == 0:
        logger.info("Implied volatility requested at expiry; premium does not depend on volatility")
        return SolverResult(
            value=None,
            success=False,
            status=0,
            iterations=0,
            method="none",
            message="Volatility is not identifiable at expiry",
            diagnostics=diagnostics,
        )

    objective = PremiumObjective(side=option_side, target_premium=target_premium, params=params)
    logger.debug(
        "Solving implied volatility for %s premium %.6f in [%g, %g]",
        option_side.value,
        target_premium,
        vol_lower,
        vol_upper,
    )

    result = solve_bounded(objective, initial_guess, vol_lower, vol_upper, tolerance)

    # Flat premium at the seed (deep ITM/OTM, short dated) stalls the solver
    if not result.success:
        bracket = _find_bracket(objective, vol_lower, vol_upper)
        if bracket is not None:
            low, high = bracket
            logger.debug("Re-seeding implied volatility solve in [%g, %g]", low, high)
            first_evaluations = result.iterations
            result = solve_bounded(objective, 0.5 * (low + high), low, high, tolerance)
            result.iterations += first_evaluations

    result.diagnostics = diagnostics

    if not result.success:
        violation = describe_bound_violation(option_side, target_premium, params)
        if violation:
            result.message = f"{result.message}. {violation}"
        logger.info(
            "No implied volatility for %s premium %.6f: %s",
            option_side.value,
            target_premium,
            result.message,
        )

    return result


def implied_volatility_vectorized(
    side: SideLike,
    target_premiums: Sequence[float],
    strikes: Sequence[float],
    params: OptionParameters,
) -> list[SolverResult]:
    """
    Solve implied volatilities across strikes (volatility smile).

    Args:
        side: "call" or "put" (same for all)
        target_premiums: Observed premiums, one per strike
        strikes: Strike prices (must match length of target_premiums)
        params: Shared parameters; strike and volatility are ignored

    Returns:
        List of SolverResult objects, one per strike

    Raises:
        ValueError: If target_premiums and strikes have different lengths
    """
    if len(target_premiums) != len(strikes):
        raise ValueError(
            f"target_premiums ({len(target_premiums)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    option_side = OptionSide.parse(side)
    return [
        implied_volatility(option_side, premium, params.replace(strike=strike))
        for premium, strike in zip(target_premiums, strikes)
    ]
