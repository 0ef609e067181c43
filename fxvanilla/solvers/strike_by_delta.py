"""
Strike-by-delta solver.

Inverts the delta formula: find the strike K in [0, 5·spot] whose call
(or put) delta equals a target. Seeded at K = spot. As with implied
volatility, an unreachable target (wrong sign for the side, or beyond the
foreign discount factor) is reported as an unsuccessful SolverResult.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from fxvanilla.core.black_scholes import log_moneyness_terms
from fxvanilla.core.greeks import _delta
from fxvanilla.core.validation import validate_parameters
from fxvanilla.solvers.least_squares import solve_bounded
from fxvanilla.utils.constants import (
    DELTA_TOLERANCE,
    STRIKE_LOWER_FRACTION,
    STRIKE_UPPER_MULTIPLE,
)
from fxvanilla.utils.errors import DomainError
from fxvanilla.utils.types import OptionParameters, OptionSide, SideLike, SolverResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeltaObjective:
    """
    Objective f(K) = target_delta - delta(side, K).

    Owns a copy of the fixed contract parameters; the strike stored in
    ``params`` is ignored.
    """

    side: OptionSide
    target_delta: float
    params: OptionParameters

    def __call__(self, strike: float) -> float:
        params = self.params.replace(strike=strike)
        model_delta = _delta(params, log_moneyness_terms(params)).for_side(self.side)
        return self.target_delta - model_delta


def strike_by_delta(
    side: SideLike,
    target_delta: float,
    params: OptionParameters,
    initial_guess: Optional[float] = None,
    strike_upper_multiple: float = STRIKE_UPPER_MULTIPLE,
    tolerance: float = DELTA_TOLERANCE,
) -> SolverResult:
    """
    Solve for the strike whose delta matches a target.

    Args:
        side: "call" or "put" (or OptionSide)
        target_delta: Desired delta, |target_delta| <= 1
        params: Contract parameters; the strike field is ignored
        initial_guess: Starting strike, defaults to spot
        strike_upper_multiple: Upper bound of the search as a multiple of spot
        tolerance: Largest delta residual accepted

    Returns:
        SolverResult with ``value`` set to the strike, or ``value=None``
        and ``success=False`` when no solution was found

    Raises:
        InvalidOptionSide: If side is not recognized (before solving)
        DomainError: If |target_delta| > 1, spot is zero, or σ√T is zero
        ValidationError: If spot, ttm or volatility is negative
    """
    option_side = OptionSide.parse(side)

    if abs(target_delta) > 1:
        raise DomainError(f"abs(delta) cannot be greater than one, got delta={target_delta}")

    # Strike placeholder until solved
    params = params.replace(strike=0.0)
    diagnostics = validate_parameters(params)

    S = params.spot
    if S == 0:
        raise DomainError("Cannot solve for a strike with zero spot")
    if params.volatility * math.sqrt(params.time_to_maturity) == 0:
        raise DomainError(
            f"Delta is undefined for volatility*sqrt(ttm) = 0 "
            f"(volatility={params.volatility}, ttm={params.time_to_maturity})"
        )

    lower = S * STRIKE_LOWER_FRACTION
    upper = S * strike_upper_multiple
    if initial_guess is None:
        initial_guess = S

    objective = DeltaObjective(side=option_side, target_delta=target_delta, params=params)
    logger.debug(
        "Solving strike for %s delta %.6f in [%g, %g]",
        option_side.value,
        target_delta,
        lower,
        upper,
    )

    result = solve_bounded(objective, initial_guess, lower, upper, tolerance)
    result.diagnostics = diagnostics

    if not result.success:
        logger.info(
            "No strike for %s delta %.6f: %s",
            option_side.value,
            target_delta,
            result.message,
        )

    return result
