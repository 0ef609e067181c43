"""
Bounded nonlinear least squares for one-dimensional inversions.

Both inversions in this package (premium → volatility and delta → strike)
reduce to driving a scalar objective to zero over a closed interval. This
module wraps scipy.optimize.least_squares for that case and turns its
termination status into a SolverResult: a value is reported only when
the solver converged and the final residual is within tolerance.
"""

import logging
from typing import Protocol

import numpy as np
from scipy.optimize import least_squares

from fxvanilla.utils.constants import (
    CONVERGED_STATUSES,
    SMALL_STEP_STATUSES,
    SOLVER_FTOL,
    SOLVER_GTOL,
    SOLVER_MAX_NFEV,
    SOLVER_METHOD,
    SOLVER_XTOL,
)
from fxvanilla.utils.types import SolverResult

logger = logging.getLogger(__name__)


class Objective(Protocol):
    """A scalar residual function of one variable."""

    def __call__(self, x: float) -> float:
        ...


def solve_bounded(
    objective: Objective,
    initial_guess: float,
    lower: float,
    upper: float,
    tolerance: float,
    method: str = SOLVER_METHOD,
    ftol: float = SOLVER_FTOL,
    xtol: float = SOLVER_XTOL,
    gtol: float = SOLVER_GTOL,
    max_nfev: int = SOLVER_MAX_NFEV,
) -> SolverResult:
    """
    Find x in [lower, upper] with objective(x) ≈ 0.

    Minimizes 0.5 · objective(x)² with the trust-region reflective
    algorithm, which keeps every iterate inside the bounds.

    Args:
        objective: Residual function; its exceptions propagate
        initial_guess: Starting point, must lie within the bounds
        lower: Lower bound of the search interval
        upper: Upper bound of the search interval
        tolerance: Largest |objective(x)| accepted as a solution
        method: least_squares algorithm
        ftol, xtol, gtol: least_squares termination tolerances
        max_nfev: Cap on objective evaluations

    Returns:
        SolverResult. ``value`` is set only if the termination status is a
        convergence (1, 2, 4) or small-step (3) status and the residual is
        within tolerance.

    Raises:
        ValueError: If the bounds are empty or the guess lies outside them
    """
    if not lower < upper:
        raise ValueError(f"Lower bound must be below upper bound, got [{lower}, {upper}]")
    if not lower <= initial_guess <= upper:
        raise ValueError(
            f"Initial guess {initial_guess} lies outside the bounds [{lower}, {upper}]"
        )

    def residuals(x: np.ndarray) -> np.ndarray:
        return np.array([objective(float(x[0]))])

    solution = least_squares(
        residuals,
        x0=np.array([initial_guess]),
        bounds=([lower], [upper]),
        method=method,
        ftol=ftol,
        xtol=xtol,
        gtol=gtol,
        max_nfev=max_nfev,
    )

    x = float(solution.x[0])
    residual = float(solution.fun[0])
    status = int(solution.status)

    if status in CONVERGED_STATUSES:
        termination = "converged"
    elif status in SMALL_STEP_STATUSES:
        termination = "converged (small step)"
    else:
        logger.debug("least_squares stopped with status %d: %s", status, solution.message)
        return SolverResult(
            value=None,
            success=False,
            status=status,
            iterations=int(solution.nfev),
            method=method,
            message=f"Solver did not converge: {solution.message}",
            residual=residual,
        )

    if abs(residual) > tolerance:
        logger.debug("least_squares stalled at x=%g with residual %.3e", x, residual)
        return SolverResult(
            value=None,
            success=False,
            status=status,
            iterations=int(solution.nfev),
            method=method,
            message=(
                f"Solver {termination} at x={x:.6g} but residual {residual:.3e} "
                f"exceeds tolerance {tolerance:.1e}"
            ),
            residual=residual,
        )

    return SolverResult(
        value=x,
        success=True,
        status=status,
        iterations=int(solution.nfev),
        method=method,
        message=f"Solver {termination} in {solution.nfev} evaluations, residual {residual:.2e}",
        residual=residual,
    )
