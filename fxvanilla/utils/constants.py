"""
Numerical constants and tolerances for option pricing and inversion.

This module defines thresholds for edge case detection and the defaults
handed to the bounded least-squares solver. Solver entry points accept
these as keyword defaults, so a caller can override any of them per call.
"""

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1
MAX_PDF_ARGUMENT = 10.0  # Beyond ±10σ, PDF is below 2e-22

# Implied volatility search
IV_INITIAL_GUESS = 0.2  # 20% seed
IV_MIN_VOL = 1e-8  # d1/d2 are undefined at exactly zero volatility
IV_MAX_VOL = 2.0  # 200% annualized
IV_PRICE_TOLERANCE = 1e-6  # Residual accepted as a matched premium
IV_SCAN_FLOOR = 1e-3  # Smallest volatility sampled when re-seeding
IV_SCAN_POINTS = 60  # Geometric grid size for re-seeding

# Strike-by-delta search
STRIKE_LOWER_FRACTION = 1e-8  # Lower bound as a fraction of spot
STRIKE_UPPER_MULTIPLE = 5.0  # Upper bound as a multiple of spot
DELTA_TOLERANCE = 1e-6  # Residual accepted as a matched delta

# scipy.optimize.least_squares settings
SOLVER_METHOD = "trf"
SOLVER_FTOL = 1e-10
SOLVER_XTOL = 1e-10
SOLVER_GTOL = 1e-10
SOLVER_MAX_NFEV = 200  # Iteration cap

# least_squares statuses treated as convergence:
# 1 gradient, 2 cost reduction, 4 cost and step (true convergence)
# 3 step size (small-step convergence)
CONVERGED_STATUSES = (1, 2, 4)
SMALL_STEP_STATUSES = (3,)

# Arbitrage diagnostics tolerances
ARBITRAGE_TOLERANCE = 1e-4  # $0.0001 tolerance for bounds checks
PARITY_TOLERANCE = 1e-6  # Put-call parity tolerance
