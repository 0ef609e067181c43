"""
Statistical distributions with numerical safeguards.

This module provides numerically stable implementations of the standard
normal cumulative distribution function (CDF), probability density
function (PDF) and inverse CDF, with special handling for extreme and
infinite arguments (d1/d2 are ±inf when spot or strike is zero).
"""

import math
from scipy.stats import norm

from fxvanilla.utils.constants import MAX_PDF_ARGUMENT, MAX_STANDARD_DEVIATIONS


def normal_cdf(x: float) -> float:
    """
    Standard normal cumulative distribution function with bounds clamping.

    For |x| > 8, the CDF is effectively 0 (x < -8) or 1 (x > 8) due to
    floating point precision limits. We clamp to these values to prevent
    underflow; this also covers x = ±inf.

    Args:
        x: Value at which to evaluate the CDF

    Returns:
        Probability that a standard normal random variable is less than x

    Examples:
        >>> normal_cdf(0.0)
        0.5
        >>> normal_cdf(10.0)
        1.0
    """
    if x > MAX_STANDARD_DEVIATIONS:
        return 1.0
    if x < -MAX_STANDARD_DEVIATIONS:
        return 0.0

    return float(norm.cdf(x))


def normal_pdf(x: float) -> float:
    """
    Standard normal probability density function with overflow protection.

    For |x| > 10, the PDF is negligible (< 2e-22) and is returned as zero.

    Notes:
        φ(x) = (1/√(2π)) * exp(-x²/2)
    """
    if abs(x) > MAX_PDF_ARGUMENT:
        return 0.0

    return (1.0 / math.sqrt(2.0 * math.pi)) * math.exp(-0.5 * x * x)


def normal_ppf(p: float) -> float:
    """
    Inverse of the standard normal CDF.

    Returns -inf at p = 0 and +inf at p = 1, matching the limits of the CDF.

    Raises:
        ValueError: If p lies outside [0, 1]
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Probability must lie in [0, 1], got p={p}")
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf

    return float(norm.ppf(p))
