"""
Parameter validation shared by every pricing and inversion operation.

Spot, strike, time to maturity and volatility must be non-negative and
finite; a violation is fatal. Rates must be finite but may be negative:
that is reported as a Diagnostic, logged at WARNING, and the computation
goes on.
"""

import logging
import math

from fxvanilla.utils.errors import ValidationError
from fxvanilla.utils.types import Diagnostic, Diagnostics, OptionParameters

logger = logging.getLogger(__name__)

_NON_NEGATIVE_FIELDS = (
    ("spot", "spot price"),
    ("strike", "strike price"),
    ("time_to_maturity", "time to maturity"),
    ("volatility", "volatility"),
)

_RATE_FIELDS = (
    ("foreign_rate", "negative_foreign_rate", "negative foreign rate / asset yield"),
    ("domestic_rate", "negative_domestic_rate", "negative domestic risk-free rate"),
)


def validate_parameters(params: OptionParameters) -> Diagnostics:
    """
    Validate option pricing inputs.

    Args:
        params: Full parameter set. Callers that have not fixed the strike
            yet pass a placeholder strike of 0.

    Returns:
        Tuple of non-fatal diagnostics (empty when all rates are
        non-negative)

    Raises:
        ValidationError: If spot, strike, time to maturity or volatility is
            negative or not finite, or a rate is not finite (NaN, inf); the
            error's ``field`` names the offending attribute
    """
    for name, label in _NON_NEGATIVE_FIELDS:
        value = getattr(params, name)
        if value < 0:
            raise ValidationError(name, value, f"Negative {label}, got {name}={value}")
        if not math.isfinite(value):
            raise ValidationError(name, value, f"Non-finite {label}, got {name}={value}")

    for name, _, _ in _RATE_FIELDS:
        value = getattr(params, name)
        if not math.isfinite(value):
            raise ValidationError(name, value, f"Non-finite rate, got {name}={value}")

    diagnostics = []
    for name, code, label in _RATE_FIELDS:
        value = getattr(params, name)
        if value < 0:
            diagnostic = Diagnostic(code=code, field=name, message=f"{label}: {name}={value}")
            logger.warning(diagnostic.message)
            diagnostics.append(diagnostic)

    return tuple(diagnostics)
