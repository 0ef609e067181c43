"""
Exception hierarchy for the pricing engine.

Every error derives from ValueError, so code written against plain
ValueError checks keeps working. Solver non-convergence is not an error:
it is reported through SolverResult.
"""


class PricingError(ValueError):
    """Base class for all fatal pricing errors."""


class ValidationError(PricingError):
    """A hard sign constraint on an option parameter was violated."""

    def __init__(self, field: str, value: float, message: str = "") -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"{field} cannot be negative, got {field}={value}")


class DomainError(PricingError):
    """An input lies outside the domain of the requested formula."""


class InvalidOptionSide(PricingError):
    """An option side token was not recognized."""

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f"option side must be 'call' or 'put', got {token!r}")
