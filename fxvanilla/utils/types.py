"""
Data types and structures for option pricing.

This module defines the dataclasses and enums used throughout the engine
for representing contracts, call/put result pairs, Greeks and solver
results. Everything here is immutable except SolverResult, and nothing
validates on construction: validation is the job of
fxvanilla.core.validation, which every operation calls first.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Callable, Iterator, NamedTuple, Optional, Union

from fxvanilla.utils.errors import InvalidOptionSide


class OptionSide(str, Enum):
    """Call or put. Selects the branch of every formula and solver objective."""

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, token: Union["OptionSide", str]) -> "OptionSide":
        """
        Resolve a side from an OptionSide or a case-insensitive token.

        Accepted tokens are "call", "c", "put" and "p".

        Raises:
            InvalidOptionSide: If the token is not recognized
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            normalized = token.strip().lower()
            if normalized in ("call", "c"):
                return cls.CALL
            if normalized in ("put", "p"):
                return cls.PUT
        raise InvalidOptionSide(token)


SideLike = Union[OptionSide, str]


@dataclass(frozen=True)
class OptionParameters:
    """
    Immutable container for one contract / market state.

    Attributes:
        spot: Current spot price of the underlying (or FX rate)
        strike: Strike price
        domestic_rate: Domestic risk-free rate (annualized, continuous)
        time_to_maturity: Time to expiration in years
        volatility: Volatility (annualized standard deviation)
        foreign_rate: Foreign rate or continuous dividend yield (annualized)
    """
    spot: float
    strike: float
    domestic_rate: float
    time_to_maturity: float
    volatility: float
    foreign_rate: float = 0.0

    def replace(self, **changes: float) -> "OptionParameters":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Diagnostic:
    """
    Non-fatal condition detected while validating inputs.

    Attributes:
        code: Machine-readable identifier, e.g. "negative_domestic_rate"
        field: Name of the OptionParameters field concerned
        message: Human-readable description
    """
    code: str
    field: str
    message: str


Diagnostics = tuple[Diagnostic, ...]


@dataclass(frozen=True)
class OptionPair:
    """A quantity evaluated for both the call and the put."""

    call: float
    put: float

    def for_side(self, side: SideLike) -> float:
        """Return the value belonging to ``side``."""
        if OptionSide.parse(side) is OptionSide.CALL:
            return self.call
        return self.put


@dataclass(frozen=True)
class PremiumPair(OptionPair):
    """Call and put premiums, with any diagnostics raised while pricing."""

    diagnostics: Diagnostics = ()


class LogMoneynessTerms(NamedTuple):
    """The normalized log-moneyness terms d1 and d2."""

    d1: float
    d2: float


@dataclass(frozen=True)
class GreeksBundle:
    """
    All Greeks for one OptionParameters instance, each as a call/put pair.

    Attributes:
        delta: ∂V/∂S
        gamma: ∂²V/∂S² (same for call and put)
        theta: ∂V/∂t in calendar time, per year
        vega: ∂V/∂σ per unit of volatility (same for call and put)
        rho: ∂V/∂r_d, domestic rate sensitivity
        q_rho: ∂V/∂r_f, foreign rate / dividend yield sensitivity
        diagnostics: Non-fatal conditions raised while validating
    """
    delta: OptionPair
    gamma: OptionPair
    theta: OptionPair
    vega: OptionPair
    rho: OptionPair
    q_rho: OptionPair
    diagnostics: Diagnostics = ()

    def items(self) -> Iterator[tuple[str, OptionPair]]:
        """Iterate over (name, pair) in GREEK_FIELDS order."""
        for name, accessor in GREEK_FIELDS:
            yield name, accessor(self)


GREEK_NAMES = ("delta", "gamma", "theta", "vega", "rho", "q_rho")

GREEK_FIELDS: tuple[tuple[str, Callable[[GreeksBundle], OptionPair]], ...] = tuple(
    (name, attrgetter(name)) for name in GREEK_NAMES
)


@dataclass
class SolverResult:
    """
    Result from one of the bounded least-squares inversions.

    ``value`` is None whenever ``success`` is False, so a solved value can
    only be read once convergence has been established.

    Attributes:
        value: Solved quantity (volatility or strike), or None
        success: Whether the solver converged to a matching solution
        status: scipy.optimize.least_squares termination status
        iterations: Number of objective evaluations
        method: least_squares algorithm used
        message: Additional information about convergence
        residual: Final objective value
        diagnostics: Non-fatal conditions raised while validating
    """
    value: Optional[float]
    success: bool
    status: int
    iterations: int
    method: str
    message: str = ""
    residual: float = float("nan")
    diagnostics: Diagnostics = ()


@dataclass
class ArbitrageCheck:
    """
    Result from arbitrage validation.

    Attributes:
        is_valid: Whether the price satisfies no-arbitrage conditions
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, Union[bool, float]]
