"""
Premium and Greek surfaces over a (spot, time-to-maturity) grid.

Each grid cell is an independent pricing problem, so cells are handed to
a thread pool and written back into arrays indexed [spot, ttm]; no
ordering between cells is assumed. Rendering is left to the caller, who
can iterate over GREEK_FIELDS or call Surface.to_frame().
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from fxvanilla.core.black_scholes import premium_pair
from fxvanilla.core.greeks import greeks_bundle
from fxvanilla.core.validation import validate_parameters
from fxvanilla.utils.errors import DomainError, ValidationError
from fxvanilla.utils.types import (
    GREEK_FIELDS,
    Diagnostics,
    GreeksBundle,
    OptionParameters,
    OptionSide,
    SideLike,
)

logger = logging.getLogger(__name__)

SIDES = (OptionSide.CALL, OptionSide.PUT)


@dataclass
class Surface:
    """
    Premiums and Greeks evaluated on a grid.

    Every array has shape (len(spots), len(maturities)).

    Attributes:
        spots: Spot axis
        maturities: Time-to-maturity axis (years)
        premiums: Premium array per side
        greeks: Per Greek name, an array per side
        diagnostics: Non-fatal conditions raised while validating
    """
    spots: np.ndarray
    maturities: np.ndarray
    premiums: dict[OptionSide, np.ndarray]
    greeks: dict[str, dict[OptionSide, np.ndarray]]
    diagnostics: Diagnostics = ()

    def premium(self, side: SideLike) -> np.ndarray:
        """Premium array of one side, indexed [spot, ttm]."""
        return self.premiums[OptionSide.parse(side)]

    def greek(self, name: str, side: SideLike) -> np.ndarray:
        """Array of one Greek (a name in GREEK_NAMES) for one side, indexed [spot, ttm]."""
        return self.greeks[name][OptionSide.parse(side)]

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with columns spot, ttm, side, quantity, value."""
        spot_grid, ttm_grid = np.meshgrid(self.spots, self.maturities, indexing="ij")
        quantities = [("premium", self.premiums)] + list(self.greeks.items())

        frames = []
        for quantity, by_side in quantities:
            for side in SIDES:
                frames.append(
                    pd.DataFrame(
                        {
                            "spot": spot_grid.ravel(),
                            "ttm": ttm_grid.ravel(),
                            "side": side.value,
                            "quantity": quantity,
                            "value": by_side[side].ravel(),
                        }
                    )
                )

        return pd.concat(frames, ignore_index=True)


def _evaluate_cell(params: OptionParameters) -> tuple[tuple[float, float], GreeksBundle]:
    return premium_pair(params), greeks_bundle(params)


def evaluate_surface(
    spots: Sequence[float],
    maturities: Sequence[float],
    params: OptionParameters,
    max_workers: Optional[int] = None,
) -> Surface:
    """
    Evaluate premiums and all Greeks on a spot × maturity grid.

    Args:
        spots: Spot values (first axis)
        maturities: Times to maturity in years (second axis), all > 0
        params: Strike, rates and volatility shared by every cell; the
            spot and ttm fields are ignored
        max_workers: Thread pool size, None for the executor default

    Returns:
        Surface with premium and Greek arrays for both sides

    Raises:
        ValidationError: If a spot or maturity is negative, or the shared
            parameters are invalid
        DomainError: If a maturity is zero (Greeks are undefined at expiry)
    """
    spot_axis = np.asarray(spots, dtype=float)
    ttm_axis = np.asarray(maturities, dtype=float)

    if spot_axis.size and spot_axis.min() < 0:
        raise ValidationError("spot", float(spot_axis.min()))
    if ttm_axis.size and ttm_axis.min() < 0:
        raise ValidationError("time_to_maturity", float(ttm_axis.min()))
    if np.any(ttm_axis == 0):
        raise DomainError("Greeks are undefined at expiry; maturities must be positive")

    diagnostics = validate_parameters(params.replace(spot=0.0, time_to_maturity=0.0))
    shape = (spot_axis.size, ttm_axis.size)
    premiums = {side: np.empty(shape) for side in SIDES}
    greeks = {name: {side: np.empty(shape) for side in SIDES} for name, _ in GREEK_FIELDS}

    logger.debug("Evaluating %d x %d surface", *shape)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                _evaluate_cell, params.replace(spot=float(spot), time_to_maturity=float(ttm))
            ): (i, j)
            for i, spot in enumerate(spot_axis)
            for j, ttm in enumerate(ttm_axis)
        }

        for future in as_completed(futures):
            i, j = futures[future]
            (call, put), bundle = future.result()
            premiums[OptionSide.CALL][i, j] = call
            premiums[OptionSide.PUT][i, j] = put
            for name, pair in bundle.items():
                greeks[name][OptionSide.CALL][i, j] = pair.call
                greeks[name][OptionSide.PUT][i, j] = pair.put

    return Surface(
        spots=spot_axis,
        maturities=ttm_axis,
        premiums=premiums,
        greeks=greeks,
        diagnostics=diagnostics,
    )
