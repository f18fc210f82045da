"""Coastline detection: land tiles that touch water."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage


@dataclass(frozen=True)
class CoastPoint:
    """A coastline tile in world coordinates."""

    x: int
    y: int
    kind: str = "land"


def coast_mask(water_halo: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Find land tiles 4-adjacent to water.

    The input carries a one-tile halo around the region of interest so the
    tiles on the region's border are tested against their real neighbours.

    Args:
        water_halo: Water mask shaped (height + 2, width + 2).

    Returns:
        Coast mask for the interior, shaped (height, width).
    """
    # 4-connected
    structure = ndimage.generate_binary_structure(2, 1)
    near_water = ndimage.binary_dilation(water_halo, structure=structure)
    coast = near_water & ~water_halo
    return coast[1:-1, 1:-1]


def coast_points(
    coast: NDArray[np.bool_],
    start_x: int,
    start_y: int,
) -> list[CoastPoint]:
    """List coast tiles as world coordinates in row-major order."""
    rows, cols = np.nonzero(coast)
    return [
        CoastPoint(x=start_x + int(c), y=start_y + int(r))
        for r, c in zip(rows, cols)
    ]
