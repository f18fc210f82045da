"""Hydrology: river channel masking and river segment extraction.

Rivers are traced from a world-space channel field, so a river that leaves
one chunk continues in the next. Each chunk then splits its river tiles
into 8-connected segments and orders every segment downhill.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .config import BiomeThresholds, HydrologyConfig

# D8 directions: N, NE, E, SE, S, SW, W, NW (clockwise from north)
D8_DY = np.array([-1, -1, 0, 1, 1, 1, 0, -1], dtype=np.int32)
D8_DX = np.array([0, 1, 1, 1, 0, -1, -1, -1], dtype=np.int32)


@dataclass(frozen=True)
class RiverPoint:
    """A river tile in world coordinates."""

    x: int
    y: int
    height: float


@dataclass
class RiverSegment:
    """An ordered river course, from source (highest) to mouth."""

    id: str
    source: RiverPoint
    mouth: RiverPoint
    length: int
    path: list[RiverPoint]


def river_mask(
    channel: NDArray[np.float64],
    height: NDArray[np.float64],
    moisture: NDArray[np.float64],
    hydrology: HydrologyConfig,
    thresholds: BiomeThresholds,
) -> NDArray[np.bool_]:
    """Mark tiles that carry a river.

    A tile is a river when it sits on the channel mid-line, is land above
    the coast band, lies below both the river height cap and the mountain
    line, and is wet enough.

    Args:
        channel: Distance from channel mid-line (from make_river_channel).
        height: Height field.
        moisture: Moisture field.
        hydrology: Hydrology parameters.
        thresholds: Biome thresholds (water level, coast margin, mountains).

    Returns:
        Boolean mask where True = river.
    """
    lowland_limit = min(hydrology.max_height, thresholds.mountain_height)
    return (
        (channel < hydrology.channel_width)
        & (height > thresholds.water_level + thresholds.coast_margin)
        & (height < lowland_limit)
        & (moisture >= hydrology.min_moisture)
    )


def order_river_component(
    rows: NDArray[np.intp],
    cols: NDArray[np.intp],
    height: NDArray[np.float64],
) -> list[tuple[int, int]]:
    """Order the tiles of one river component downhill.

    Starts at the highest tile and repeatedly steps to the lowest unvisited
    8-neighbour. When no neighbour remains (the walk hit a dead end inside a
    branching component), it jumps to the lowest remaining tile.

    Args:
        rows: Row indices of the component, in row-major order.
        cols: Column indices of the component, in row-major order.
        height: Height field the indices refer to.

    Returns:
        List of (row, col) in visiting order.
    """
    remaining = {(int(r), int(c)) for r, c in zip(rows, cols)}
    heights = height[rows, cols]

    start = int(np.argmax(heights))
    current = (int(rows[start]), int(cols[start]))
    ordered = [current]
    remaining.discard(current)

    while remaining:
        next_tile = None
        lowest = np.inf
        for d in range(8):
            candidate = (current[0] + int(D8_DY[d]), current[1] + int(D8_DX[d]))
            if candidate in remaining and height[candidate] < lowest:
                next_tile = candidate
                lowest = height[candidate]

        if next_tile is None:
            next_tile = min(remaining, key=lambda tile: (height[tile], tile))

        ordered.append(next_tile)
        remaining.discard(next_tile)
        current = next_tile

    return ordered


def extract_river_segments(
    is_river: NDArray[np.bool_],
    height: NDArray[np.float64],
    start_x: int,
    start_y: int,
) -> list[RiverSegment]:
    """Split a river mask into ordered river segments.

    Components are numbered in row-major order of their first tile, which
    makes segment ids stable for a given region.

    Args:
        is_river: Boolean river mask for the region.
        height: Height field for the region.
        start_x: World x of the region's left column.
        start_y: World y of the region's top row.

    Returns:
        List of river segments with world-coordinate paths.
    """
    structure = ndimage.generate_binary_structure(2, 2)
    labeled, num_features = ndimage.label(is_river, structure=structure)

    segments: list[RiverSegment] = []
    for label in range(1, num_features + 1):
        rows, cols = np.nonzero(labeled == label)
        ordered = order_river_component(rows, cols, height)
        path = [
            RiverPoint(x=start_x + c, y=start_y + r, height=float(height[r, c]))
            for r, c in ordered
        ]
        segments.append(
            RiverSegment(
                id=f"river-{start_x}-{start_y}-{label - 1}",
                source=path[0],
                mouth=path[-1],
                length=len(path),
                path=path,
            )
        )

    return segments
