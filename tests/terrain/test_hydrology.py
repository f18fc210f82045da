"""Tests for river masking and river segment extraction."""

import numpy as np

from chunkworld.terrain.config import BiomeThresholds, HydrologyConfig
from chunkworld.terrain.hydrology import (
    D8_DX,
    D8_DY,
    extract_river_segments,
    order_river_component,
    river_mask,
)


class TestD8Directions:
    """Tests for D8 direction constants."""

    def test_eight_unique_neighbours(self) -> None:
        offsets = set(zip(D8_DY.tolist(), D8_DX.tolist()))
        assert len(offsets) == 8
        assert (0, 0) not in offsets


class TestRiverMask:
    """Tests for river tile selection."""

    def _mask(self, channel: float, height: float, moisture: float) -> bool:
        return bool(
            river_mask(
                np.array([[channel]]),
                np.array([[height]]),
                np.array([[moisture]]),
                HydrologyConfig(),
                BiomeThresholds(),
            )[0, 0]
        )

    def test_on_channel(self) -> None:
        assert self._mask(0.001, 0.5, 0.6)

    def test_off_channel(self) -> None:
        assert not self._mask(0.1, 0.5, 0.6)

    def test_not_in_water_or_coast(self) -> None:
        assert not self._mask(0.0, 0.3, 0.9)
        assert not self._mask(0.0, 0.39, 0.9)

    def test_not_on_high_ground(self) -> None:
        """Rivers stay below the height cap and never reach mountains."""
        assert not self._mask(0.0, 0.79, 0.9)
        assert not self._mask(0.0, 0.85, 0.9)

    def test_needs_moisture(self) -> None:
        assert not self._mask(0.0, 0.5, 0.4)
        assert self._mask(0.0, 0.5, 0.52)


class TestOrderRiverComponent:
    """Tests for downhill ordering."""

    def test_straight_slope(self) -> None:
        """A straight channel is walked from its highest end."""
        height = np.array([[0.1, 0.2, 0.3, 0.4, 0.5]])
        rows, cols = np.nonzero(np.ones_like(height, dtype=bool))
        ordered = order_river_component(rows, cols, height)
        assert ordered == [(0, 4), (0, 3), (0, 2), (0, 1), (0, 0)]

    def test_dead_end_falls_back_to_lowest_remaining(self) -> None:
        """After a dead end the walk jumps to the lowest unvisited tile."""
        # Highest tile in the middle; both arms lead away from it
        height = np.array([[0.2, 0.9, 0.1]])
        rows, cols = np.nonzero(np.ones_like(height, dtype=bool))
        ordered = order_river_component(rows, cols, height)
        assert ordered[0] == (0, 1)
        assert ordered[1] == (0, 2)
        assert ordered[2] == (0, 0)

    def test_diagonal_step(self) -> None:
        height = np.array([[0.9, 0.0], [0.0, 0.5]])
        mask = np.array([[True, False], [False, True]])
        rows, cols = np.nonzero(mask)
        assert order_river_component(rows, cols, height) == [(0, 0), (1, 1)]


class TestExtractRiverSegments:
    """Tests for segment extraction."""

    def test_empty_mask(self) -> None:
        assert extract_river_segments(np.zeros((4, 4), dtype=bool), np.zeros((4, 4)), 0, 0) == []

    def test_two_components(self) -> None:
        """Separate components become separate segments, numbered row-major."""
        mask = np.zeros((5, 5), dtype=bool)
        mask[0, 0:3] = True
        mask[4, 1:5] = True
        height = np.tile(np.linspace(0.5, 0.7, 5), (5, 1))

        segments = extract_river_segments(mask, height, start_x=64, start_y=-32)

        assert [s.id for s in segments] == ["river-64--32-0", "river-64--32-1"]
        assert [s.length for s in segments] == [3, 4]

    def test_world_coordinates_and_order(self) -> None:
        """Paths are in world coordinates and run from source to mouth."""
        mask = np.zeros((3, 3), dtype=bool)
        mask[1, :] = True
        height = np.array([[0.0, 0.0, 0.0], [0.4, 0.5, 0.6], [0.0, 0.0, 0.0]])

        (segment,) = extract_river_segments(mask, height, start_x=10, start_y=20)

        assert (segment.source.x, segment.source.y) == (12, 21)
        assert (segment.mouth.x, segment.mouth.y) == (10, 21)
        assert segment.source.height >= segment.mouth.height
        assert segment.path[0] == segment.source
        assert segment.path[-1] == segment.mouth

    def test_diagonal_tiles_connect(self) -> None:
        """8-connected tiles form one segment."""
        mask = np.eye(4, dtype=bool)
        segments = extract_river_segments(mask, np.random.rand(4, 4), 0, 0)
        assert len(segments) == 1
        assert segments[0].length == 4
