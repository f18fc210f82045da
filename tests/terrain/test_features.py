"""Tests for coverage rankings and elevation summaries."""

import numpy as np
import pytest

from chunkworld.terrain.classification import Biome, ClimateBand, biome_code, climate_code
from chunkworld.terrain.features import (
    rank_biomes,
    rank_climate_bands,
    summarize_elevation,
)


class TestRankings:
    """Tests for coverage rankings."""

    def test_descending_coverage(self) -> None:
        grid = np.array(
            [[biome_code(Biome.DESERT)] * 3 + [biome_code(Biome.SNOW)]], dtype=np.uint8
        )
        ranked = rank_biomes(grid)
        assert [item.biome for item in ranked] == [Biome.DESERT, Biome.SNOW]
        assert ranked[0].coverage == pytest.approx(0.75)
        assert ranked[1].coverage == pytest.approx(0.25)

    def test_ties_go_to_lower_ordinal(self) -> None:
        """Equal coverage is ordered by enum ordinal, not first appearance."""
        grid = np.array(
            [[climate_code(ClimateBand.TROPICAL_ARID), climate_code(ClimateBand.POLAR)]],
            dtype=np.uint8,
        )
        ranked = rank_climate_bands(grid)
        assert [item.band for item in ranked] == [ClimateBand.POLAR, ClimateBand.TROPICAL_ARID]

    def test_only_present_members(self) -> None:
        grid = np.full((4, 4), biome_code(Biome.GRASSLAND), dtype=np.uint8)
        ranked = rank_biomes(grid)
        assert len(ranked) == 1
        assert ranked[0].coverage == 1.0

    def test_coverage_sums_to_one(self) -> None:
        rng = np.random.default_rng(0)
        grid = rng.integers(0, 15, size=(32, 32)).astype(np.uint8)
        ranked = rank_biomes(grid)
        assert sum(item.coverage for item in ranked) == pytest.approx(1.0)

    def test_empty_grid(self) -> None:
        assert rank_biomes(np.zeros((0, 0), dtype=np.uint8)) == []


class TestSummarizeElevation:
    """Tests for elevation statistics."""

    def test_stats(self) -> None:
        summary = summarize_elevation(np.array([[0.2, 0.4], [0.6, 0.8]]))
        assert summary.min == pytest.approx(0.2)
        assert summary.max == pytest.approx(0.8)
        assert summary.mean == pytest.approx(0.5)

    def test_empty(self) -> None:
        summary = summarize_elevation(np.zeros((0, 0)))
        assert (summary.min, summary.max, summary.mean) == (0.0, 0.0, 0.0)
