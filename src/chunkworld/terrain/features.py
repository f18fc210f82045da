"""Chunk-level feature summaries: coverage rankings and elevation stats."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from .classification import BIOMES, CLIMATE_BANDS, Biome, ClimateBand
from .coastal import CoastPoint
from .hydrology import RiverSegment

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class ClimateCoverage:
    """Share of a region covered by one climate band."""

    band: ClimateBand
    coverage: float


@dataclass(frozen=True)
class BiomeCoverage:
    """Share of a region covered by one biome."""

    biome: Biome
    coverage: float


@dataclass(frozen=True)
class ElevationSummary:
    """Height statistics for a region."""

    min: float
    max: float
    mean: float


@dataclass
class ChunkFeatures:
    """Summary of a generated region derived from its fields."""

    rivers: list[RiverSegment] = field(default_factory=list)
    coasts: list[CoastPoint] = field(default_factory=list)
    climate_bands: list[ClimateCoverage] = field(default_factory=list)
    biome_distribution: list[BiomeCoverage] = field(default_factory=list)
    elevation: ElevationSummary = field(
        default_factory=lambda: ElevationSummary(min=0.0, max=0.0, mean=0.0)
    )


def rank_coverage(
    codes: NDArray[np.uint8],
    members: tuple[E, ...],
) -> list[tuple[E, float]]:
    """Rank the enum members present in a code grid by coverage.

    Most common first; ties go to the lower ordinal so the order never
    depends on dictionary or hash ordering.

    Args:
        codes: Grid of uint8 enum codes.
        members: Enum members indexed by code.

    Returns:
        List of (member, coverage) with coverage in (0, 1].
    """
    total = codes.size
    if total == 0:
        return []

    counts = np.bincount(codes.ravel(), minlength=len(members))
    present = np.nonzero(counts)[0]
    ranked = sorted(present, key=lambda code: (-counts[code], code))
    return [(members[code], counts[code] / total) for code in ranked]


def rank_climate_bands(climate: NDArray[np.uint8]) -> list[ClimateCoverage]:
    """Climate bands present in a region, ranked by coverage."""
    return [
        ClimateCoverage(band=band, coverage=float(coverage))
        for band, coverage in rank_coverage(climate, CLIMATE_BANDS)
    ]


def rank_biomes(biomes: NDArray[np.uint8]) -> list[BiomeCoverage]:
    """Biomes present in a region, ranked by coverage."""
    return [
        BiomeCoverage(biome=biome, coverage=float(coverage))
        for biome, coverage in rank_coverage(biomes, BIOMES)
    ]


def summarize_elevation(height: NDArray[np.float64]) -> ElevationSummary:
    """Min/max/mean of a height field (all zero for an empty field)."""
    if height.size == 0:
        return ElevationSummary(min=0.0, max=0.0, mean=0.0)
    return ElevationSummary(
        min=float(height.min()),
        max=float(height.max()),
        mean=float(height.mean()),
    )
