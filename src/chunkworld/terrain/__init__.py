"""Procedural world generation package.

This package implements deterministic, world-space terrain generation:
height, temperature and moisture fields, climate and biome classification,
rivers, coastlines and per-chunk feature summaries.
"""

from .classification import Biome, ClimateBand
from .config import TerrainConfig
from .coastal import CoastPoint
from .features import BiomeCoverage, ChunkFeatures, ClimateCoverage, ElevationSummary
from .generator import ChunkFields, ChunkPayload, RegionResult, SampledTile, WorldGenerator
from .hydrology import RiverPoint, RiverSegment

__all__ = [
    "Biome",
    "BiomeCoverage",
    "ChunkFeatures",
    "ChunkFields",
    "ChunkPayload",
    "ClimateBand",
    "ClimateCoverage",
    "CoastPoint",
    "ElevationSummary",
    "RegionResult",
    "RiverPoint",
    "RiverSegment",
    "SampledTile",
    "TerrainConfig",
    "WorldGenerator",
]
