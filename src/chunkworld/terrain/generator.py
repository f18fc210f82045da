"""World generation orchestration: fields, classification, features."""

import logging
from dataclasses import dataclass, fields as dataclass_fields

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidChunkSizeError
from ..tile_types import TILE_TYPES, WATER_CODE, TileType, tile_from_code
from .classification import (
    BIOMES,
    CLIMATE_BANDS,
    Biome,
    ClimateBand,
    classify_biome,
    classify_climate,
    classify_tiles,
)
from .coastal import coast_mask, coast_points
from .config import TerrainConfig
from .features import ChunkFeatures, rank_biomes, rank_climate_bands, summarize_elevation
from .fields import (
    make_height,
    make_moisture,
    make_river_channel,
    make_temperature,
    world_grid,
)
from .hydrology import extract_river_segments, river_mask

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ChunkFields:
    """Dense per-tile layers of a generated region, indexed [row][col]."""

    height: NDArray[np.float64]
    temperature: NDArray[np.float64]
    moisture: NDArray[np.float64]
    climate: NDArray[np.uint8]
    biomes: NDArray[np.uint8]
    is_river: NDArray[np.bool_]
    is_water: NDArray[np.bool_]


@dataclass(eq=False)
class RegionResult:
    """Generation result for an arbitrary rectangle of the world."""

    start_x: int
    start_y: int
    width: int
    height: int
    tiles: NDArray[np.uint8]
    fields: ChunkFields
    features: ChunkFeatures


@dataclass(eq=False)
class ChunkPayload:
    """Generation result for one chunk.

    Arrays are read-only. Cached payloads are shared between callers.
    """

    chunk_x: int
    chunk_y: int
    chunk_size: int
    seed: int
    tiles: NDArray[np.uint8]
    fields: ChunkFields
    features: ChunkFeatures

    def __post_init__(self) -> None:
        self.tiles.flags.writeable = False
        for field in dataclass_fields(self.fields):
            getattr(self.fields, field.name).flags.writeable = False

    @property
    def tile_count(self) -> int:
        return self.chunk_size * self.chunk_size

    def tile_labels(self) -> list[list[str]]:
        """Tile grid as label strings, [row][col]."""
        labels = [tile_type.value for tile_type in TILE_TYPES]
        return [[labels[code] for code in row] for row in self.tiles.tolist()]


@dataclass(frozen=True)
class SampledTile:
    """Every generated value for a single world tile."""

    height: float
    temperature: float
    moisture: float
    climate: ClimateBand
    biome: Biome
    tile_type: TileType
    is_river: bool
    is_water: bool


class WorldGenerator:
    """Deterministic generator for an unbounded tile world.

    Every value is a pure function of the world seed and the world
    coordinate, so regions can be generated in any order and adjacent
    chunks agree on their shared borders.
    """

    def __init__(self, seed: int, config: TerrainConfig | None = None):
        self.seed = seed
        self.config = config or TerrainConfig()

    def sample_tile(self, x: int, y: int) -> SampledTile:
        """Generate every field for a single world tile."""
        fields, tiles = self._sample(x, y, 1, 1)
        return SampledTile(
            height=float(fields.height[0, 0]),
            temperature=float(fields.temperature[0, 0]),
            moisture=float(fields.moisture[0, 0]),
            climate=CLIMATE_BANDS[fields.climate[0, 0]],
            biome=BIOMES[fields.biomes[0, 0]],
            tile_type=tile_from_code(int(tiles[0, 0])),
            is_river=bool(fields.is_river[0, 0]),
            is_water=bool(fields.is_water[0, 0]),
        )

    def generate_region(
        self,
        start_x: int,
        start_y: int,
        width: int,
        height: int,
    ) -> RegionResult:
        """Generate a rectangular region of the world.

        Args:
            start_x: World x of the left column.
            start_y: World y of the top row.
            width: Region width in tiles (> 0).
            height: Region height in tiles (> 0).

        Returns:
            RegionResult with tiles, dense fields and feature summary.

        Raises:
            InvalidChunkSizeError: If width or height is not positive.
        """
        _check_size(width, "width")
        _check_size(height, "height")

        fields, tiles, coast = self._sample_with_halo(start_x, start_y, width, height)

        features = ChunkFeatures(
            rivers=extract_river_segments(fields.is_river, fields.height, start_x, start_y),
            coasts=coast_points(coast, start_x, start_y),
            climate_bands=rank_climate_bands(fields.climate),
            biome_distribution=rank_biomes(fields.biomes),
            elevation=summarize_elevation(fields.height),
        )

        logger.debug(
            f"Generated region ({start_x}, {start_y}) {width}x{height}: "
            f"{len(features.rivers)} rivers, {len(features.coasts)} coast tiles"
        )

        return RegionResult(
            start_x=start_x,
            start_y=start_y,
            width=width,
            height=height,
            tiles=tiles,
            fields=fields,
            features=features,
        )

    def generate_chunk(self, chunk_x: int, chunk_y: int, chunk_size: int) -> ChunkPayload:
        """Generate one chunk, sampled in world space.

        Args:
            chunk_x: Chunk x coordinate.
            chunk_y: Chunk y coordinate.
            chunk_size: Tiles per chunk side (> 0).

        Returns:
            ChunkPayload for the chunk.

        Raises:
            InvalidChunkSizeError: If chunk_size is not positive.
        """
        _check_size(chunk_size, "chunk_size")
        region = self.generate_region(
            chunk_x * chunk_size, chunk_y * chunk_size, chunk_size, chunk_size
        )
        return ChunkPayload(
            chunk_x=chunk_x,
            chunk_y=chunk_y,
            chunk_size=chunk_size,
            seed=self.seed,
            tiles=region.tiles,
            fields=region.fields,
            features=region.features,
        )

    def _sample(
        self,
        start_x: int,
        start_y: int,
        width: int,
        height: int,
    ) -> tuple[ChunkFields, NDArray[np.uint8]]:
        """Sample and classify every field over a region."""
        config = self.config
        thresholds = config.biomes
        xs, ys = world_grid(start_x, start_y, width, height)

        height_field = make_height(self.seed, xs, ys, config.height)
        temperature = make_temperature(self.seed, xs, ys, height_field, config.temperature)
        moisture = make_moisture(
            self.seed, xs, ys, height_field, thresholds.water_level, config.moisture
        )
        channel = make_river_channel(self.seed, xs, ys, config.hydrology)

        climate = classify_climate(temperature, moisture, config.climate)
        biomes = classify_biome(height_field, temperature, moisture, thresholds)
        is_river = river_mask(channel, height_field, moisture, config.hydrology, thresholds)
        tiles = classify_tiles(biomes, is_river)

        fields = ChunkFields(
            height=height_field,
            temperature=temperature,
            moisture=moisture,
            climate=climate,
            biomes=biomes,
            is_river=is_river,
            is_water=tiles == WATER_CODE,
        )
        return fields, tiles

    def _sample_with_halo(
        self,
        start_x: int,
        start_y: int,
        width: int,
        height: int,
    ) -> tuple[ChunkFields, NDArray[np.uint8], NDArray[np.bool_]]:
        """Sample a region plus a one-tile border, then crop the border.

        The border is only used to find coast tiles on the region's edge.
        """
        halo_fields, halo_tiles = self._sample(start_x - 1, start_y - 1, width + 2, height + 2)
        coast = coast_mask(halo_fields.is_water)

        inner = (slice(1, -1), slice(1, -1))
        fields = ChunkFields(
            height=halo_fields.height[inner].copy(),
            temperature=halo_fields.temperature[inner].copy(),
            moisture=halo_fields.moisture[inner].copy(),
            climate=halo_fields.climate[inner].copy(),
            biomes=halo_fields.biomes[inner].copy(),
            is_river=halo_fields.is_river[inner].copy(),
            is_water=halo_fields.is_water[inner].copy(),
        )
        return fields, halo_tiles[inner].copy(), coast


def _check_size(value: int, name: str) -> None:
    if value <= 0:
        raise InvalidChunkSizeError(f"{name} must be positive, got {value}")
