"""Climate band, biome and tile classification."""

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from ..tile_types import RIVER_CODE, TileType, tile_code
from .config import BiomeThresholds, ClimateThresholds


class ClimateBand(str, Enum):
    """Climate bands, in ordinal (tie-break) order."""

    POLAR = "polar"
    SUBPOLAR = "subpolar"
    TEMPERATE_HUMID = "temperate-humid"
    TEMPERATE_ARID = "temperate-arid"
    SUBTROPICAL_HUMID = "subtropical-humid"
    SUBTROPICAL_ARID = "subtropical-arid"
    TROPICAL_HUMID = "tropical-humid"
    TROPICAL_ARID = "tropical-arid"


class Biome(str, Enum):
    """Biomes, in ordinal (tie-break) order."""

    DEEP_WATER = "deep_water"
    OPEN_WATER = "open_water"
    COAST = "coast"
    SWAMP = "swamp"
    TEMPERATE_FOREST = "temperate_forest"
    TROPICAL_FOREST = "tropical_forest"
    GRASSLAND = "grassland"
    STEPPE = "steppe"
    SAVANNA = "savanna"
    DESERT = "desert"
    TUNDRA = "tundra"
    SNOW = "snow"
    MOUNTAIN = "mountain"
    HILLS = "hills"
    BADLANDS = "badlands"


CLIMATE_BANDS: tuple[ClimateBand, ...] = tuple(ClimateBand)
BIOMES: tuple[Biome, ...] = tuple(Biome)


def climate_code(band: ClimateBand) -> int:
    """Convert ClimateBand to its uint8 storage code."""
    return CLIMATE_BANDS.index(band)


def biome_code(biome: Biome) -> int:
    """Convert Biome to its uint8 storage code."""
    return BIOMES.index(biome)


_BIOME_TILES: dict[Biome, TileType] = {
    Biome.DEEP_WATER: TileType.WATER,
    Biome.OPEN_WATER: TileType.WATER,
    Biome.COAST: TileType.SAND,
    Biome.SWAMP: TileType.SWAMP,
    Biome.TEMPERATE_FOREST: TileType.FOREST,
    Biome.TROPICAL_FOREST: TileType.FOREST,
    Biome.GRASSLAND: TileType.GRASS,
    Biome.STEPPE: TileType.PLAINS,
    Biome.SAVANNA: TileType.SAVANNA,
    Biome.DESERT: TileType.DESERT,
    Biome.TUNDRA: TileType.TUNDRA,
    Biome.SNOW: TileType.SNOW,
    Biome.MOUNTAIN: TileType.MOUNTAIN,
    Biome.HILLS: TileType.HILLS,
    Biome.BADLANDS: TileType.BADLANDS,
}

# Lookup table indexed by biome code
_BIOME_TILE_CODES = np.array(
    [tile_code(_BIOME_TILES[biome]) for biome in BIOMES], dtype=np.uint8
)


def biome_tile(biome: Biome, is_river: bool = False) -> TileType:
    """Tile type shown for a biome; rivers override the biome tile."""
    if is_river:
        return TileType.RIVER
    return _BIOME_TILES[biome]


def classify_climate(
    temperature: NDArray[np.float64],
    moisture: NDArray[np.float64],
    thresholds: ClimateThresholds,
) -> NDArray[np.uint8]:
    """Classify each cell into a climate band.

    Args:
        temperature: Temperature field [0, 1].
        moisture: Moisture field [0, 1].
        thresholds: Climate band cut-offs.

    Returns:
        2D array of ClimateBand codes as uint8.
    """
    t, m = temperature, moisture
    conditions = [
        t < thresholds.polar_max_temperature,
        t < thresholds.subpolar_max_temperature,
        (t < thresholds.temperate_max_temperature) & (m < thresholds.temperate_humid_moisture),
        t < thresholds.temperate_max_temperature,
        (t < thresholds.subtropical_max_temperature) & (m < thresholds.subtropical_humid_moisture),
        t < thresholds.subtropical_max_temperature,
        m < thresholds.tropical_humid_moisture,
    ]
    choices = [
        ClimateBand.POLAR,
        ClimateBand.SUBPOLAR,
        ClimateBand.TEMPERATE_ARID,
        ClimateBand.TEMPERATE_HUMID,
        ClimateBand.SUBTROPICAL_ARID,
        ClimateBand.SUBTROPICAL_HUMID,
        ClimateBand.TROPICAL_ARID,
    ]
    codes = np.select(
        conditions,
        [climate_code(band) for band in choices],
        default=climate_code(ClimateBand.TROPICAL_HUMID),
    )
    return codes.astype(np.uint8)


def classify_biome(
    height: NDArray[np.float64],
    temperature: NDArray[np.float64],
    moisture: NDArray[np.float64],
    thresholds: BiomeThresholds,
) -> NDArray[np.uint8]:
    """Classify each cell into a biome.

    Water below sea level, a coast band just above it, then mountains and
    hills by height, then temperature/moisture regimes for lowland.

    Args:
        height: Height field [0, 1].
        temperature: Temperature field [0, 1].
        moisture: Moisture field [0, 1].
        thresholds: Biome cut-offs.

    Returns:
        2D array of Biome codes as uint8.
    """
    h, t, m = height, temperature, moisture
    cold = t < thresholds.cool_forest_temperature
    hot = t > thresholds.tropical_temperature
    highland = h >= thresholds.hill_height

    # First matching rule wins
    rules: list[tuple[NDArray[np.bool_], Biome]] = [
        (h <= thresholds.deep_water_level, Biome.DEEP_WATER),
        (h <= thresholds.water_level, Biome.OPEN_WATER),
        (h <= thresholds.water_level + thresholds.coast_margin, Biome.COAST),
        (h >= thresholds.mountain_height, Biome.MOUNTAIN),
        (highland & (t < thresholds.highland_tundra_temperature), Biome.TUNDRA),
        (highland, Biome.HILLS),
        (t < thresholds.snow_temperature, Biome.SNOW),
        (cold & (m > thresholds.forest_moisture), Biome.TEMPERATE_FOREST),
        (cold, Biome.TUNDRA),
        (hot & (m < thresholds.desert_moisture), Biome.DESERT),
        (hot & (m < thresholds.savanna_moisture), Biome.SAVANNA),
        (hot, Biome.TROPICAL_FOREST),
        (m < thresholds.badlands_moisture, Biome.BADLANDS),
        (m < thresholds.steppe_moisture, Biome.STEPPE),
        (m > thresholds.swamp_moisture, Biome.SWAMP),
        (m > thresholds.forest_moisture, Biome.TEMPERATE_FOREST),
    ]
    codes = np.select(
        [condition for condition, _ in rules],
        [biome_code(biome) for _, biome in rules],
        default=biome_code(Biome.GRASSLAND),
    )
    return codes.astype(np.uint8)


def classify_tiles(
    biomes: NDArray[np.uint8],
    river_mask: NDArray[np.bool_],
) -> NDArray[np.uint8]:
    """Map biome codes to tile codes, with rivers drawn over the biome.

    Args:
        biomes: Biome codes.
        river_mask: Boolean mask where True = river.

    Returns:
        2D array of TileType codes as uint8.
    """
    tiles = _BIOME_TILE_CODES[biomes]
    tiles[river_mask] = RIVER_CODE
    return tiles
