"""Tile types carried in chunk payloads."""

from enum import Enum


class TileType(str, Enum):
    """Tile type labels, in storage-code order."""

    WATER = "water"
    RIVER = "river"
    SAND = "sand"
    GRASS = "grass"
    PLAINS = "plains"
    FOREST = "forest"
    SWAMP = "swamp"
    SAVANNA = "savanna"
    DESERT = "desert"
    BADLANDS = "badlands"
    TUNDRA = "tundra"
    SNOW = "snow"
    HILLS = "hills"
    MOUNTAIN = "mountain"


# Stable uint8 codes: position in declaration order
TILE_TYPES: tuple[TileType, ...] = tuple(TileType)

WATER_CODE = TILE_TYPES.index(TileType.WATER)
RIVER_CODE = TILE_TYPES.index(TileType.RIVER)
MOUNTAIN_CODE = TILE_TYPES.index(TileType.MOUNTAIN)


def tile_code(tile_type: TileType) -> int:
    """Convert TileType to its uint8 storage code."""
    return TILE_TYPES.index(tile_type)


def tile_from_code(code: int) -> TileType:
    """Convert a uint8 storage code back to TileType.

    Raises:
        ValueError: If the code does not name a tile type.
    """
    if not 0 <= code < len(TILE_TYPES):
        raise ValueError(f"Unknown tile code: {code}")
    return TILE_TYPES[code]
