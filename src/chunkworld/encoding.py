"""JSON encoding of chunk payloads for the chunk request contract."""

from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from .terrain.classification import BIOMES, CLIMATE_BANDS
from .terrain.coastal import CoastPoint
from .terrain.features import ChunkFeatures, ElevationSummary
from .terrain.generator import ChunkPayload
from .terrain.hydrology import RiverPoint, RiverSegment

# Chunk bodies depend only on the request parameters
CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "public, max-age=300, s-maxage=3600, stale-while-revalidate=86400",
}


class DetailLevel(str, Enum):
    """How much of a chunk payload to serialize."""

    MINIMAL = "minimal"
    STANDARD = "standard"
    FULL = "full"


def encode_chunk(payload: ChunkPayload, detail: DetailLevel = DetailLevel.FULL) -> dict[str, Any]:
    """Encode a chunk payload as a JSON-serializable dict.

    Args:
        payload: Generated chunk.
        detail: minimal = tiles + metadata; standard adds the biome grid and
            feature summaries; full adds every dense field layer.

    Returns:
        Dict with camelCase keys.
    """
    body: dict[str, Any] = {
        "chunkX": payload.chunk_x,
        "chunkY": payload.chunk_y,
        "chunkSize": payload.chunk_size,
        "seed": payload.seed,
        "tiles": payload.tile_labels(),
        "metadata": encode_metadata(payload.features),
    }

    if detail == DetailLevel.MINIMAL:
        return body

    body["biomes"] = _label_grid(payload.fields.biomes, [b.value for b in BIOMES])
    body["features"] = encode_features(payload.features)

    if detail == DetailLevel.STANDARD:
        return body

    fields = payload.fields
    body["fields"] = {
        "height": fields.height.tolist(),
        "temperature": fields.temperature.tolist(),
        "moisture": fields.moisture.tolist(),
        "climate": _label_grid(fields.climate, [c.value for c in CLIMATE_BANDS]),
        "isRiver": fields.is_river.tolist(),
        "isWater": fields.is_water.tolist(),
    }
    return body


def encode_metadata(features: ChunkFeatures) -> dict[str, Any]:
    """Summary metadata sent at every detail level."""
    dominant_climate = features.climate_bands[0].band.value if features.climate_bands else None
    dominant_biome = (
        features.biome_distribution[0].biome.value if features.biome_distribution else None
    )
    return {
        "dominantClimate": dominant_climate,
        "dominantBiome": dominant_biome,
        "riverCount": len(features.rivers),
        "coastlineTiles": len(features.coasts),
        "elevation": _encode_elevation(features.elevation),
    }


def encode_features(features: ChunkFeatures) -> dict[str, Any]:
    """Encode the chunk feature summary."""
    return {
        "rivers": [_encode_river(river) for river in features.rivers],
        "coasts": [_encode_coast(point) for point in features.coasts],
        "climateBands": [
            {"band": item.band.value, "coverage": item.coverage}
            for item in features.climate_bands
        ],
        "biomeDistribution": [
            {"biome": item.biome.value, "coverage": item.coverage}
            for item in features.biome_distribution
        ],
        "elevation": _encode_elevation(features.elevation),
    }


def _encode_elevation(elevation: ElevationSummary) -> dict[str, float]:
    return {"min": elevation.min, "max": elevation.max, "mean": elevation.mean}


def _encode_river_point(point: RiverPoint) -> dict[str, Any]:
    return {"x": point.x, "y": point.y, "height": point.height}


def _encode_river(river: RiverSegment) -> dict[str, Any]:
    return {
        "id": river.id,
        "source": _encode_river_point(river.source),
        "mouth": _encode_river_point(river.mouth),
        "length": river.length,
        "path": [_encode_river_point(point) for point in river.path],
    }


def _encode_coast(point: CoastPoint) -> dict[str, Any]:
    return {"x": point.x, "y": point.y, "type": point.kind}


def _label_grid(codes: NDArray[np.uint8], labels: list[str]) -> list[list[str]]:
    return [[labels[code] for code in row] for row in codes.tolist()]
