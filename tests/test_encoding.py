"""Tests for chunk payload encoding."""

import json

import pytest

from chunkworld.encoding import CACHE_HEADERS, DetailLevel, encode_chunk
from chunkworld.terrain.generator import ChunkPayload


class TestEncodeChunk:
    """Tests for detail levels."""

    def test_minimal(self, origin_chunk: ChunkPayload) -> None:
        body = encode_chunk(origin_chunk, DetailLevel.MINIMAL)

        assert set(body) == {"chunkX", "chunkY", "chunkSize", "seed", "tiles", "metadata"}
        assert body["chunkSize"] == 32
        assert body["seed"] == 12345
        assert len(body["tiles"]) == 32

    def test_standard(self, origin_chunk: ChunkPayload) -> None:
        body = encode_chunk(origin_chunk, DetailLevel.STANDARD)

        assert "biomes" in body
        assert "fields" not in body
        assert set(body["features"]) == {
            "rivers",
            "coasts",
            "climateBands",
            "biomeDistribution",
            "elevation",
        }

    def test_full(self, origin_chunk: ChunkPayload) -> None:
        body = encode_chunk(origin_chunk, DetailLevel.FULL)

        assert set(body["fields"]) == {
            "height",
            "temperature",
            "moisture",
            "climate",
            "isRiver",
            "isWater",
        }
        assert len(body["fields"]["height"]) == 32
        assert isinstance(body["fields"]["isWater"][0][0], bool)

    def test_default_is_full(self, origin_chunk: ChunkPayload) -> None:
        assert "fields" in encode_chunk(origin_chunk)

    def test_json_serializable(self, origin_chunk: ChunkPayload) -> None:
        """The full body survives json.dumps without custom encoders."""
        text = json.dumps(encode_chunk(origin_chunk, DetailLevel.FULL))
        decoded = json.loads(text)
        assert decoded["chunkX"] == 0

    def test_deterministic(self, origin_chunk: ChunkPayload) -> None:
        a = json.dumps(encode_chunk(origin_chunk))
        b = json.dumps(encode_chunk(origin_chunk))
        assert a == b


class TestMetadata:
    """Tests for summary metadata."""

    def test_metadata_matches_features(self, origin_chunk: ChunkPayload) -> None:
        metadata = encode_chunk(origin_chunk, DetailLevel.MINIMAL)["metadata"]
        features = origin_chunk.features

        assert metadata["dominantClimate"] == features.climate_bands[0].band.value
        assert metadata["dominantBiome"] == features.biome_distribution[0].biome.value
        assert metadata["riverCount"] == len(features.rivers)
        assert metadata["coastlineTiles"] == len(features.coasts)
        assert metadata["elevation"]["min"] == pytest.approx(features.elevation.min)

    def test_tiles_are_labels(self, origin_chunk: ChunkPayload) -> None:
        body = encode_chunk(origin_chunk, DetailLevel.MINIMAL)
        assert body["tiles"] == origin_chunk.tile_labels()


class TestCacheHeaders:
    def test_cache_control(self) -> None:
        assert CACHE_HEADERS["Cache-Control"] == (
            "public, max-age=300, s-maxage=3600, stale-while-revalidate=86400"
        )
