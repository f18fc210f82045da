"""Shared test fixtures for chunkworld tests."""

import pytest

from chunkworld.terrain.generator import ChunkPayload, WorldGenerator


@pytest.fixture
def generator() -> WorldGenerator:
    """Generator for the default test world."""
    return WorldGenerator(seed=12345)


@pytest.fixture(scope="session")
def origin_chunk() -> ChunkPayload:
    """32x32 chunk at (0, 0) of the default test world."""
    return WorldGenerator(seed=12345).generate_chunk(0, 0, 32)
