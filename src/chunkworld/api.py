"""Chunk request handling: query parameter model and response building.

The HTTP framework itself lives outside this package; it passes the query
parameters in and sends the returned body and headers back.
"""

from functools import lru_cache
from typing import Any, Mapping

import structlog
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .encoding import CACHE_HEADERS, DetailLevel, encode_chunk
from .terrain.generator import WorldGenerator

logger = structlog.get_logger()

MIN_REQUEST_CHUNK_SIZE = 8
MAX_REQUEST_CHUNK_SIZE = 128


class ChunkRequest(BaseModel):
    """Query parameters of a chunk request."""

    model_config = ConfigDict(populate_by_name=True)

    chunk_x: int = Field(default=0, validation_alias=AliasChoices("chunkX", "x", "chunk_x"))
    chunk_y: int = Field(default=0, validation_alias=AliasChoices("chunkY", "y", "chunk_y"))
    chunk_size: int = Field(
        default=32,
        validation_alias=AliasChoices("chunkSize", "size", "chunk_size"),
        description="Tiles per side, clamped to [8, 128]",
    )
    seed: int = Field(default=12345, description="World seed")
    detail: DetailLevel = Field(default=DetailLevel.FULL)

    @field_validator("chunk_size")
    @classmethod
    def clamp_chunk_size(cls, value: int) -> int:
        return max(MIN_REQUEST_CHUNK_SIZE, min(MAX_REQUEST_CHUNK_SIZE, value))


GENERATOR_CACHE_SIZE = 16


@lru_cache(maxsize=GENERATOR_CACHE_SIZE)
def get_generator(seed: int) -> WorldGenerator:
    """Return a shared generator for a seed, keeping only recently used seeds."""
    return WorldGenerator(seed)


def handle_chunk_request(params: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
    """Generate and encode the chunk described by request parameters.

    Args:
        params: Query parameters (string or typed values).

    Returns:
        Tuple of (JSON body, response headers).

    Raises:
        pydantic.ValidationError: If a parameter cannot be parsed.
    """
    request = ChunkRequest.model_validate(dict(params))
    generator = get_generator(request.seed)
    payload = generator.generate_chunk(request.chunk_x, request.chunk_y, request.chunk_size)

    logger.debug(
        "chunk_request_served",
        chunk_x=request.chunk_x,
        chunk_y=request.chunk_y,
        chunk_size=request.chunk_size,
        seed=request.seed,
        detail=request.detail.value,
    )
    return encode_chunk(payload, request.detail), dict(CACHE_HEADERS)
