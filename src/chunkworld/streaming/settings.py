"""Streaming manager configuration."""

from pydantic import BaseModel, Field

from ..chunks import DEFAULT_CHUNK_SIZE


class StreamingSettings(BaseModel):
    """Chunk streaming configuration."""

    world_seed: int = Field(default=12345, description="Seed of the streamed world")
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE, ge=1, description="Tiles per chunk side"
    )
    max_loaded_chunks: int = Field(
        default=64, ge=1, description="Maximum number of resident chunks"
    )
    cleanup_interval_ms: float = Field(
        default=30_000, gt=0, description="Interval between idle-chunk sweeps"
    )
    stale_after_sweeps: int = Field(
        default=1, ge=1, description="Sweeps a chunk may go untouched before it is pruned"
    )
