"""Deterministic procedural tile world with bounded chunk streaming."""

from .chunks import (
    DEFAULT_CHUNK_SIZE,
    chunk_coords,
    chunk_key,
    chunks_for_viewport,
    local_coords,
    parse_chunk_key,
    world_coords,
)
from .encoding import CACHE_HEADERS, DetailLevel, encode_chunk
from .exceptions import (
    ChunkWorldError,
    InvalidChunkKeyError,
    InvalidChunkSizeError,
    ManagerDisposedError,
)
from .streaming import (
    ChunkStreamingManager,
    ChunkTelemetry,
    EnsureChunkResult,
    LoggingChunkTelemetry,
    NullChunkTelemetry,
    StreamingSettings,
    create_streaming_manager,
    generator_loader,
)
from .terrain import Biome, ChunkPayload, ClimateBand, TerrainConfig, WorldGenerator
from .tile_types import TileType

__all__ = [
    # Chunks
    "DEFAULT_CHUNK_SIZE",
    "chunk_key",
    "parse_chunk_key",
    "chunk_coords",
    "world_coords",
    "local_coords",
    "chunks_for_viewport",
    # Generation
    "Biome",
    "ChunkPayload",
    "ClimateBand",
    "TerrainConfig",
    "TileType",
    "WorldGenerator",
    # Streaming
    "ChunkStreamingManager",
    "ChunkTelemetry",
    "EnsureChunkResult",
    "LoggingChunkTelemetry",
    "NullChunkTelemetry",
    "StreamingSettings",
    "create_streaming_manager",
    "generator_loader",
    # Encoding
    "CACHE_HEADERS",
    "DetailLevel",
    "encode_chunk",
    # Exceptions
    "ChunkWorldError",
    "InvalidChunkKeyError",
    "InvalidChunkSizeError",
    "ManagerDisposedError",
]
