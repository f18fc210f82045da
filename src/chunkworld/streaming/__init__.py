"""Chunk streaming: bounded LRU cache with asynchronous, de-duplicated loads."""

from .loaders import create_streaming_manager, generator_loader
from .manager import (
    CacheEntry,
    ChunkLoader,
    ChunkStreamingManager,
    EnsureChunkResult,
    ReleaseResult,
)
from .settings import StreamingSettings
from .telemetry import (
    ChunkTelemetry,
    ChunkTelemetryStats,
    LoggingChunkTelemetry,
    NullChunkTelemetry,
)

__all__ = [
    "CacheEntry",
    "ChunkLoader",
    "ChunkStreamingManager",
    "ChunkTelemetry",
    "ChunkTelemetryStats",
    "EnsureChunkResult",
    "LoggingChunkTelemetry",
    "NullChunkTelemetry",
    "ReleaseResult",
    "StreamingSettings",
    "create_streaming_manager",
    "generator_loader",
]
