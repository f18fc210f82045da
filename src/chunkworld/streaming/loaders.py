"""Production chunk loaders backed by the world generator."""

import asyncio

import structlog

from ..terrain.config import TerrainConfig
from ..terrain.generator import ChunkPayload, WorldGenerator
from .manager import ChunkLoader, ChunkStreamingManager, EvictionCallback
from .settings import StreamingSettings
from .telemetry import ChunkTelemetry, LoggingChunkTelemetry

logger = structlog.get_logger()


def generator_loader(generator: WorldGenerator, chunk_size: int) -> ChunkLoader:
    """Wrap a generator as an async chunk loader.

    Generation runs in a worker thread so the event loop keeps serving
    cache hits while a chunk is being built. The generator holds no mutable
    state, so concurrent generation is safe.
    """

    async def load_chunk_data(chunk_x: int, chunk_y: int) -> ChunkPayload:
        return await asyncio.to_thread(generator.generate_chunk, chunk_x, chunk_y, chunk_size)

    return load_chunk_data


def create_streaming_manager(
    settings: StreamingSettings,
    terrain: TerrainConfig | None = None,
    telemetry: ChunkTelemetry | None = None,
    on_chunk_evicted: EvictionCallback | None = None,
) -> ChunkStreamingManager:
    """Build a streaming manager that generates chunks for ``settings.world_seed``.

    Args:
        settings: Streaming configuration.
        terrain: Terrain generation parameters (defaults if None).
        telemetry: Telemetry sink; a logging sink is created if None.
        on_chunk_evicted: Called with the key of each evicted chunk.

    Returns:
        Configured ChunkStreamingManager.
    """
    generator = WorldGenerator(settings.world_seed, terrain)
    if telemetry is None:
        telemetry = LoggingChunkTelemetry(cleanup_interval_ms=settings.cleanup_interval_ms)

    logger.info(
        "streaming_manager_created",
        world_seed=settings.world_seed,
        chunk_size=settings.chunk_size,
        max_loaded_chunks=settings.max_loaded_chunks,
    )

    return ChunkStreamingManager(
        settings,
        generator_loader(generator, settings.chunk_size),
        telemetry=telemetry,
        on_chunk_evicted=on_chunk_evicted,
    )
