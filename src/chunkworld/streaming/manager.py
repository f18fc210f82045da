"""Bounded LRU cache of generated chunks with asynchronous loading.

All cache mutation happens on the event loop thread between awaits, so no
lock is needed. Porting this to preemptive threads requires one.
"""

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog

from ..chunks import chunk_key
from ..exceptions import ManagerDisposedError
from ..terrain.generator import ChunkPayload
from .settings import StreamingSettings
from .telemetry import CancelCleanup, ChunkTelemetry, NullChunkTelemetry

logger = structlog.get_logger()

ChunkLoader = Callable[[int, int], Awaitable[ChunkPayload]]
EvictionCallback = Callable[[str], None]


@dataclass
class CacheEntry:
    """A resident chunk and its recency sequence number."""

    key: str
    payload: ChunkPayload
    tile_count: int
    last_accessed: int


@dataclass(frozen=True)
class EnsureChunkResult:
    """Result of ensure_chunk_loaded."""

    key: str
    payload: ChunkPayload
    is_new: bool


@dataclass(frozen=True)
class ReleaseResult:
    """A chunk removed from the cache."""

    key: str
    entry: CacheEntry
    reason: str


class ChunkStreamingManager:
    """Keeps a bounded working set of chunks resident.

    Chunks are produced by an injected async loader. Concurrent requests
    for the same chunk share a single load. When the cache grows past
    ``max_loaded_chunks``, the least recently used chunks are evicted.
    """

    def __init__(
        self,
        settings: StreamingSettings,
        load_chunk_data: ChunkLoader,
        telemetry: ChunkTelemetry | None = None,
        on_chunk_evicted: EvictionCallback | None = None,
    ):
        self.settings = settings
        self._load_chunk_data = load_chunk_data
        self._telemetry = telemetry if telemetry is not None else NullChunkTelemetry()
        self._on_chunk_evicted = on_chunk_evicted

        self._cache: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Task[ChunkPayload]] = {}
        self._sequence = 0
        # Sequence value at each of the last stale_after_sweeps sweeps, oldest first
        self._sweep_watermarks: deque[int] = deque(
            [0] * settings.stale_after_sweeps, maxlen=settings.stale_after_sweeps
        )
        self._cancel_cleanup: CancelCleanup | None = None
        self._disposed = False

    @property
    def telemetry(self) -> ChunkTelemetry:
        """Sink shared with the render layer."""
        return self._telemetry

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def loaded_keys(self) -> list[str]:
        """Resident chunk keys, least recently used first."""
        return [
            entry.key
            for entry in sorted(self._cache.values(), key=lambda e: e.last_accessed)
        ]

    def is_loaded(self, chunk_x: int, chunk_y: int) -> bool:
        return chunk_key(chunk_x, chunk_y) in self._cache

    async def ensure_chunk_loaded(self, chunk_x: int, chunk_y: int) -> EnsureChunkResult:
        """Return a chunk, loading it if it is not resident.

        Args:
            chunk_x: Chunk x coordinate.
            chunk_y: Chunk y coordinate.

        Returns:
            EnsureChunkResult. ``is_new`` is True only for the caller whose
            request started the load.

        Raises:
            ManagerDisposedError: If the manager has been disposed.
            Exception: Whatever the loader raised.
        """
        if self._disposed:
            raise ManagerDisposedError("Chunk streaming manager has been disposed")

        self._ensure_cleanup_scheduled()
        key = chunk_key(chunk_x, chunk_y)

        entry = self._cache.get(key)
        if entry is not None:
            entry.last_accessed = self._next_sequence()
            self._telemetry.log_cache_hit(key, cache_size=len(self._cache))
            return EnsureChunkResult(key=key, payload=entry.payload, is_new=False)

        task = self._in_flight.get(key)
        is_new = task is None
        if task is None:
            task = asyncio.get_running_loop().create_task(self._load(key, chunk_x, chunk_y))
            task.add_done_callback(_retrieve_load_error)
            self._in_flight[key] = task
        else:
            logger.debug("chunk_load_joined", chunk_key=key)

        # Shielded so a cancelled caller does not abort a shared load
        payload = await asyncio.shield(task)
        return EnsureChunkResult(key=key, payload=payload, is_new=is_new)

    def release_chunk(self, key: str, reason: str = "manual") -> ReleaseResult | None:
        """Drop a resident chunk without notifying the eviction callback.

        Returns:
            ReleaseResult, or None if the chunk was not resident.
        """
        return self._release(key, reason)

    def prune_idle_chunks(self) -> list[str]:
        """Release every chunk not accessed during the last ``stale_after_sweeps`` sweeps.

        Returns:
            Keys of the released chunks.
        """
        watermark = self._sweep_watermarks[0]
        stale = [entry.key for entry in self._cache.values() if entry.last_accessed <= watermark]

        for key in stale:
            if self._release(key, "stale") is not None:
                self._notify_evicted(key)

        self._sweep_watermarks.append(self._sequence)
        if stale:
            logger.debug("idle_chunks_pruned", count=len(stale), cache_size=len(self._cache))
        return stale

    def dispose(self) -> None:
        """Cancel cleanup, drop every chunk and dispose telemetry. Idempotent.

        Dropped chunks are not reported to the eviction callback.
        """
        if self._disposed:
            return
        self._disposed = True

        if self._cancel_cleanup is not None:
            self._cancel_cleanup()
            self._cancel_cleanup = None

        dropped = len(self._cache)
        self._cache.clear()
        self._telemetry.dispose()
        logger.info(
            "chunk_streaming_disposed",
            dropped_chunks=dropped,
            in_flight=len(self._in_flight),
        )

    async def _load(self, key: str, chunk_x: int, chunk_y: int) -> ChunkPayload:
        self._telemetry.log_load_start(key)
        start = time.perf_counter()
        try:
            payload = await self._load_chunk_data(chunk_x, chunk_y)
        except Exception as e:
            self._telemetry.log_load_error(key, e)
            raise
        finally:
            self._in_flight.pop(key, None)

        if self._disposed:
            logger.debug("chunk_load_discarded", chunk_key=key)
            return payload

        entry = CacheEntry(
            key=key,
            payload=payload,
            tile_count=payload.tile_count,
            last_accessed=self._next_sequence(),
        )
        self._cache[key] = entry
        self._telemetry.log_load_success(
            key,
            duration_ms=(time.perf_counter() - start) * 1000,
            tile_count=entry.tile_count,
            cache_size=len(self._cache),
        )
        self._enforce_capacity()
        return payload

    def _enforce_capacity(self) -> None:
        excess = len(self._cache) - self.settings.max_loaded_chunks
        if excess <= 0:
            return

        oldest = sorted(self._cache.values(), key=lambda e: e.last_accessed)[:excess]
        for entry in oldest:
            if self._release(entry.key, "evicted") is not None:
                self._notify_evicted(entry.key)

    def _release(self, key: str, reason: str) -> ReleaseResult | None:
        start = time.perf_counter()
        entry = self._cache.pop(key, None)
        if entry is None:
            return None

        self._telemetry.log_release(
            key,
            duration_ms=(time.perf_counter() - start) * 1000,
            tile_count=entry.tile_count,
            cache_size=len(self._cache),
            reason=reason,
        )
        return ReleaseResult(key=key, entry=entry, reason=reason)

    def _notify_evicted(self, key: str) -> None:
        if self._on_chunk_evicted is None:
            return
        try:
            self._on_chunk_evicted(key)
        except Exception:
            logger.exception("chunk_eviction_callback_failed", chunk_key=key)

    def _ensure_cleanup_scheduled(self) -> None:
        if self._cancel_cleanup is None:
            self._cancel_cleanup = self._telemetry.schedule_cleanup(self.prune_idle_chunks)

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence


def _retrieve_load_error(task: asyncio.Task[ChunkPayload]) -> None:
    # Load errors are already reported through log_load_error; this marks the
    # exception retrieved when every caller has been cancelled.
    if not task.cancelled():
        task.exception()
