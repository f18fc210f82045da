"""Telemetry sinks for chunk streaming.

The streaming manager reports load/release/hit events to a sink and asks it
to schedule periodic cleanup. The render layer reports create/dispose events
to the same sink.
"""

import asyncio
from dataclasses import asdict, dataclass
from typing import Callable, Protocol

import structlog

logger = structlog.get_logger()

CleanupCallback = Callable[[], None]
CancelCleanup = Callable[[], None]


class ChunkTelemetry(Protocol):
    """Sink interface for chunk streaming events."""

    def log_load_start(self, key: str) -> None: ...

    def log_load_success(
        self, key: str, *, duration_ms: float, tile_count: int, cache_size: int
    ) -> None: ...

    def log_load_error(self, key: str, error: BaseException) -> None: ...

    def log_release(
        self,
        key: str,
        *,
        duration_ms: float,
        tile_count: int,
        cache_size: int,
        reason: str,
    ) -> None: ...

    def log_cache_hit(self, key: str, *, cache_size: int) -> None: ...

    def log_render_create(self, key: str, *, duration_ms: float, tile_count: int) -> None: ...

    def log_render_dispose(self, key: str, *, duration_ms: float, tile_count: int) -> None: ...

    def schedule_cleanup(self, callback: CleanupCallback) -> CancelCleanup: ...

    def dispose(self) -> None: ...


@dataclass
class ChunkTelemetryStats:
    """Running counters for chunk streaming."""

    loads: int = 0
    releases: int = 0
    hits: int = 0
    tiles_loaded: int = 0
    tiles_released: int = 0
    last_cache_size: int = 0
    render_creates: int = 0
    render_disposes: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class LoggingChunkTelemetry:
    """Telemetry sink that keeps counters and logs events with structlog.

    Cleanup callbacks run on the running asyncio loop every
    ``cleanup_interval_ms``. Only one cleanup schedule is kept; scheduling
    again replaces the previous one.
    """

    def __init__(self, cleanup_interval_ms: float = 30_000):
        self.cleanup_interval_ms = cleanup_interval_ms
        self.stats = ChunkTelemetryStats()
        self._cleanup_task: asyncio.Task[None] | None = None
        self._disposed = False

    def log_load_start(self, key: str) -> None:
        logger.debug("chunk_load_started", chunk_key=key)

    def log_load_success(
        self, key: str, *, duration_ms: float, tile_count: int, cache_size: int
    ) -> None:
        self.stats.loads += 1
        self.stats.tiles_loaded += tile_count
        self.stats.last_cache_size = cache_size
        logger.debug(
            "chunk_loaded",
            chunk_key=key,
            duration_ms=round(duration_ms, 3),
            tile_count=tile_count,
            cache_size=cache_size,
        )

    def log_load_error(self, key: str, error: BaseException) -> None:
        logger.warning(
            "chunk_load_failed",
            chunk_key=key,
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_release(
        self,
        key: str,
        *,
        duration_ms: float,
        tile_count: int,
        cache_size: int,
        reason: str,
    ) -> None:
        self.stats.releases += 1
        self.stats.tiles_released += tile_count
        self.stats.last_cache_size = cache_size
        logger.debug(
            "chunk_released",
            chunk_key=key,
            duration_ms=round(duration_ms, 3),
            tile_count=tile_count,
            cache_size=cache_size,
            reason=reason,
        )

    def log_cache_hit(self, key: str, *, cache_size: int) -> None:
        self.stats.hits += 1
        self.stats.last_cache_size = cache_size
        logger.debug("chunk_cache_hit", chunk_key=key, cache_size=cache_size)

    def log_render_create(self, key: str, *, duration_ms: float, tile_count: int) -> None:
        self.stats.render_creates += 1
        logger.debug(
            "chunk_render_created",
            chunk_key=key,
            duration_ms=round(duration_ms, 3),
            tile_count=tile_count,
        )

    def log_render_dispose(self, key: str, *, duration_ms: float, tile_count: int) -> None:
        self.stats.render_disposes += 1
        logger.debug(
            "chunk_render_disposed",
            chunk_key=key,
            duration_ms=round(duration_ms, 3),
            tile_count=tile_count,
        )

    def schedule_cleanup(self, callback: CleanupCallback) -> CancelCleanup:
        """Run ``callback`` periodically on the running event loop.

        Must be called from within a running loop.

        Returns:
            Function that cancels this schedule. Safe to call more than once.
        """
        self._cancel_cleanup_task()
        task = asyncio.get_running_loop().create_task(self._cleanup_loop(callback))
        self._cleanup_task = task

        def cancel() -> None:
            task.cancel()
            if self._cleanup_task is task:
                self._cleanup_task = None

        return cancel

    def dispose(self) -> None:
        """Stop any scheduled cleanup. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self._cancel_cleanup_task()
        logger.debug("chunk_telemetry_disposed", **self.stats.to_dict())

    async def _cleanup_loop(self, callback: CleanupCallback) -> None:
        interval = self.cleanup_interval_ms / 1000
        while True:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception:
                logger.exception("chunk_cleanup_failed")

    def _cancel_cleanup_task(self) -> None:
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None


class NullChunkTelemetry:
    """Telemetry sink that ignores every event."""

    def log_load_start(self, key: str) -> None:
        pass

    def log_load_success(
        self, key: str, *, duration_ms: float, tile_count: int, cache_size: int
    ) -> None:
        pass

    def log_load_error(self, key: str, error: BaseException) -> None:
        pass

    def log_release(
        self,
        key: str,
        *,
        duration_ms: float,
        tile_count: int,
        cache_size: int,
        reason: str,
    ) -> None:
        pass

    def log_cache_hit(self, key: str, *, cache_size: int) -> None:
        pass

    def log_render_create(self, key: str, *, duration_ms: float, tile_count: int) -> None:
        pass

    def log_render_dispose(self, key: str, *, duration_ms: float, tile_count: int) -> None:
        pass

    def schedule_cleanup(self, callback: CleanupCallback) -> CancelCleanup:
        return _noop

    def dispose(self) -> None:
        pass


def _noop() -> None:
    pass
