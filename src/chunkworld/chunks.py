"""Chunk keys and coordinate conversion for an unbounded tile world."""

from .exceptions import InvalidChunkKeyError

DEFAULT_CHUNK_SIZE = 32


def chunk_key(chunk_x: int, chunk_y: int) -> str:
    """Canonical cache key for a chunk coordinate, e.g. ``"3,-1"``."""
    return f"{chunk_x},{chunk_y}"


def parse_chunk_key(key: str) -> tuple[int, int]:
    """Parse a canonical chunk key back into ``(chunk_x, chunk_y)``.

    Raises:
        InvalidChunkKeyError: If the key is not two comma separated integers.
    """
    parts = key.split(",")
    if len(parts) != 2:
        raise InvalidChunkKeyError(f"Invalid chunk key: {key!r}")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError as e:
        raise InvalidChunkKeyError(f"Invalid chunk key: {key!r}") from e


def chunk_coords(x: int, y: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> tuple[int, int]:
    """Convert world coordinates to chunk coordinates.

    Floor division keeps negative coordinates in the correct chunk.
    """
    return (x // chunk_size, y // chunk_size)


def world_coords(
    chunk_x: int,
    chunk_y: int,
    local_x: int,
    local_y: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> tuple[int, int]:
    """Convert chunk + local offset to world coordinates."""
    return (chunk_x * chunk_size + local_x, chunk_y * chunk_size + local_y)


def local_coords(x: int, y: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> tuple[int, int]:
    """Convert world coordinates to local coordinates within a chunk."""
    return (x % chunk_size, y % chunk_size)


def chunks_for_viewport(
    x: int,
    y: int,
    width: int,
    height: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    padding: int = 0,
) -> list[tuple[int, int]]:
    """Return chunk coordinates that overlap a viewport rectangle.

    Args:
        x, y: Top-left corner of viewport in world coordinates.
        width, height: Size of viewport in tiles.
        chunk_size: Tiles per chunk side.
        padding: Extra chunks to include beyond viewport edges.

    Returns:
        List of (chunk_x, chunk_y) tuples in row-major order.
    """
    start_cx = x // chunk_size - padding
    start_cy = y // chunk_size - padding
    end_cx = (x + width - 1) // chunk_size + 1 + padding
    end_cy = (y + height - 1) // chunk_size + 1 + padding

    chunks = []
    for cy in range(start_cy, end_cy):
        for cx in range(start_cx, end_cx):
            chunks.append((cx, cy))
    return chunks
