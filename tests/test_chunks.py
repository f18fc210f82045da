"""Tests for chunk keys and coordinate conversion."""

import pytest

from chunkworld.chunks import (
    chunk_coords,
    chunk_key,
    chunks_for_viewport,
    local_coords,
    parse_chunk_key,
    world_coords,
)
from chunkworld.exceptions import InvalidChunkKeyError


class TestChunkKey:
    """Tests for canonical chunk keys."""

    def test_format(self) -> None:
        """Key is 'x,y' with no spaces."""
        assert chunk_key(3, -1) == "3,-1"
        assert chunk_key(0, 0) == "0,0"

    def test_parse_round_trip(self) -> None:
        """Parsing a key gives back the coordinate."""
        assert parse_chunk_key(chunk_key(-12, 40)) == (-12, 40)

    @pytest.mark.parametrize("key", ["", "1", "1,2,3", "a,b", "1.5,2"])
    def test_parse_invalid(self, key: str) -> None:
        """Malformed keys raise InvalidChunkKeyError."""
        with pytest.raises(InvalidChunkKeyError):
            parse_chunk_key(key)

    def test_invalid_key_is_value_error(self) -> None:
        """InvalidChunkKeyError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_chunk_key("nope")


class TestCoordinateConversion:
    """Tests for world/chunk/local conversion."""

    def test_chunk_coords_positive(self) -> None:
        assert chunk_coords(0, 0) == (0, 0)
        assert chunk_coords(31, 31) == (0, 0)
        assert chunk_coords(32, 64) == (1, 2)

    def test_chunk_coords_negative(self) -> None:
        """Negative world coordinates land in negative chunks."""
        assert chunk_coords(-1, -1) == (-1, -1)
        assert chunk_coords(-32, -33) == (-1, -2)

    def test_local_coords_negative(self) -> None:
        """Local coordinates stay within [0, chunk_size)."""
        assert local_coords(-1, -32) == (31, 0)

    def test_world_coords_inverse(self) -> None:
        """world_coords undoes chunk_coords + local_coords."""
        for x, y in [(0, 0), (45, -7), (-100, 300)]:
            cx, cy = chunk_coords(x, y, 16)
            lx, ly = local_coords(x, y, 16)
            assert world_coords(cx, cy, lx, ly, 16) == (x, y)


class TestChunksForViewport:
    """Tests for viewport chunk enumeration."""

    def test_single_chunk(self) -> None:
        assert chunks_for_viewport(0, 0, 32, 32) == [(0, 0)]

    def test_straddles_chunks(self) -> None:
        """A viewport crossing a border covers both chunks."""
        chunks = chunks_for_viewport(16, 0, 32, 32)
        assert chunks == [(0, 0), (1, 0)]

    def test_row_major(self) -> None:
        chunks = chunks_for_viewport(0, 0, 64, 64)
        assert chunks == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_negative_origin(self) -> None:
        """Viewports left of/above the origin are not clipped."""
        chunks = chunks_for_viewport(-10, -10, 20, 20)
        assert chunks == [(-1, -1), (0, -1), (-1, 0), (0, 0)]

    def test_padding(self) -> None:
        """Padding adds a ring of chunks on every side."""
        chunks = chunks_for_viewport(0, 0, 32, 32, padding=1)
        assert len(chunks) == 9
        assert (-1, -1) in chunks
        assert (1, 1) in chunks
