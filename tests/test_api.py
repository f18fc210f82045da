"""Tests for chunk request handling."""

import pytest
from pydantic import ValidationError

from chunkworld.api import GENERATOR_CACHE_SIZE, ChunkRequest, get_generator, handle_chunk_request
from chunkworld.encoding import CACHE_HEADERS, DetailLevel


class TestChunkRequest:
    """Tests for query parameter parsing."""

    def test_defaults(self) -> None:
        request = ChunkRequest.model_validate({})
        assert (request.chunk_x, request.chunk_y) == (0, 0)
        assert request.chunk_size == 32
        assert request.seed == 12345
        assert request.detail == DetailLevel.FULL

    def test_long_names(self) -> None:
        request = ChunkRequest.model_validate(
            {"chunkX": "3", "chunkY": "-2", "chunkSize": "16", "seed": "7", "detail": "minimal"}
        )
        assert (request.chunk_x, request.chunk_y, request.chunk_size) == (3, -2, 16)
        assert request.seed == 7
        assert request.detail == DetailLevel.MINIMAL

    def test_short_names(self) -> None:
        request = ChunkRequest.model_validate({"x": "5", "y": "6", "size": "24"})
        assert (request.chunk_x, request.chunk_y, request.chunk_size) == (5, 6, 24)

    @pytest.mark.parametrize(("size", "expected"), [("1", 8), ("0", 8), ("-5", 8), ("500", 128), ("64", 64)])
    def test_chunk_size_clamped(self, size: str, expected: int) -> None:
        assert ChunkRequest.model_validate({"chunkSize": size}).chunk_size == expected

    def test_invalid_detail(self) -> None:
        with pytest.raises(ValidationError):
            ChunkRequest.model_validate({"detail": "everything"})

    def test_non_integer_coordinate(self) -> None:
        with pytest.raises(ValidationError):
            ChunkRequest.model_validate({"chunkX": "east"})


class TestHandleChunkRequest:
    """Tests for the request handler."""

    def test_body_and_headers(self) -> None:
        body, headers = handle_chunk_request({"x": "1", "y": "2", "size": "8", "detail": "minimal"})

        assert (body["chunkX"], body["chunkY"], body["chunkSize"]) == (1, 2, 8)
        assert body["seed"] == 12345
        assert "fields" not in body
        assert headers == CACHE_HEADERS

    def test_headers_are_a_copy(self) -> None:
        _, headers = handle_chunk_request({"size": "8", "detail": "minimal"})
        headers["Cache-Control"] = "no-store"
        assert CACHE_HEADERS["Cache-Control"] != "no-store"

    def test_same_request_same_body(self) -> None:
        params = {"chunkX": "-3", "chunkY": "4", "chunkSize": "8", "seed": "99"}
        assert handle_chunk_request(params)[0] == handle_chunk_request(params)[0]

    def test_generator_reused_per_seed(self) -> None:
        assert get_generator(4242) is get_generator(4242)
        assert get_generator(4242) is not get_generator(4243)

    def test_generator_cache_bounded(self) -> None:
        for seed in range(500):
            handle_chunk_request({"seed": str(seed), "size": "8", "detail": "minimal"})

        assert get_generator.cache_info().currsize == GENERATOR_CACHE_SIZE
