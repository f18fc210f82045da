"""Custom exceptions for chunk generation and streaming."""


class ChunkWorldError(Exception):
    """Base exception for chunkworld errors."""

    pass


class InvalidChunkSizeError(ChunkWorldError, ValueError):
    """Raised when a chunk or region has a non-positive size."""

    pass


class InvalidChunkKeyError(ChunkWorldError, ValueError):
    """Raised when a chunk key string cannot be parsed."""

    pass


class ManagerDisposedError(ChunkWorldError):
    """Raised when a disposed streaming manager is asked to load a chunk."""

    pass
