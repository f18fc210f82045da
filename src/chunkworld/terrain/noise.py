"""Noise generation functions for terrain generation.

Provides lattice-hash value noise and fractal Brownian motion evaluated
directly at world coordinates. Because every sample is a pure function of
``(seed, x, y)``, any two regions that overlap agree exactly on the
overlap, which is what keeps neighbouring chunks seamless.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

_MASK32 = 0xFFFFFFFF
_UINT32_MAX = float(_MASK32)

# Lattice hash multipliers
_HASH_X = np.uint64(374761393)
_HASH_Y = np.uint64(668265263)
_HASH_SEED = 362437
_HASH_MIX = np.uint64(1274126177)

# Per-octave seed step for fractal noise
OCTAVE_SEED_STEP = 97


def _to_uint32(values: NDArray[np.int64]) -> NDArray[np.uint64]:
    """Reduce signed lattice coordinates to their 32-bit two's complement."""
    return np.bitwise_and(values, _MASK32).astype(np.uint64)


def hash_2d(seed: int, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Hash integer lattice coordinates to values in [0, 1].

    All multiplications happen on values below 2**32 in uint64, so they
    never overflow and are masked back to 32 bits explicitly.

    Args:
        seed: Noise seed.
        x: Integer x lattice coordinates.
        y: Integer y lattice coordinates.

    Returns:
        Array of hash values in [0, 1].
    """
    xs = _to_uint32(np.asarray(x, dtype=np.int64))
    ys = _to_uint32(np.asarray(y, dtype=np.int64))
    seed_term = np.uint64(((seed & _MASK32) * _HASH_SEED) & _MASK32)
    mask = np.uint64(_MASK32)

    h = ((xs * _HASH_X) & mask) ^ ((ys * _HASH_Y) & mask) ^ seed_term
    h = h ^ (h >> np.uint64(13))
    h = (h * _HASH_MIX) & mask
    h = h ^ (h >> np.uint64(16))

    return h.astype(np.float64) / _UINT32_MAX


def value_noise(seed: int, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Bilinear value noise with smoothstep fade.

    Args:
        seed: Noise seed.
        x: Sample x coordinates (already scaled by frequency).
        y: Sample y coordinates (already scaled by frequency).

    Returns:
        Noise values in [0, 1], same shape as the inputs.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    x0 = np.floor(x)
    y0 = np.floor(y)
    sx = smoothstep(0.0, 1.0, x - x0)
    sy = smoothstep(0.0, 1.0, y - y0)

    ix0 = x0.astype(np.int64)
    iy0 = y0.astype(np.int64)

    n00 = hash_2d(seed, ix0, iy0)
    n10 = hash_2d(seed, ix0 + 1, iy0)
    n01 = hash_2d(seed, ix0, iy0 + 1)
    n11 = hash_2d(seed, ix0 + 1, iy0 + 1)

    ix_top = lerp(n00, n10, sx)
    ix_bottom = lerp(n01, n11, sx)
    return lerp(ix_top, ix_bottom, sy)


def fractal_noise(
    seed: int,
    x: ArrayLike,
    y: ArrayLike,
    frequency: float,
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> NDArray[np.float64]:
    """Generate fractal Brownian motion noise at world coordinates.

    Sums multiple octaves of value noise at increasing frequencies
    and decreasing amplitudes for natural-looking variation.

    Args:
        seed: Noise seed; octave i uses ``seed + i * OCTAVE_SEED_STEP``.
        x: World x coordinates in tiles.
        y: World y coordinates in tiles.
        frequency: Frequency of the base (lowest) octave in cycles per tile.
        octaves: Number of noise layers to sum.
        lacunarity: Frequency multiplier between octaves.
        gain: Amplitude multiplier between octaves.

    Returns:
        Noise values in [0, 1], amplitude-normalized.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    result = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)

    amplitude = 1.0
    freq = frequency
    total_amplitude = 0.0

    for i in range(octaves):
        result += amplitude * value_noise(seed + i * OCTAVE_SEED_STEP, x * freq, y * freq)
        total_amplitude += amplitude
        amplitude *= gain
        freq *= lacunarity

    if total_amplitude == 0.0:
        return result
    return result / total_amplitude


def lerp(a: NDArray[np.float64], b: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Linear interpolation from a to b by t."""
    return a + (b - a) * t


def smoothstep(edge0: float, edge1: float, x: ArrayLike) -> NDArray[np.float64]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((np.asarray(x, dtype=np.float64) - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
