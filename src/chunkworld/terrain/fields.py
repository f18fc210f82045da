"""Field generation for terrain: height, temperature, moisture, river channels.

Every function takes world-space coordinate grids so that the same world
tile always receives the same values, whichever chunk asks for it.
"""

import numpy as np
from numpy.typing import NDArray

from .config import (
    HeightConfig,
    HydrologyConfig,
    MoistureConfig,
    NoiseLayerConfig,
    TemperatureConfig,
)
from .noise import fractal_noise


def world_grid(
    start_x: int,
    start_y: int,
    width: int,
    height: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Build world coordinate grids for a rectangular region.

    Args:
        start_x: World x of the region's left column.
        start_y: World y of the region's top row.
        width: Region width in tiles.
        height: Region height in tiles.

    Returns:
        Tuple of (xs, ys), each shaped (height, width) and indexed [row][col].
    """
    ys, xs = np.meshgrid(
        np.arange(start_y, start_y + height, dtype=np.float64),
        np.arange(start_x, start_x + width, dtype=np.float64),
        indexing="ij",
    )
    return xs, ys


def sample_layer(
    seed: int,
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    layer: NoiseLayerConfig,
) -> NDArray[np.float64]:
    """Sample one configured fractal noise layer (unweighted, in [0, 1])."""
    return fractal_noise(
        seed + layer.seed_offset,
        xs,
        ys,
        layer.frequency,
        octaves=layer.octaves,
        lacunarity=layer.lacunarity,
        gain=layer.gain,
    )


def make_height(
    seed: int,
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    config: HeightConfig,
) -> NDArray[np.float64]:
    """Generate the height field.

    Blends the configured layers by amplitude, then sharpens the result
    slightly with a power curve so lowlands are broader than peaks.

    Args:
        seed: World seed.
        xs: World x coordinates.
        ys: World y coordinates.
        config: Height generation parameters.

    Returns:
        2D height array in range [0, 1].
    """
    height = np.zeros_like(xs)
    total_amplitude = 0.0

    for layer in config.layers:
        height += layer.amplitude * sample_layer(seed, xs, ys, layer)
        total_amplitude += layer.amplitude

    if total_amplitude > 0:
        height /= total_amplitude

    height = np.power(height, config.exponent)
    return np.clip(height, 0.0, 1.0)


def make_temperature(
    seed: int,
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    height: NDArray[np.float64],
    config: TemperatureConfig,
) -> NDArray[np.float64]:
    """Generate the temperature field.

    Warm near the y=0 latitude, cooling toward the poles and with height.

    Args:
        seed: World seed.
        xs: World x coordinates.
        ys: World y coordinates.
        height: Height field for the same coordinates.
        config: Temperature generation parameters.

    Returns:
        2D temperature array in range [0, 1].
    """
    latitude = np.abs(ys) / config.latitude_span
    latitude_warmth = np.clip(1.0 - latitude, 0.0, 1.0)

    continental = sample_layer(seed, xs, ys, config.continental)
    detail = sample_layer(seed, xs, ys, config.detail)

    temperature = (
        config.latitude_weight * latitude_warmth
        + config.continental.amplitude * continental
        + config.detail.amplitude * detail
    )
    temperature -= config.height_lapse * height

    return np.clip(temperature, 0.0, 1.0)


def make_moisture(
    seed: int,
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    height: NDArray[np.float64],
    water_level: float,
    config: MoistureConfig,
) -> NDArray[np.float64]:
    """Generate the moisture field.

    Combines noise with a boost for tiles in or just above the water.

    Args:
        seed: World seed.
        xs: World x coordinates.
        ys: World y coordinates.
        height: Height field for the same coordinates.
        water_level: Height at or below which tiles are water.
        config: Moisture generation parameters.

    Returns:
        2D moisture array in range [0, 1].
    """
    base = sample_layer(seed, xs, ys, config.base)
    detail = sample_layer(seed, xs, ys, config.detail)
    moisture = config.base.amplitude * base + config.detail.amplitude * detail

    # Shoreline boost: wetter the further below the shoreline band
    shoreline = water_level + config.shoreline_range
    boost = np.maximum(shoreline - height, 0.0) * config.shoreline_intensity
    moisture = moisture + boost

    return np.clip(moisture, 0.0, 1.0)


def make_river_channel(
    seed: int,
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    config: HydrologyConfig,
) -> NDArray[np.float64]:
    """Generate the river channel distance field.

    Rivers follow the lines where the channel noise crosses its mid-point,
    which gives long, meandering, unbranched courses.

    Args:
        seed: World seed.
        xs: World x coordinates.
        ys: World y coordinates.
        config: Hydrology parameters.

    Returns:
        2D array of distance from the channel mid-line, in [0, 0.5].
    """
    channel = sample_layer(seed, xs, ys, config.channel)
    return np.abs(channel - 0.5)
