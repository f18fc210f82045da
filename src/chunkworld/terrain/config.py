"""Terrain generation configuration models."""

from pydantic import BaseModel, Field


class NoiseLayerConfig(BaseModel):
    """Fractal noise parameters for a single sampled layer."""

    seed_offset: int = Field(description="Offset added to the world seed for this layer")
    frequency: float = Field(description="Base frequency in cycles per tile")
    amplitude: float = Field(default=1.0, description="Weight of this layer in its blend")
    octaves: int = Field(default=3, description="Number of octaves for fBm")
    lacunarity: float = Field(default=2.1, description="Frequency multiplier per octave")
    gain: float = Field(default=0.55, description="Amplitude multiplier per octave")


def _default_height_layers() -> list[NoiseLayerConfig]:
    return [
        NoiseLayerConfig(seed_offset=101, frequency=0.004, amplitude=1.0),
        NoiseLayerConfig(seed_offset=131, frequency=0.008, amplitude=0.55),
        NoiseLayerConfig(seed_offset=151, frequency=0.018, amplitude=0.25),
    ]


class HeightConfig(BaseModel):
    """Height field generation parameters."""

    layers: list[NoiseLayerConfig] = Field(default_factory=_default_height_layers)
    exponent: float = Field(default=1.08, description="Power applied to blended height")


class TemperatureConfig(BaseModel):
    """Temperature field generation parameters."""

    latitude_span: float = Field(
        default=620.0, description="Distance from y=0 in tiles where latitude warmth reaches zero"
    )
    latitude_weight: float = Field(default=0.7, description="Weight of latitude warmth")
    continental: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(
            seed_offset=211, frequency=0.0025, amplitude=0.2, lacunarity=2.2
        )
    )
    detail: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(
            seed_offset=213, frequency=0.012, amplitude=0.1, octaves=2, gain=0.5
        )
    )
    height_lapse: float = Field(
        default=0.32, description="Temperature lost per unit of height"
    )


class MoistureConfig(BaseModel):
    """Moisture field generation parameters."""

    base: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(
            seed_offset=271, frequency=0.0035, amplitude=0.7, octaves=4, lacunarity=2.0
        )
    )
    detail: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(
            seed_offset=277, frequency=0.015, amplitude=0.3, octaves=2, gain=0.5
        )
    )
    shoreline_range: float = Field(
        default=0.04, description="Height above water level that still gets shoreline moisture"
    )
    shoreline_intensity: float = Field(
        default=1.4, description="Moisture added per unit of height below the shoreline band"
    )


class HydrologyConfig(BaseModel):
    """River channel parameters."""

    channel: NoiseLayerConfig = Field(
        default_factory=lambda: NoiseLayerConfig(seed_offset=331, frequency=0.008)
    )
    channel_width: float = Field(
        default=0.004, description="Half-width of the channel band around the noise mid-line"
    )
    max_height: float = Field(default=0.78, description="Rivers only run below this height")
    min_moisture: float = Field(default=0.52, description="Rivers need at least this moisture")


class BiomeThresholds(BaseModel):
    """Height/temperature/moisture cut-offs for biome classification."""

    water_level: float = 0.38
    deep_water_level: float = 0.30
    coast_margin: float = 0.02
    mountain_height: float = 0.82
    hill_height: float = 0.70
    highland_tundra_temperature: float = 0.35
    snow_temperature: float = 0.18
    cool_forest_temperature: float = 0.32
    forest_moisture: float = 0.55
    tropical_temperature: float = 0.78
    desert_moisture: float = 0.35
    savanna_moisture: float = 0.55
    badlands_moisture: float = 0.22
    steppe_moisture: float = 0.35
    swamp_moisture: float = 0.78


class ClimateThresholds(BaseModel):
    """Temperature/moisture cut-offs for climate bands."""

    polar_max_temperature: float = 0.2
    subpolar_max_temperature: float = 0.35
    temperate_max_temperature: float = 0.6
    subtropical_max_temperature: float = 0.78
    temperate_humid_moisture: float = 0.4
    subtropical_humid_moisture: float = 0.45
    tropical_humid_moisture: float = 0.5


class TerrainConfig(BaseModel):
    """Complete terrain generation configuration.

    The world seed is not part of this model; it is given to the
    generator so one configuration can describe many worlds.
    """

    height: HeightConfig = Field(default_factory=HeightConfig)
    temperature: TemperatureConfig = Field(default_factory=TemperatureConfig)
    moisture: MoistureConfig = Field(default_factory=MoistureConfig)
    hydrology: HydrologyConfig = Field(default_factory=HydrologyConfig)
    biomes: BiomeThresholds = Field(default_factory=BiomeThresholds)
    climate: ClimateThresholds = Field(default_factory=ClimateThresholds)
