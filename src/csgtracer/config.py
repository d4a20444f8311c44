# config.py
from dataclasses import dataclass, field
from typing import Dict, Tuple

from csgtracer.core.color import Color
from csgtracer.exceptions import ConfigurationError
from csgtracer.imaging.tone_mapping import MeanType
from csgtracer.renderer.image_tracer import samples_per_side

RENDERERS = ("onoff", "flat", "pathtracing")

# Named trade-offs between speed and noise
QUALITY_PRESETS: Dict[str, Dict[str, int]] = {
    "preview": {"samples_per_pixel": 1, "n_rays": 3, "max_depth": 2, "russian_roulette_limit": 2},
    "balanced": {"samples_per_pixel": 4, "n_rays": 5, "max_depth": 3, "russian_roulette_limit": 2},
    "final": {"samples_per_pixel": 9, "n_rays": 10, "max_depth": 5, "russian_roulette_limit": 3},
}


@dataclass
class RenderSettings:
    """Everything the render driver needs besides the scene itself."""
    width: int = 640
    height: int = 480
    renderer: str = "pathtracing"
    samples_per_pixel: int = 1
    n_rays: int = 10
    max_depth: int = 2
    russian_roulette_limit: int = 3
    background: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    seed: int = 42
    workers: int = 1
    rows_per_band: int = 8

    def __post_init__(self):
        self.background = tuple(float(c) for c in self.background)
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError on values that cannot be rendered."""
        for name in ("width", "height", "n_rays", "workers", "rows_per_band"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("max_depth", "russian_roulette_limit", "seed"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        if self.renderer not in RENDERERS:
            raise ConfigurationError(
                f"unknown renderer '{self.renderer}', expected one of {', '.join(RENDERERS)}"
            )
        if len(self.background) != 3:
            raise ConfigurationError(f"background must be an RGB triple, got {self.background!r}")
        samples_per_side(self.samples_per_pixel)

    @property
    def background_color(self) -> Color:
        return Color(*self.background)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "RenderSettings":
        try:
            preset = QUALITY_PRESETS[name]
        except KeyError:
            raise ConfigurationError(
                f"unknown quality preset '{name}', expected one of {', '.join(QUALITY_PRESETS)}"
            ) from None
        values = dict(preset)
        values.update(overrides)
        return cls(**values)


@dataclass
class ToneMapSettings:
    """Parameters of the HDR to LDR conversion."""
    factor: float = 1.0
    gamma: float = 1.0
    mean_type: MeanType = MeanType.MAX_MIN
    weights: Tuple[float, float, float] = field(default=(1.0, 1.0, 1.0))
    delta: float = 1e-10

    def __post_init__(self):
        if isinstance(self.mean_type, str):
            try:
                self.mean_type = MeanType[self.mean_type.upper()]
            except KeyError:
                raise ConfigurationError(f"unknown mean type '{self.mean_type}'") from None
        if self.factor <= 0:
            raise ConfigurationError(f"factor must be positive, got {self.factor}")
        if self.gamma <= 0:
            raise ConfigurationError(f"gamma must be positive, got {self.gamma}")
        if len(self.weights) != 3:
            raise ConfigurationError(f"exactly three weights are needed, got {self.weights!r}")
