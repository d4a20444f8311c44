# tests/test_config.py
import pytest

from csgtracer.config import QUALITY_PRESETS, RenderSettings, ToneMapSettings
from csgtracer.core.color import Color
from csgtracer.exceptions import ConfigurationError
from csgtracer.imaging.tone_mapping import MeanType


class TestRenderSettings:
    def test_defaults(self):
        settings = RenderSettings()
        assert (settings.width, settings.height) == (640, 480)
        assert settings.renderer == "pathtracing"
        assert settings.aspect_ratio == pytest.approx(640 / 480)
        assert settings.background_color.is_close(Color())

    def test_background(self):
        settings = RenderSettings(background=[0.1, 0.2, 0.3])
        assert settings.background == (0.1, 0.2, 0.3)
        assert settings.background_color.is_close(Color(0.1, 0.2, 0.3))

    @pytest.mark.parametrize("overrides, message", [
        ({"width": 0}, "width"),
        ({"height": -3}, "height"),
        ({"n_rays": 0}, "n_rays"),
        ({"workers": 0}, "workers"),
        ({"max_depth": -1}, "max_depth"),
        ({"renderer": "raymarching"}, "unknown renderer"),
        ({"samples_per_pixel": 3}, "perfect square"),
        ({"background": (1.0, 1.0)}, "RGB triple"),
    ])
    def test_invalid(self, overrides, message):
        with pytest.raises(ConfigurationError, match=message):
            RenderSettings(**overrides)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            RenderSettings(width=0)

    def test_presets(self):
        for name, values in QUALITY_PRESETS.items():
            settings = RenderSettings.from_preset(name)
            for key, value in values.items():
                assert getattr(settings, key) == value

    def test_preset_overrides(self):
        settings = RenderSettings.from_preset("balanced", width=10, height=5, n_rays=1)
        assert settings.samples_per_pixel == QUALITY_PRESETS["balanced"]["samples_per_pixel"]
        assert settings.n_rays == 1
        assert settings.aspect_ratio == pytest.approx(2.0)

    def test_unknown_preset(self):
        with pytest.raises(ConfigurationError, match="unknown quality preset"):
            RenderSettings.from_preset("ultra")


class TestToneMapSettings:
    def test_mean_type_from_string(self):
        assert ToneMapSettings(mean_type="distance").mean_type is MeanType.DISTANCE

    @pytest.mark.parametrize("kwargs, message", [
        ({"mean_type": "median"}, "unknown mean type"),
        ({"factor": 0.0}, "factor"),
        ({"gamma": -1.0}, "gamma"),
        ({"weights": (1.0, 2.0)}, "three weights"),
    ])
    def test_invalid(self, kwargs, message):
        with pytest.raises(ConfigurationError, match=message):
            ToneMapSettings(**kwargs)
