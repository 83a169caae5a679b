"""Tests for VisualizationConfig."""

import dataclasses

import pytest

from spectrascope.config import PRESETS, VisualizationConfig, from_preset
from spectrascope.errors import InvalidConfiguration


class TestVisualizationConfig:
    def test_defaults(self, config):
        assert config.bar_count == 64
        assert config.point_count == 256
        assert config.color_scheme == "wmp"
        assert config.peak_hold is True
        assert config.peak_decay == 0.95
        assert config.peak_hold_frames == 30
        assert config.smoothing == 0.8
        assert config.amplification == 1.0

    def test_is_immutable(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bar_count = 32

    @pytest.mark.parametrize(
        "field, value",
        [
            ("bar_count", 0),
            ("bar_count", -4),
            ("bar_count", 2.5),
            ("point_count", 0),
            ("peak_hold_frames", -1),
            ("color_scheme", "plasma"),
            ("peak_decay", 0.0),
            ("peak_decay", 1.0),
            ("smoothing", 0.0),
            ("smoothing", 1.01),
            ("amplification", -0.5),
            ("amplification", float("nan")),
            ("amplification", float("inf")),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(InvalidConfiguration):
            VisualizationConfig(**{field: value})

    def test_boundary_values_accepted(self):
        cfg = VisualizationConfig(bar_count=1, smoothing=1.0, amplification=0.0, peak_hold_frames=0)
        assert cfg.smoothing == 1.0

    def test_merged_overrides_fields(self, config):
        merged = config.merged(color_scheme="modern", amplification=2.0)
        assert merged.color_scheme == "modern"
        assert merged.amplification == 2.0
        assert merged.bar_count == config.bar_count
        # Original untouched
        assert config.color_scheme == "wmp"

    def test_merged_validates(self, config):
        with pytest.raises(InvalidConfiguration):
            config.merged(smoothing=2.0)

    def test_merged_rejects_unknown_fields(self, config):
        with pytest.raises(InvalidConfiguration, match="bogus"):
            config.merged(bogus=1)

    def test_changes_counts(self, config):
        assert config.changes_counts(config.merged(bar_count=32))
        assert not config.changes_counts(config.merged(color_scheme="modern"))
        assert not config.changes_counts(config.merged(point_count=128))

    def test_to_dict(self, config):
        d = config.to_dict()
        assert d["bar_count"] == 64
        assert set(d) == {f.name for f in dataclasses.fields(config)}


class TestPresets:
    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_presets_are_valid(self, name):
        assert isinstance(from_preset(name), VisualizationConfig)

    def test_overrides_apply(self):
        cfg = from_preset("modern", bar_count=16)
        assert cfg.color_scheme == "modern"
        assert cfg.bar_count == 16

    def test_unknown_preset(self):
        with pytest.raises(InvalidConfiguration):
            from_preset("winamp")
