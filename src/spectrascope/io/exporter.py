"""
Frame sequence serialization.

Writes rendered frame descriptors to JSON for inspection or to a NumPy
archive for direct buffer upload by an external renderer.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import numpy as np

from spectrascope.config import VisualizationConfig
from spectrascope.errors import InvalidConfiguration
from spectrascope.layout.frames import BarFrame, CircularFrame
from spectrascope.layout.geometry import bar_geometry

SCHEMA_VERSION = "1.0"


@dataclass
class FrameMetadata:
    """Header for an exported frame sequence."""

    mode: str
    fps: int
    n_frames: int
    schema_version: str = SCHEMA_VERSION


def _frame_mode(frames: Sequence[Any]) -> str:
    if not frames:
        raise InvalidConfiguration("Nothing to export: frame sequence is empty")
    if all(isinstance(f, BarFrame) for f in frames):
        return "bars"
    if all(isinstance(f, CircularFrame) for f in frames):
        return "circular"
    raise InvalidConfiguration("Cannot export a mix of bar and circular frames")


class FrameExporter:
    """Exports BarFrame / CircularFrame sequences."""

    def __init__(self, precision: int = 4):
        """
        Args:
            precision: Decimal places for floating point values in JSON.
        """
        self.precision = precision

    def _round(self, value: float) -> float:
        return round(float(value), self.precision)

    def _color(self, color) -> list[float]:
        return [self._round(c) for c in color]

    def bar_frame_to_dict(self, index: int, frame: BarFrame) -> dict[str, Any]:
        return {
            "frame_index": index,
            "silent": frame.silent,
            "bars": [
                {
                    "height": self._round(bar.height),
                    "peak": self._round(bar.peak),
                    "color": self._color(bar.color),
                }
                for bar in frame
            ],
        }

    def circular_frame_to_dict(self, index: int, frame: CircularFrame) -> dict[str, Any]:
        return {
            "frame_index": index,
            "silent": frame.silent,
            "rotation": self._round(frame.rotation),
            "center_glow": {
                "intensity": self._round(frame.center_glow.intensity),
                "color": self._color(frame.center_glow.color),
            },
            "points": [
                {
                    "x": self._round(p.x),
                    "y": self._round(p.y),
                    "amplitude": self._round(p.amplitude),
                    "color": self._color(p.color),
                }
                for p in frame
            ],
        }

    def build_document(
        self,
        frames: Sequence[Union[BarFrame, CircularFrame]],
        config: Optional[VisualizationConfig] = None,
        fps: int = 60,
    ) -> dict[str, Any]:
        """
        Build the full export document.

        Returns:
            Dict with "metadata", "config" and "frames" keys.
        """
        mode = _frame_mode(frames)
        metadata = FrameMetadata(mode=mode, fps=fps, n_frames=len(frames))

        if mode == "bars":
            body = [self.bar_frame_to_dict(i, f) for i, f in enumerate(frames)]
        else:
            body = [self.circular_frame_to_dict(i, f) for i, f in enumerate(frames)]

        return {
            "metadata": asdict(metadata),
            "config": (config or VisualizationConfig()).to_dict(),
            "frames": body,
        }

    def export_json(
        self,
        frames: Sequence[Union[BarFrame, CircularFrame]],
        output_path: Union[str, Path],
        config: Optional[VisualizationConfig] = None,
        fps: int = 60,
    ) -> Path:
        output_path = Path(output_path)
        document = self.build_document(frames, config=config, fps=fps)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
        return output_path

    def export_numpy(
        self,
        frames: Sequence[Union[BarFrame, CircularFrame]],
        output_path: Union[str, Path],
        fps: int = 60,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> Path:
        """
        Write stacked per-frame arrays to a compressed .npz archive.

        Bars: heights, peaks (n_frames, n_bars), colors (n_frames, n_bars, 3).
        When width and height are given, bar vertex buffers are included
        per frame as ``vertices_<i>``.
        Circular: positions (n_frames, n_points, 2), amplitudes, colors,
        rotation, glow_intensity, glow_color.
        """
        output_path = Path(output_path)
        mode = _frame_mode(frames)
        arrays: dict[str, np.ndarray] = {
            "fps": np.array(fps),
            "mode": np.array(mode),
        }

        if mode == "bars":
            arrays["heights"] = np.stack([f.heights for f in frames])
            arrays["peaks"] = np.stack([f.peaks for f in frames])
            arrays["colors"] = np.stack([f.colors for f in frames])
            if width is not None and height is not None:
                for i, frame in enumerate(frames):
                    arrays[f"vertices_{i}"] = bar_geometry(frame, width, height).vertices
        else:
            arrays["positions"] = np.stack([f.positions for f in frames])
            arrays["amplitudes"] = np.stack([f.amplitudes for f in frames])
            arrays["colors"] = np.stack([f.colors for f in frames])
            arrays["rotation"] = np.array([f.rotation for f in frames])
            arrays["glow_intensity"] = np.array([f.center_glow.intensity for f in frames])
            arrays["glow_color"] = np.array([f.center_glow.color for f in frames])

        with open(output_path, "wb") as f:
            np.savez_compressed(f, **arrays)
        return output_path
