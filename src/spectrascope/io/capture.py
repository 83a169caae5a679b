"""
Recorded analysis snapshots.

A capture is a sequence of per-frame magnitude (and optionally waveform)
snapshots plus the "producing sound" flag, stored as a NumPy .npz archive.
"""

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

import numpy as np

from spectrascope.errors import InvalidConfiguration


@dataclass
class CapturedFrame:
    """One frame of a capture; satisfies the pipeline's AnalysisSource."""

    magnitudes: Optional[np.ndarray]
    waveform: Optional[np.ndarray]
    is_producing_sound: bool = True

    def frequency_snapshot(self) -> Optional[np.ndarray]:
        return self.magnitudes

    def waveform_snapshot(self) -> Optional[np.ndarray]:
        return self.waveform


class SnapshotCapture:
    """
    Frame-aligned arrays of analysis snapshots.

    Args:
        magnitudes: (n_frames, n_bins) byte-range frequency magnitudes.
        waveforms: Optional (n_frames, n_samples) byte-range time-domain data.
        playing: Optional (n_frames,) bool flags, all True by default.
        fps: Frame rate the capture was taken at.
    """

    def __init__(
        self,
        magnitudes,
        waveforms=None,
        playing=None,
        fps: int = 60,
    ):
        self.magnitudes = np.atleast_2d(np.asarray(magnitudes))
        n_frames = self.magnitudes.shape[0]

        self.waveforms = None
        if waveforms is not None:
            self.waveforms = np.atleast_2d(np.asarray(waveforms))
            if self.waveforms.shape[0] != n_frames:
                raise InvalidConfiguration(
                    f"waveforms has {self.waveforms.shape[0]} frames, "
                    f"magnitudes has {n_frames}"
                )

        if playing is None:
            self.playing = np.ones(n_frames, dtype=bool)
        else:
            self.playing = np.asarray(playing, dtype=bool).ravel()
            if self.playing.size != n_frames:
                raise InvalidConfiguration(
                    f"playing has {self.playing.size} flags, magnitudes has {n_frames} frames"
                )

        if fps < 1:
            raise InvalidConfiguration(f"fps must be >= 1, got {fps}")
        self.fps = int(fps)

    def __len__(self) -> int:
        return self.magnitudes.shape[0]

    def __iter__(self) -> Iterator[CapturedFrame]:
        for i in range(len(self)):
            yield self.frame(i)

    def frame(self, index: int) -> CapturedFrame:
        waveform = self.waveforms[index] if self.waveforms is not None else None
        return CapturedFrame(
            magnitudes=self.magnitudes[index],
            waveform=waveform,
            is_producing_sound=bool(self.playing[index]),
        )

    @property
    def duration(self) -> float:
        return len(self) / self.fps

    def truncated(self, max_frames: int) -> "SnapshotCapture":
        """First ``max_frames`` frames as a new capture."""
        waveforms = self.waveforms[:max_frames] if self.waveforms is not None else None
        return SnapshotCapture(
            self.magnitudes[:max_frames],
            waveforms=waveforms,
            playing=self.playing[:max_frames],
            fps=self.fps,
        )

    def save(self, path: Union[str, Path]) -> Path:
        """Write the capture as a compressed .npz archive."""
        path = Path(path)
        arrays = {
            "magnitudes": self.magnitudes,
            "playing": self.playing,
            "fps": np.array(self.fps),
        }
        if self.waveforms is not None:
            arrays["waveforms"] = self.waveforms

        with open(path, "wb") as f:
            np.savez_compressed(f, **arrays)
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SnapshotCapture":
        """
        Read a capture written by save() or any .npz with a magnitudes array.

        Raises:
            InvalidConfiguration: If the file is not an .npz archive, cannot
                be read, or has no magnitudes array.
        """
        try:
            data = np.load(Path(path), allow_pickle=False)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            raise InvalidConfiguration(f"{path} is not a valid capture archive") from e

        if not hasattr(data, "files"):
            raise InvalidConfiguration(f"{path} holds a single array, not a capture archive")

        with data:
            if "magnitudes" not in data.files:
                raise InvalidConfiguration(f"{path} has no 'magnitudes' array")
            try:
                arrays = {name: data[name] for name in data.files}
            except (OSError, ValueError, zipfile.BadZipFile) as e:
                raise InvalidConfiguration(f"{path} is not a valid capture archive") from e

        return cls(
            arrays["magnitudes"],
            waveforms=arrays.get("waveforms"),
            playing=arrays.get("playing"),
            fps=int(arrays["fps"]) if "fps" in arrays else 60,
        )
