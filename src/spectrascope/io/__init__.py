"""Capture input and frame export."""

from spectrascope.io.capture import CapturedFrame, SnapshotCapture
from spectrascope.io.exporter import FrameExporter

__all__ = ["CapturedFrame", "SnapshotCapture", "FrameExporter"]
