"""
CLI entry point: render a recorded snapshot capture to frame descriptors.

Usage:
    spectrascope <capture.npz> [options]
    python -m spectrascope <capture.npz> [options]
"""

import argparse
import sys
import time
from pathlib import Path

from spectrascope.config import PRESETS, from_preset
from spectrascope.core.colors import COLOR_SCHEMES
from spectrascope.errors import SpectrascopeError
from spectrascope.io.capture import SnapshotCapture
from spectrascope.io.exporter import FrameExporter
from spectrascope.pipeline import MODES, VisualizationPipeline


def _progress_printer(label: str, width: int = 30):
    """Return a progress callback that reports rendered snapshots to stdout."""
    t0 = time.time()

    def report(current: int, total: int):
        frac = current / max(total, 1)
        if sys.stdout.isatty():
            filled = int(width * frac)
            rate = current / max(time.time() - t0, 1e-6)
            bar = "#" * filled + "." * (width - filled)
            sys.stdout.write(f"\r  {label} [{bar}] {current}/{total} ({rate:.0f} frames/s)")
            sys.stdout.flush()
            if current >= total:
                sys.stdout.write("\n")
        elif current % max(1, total // 10) == 0 or current >= total:
            print(f"  {label}: {current}/{total} snapshots ({frac * 100:.0f}%)", flush=True)

    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spectrascope",
        description="Render recorded audio analysis snapshots to visualizer frames",
    )

    parser.add_argument("capture", type=Path, help="Input capture (.npz with a 'magnitudes' array)")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output path (default: <capture>_<mode>.json or .npz)",
    )
    parser.add_argument("-m", "--mode", type=str, default="bars", choices=MODES)

    # Look
    parser.add_argument(
        "-p", "--preset", type=str, default="wmp",
        choices=sorted(PRESETS),
        help="Starting configuration (default: wmp)",
    )
    parser.add_argument("--bars", type=int, default=None, help="Number of bars (overrides preset)")
    parser.add_argument("--points", type=int, default=None, help="Ring resolution in points")
    parser.add_argument("--scheme", type=str, default=None, choices=COLOR_SCHEMES)
    parser.add_argument("--no-peaks", action="store_true", help="Hide peak markers")
    parser.add_argument("--peak-decay", type=float, default=None, help="Peak decay per frame (0-1)")
    parser.add_argument("--smoothing", type=float, default=None, help="Smoothing step size (0-1]")
    parser.add_argument("--amplification", type=float, default=None, help="Height multiplier")

    # Canvas
    parser.add_argument("--width", type=float, default=800, help="Canvas width (default: 800)")
    parser.add_argument("--height", type=float, default=600, help="Canvas height (default: 600)")

    # Output
    parser.add_argument("-f", "--format", type=str, default="json", choices=["json", "numpy"])
    parser.add_argument("--max-frames", type=int, default=None, help="Limit output to N frames")

    return parser


def _config_overrides(args: argparse.Namespace) -> dict:
    overrides = {
        "bar_count": args.bars,
        "point_count": args.points,
        "color_scheme": args.scheme,
        "peak_decay": args.peak_decay,
        "smoothing": args.smoothing,
        "amplification": args.amplification,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.no_peaks:
        overrides["peak_hold"] = False
    return overrides


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_frames is not None and args.max_frames < 1:
        parser.error(f"--max-frames must be >= 1, got {args.max_frames}")

    if not args.capture.exists():
        print(f"Error: Capture file not found: {args.capture}", file=sys.stderr)
        sys.exit(1)

    try:
        config = from_preset(args.preset, **_config_overrides(args))
        capture = SnapshotCapture.load(args.capture)
    except SpectrascopeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.max_frames is not None and args.max_frames < len(capture):
        capture = capture.truncated(args.max_frames)
        print(f"  Limiting to {args.max_frames} frames")

    output = args.output
    if output is None:
        suffix = ".json" if args.format == "json" else ".npz"
        output = args.capture.with_name(f"{args.capture.stem}_{args.mode}{suffix}")

    print(f"Rendering {len(capture)} frames ({args.mode}) from {args.capture}")
    print(f"  Bars: {config.bar_count}, Scheme: {config.color_scheme}, FPS: {capture.fps}")
    t0 = time.time()

    pipeline = VisualizationPipeline(config)
    exporter = FrameExporter()
    try:
        frames = list(
            pipeline.render_capture(
                capture,
                mode=args.mode,
                width=args.width,
                height=args.height,
                progress_callback=_progress_printer(args.mode),
            )
        )
        if args.format == "numpy":
            exporter.export_numpy(
                frames, output, fps=capture.fps, width=args.width, height=args.height
            )
        else:
            exporter.export_json(frames, output, config=config, fps=capture.fps)
    except SpectrascopeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    elapsed = time.time() - t0
    print(f"\nDone! {len(frames)} frames in {elapsed:.2f}s")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()
