"""
Frame pipeline.

Owns the bars and circular generators and runs exactly one pass per
rendered frame. Construct one instance and hand it to whatever drives the
render loop.
"""

from typing import Any, Callable, Iterator, Optional, Protocol, Union

from spectrascope.config import VisualizationConfig
from spectrascope.errors import InvalidConfiguration
from spectrascope.layout.bars import BarsLayoutGenerator
from spectrascope.layout.circular import CircularLayoutGenerator
from spectrascope.layout.frames import BarFrame, CircularFrame

MODES = ("bars", "circular")

Frame = Union[BarFrame, CircularFrame]


class AnalysisSource(Protocol):
    """What the pipeline needs from the audio analysis side, per frame."""

    is_producing_sound: bool

    def frequency_snapshot(self) -> Optional[Any]: ...
    def waveform_snapshot(self) -> Optional[Any]: ...


class VisualizationPipeline:
    """
    Analysis snapshot -> frame descriptor.

    The bars and circular paths keep independent smoothing state.
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        self._config = config or VisualizationConfig()
        self.bars = BarsLayoutGenerator(self._config)
        self.circular = CircularLayoutGenerator(self._config)

    @property
    def config(self) -> VisualizationConfig:
        return self._config

    def replace_config(self, config: VisualizationConfig):
        """Swap in a whole new config; state is rebuilt only on count change."""
        self._config = config
        self.bars.configure(config)
        self.circular.configure(config)

    def update_config(self, **changes: Any) -> VisualizationConfig:
        """Merge ``changes`` over the current config and apply it."""
        self.replace_config(self._config.merged(**changes))
        return self._config

    def reset(self):
        """Cold start: zero smoothing, peaks and rotation."""
        self.bars.reset()
        self.circular.reset()

    def render_bars(self, snapshot, is_producing_sound: bool = True) -> BarFrame:
        if not is_producing_sound:
            snapshot = None
        return self.bars.generate(snapshot)

    def render_circular(
        self,
        waveform,
        width: float,
        height: float,
        is_producing_sound: bool = True,
    ) -> CircularFrame:
        if not is_producing_sound:
            waveform = None
        return self.circular.generate(waveform, width, height)

    def render(
        self,
        source: AnalysisSource,
        mode: str = "bars",
        width: float = 800,
        height: float = 600,
    ) -> Frame:
        """
        Run one frame pass against an analysis source.

        Args:
            source: Supplies snapshots and the "producing sound" flag.
            mode: "bars" or "circular".
            width: Canvas width (circular mode).
            height: Canvas height (circular mode).
        """
        if mode not in MODES:
            raise InvalidConfiguration(f"mode must be one of {MODES}, got {mode!r}")

        playing = bool(source.is_producing_sound)
        if mode == "circular":
            waveform = source.waveform_snapshot() if playing else None
            return self.render_circular(waveform, width, height, playing)

        snapshot = source.frequency_snapshot() if playing else None
        return self.render_bars(snapshot, playing)

    def render_capture(
        self,
        capture,
        mode: str = "bars",
        width: float = 800,
        height: float = 600,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> Iterator[Frame]:
        """
        Render every frame of a recorded capture, in order.

        Args:
            capture: Iterable of AnalysisSource frames with a length.
            mode: "bars" or "circular".
            width: Canvas width.
            height: Canvas height.
            progress_callback: Called as (frames_done, total) after each frame.

        Yields:
            One frame descriptor per captured frame.
        """
        total = len(capture)
        for i, source in enumerate(capture):
            yield self.render(source, mode=mode, width=width, height=height)
            if progress_callback:
                progress_callback(i + 1, total)
