"""VisualizerSession: inputs, algorithm choice and playback bundled together.

Mirrors an interactive visualiser: editing the text, pattern or
algorithm throws away whatever trace is loaded, and starting generates a
fresh trace and plays it.
"""

from __future__ import annotations

import logging

from .api import generate_trace
from .errors import PlaybackError
from .playback_types import PlaybackConfig, PlaybackState
from .sequencer import StepListener, StepSequencer
from .ticks import TickSource
from .trace_types import Algorithm, Step, Trace

logger = logging.getLogger(__name__)


class VisualizerSession:
    def __init__(
        self,
        text: str = "",
        pattern: str = "",
        algorithm: Algorithm | str = Algorithm.NAIVE,
        config: PlaybackConfig | None = None,
        listener: StepListener | None = None,
    ):
        self._text = text
        self._pattern = pattern
        self._algorithm = Algorithm.parse(algorithm)
        self._config = config or PlaybackConfig()
        self._sequencer = StepSequencer(config=self._config, listener=listener)

    @property
    def text(self) -> str:
        return self._text

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def config(self) -> PlaybackConfig:
        return self._config

    @property
    def sequencer(self) -> StepSequencer:
        return self._sequencer

    @property
    def trace(self) -> Trace | None:
        return self._sequencer.trace

    @property
    def is_running(self) -> bool:
        return self._sequencer.state == PlaybackState.PLAYING

    def current_step(self) -> Step | None:
        return self._sequencer.current_step()

    def set_inputs(
        self,
        text: str | None = None,
        pattern: str | None = None,
        algorithm: Algorithm | str | None = None,
    ) -> None:
        """Change any of text / pattern / algorithm; a real change resets playback."""
        new_text = self._text if text is None else text
        new_pattern = self._pattern if pattern is None else pattern
        new_algorithm = (
            self._algorithm if algorithm is None else Algorithm.parse(algorithm)
        )
        changed = (new_text, new_pattern, new_algorithm) != (
            self._text,
            self._pattern,
            self._algorithm,
        )
        self._text, self._pattern, self._algorithm = new_text, new_pattern, new_algorithm
        if changed:
            logger.debug("Inputs changed; discarding current trace")
            self._sequencer.reset()

    def set_speed(self, speed_ms: int) -> None:
        """Change playback speed. Rejected while playing."""
        if self.is_running:
            raise PlaybackError("Cannot change speed while playback is running")
        config = PlaybackConfig(speed_ms=speed_ms)
        self._sequencer.configure(config)
        self._config = config

    def start(self, tick_source: TickSource | None = None) -> Trace:
        """Generate a fresh trace for the current inputs and start playing it.

        Raises:
            PlaybackError: if text or pattern is empty, or the trace has
                no steps (pattern longer than text).
        """
        if not self._text or not self._pattern:
            raise PlaybackError("Enter both a text and a pattern before starting")
        trace = generate_trace(self._text, self._pattern, self._algorithm)
        self._sequencer.start(trace, tick_source)
        return trace

    def pause(self) -> None:
        self._sequencer.pause()

    def reset(self) -> None:
        self._sequencer.reset()
