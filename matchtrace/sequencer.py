"""StepSequencer — timed, cancellable replay of a precomputed Trace.

State machine::

    IDLE --load/start(trace)--> READY --start--> PLAYING --last step--> FINISHED
      ^                           ^                 |
      |                           +-----pause-------+
      +------------------------- reset (from any state)

The sequencer owns only a cursor into a Trace it references. Every
mutation happens under one lock, and each start() hands the tick source
a callback tagged with a generation number: once playback is paused,
cancelled or reset, ticks from an earlier generation are ignored even if
they were already in flight.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable

from .errors import PlaybackError
from .playback_types import PlaybackConfig, PlaybackState
from .ticks import IntervalTickSource, TickSource
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)

StepListener = Callable[[Step], None]


class StepSequencer:
    """Replays one Trace at a time, one step per tick."""

    def __init__(
        self,
        config: PlaybackConfig | None = None,
        listener: StepListener | None = None,
    ):
        self._config = config or PlaybackConfig()
        self._listener = listener
        self._lock = threading.Lock()
        self._trace: Trace | None = None
        self._cursor = -1
        self._state = PlaybackState.IDLE
        self._tick_source: TickSource | None = None
        self._retired: list[TickSource] = []
        self._generation = 0

    # ── read side ────────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def cursor(self) -> int:
        """Index of the step in view; -1 when nothing is loaded."""
        return self._cursor

    @property
    def trace(self) -> Trace | None:
        return self._trace

    @property
    def config(self) -> PlaybackConfig:
        return self._config

    def current_step(self) -> Step | None:
        with self._lock:
            return self._current_step_locked()

    def _current_step_locked(self) -> Step | None:
        if self._trace is None or not 0 <= self._cursor < len(self._trace.steps):
            return None
        return self._trace.steps[self._cursor]

    # ── commands ─────────────────────────────────────────────────

    def configure(self, config: PlaybackConfig) -> None:
        """Swap playback settings; takes effect on the next start()."""
        with self._lock:
            if self._state == PlaybackState.PLAYING:
                raise PlaybackError("Cannot reconfigure while playing")
            self._config = config

    def load(self, trace: Trace) -> None:
        """Replace the current trace and rewind to its first step (READY)."""
        with self._lock:
            self._load_locked(trace)
            retired = self._take_retired_locked()
        _join_all(retired)

    def _load_locked(self, trace: Trace) -> None:
        self._cancel_locked()
        self._trace = trace
        self._cursor = 0 if trace.steps else -1
        self._state = PlaybackState.READY
        logger.debug(
            "Loaded %s trace with %d steps", trace.algorithm.value, len(trace.steps)
        )

    def start(
        self, trace: Trace | None = None, tick_source: TickSource | None = None
    ) -> None:
        """Begin (or resume) playback.

        Args:
            trace: Trace to load first; None keeps the current one.
            tick_source: Clock driving the cursor. Defaults to an
                IntervalTickSource at the configured speed.

        Raises:
            PlaybackError: if there is nothing playable or playback is
                already running. The sequencer is left untouched.
        """
        with self._lock:
            candidate = trace if trace is not None else self._trace
            if candidate is None:
                raise PlaybackError("No trace loaded")
            if len(candidate.text) == 0 or len(candidate.pattern) == 0:
                raise PlaybackError("Text and pattern must both be non-empty")
            if not candidate.steps:
                raise PlaybackError("Trace has no steps to play")
            if trace is None and self._state == PlaybackState.PLAYING:
                raise PlaybackError("Playback is already running")

            if trace is not None:
                self._load_locked(trace)
            elif self._state == PlaybackState.FINISHED:
                self._cursor = 0

            last = len(candidate.steps) - 1
            if self._cursor >= last:
                self._cursor = last
                self._state = PlaybackState.FINISHED
            else:
                self._state = PlaybackState.PLAYING
                self._generation += 1
                source = tick_source or IntervalTickSource(self._config.speed_ms)
                self._tick_source = source
                source.start(functools.partial(self._on_tick, self._generation))
            logger.info(
                "Playback %s at step %d/%d",
                self._state.value,
                self._cursor + 1,
                len(candidate.steps),
            )
            step = self._current_step_locked()
            retired = self._take_retired_locked()
        _join_all(retired)
        self._notify(step)

    def pause(self) -> None:
        """Stop advancing but keep the trace and cursor (PLAYING -> READY)."""
        self.cancel()

    def cancel(self) -> None:
        """Stop outstanding ticks and wait for the stopped clock to wind down.

        Idempotent.
        """
        with self._lock:
            self._cancel_locked()
            retired = self._take_retired_locked()
        _join_all(retired)

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._tick_source is not None:
            self._tick_source.stop()
            self._retired.append(self._tick_source)
            self._tick_source = None
        if self._state == PlaybackState.PLAYING:
            self._state = PlaybackState.READY

    def _take_retired_locked(self) -> list[TickSource]:
        # Joined only after the lock is released: a ticker blocked on the
        # lock inside _on_tick must be able to finish its last callback.
        retired, self._retired = self._retired, []
        return retired

    def reset(self) -> None:
        """Discard the trace and cursor and return to IDLE."""
        with self._lock:
            self._cancel_locked()
            self._trace = None
            self._cursor = -1
            self._state = PlaybackState.IDLE
            retired = self._take_retired_locked()
        _join_all(retired)

    def seek(self, index: int) -> Step:
        """Move the cursor to *index* while not playing."""
        with self._lock:
            if self._trace is None or not self._trace.steps:
                raise PlaybackError("No steps to seek in")
            if self._state == PlaybackState.PLAYING:
                raise PlaybackError("Cannot seek while playing; pause first")
            if not 0 <= index < len(self._trace.steps):
                raise PlaybackError(
                    f"Step index {index} out of range [0, {len(self._trace.steps)})"
                )
            self._cursor = index
            self._state = PlaybackState.READY
            return self._trace.steps[index]

    # ── tick handling ────────────────────────────────────────────

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state != PlaybackState.PLAYING:
                return
            self._cursor += 1
            if self._cursor >= len(self._trace.steps) - 1:
                self._state = PlaybackState.FINISHED
                self._cancel_locked()
                logger.info("Playback finished after %d steps", self._cursor + 1)
            step = self._current_step_locked()
            retired = self._take_retired_locked()
        _join_all(retired)
        self._notify(step)

    def _notify(self, step: Step | None) -> None:
        if self._listener is not None and step is not None:
            self._listener(step)


def _join_all(sources: list[TickSource]) -> None:
    for source in sources:
        source.join()
