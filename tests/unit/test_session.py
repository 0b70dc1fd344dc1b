"""Tests for VisualizerSession: input changes discard playback."""

import pytest

from matchtrace import constants
from matchtrace.errors import PlaybackError, UnsupportedAlgorithmError
from matchtrace.playback_types import PlaybackState
from matchtrace.session import VisualizerSession
from matchtrace.ticks import ManualTickSource
from matchtrace.trace_types import Algorithm


class TestStart:
    def test_generates_and_plays_trace(self):
        session = VisualizerSession("ABABDABACDABABCABAB", "ABABCABAB", "kmp")
        trace = session.start(ManualTickSource())

        assert trace.match_positions == (10,)
        assert session.trace is trace
        assert session.is_running
        assert session.current_step() == trace.steps[0]

    @pytest.mark.parametrize("text, pattern", [("", "A"), ("A", ""), ("", "")])
    def test_empty_inputs_are_rejected(self, text, pattern):
        session = VisualizerSession(text, pattern)
        with pytest.raises(PlaybackError):
            session.start(ManualTickSource())
        assert session.sequencer.state == PlaybackState.IDLE

    def test_pattern_longer_than_text_is_rejected(self):
        session = VisualizerSession("AB", "ABC")
        with pytest.raises(PlaybackError):
            session.start(ManualTickSource())
        assert session.trace is None

    def test_ticks_advance_session_step(self):
        session = VisualizerSession("AAAAA", "AA")
        source = ManualTickSource()
        trace = session.start(source)
        source.tick()
        assert session.current_step() == trace.steps[1]


class TestSetInputs:
    def test_changing_text_resets_playback(self):
        session = VisualizerSession("AAAAA", "AA")
        session.start(ManualTickSource())
        session.set_inputs(text="AAAA")
        assert session.sequencer.state == PlaybackState.IDLE
        assert session.trace is None
        assert session.text == "AAAA"

    def test_changing_algorithm_resets_playback(self):
        session = VisualizerSession("AAAAA", "AA")
        session.start(ManualTickSource())
        session.set_inputs(algorithm="rabin-karp")
        assert session.algorithm == Algorithm.RABIN_KARP
        assert session.trace is None

    def test_unchanged_inputs_keep_playback(self):
        session = VisualizerSession("AAAAA", "AA")
        session.start(ManualTickSource())
        session.set_inputs(text="AAAAA", pattern="AA")
        assert session.is_running

    def test_unknown_algorithm(self):
        session = VisualizerSession("AAAAA", "AA")
        with pytest.raises(UnsupportedAlgorithmError):
            session.set_inputs(algorithm="z-algorithm")


class TestSpeed:
    def test_set_speed_when_idle(self):
        session = VisualizerSession("AAAAA", "AA")
        session.set_speed(1000)
        assert session.config.speed_ms == 1000
        assert session.sequencer.config.speed_ms == 1000

    def test_set_speed_while_running_is_rejected(self):
        session = VisualizerSession("AAAAA", "AA")
        session.start(ManualTickSource())
        with pytest.raises(PlaybackError):
            session.set_speed(1000)

    def test_pause_then_reset(self):
        session = VisualizerSession("AAAAA", "AA")
        session.start(ManualTickSource())
        session.pause()
        assert session.sequencer.state == PlaybackState.READY
        session.reset()
        assert session.sequencer.state == PlaybackState.IDLE


class TestSessionConfig:
    def test_default_config_is_shared_with_sequencer(self):
        session = VisualizerSession("ABAB", "AB")
        assert session.config.speed_ms == constants.DEFAULT_SPEED_MS
        assert session.sequencer.config is session.config
