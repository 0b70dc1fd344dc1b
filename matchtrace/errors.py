"""Error hierarchy for trace generation and playback."""

from __future__ import annotations


class MatchTraceError(Exception):
    """Base class for every error raised by matchtrace."""


class InvalidInputError(MatchTraceError, ValueError):
    """Text or pattern cannot be searched (e.g. it is empty)."""


class UnsupportedAlgorithmError(MatchTraceError, ValueError):
    """The algorithm tag does not name a known search algorithm."""


class PlaybackError(MatchTraceError):
    """A playback command was issued in a state that does not permit it."""
