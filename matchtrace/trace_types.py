"""Trace data types for step-by-step search replay (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from . import constants
from .errors import UnsupportedAlgorithmError


class Algorithm(str, Enum):
    """Closed set of search algorithms a trace can be generated for."""

    NAIVE = constants.ALGORITHM_NAIVE
    KMP = constants.ALGORITHM_KMP
    RABIN_KARP = constants.ALGORITHM_RABIN_KARP

    @classmethod
    def parse(cls, value: Algorithm | str) -> Algorithm:
        """Resolve a tag such as ``"kmp"`` to an Algorithm member.

        Raises ``UnsupportedAlgorithmError`` for anything unrecognised.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(a.value for a in cls)
            raise UnsupportedAlgorithmError(
                f"Unsupported algorithm: {value!r}. Supported: {supported}"
            ) from None


class StepOutcome(str, Enum):
    """What a single step concluded."""

    MATCH_FOUND = "MATCH_FOUND"
    MISMATCH = "MISMATCH"
    CHARACTER_MATCH = "CHARACTER_MATCH"
    MISMATCH_WITH_PREFIX_SHIFT = "MISMATCH_WITH_PREFIX_SHIFT"
    MISMATCH_AT_PATTERN_START = "MISMATCH_AT_PATTERN_START"
    HASH_MISMATCH_SKIPPED = "HASH_MISMATCH_SKIPPED"
    HASH_MATCH_CONFIRMED = "HASH_MATCH_CONFIRMED"
    HASH_MATCH_SPURIOUS = "HASH_MATCH_SPURIOUS"

    @property
    def is_match(self) -> bool:
        return self in (StepOutcome.MATCH_FOUND, StepOutcome.HASH_MATCH_CONFIRMED)


@dataclass(frozen=True)
class ComparisonRecord:
    """One symbol-vs-symbol comparison."""

    text_index: int
    pattern_index: int
    matched: bool


@dataclass(frozen=True)
class PrefixShift:
    """KMP re-synchronisation: pattern cursor moved from old to new offset."""

    old_offset: int
    new_offset: int


@dataclass(frozen=True)
class HashState:
    """Rabin-Karp hash snapshot for the window under test."""

    pattern_hash: int
    window_hash: int
    hashes_equal: bool
    spurious: bool = False


AlgorithmDetail = Union[PrefixShift, HashState, None]

# Text and pattern as stored in a Trace: a string, or a tuple of other symbols
Symbols = Union[str, tuple[Any, ...]]


@dataclass(frozen=True)
class Step:
    """A single step in a search trace.

    ``total_comparisons`` is the running count up to and including this
    step. For Rabin-Karp it also counts one unit per hash test, so it can
    exceed the number of ComparisonRecords seen so far.
    """

    step_index: int
    anchor_text_index: int
    comparisons: tuple[ComparisonRecord, ...]
    total_comparisons: int
    outcome: StepOutcome
    description: str
    detail: AlgorithmDetail = None


@dataclass(frozen=True)
class ComparisonHistoryEntry:
    step_index: int
    step_comparisons: int
    cumulative_comparisons: int


@dataclass(frozen=True)
class Trace:
    """Complete, immutable record of one algorithm run.

    Carries the inputs it was generated from and, for KMP, the prefix
    table, so a renderer can draw any step without re-running the search.
    """

    algorithm: Algorithm
    text: Symbols
    pattern: Symbols
    steps: tuple[Step, ...] = ()
    match_positions: tuple[int, ...] = ()
    comparison_history: tuple[ComparisonHistoryEntry, ...] = ()
    prefix_table: tuple[int, ...] = ()

    @property
    def total_comparisons(self) -> int:
        return self.steps[-1].total_comparisons if self.steps else 0
