"""Trace generators, one per search algorithm, behind a common interface.

Each generator yields Steps lazily from ``iter_steps``; ``generate``
materialises them into an immutable Trace, ``count_comparisons`` only
keeps the running total.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Any

from .errors import InvalidInputError
from .hashing import rolling_hashes, window_hash
from .prefix_table import build_prefix_table
from .trace_types import (
    Algorithm,
    ComparisonHistoryEntry,
    ComparisonRecord,
    HashState,
    PrefixShift,
    Step,
    StepOutcome,
    Trace,
)

logger = logging.getLogger(__name__)


def _freeze(seq: Sequence[Any]) -> Sequence[Any]:
    """Private immutable copy of an input sequence (str is already immutable)."""
    if isinstance(seq, str):
        return seq
    return tuple(seq)


def validate_inputs(text: Sequence[Any] | None, pattern: Sequence[Any] | None) -> None:
    """Reject inputs the generators cannot search.

    A pattern longer than the text is *not* an error: it yields an empty trace.
    """
    if text is None or len(text) == 0:
        raise InvalidInputError("Text must be a non-empty sequence")
    if pattern is None or len(pattern) == 0:
        raise InvalidInputError("Pattern must be a non-empty sequence")


def _scan_window(
    text: Sequence[Any], pattern: Sequence[Any], offset: int
) -> tuple[tuple[ComparisonRecord, ...], bool]:
    """Compare *pattern* against the text window at *offset*, left to right.

    Stops at the first mismatch. Returns the comparisons performed and
    whether every symbol matched.
    """
    records: list[ComparisonRecord] = []
    for j in range(len(pattern)):
        matched = text[offset + j] == pattern[j]
        records.append(
            ComparisonRecord(text_index=offset + j, pattern_index=j, matched=matched)
        )
        if not matched:
            return tuple(records), False
    return tuple(records), True


class TraceGenerator(ABC):
    """Strategy for producing the step sequence of one search algorithm."""

    algorithm: Algorithm

    def prefix_table(self, pattern: Sequence[Any]) -> tuple[int, ...]:
        """Auxiliary per-pattern table; only KMP needs one."""
        return ()

    @abstractmethod
    def iter_steps(
        self,
        text: Sequence[Any],
        pattern: Sequence[Any],
        prefix_table: tuple[int, ...],
    ) -> Iterator[Step]:
        """Yield the steps of a search of *pattern* in *text*, in order."""
        ...

    def generate(self, text: Sequence[Any], pattern: Sequence[Any]) -> Trace:
        """Run the search and return the full, immutable Trace."""
        validate_inputs(text, pattern)
        text = _freeze(text)
        pattern = _freeze(pattern)
        table = self.prefix_table(pattern)

        steps = tuple(self.iter_steps(text, pattern, table))
        match_positions = tuple(
            s.anchor_text_index for s in steps if s.outcome.is_match
        )
        history: list[ComparisonHistoryEntry] = []
        previous_total = 0
        for s in steps:
            history.append(
                ComparisonHistoryEntry(
                    step_index=s.step_index,
                    step_comparisons=s.total_comparisons - previous_total,
                    cumulative_comparisons=s.total_comparisons,
                )
            )
            previous_total = s.total_comparisons

        logger.info(
            "%s: %d steps, %d comparisons, %d matches (text=%d, pattern=%d)",
            self.algorithm.value,
            len(steps),
            previous_total,
            len(match_positions),
            len(text),
            len(pattern),
        )
        return Trace(
            algorithm=self.algorithm,
            text=text,
            pattern=pattern,
            steps=steps,
            match_positions=match_positions,
            comparison_history=tuple(history),
            prefix_table=table,
        )

    def count_comparisons(self, text: Sequence[Any], pattern: Sequence[Any]) -> int:
        """Final comparison count, without keeping the steps."""
        validate_inputs(text, pattern)
        text = _freeze(text)
        pattern = _freeze(pattern)
        total = 0
        for step in self.iter_steps(text, pattern, self.prefix_table(pattern)):
            total = step.total_comparisons
        return total


class NaiveTraceGenerator(TraceGenerator):
    """Tries every offset, comparing left to right until the first mismatch."""

    algorithm = Algorithm.NAIVE

    def iter_steps(self, text, pattern, prefix_table):
        total = 0
        for i in range(len(text) - len(pattern) + 1):
            comparisons, matched = _scan_window(text, pattern, i)
            total += len(comparisons)
            if matched:
                outcome = StepOutcome.MATCH_FOUND
                description = f"Match found at position {i}!"
            else:
                outcome = StepOutcome.MISMATCH
                description = (
                    f"Mismatch at position {i + len(comparisons) - 1}, "
                    "shifting pattern."
                )
            yield Step(
                step_index=i,
                anchor_text_index=i,
                comparisons=comparisons,
                total_comparisons=total,
                outcome=outcome,
                description=description,
            )


class KMPTraceGenerator(TraceGenerator):
    """Knuth-Morris-Pratt: one comparison per step, never moves backwards in the text."""

    algorithm = Algorithm.KMP

    def prefix_table(self, pattern):
        return build_prefix_table(pattern)

    def iter_steps(self, text, pattern, prefix_table):
        n, m = len(text), len(pattern)
        if m > n:
            return
        i = 0  # text cursor
        j = 0  # pattern cursor
        total = 0
        index = 0

        while i < n:
            matched = text[i] == pattern[j]
            record = ComparisonRecord(text_index=i, pattern_index=j, matched=matched)
            total += 1
            detail = None

            if matched:
                i += 1
                j += 1

            if j == m:
                anchor = i - j
                outcome = StepOutcome.MATCH_FOUND
                description = f"Match found at position {anchor}!"
                j = prefix_table[j - 1]
            elif matched:
                anchor = i - j
                outcome = StepOutcome.CHARACTER_MATCH
                description = "Characters match, advancing both pointers."
            elif j != 0:
                new_j = prefix_table[j - 1]
                detail = PrefixShift(old_offset=j, new_offset=new_j)
                j = new_j
                anchor = i - j
                outcome = StepOutcome.MISMATCH_WITH_PREFIX_SHIFT
                description = "Mismatch, using prefix table to shift pattern."
            else:
                anchor = i
                outcome = StepOutcome.MISMATCH_AT_PATTERN_START
                description = (
                    "Mismatch at beginning of pattern, moving to next position."
                )
                i += 1

            yield Step(
                step_index=index,
                anchor_text_index=anchor,
                comparisons=(record,),
                total_comparisons=total,
                outcome=outcome,
                description=description,
                detail=detail,
            )
            index += 1


class RabinKarpTraceGenerator(TraceGenerator):
    """Rabin-Karp: rolling-hash gate, symbol comparison only on hash equality.

    The hash test itself is counted as one comparison per window.
    """

    algorithm = Algorithm.RABIN_KARP

    def iter_steps(self, text, pattern, prefix_table):
        m = len(pattern)
        pattern_hash = window_hash(pattern, 0, m)
        total = 0

        for i, text_hash in enumerate(rolling_hashes(text, m)):
            total += 1
            if text_hash != pattern_hash:
                yield Step(
                    step_index=i,
                    anchor_text_index=i,
                    comparisons=(),
                    total_comparisons=total,
                    outcome=StepOutcome.HASH_MISMATCH_SKIPPED,
                    description="Hash mismatch, skipping detailed comparison.",
                    detail=HashState(
                        pattern_hash=pattern_hash,
                        window_hash=text_hash,
                        hashes_equal=False,
                    ),
                )
                continue

            comparisons, matched = _scan_window(text, pattern, i)
            total += len(comparisons)
            if matched:
                outcome = StepOutcome.HASH_MATCH_CONFIRMED
                description = f"Hash match! Confirmed match at position {i}."
            else:
                outcome = StepOutcome.HASH_MATCH_SPURIOUS
                description = "Hash match but actual string mismatch (spurious hit)."
                logger.debug("Spurious hash hit at offset %d (hash=%d)", i, text_hash)
            yield Step(
                step_index=i,
                anchor_text_index=i,
                comparisons=comparisons,
                total_comparisons=total,
                outcome=outcome,
                description=description,
                detail=HashState(
                    pattern_hash=pattern_hash,
                    window_hash=text_hash,
                    hashes_equal=True,
                    spurious=not matched,
                ),
            )


_GENERATORS: dict[Algorithm, type[TraceGenerator]] = {
    Algorithm.NAIVE: NaiveTraceGenerator,
    Algorithm.KMP: KMPTraceGenerator,
    Algorithm.RABIN_KARP: RabinKarpTraceGenerator,
}


def get_generator(algorithm: Algorithm | str) -> TraceGenerator:
    """Factory for trace generators.

    Raises ``UnsupportedAlgorithmError`` if *algorithm* is not a known tag.
    """
    return _GENERATORS[Algorithm.parse(algorithm)]()
