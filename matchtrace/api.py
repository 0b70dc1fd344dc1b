"""Composable API functions for trace generation and inspection.

Each function corresponds to a CLI workflow (--json, --prefix-table, plain
dump) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter

from .generators import get_generator
from .prefix_table import build_prefix_table
from .trace_types import Algorithm, HashState, PrefixShift, Step, Trace

logger = logging.getLogger(__name__)

__all__ = [
    "generate_trace",
    "count_comparisons",
    "build_prefix_table",
    "dump_trace",
    "dump_trace_json",
    "render_step",
    "describe_algorithm",
]

_TRACE_ADAPTER: TypeAdapter[Trace] = TypeAdapter(Trace)

_ALGORITHM_DESCRIPTIONS: dict[Algorithm, str] = {
    Algorithm.NAIVE: (
        "The Naive algorithm compares the pattern with the text at each "
        "position, shifting one character at a time.\n"
        "Time Complexity: O(m*n) where m is pattern length and n is text length."
    ),
    Algorithm.KMP: (
        "The KMP algorithm uses a prefix table to avoid unnecessary "
        "comparisons by remembering previously matched characters.\n"
        "Time Complexity: O(m+n) where m is pattern length and n is text length."
    ),
    Algorithm.RABIN_KARP: (
        "The Rabin-Karp algorithm uses a rolling hash function to quickly "
        "identify potential matches, only comparing characters when hashes match.\n"
        "Time Complexity: Average O(n+m), Worst case O(n*m) where m is "
        "pattern length and n is text length."
    ),
}


def generate_trace(
    text: Sequence[Any],
    pattern: Sequence[Any],
    algorithm: Algorithm | str = Algorithm.NAIVE,
) -> Trace:
    """Search *pattern* in *text* and record every step.

    Args:
        text: Sequence of symbols to search in.
        pattern: Sequence of symbols to search for.
        algorithm: ``Algorithm`` member or tag ("naive", "kmp", "rabin-karp").

    Returns:
        The immutable Trace. A pattern longer than the text yields a
        Trace with no steps.

    Raises:
        InvalidInputError: if text or pattern is empty.
        UnsupportedAlgorithmError: if *algorithm* is not recognised.
    """
    return get_generator(algorithm).generate(text, pattern)


def count_comparisons(
    text: Sequence[Any],
    pattern: Sequence[Any],
    algorithm: Algorithm | str = Algorithm.NAIVE,
) -> int:
    """Return only the final comparison count of a search.

    Steps are streamed and discarded; the result equals
    ``generate_trace(text, pattern, algorithm).total_comparisons``.
    """
    return get_generator(algorithm).count_comparisons(text, pattern)


def describe_algorithm(algorithm: Algorithm | str) -> str:
    """Return the explanatory blurb for *algorithm*."""
    return _ALGORITHM_DESCRIPTIONS[Algorithm.parse(algorithm)]


def _symbols_str(symbols: Sequence[Any]) -> str:
    if isinstance(symbols, str):
        return symbols
    return " ".join(str(s) for s in symbols)


def _detail_str(detail: PrefixShift | HashState | None) -> str:
    if isinstance(detail, PrefixShift):
        return f"j: {detail.old_offset} -> {detail.new_offset}"
    if isinstance(detail, HashState):
        verdict = "equal" if detail.hashes_equal else "different"
        suffix = " (spurious)" if detail.spurious else ""
        return (
            f"pattern hash={detail.pattern_hash} window hash={detail.window_hash} "
            f"{verdict}{suffix}"
        )
    return ""


def render_step(trace: Trace, step: Step) -> str:
    """Render one step as a few lines of text with the pattern aligned under the text.

    The marker row shows ``=`` for matched comparisons, ``x`` for
    mismatches and ``^`` at the alignment anchor when it was not compared.
    Only meaningful for string inputs; other symbol types are joined with
    spaces and the marker row is omitted.
    """
    lines = [
        f"[{step.step_index}] {step.outcome.value}  anchor={step.anchor_text_index}"
        f"  total comparisons={step.total_comparisons}",
        f"    {step.description}",
    ]
    detail = _detail_str(step.detail)
    if detail:
        lines.append(f"    {detail}")

    if isinstance(trace.text, str) and isinstance(trace.pattern, str):
        markers = [" "] * len(trace.text)
        if 0 <= step.anchor_text_index < len(markers):
            markers[step.anchor_text_index] = "^"
        for c in step.comparisons:
            markers[c.text_index] = "=" if c.matched else "x"
        lines.append(f"    text:    {trace.text}")
        lines.append(f"             {''.join(markers).rstrip()}")
        lines.append(f"    pattern: {' ' * step.anchor_text_index}{trace.pattern}")
    return "\n".join(lines)


def dump_trace(trace: Trace) -> str:
    """Render a whole trace, header and summary included."""
    lines = [
        f"═══ {trace.algorithm.value} ═══",
        f"  text:    {_symbols_str(trace.text)}",
        f"  pattern: {_symbols_str(trace.pattern)}",
    ]
    if trace.prefix_table:
        lines.append(f"  prefix table: {list(trace.prefix_table)}")
    lines.append("")
    for step in trace.steps:
        lines.append(render_step(trace, step))
    lines.append("")
    lines.append(
        f"{len(trace.steps)} steps, {trace.total_comparisons} comparisons, "
        f"{len(trace.match_positions)} matches"
    )
    if trace.match_positions:
        lines.append(
            "Match positions: " + ", ".join(str(p) for p in trace.match_positions)
        )
    return "\n".join(lines)


def dump_trace_json(trace: Trace, indent: int | None = 2) -> str:
    """Serialise *trace* to JSON."""
    return _TRACE_ADAPTER.dump_json(trace, indent=indent).decode("utf-8")
