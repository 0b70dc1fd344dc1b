"""Command-line front end: print, export or replay a search trace."""

from __future__ import annotations

import argparse
import logging
import sys
import threading

from . import constants
from .api import (
    build_prefix_table,
    describe_algorithm,
    dump_trace,
    dump_trace_json,
    generate_trace,
    render_step,
)
from .errors import MatchTraceError
from .playback_types import PlaybackConfig
from .sampler import sample_performance
from .sequencer import StepSequencer
from .trace_types import Algorithm, Step, Trace


def _play(trace: Trace, config: PlaybackConfig) -> None:
    """Animate *trace* on the terminal at the configured speed."""
    done = threading.Event()
    last = len(trace.steps) - 1

    def show(step: Step) -> None:
        print(render_step(trace, step))
        print()
        if step.step_index == last:
            done.set()

    sequencer = StepSequencer(config=config, listener=show)
    sequencer.start(trace)
    try:
        done.wait()
    except KeyboardInterrupt:
        print("Interrupted.")
    finally:
        sequencer.cancel()


def _print_samples(pattern_length: int, seed: int) -> None:
    samples = sample_performance(pattern_length=pattern_length, seed=seed)
    algorithms = list(Algorithm)
    header = f"  {'text length':>12}" + "".join(f" {a.value:>12}" for a in algorithms)
    print("═══ Comparison counts ═══")
    print(header)
    for sample in samples:
        row = f"  {sample.text_length:>12}" + "".join(
            f" {sample.counts[a]:>12}" for a in algorithms
        )
        print(row)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Step-by-step string matching (Naive, KMP, Rabin-Karp)"
    )
    parser.add_argument("text", nargs="?", help="Text to search in")
    parser.add_argument("pattern", nargs="?", help="Pattern to search for")
    parser.add_argument(
        "--algorithm",
        "-a",
        default=constants.ALGORITHM_NAIVE,
        choices=[a.value for a in Algorithm],
        help="Search algorithm (default: naive)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the trace as JSON"
    )
    parser.add_argument(
        "--prefix-table",
        action="store_true",
        help="Only print the KMP prefix table of the pattern",
    )
    parser.add_argument(
        "--play", action="store_true", help="Replay the trace one step per tick"
    )
    parser.add_argument(
        "--speed",
        "-s",
        type=int,
        default=constants.DEFAULT_SPEED_MS,
        help=f"Milliseconds per step when playing (default: {constants.DEFAULT_SPEED_MS})",
    )
    parser.add_argument(
        "--explain", action="store_true", help="Print how the algorithm works"
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Compare comparison counts of all algorithms on random inputs",
    )
    parser.add_argument(
        "--seed", type=int, default=0, help="Random seed for --sample (default: 0)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable info logging"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    text, pattern = args.text, args.pattern
    if text is None and pattern is None:
        text, pattern = constants.DEMO_TEXT, constants.DEMO_PATTERN
        print(f"No input provided. Using built-in demo: {text!r} / {pattern!r}\n")
    elif pattern is None:
        parser.error("a pattern is required when a text is given")

    try:
        if args.sample:
            _print_samples(len(pattern), args.seed)
            return 0

        if args.explain:
            print(describe_algorithm(args.algorithm))
            print()

        if args.prefix_table:
            print("═══ Prefix table ═══")
            print("  " + "  ".join(f"{ch:>2}" for ch in pattern))
            print("  " + "  ".join(f"{v:>2}" for v in build_prefix_table(pattern)))
            return 0

        trace = generate_trace(text, pattern, args.algorithm)

        if args.json:
            print(dump_trace_json(trace))
        elif args.play:
            config = PlaybackConfig(speed_ms=args.speed)
            if not trace.steps:
                print("Nothing to play: the pattern is longer than the text.")
                return 0
            _play(trace, config)
            print(
                f"{trace.total_comparisons} comparisons, match positions: "
                f"{list(trace.match_positions)}"
            )
        else:
            print(dump_trace(trace))
    except (MatchTraceError, ValueError) as e:
        # ValueError: pydantic rejects out-of-range speeds
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
