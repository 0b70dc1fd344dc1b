"""Comparison-count sampler over synthetic random inputs.

A thin client of ``count_comparisons``: it never looks at individual
steps, only at the final count each algorithm needs.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from .api import count_comparisons
from .trace_types import Algorithm

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "AB"
DEFAULT_TEXT_LENGTHS: tuple[int, ...] = (10, 50, 100, 500, 1000)


@dataclass(frozen=True)
class PerformanceSample:
    text_length: int
    pattern_length: int
    counts: dict[Algorithm, int] = field(default_factory=dict)


def _random_symbols(rng: random.Random, alphabet: str, length: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(length))


def sample_performance(
    text_lengths: Iterable[int] = DEFAULT_TEXT_LENGTHS,
    pattern_length: int = 5,
    alphabet: str = DEFAULT_ALPHABET,
    seed: int = 0,
    algorithms: Iterable[Algorithm] = tuple(Algorithm),
) -> list[PerformanceSample]:
    """Count comparisons of each algorithm on random text of each length.

    Every algorithm sees the same text and pattern for a given length, and
    the same *seed* always produces the same samples.
    """
    if pattern_length <= 0:
        raise ValueError(f"pattern_length must be positive, got {pattern_length}")
    if not alphabet:
        raise ValueError("alphabet must not be empty")

    rng = random.Random(seed)
    algorithms = tuple(algorithms)
    samples: list[PerformanceSample] = []
    for length in text_lengths:
        text = _random_symbols(rng, alphabet, length)
        pattern = _random_symbols(rng, alphabet, pattern_length)
        counts = {a: count_comparisons(text, pattern, a) for a in algorithms}
        logger.debug("Sampled text length %d: %s", length, counts)
        samples.append(
            PerformanceSample(
                text_length=length, pattern_length=pattern_length, counts=counts
            )
        )
    return samples
