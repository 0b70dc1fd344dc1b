"""KMP failure function (longest proper prefix that is also a suffix)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)


def build_prefix_table(pattern: Sequence[Any]) -> tuple[int, ...]:
    """Return the KMP prefix table for *pattern*.

    Entry ``i`` is the length of the longest proper prefix of
    ``pattern[:i + 1]`` that is also a suffix of it. Runs in linear time;
    an empty pattern gives an empty table.

    Args:
        pattern: Any sequence of comparable symbols.

    Returns:
        A tuple of ``len(pattern)`` non-negative ints; entry 0 is always 0.
    """
    m = len(pattern)
    table = [0] * m
    length = 0
    i = 1
    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            table[i] = length
            i += 1
        elif length != 0:
            # Fall back to the next-shorter border; i stays put
            length = table[length - 1]
        else:
            table[i] = 0
            i += 1

    logger.debug("Prefix table for pattern of length %d: %s", m, table)
    return tuple(table)
