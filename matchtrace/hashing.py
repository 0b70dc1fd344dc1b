"""Rolling polynomial hash used by the Rabin-Karp generator.

Pure functions only. A window ``seq[start:end]`` hashes to

    sum(code(seq[k]) * base ** (end - 1 - k) for k in range(start, end)) % modulus

and ``roll`` derives the next window's hash from the current one in
constant time. Rolling must always agree with direct hashing.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from . import constants
from .errors import InvalidInputError


def symbol_code(symbol: Any) -> int:
    """Numeric code of a symbol.

    A character maps to its code point. A multi-character token (a word
    in a token sequence) folds its code points in base ``HASH_BASE``, so
    equal tokens always get equal codes. Anything else goes through
    ``int()``.

    Raises:
        InvalidInputError: if the symbol has no integer value.
    """
    if isinstance(symbol, str):
        code = 0
        for ch in symbol:
            code = code * constants.HASH_BASE + ord(ch)
        return code
    try:
        return int(symbol)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Cannot hash symbol {symbol!r}: expected a string or an integer"
        ) from e


def window_hash(
    seq: Sequence[Any],
    start: int,
    end: int,
    base: int = constants.HASH_BASE,
    modulus: int = constants.HASH_MODULUS,
) -> int:
    """Hash ``seq[start:end]`` directly (Horner's rule)."""
    h = 0
    for k in range(start, end):
        h = (h * base + symbol_code(seq[k])) % modulus
    return h


def roll(
    old_hash: int,
    leaving_code: int,
    entering_code: int,
    window_length: int,
    base: int = constants.HASH_BASE,
    modulus: int = constants.HASH_MODULUS,
) -> int:
    """Shift a window hash one position right without rescanning the window."""
    high_weight = pow(base, window_length - 1, modulus)
    leaving = (leaving_code * high_weight) % modulus
    # + modulus keeps the intermediate non-negative
    return ((old_hash - leaving + modulus) * base + entering_code) % modulus


def rolling_hashes(
    seq: Sequence[Any],
    window_length: int,
    base: int = constants.HASH_BASE,
    modulus: int = constants.HASH_MODULUS,
) -> Iterator[int]:
    """Yield the hash of every length-``window_length`` window of *seq*, left to right.

    Only the first window is hashed directly; the rest are rolled.
    Yields nothing when the window does not fit.
    """
    if window_length <= 0 or window_length > len(seq):
        return
    h = window_hash(seq, 0, window_length, base, modulus)
    yield h
    for i in range(len(seq) - window_length):
        h = roll(
            h,
            symbol_code(seq[i]),
            symbol_code(seq[i + window_length]),
            window_length,
            base,
            modulus,
        )
        yield h
