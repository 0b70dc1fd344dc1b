"""Named constants — eliminates magic numbers across the codebase."""

from __future__ import annotations

# Rabin-Karp rolling hash: one base-256 "digit" per symbol code, reduced
# modulo a small prime so that collisions are easy to demonstrate.
HASH_BASE = 256
HASH_MODULUS = 101

ALGORITHM_NAIVE = "naive"
ALGORITHM_KMP = "kmp"
ALGORITHM_RABIN_KARP = "rabin-karp"

# Playback cadence, in milliseconds per step
MIN_SPEED_MS = 100
MAX_SPEED_MS = 2000
SPEED_STEP_MS = 100
DEFAULT_SPEED_MS = 500

DEMO_TEXT = "ABABDABACDABABCABAB"
DEMO_PATTERN = "ABABCABAB"
