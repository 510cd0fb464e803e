# terrain_logic/core/seeding.py
from __future__ import annotations

import random
from typing import Optional

from setting.constants import RANDOM_SEED_MAX

_MASK64 = 0xFFFFFFFFFFFFFFFF


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    return z ^ (z >> 31)


def mix_seed(seed: int, salt: int) -> int:
    """Derives an independent 31-bit stream seed from the run seed."""
    s = (seed ^ (salt * 0x9E3779B9)) & 0xFFFFFFFF
    # xorshift32
    s ^= (s << 13) & 0xFFFFFFFF
    s ^= (s >> 17)
    s ^= (s << 5) & 0xFFFFFFFF
    return s & 0x7FFFFFFF


class RNG:
    """Small deterministic generator; one instance per generation run."""

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = seed & _MASK64

    def u64(self) -> int:
        self.state = _splitmix64(self.state)
        return self.state

    def randrange(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi); collapses to lo when the range is empty."""
        if hi <= lo:
            return lo
        span = hi - lo
        # reject the top partial block so every residue is equally likely
        limit = (1 << 64) - ((1 << 64) % span)
        while True:
            v = self.u64()
            if v < limit:
                return lo + v % span


def resolve_seed(use_random_seed: bool, seed: int, source: Optional[random.Random] = None) -> int:
    """
    Returns the seed a run should use. With use_random_seed the value is drawn
    from the caller's generator, so the numeric core never touches global state.
    """
    if not use_random_seed:
        return int(seed)
    rng = source if source is not None else random.Random()
    return rng.randrange(0, RANDOM_SEED_MAX)
