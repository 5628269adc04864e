"""Random number helper seeded from the clock by default."""

from __future__ import annotations

import random
import time
from typing import Optional, Union

Number = Union[int, float]


class Random:
    """A Mersenne Twister generator with a few convenience draws."""

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self._generator = random.Random(seed)

    def random_int(self) -> int:
        """Return an unsigned 32-bit integer."""
        return self._generator.getrandbits(32)

    def random_float(self) -> float:
        """Return a float in [0, 1)."""
        return self._generator.random()

    def random_range(self, lo: Number, hi: Number) -> Number:
        """Return a value between ``lo`` and ``hi``.

        Two integers give an integer with both bounds included; otherwise a
        float is drawn.
        """
        if lo > hi:
            raise ValueError(f"empty range: {lo} > {hi}")
        if isinstance(lo, int) and isinstance(hi, int):
            return self._generator.randint(lo, hi)
        return self._generator.uniform(lo, hi)