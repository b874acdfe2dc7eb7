"""Pseudo-random integers in an inclusive interval with endpoint-bias compensation.

Rounding ``min + u * (max - min)`` gives the two endpoints half the weight of
the interior values. Widening the interval by just under one half on each side
before rounding evens that out.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from numbers import Real

import numpy as np

from .constants import DEFAULT_SEED, RANGE_PAD
from .seeded_rng import SeededRng

UniformSource = Callable[[], float]


def system_uniform() -> UniformSource:
    """Unseeded uniform source in [0, 1) backed by numpy's default generator."""
    rng = np.random.default_rng()
    return lambda: float(rng.random())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_in_range(low: float, high: float, uniform: UniformSource | None = None) -> int:
    draw = uniform if uniform is not None else system_uniform()
    lo = float(low) - RANGE_PAD
    hi = max(float(low), float(high)) + RANGE_PAD
    return _round_half_up(lo + draw() * (hi - lo))


class RandomIntInRange:
    def __init__(
        self,
        low: float = 0,
        high: float = 1,
        seed: int = DEFAULT_SEED,
        uniform: UniformSource | None = None,
    ) -> None:
        self._low = 0
        self._high = 1
        self._min = 0.0
        self._max = 1.0
        self._delta = 1.0
        self.set_interval(low, high)

        self._seed = max(DEFAULT_SEED, abs(int(seed)))
        self._uniform = uniform if uniform is not None else system_uniform()
        self._rng: SeededRng | None = None

    @property
    def low(self) -> int:
        return self._low

    @property
    def high(self) -> int:
        return self._high

    def set_interval(self, low: float, high: float) -> None:
        """Non-finite bounds keep the previous value; reversed bounds are swapped."""
        lo = self._low
        hi = self._high
        if isinstance(low, Real) and math.isfinite(float(low)):
            lo = _round_half_up(float(low))
        if isinstance(high, Real) and math.isfinite(float(high)):
            hi = _round_half_up(float(high))
        if hi < lo:
            lo, hi = hi, lo

        self._low = lo
        self._high = hi
        self._min = lo - RANGE_PAD
        self._max = hi + RANGE_PAD
        self._delta = self._max - self._min

    @classmethod
    def generate_in_range(
        cls, low: float, high: float, uniform: UniformSource | None = None
    ) -> int:
        return generate_in_range(low, high, uniform)

    def generate(self, use_seeded: bool = False) -> int:
        if use_seeded and self._rng is None:
            self._rng = SeededRng(self._seed)

        u = self._rng.next() if use_seeded and self._rng is not None else self._uniform()
        return _round_half_up(self._min + u * self._delta)
