"""Portable ran1 uniform generator used by every deviate transform."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Integral, Real

from .constants import (
    AM,
    DEFAULT_SEED,
    NDIV,
    RAN1_A,
    RAN1_M,
    RAN1_Q,
    RAN1_R,
    RNMX,
    TABLE_SIZE,
    WARMUP_STEPS,
)


def schrage_step(x: int) -> int:
    """Advance the minimal standard LCG once without overflowing 32 bits."""
    k = x // RAN1_Q
    x = RAN1_A * (x - k * RAN1_Q) - RAN1_R * k
    if x < 0:
        x += RAN1_M
    return x


def normalize_seed(seed: object) -> int:
    """Map any caller-supplied start value onto a valid non-zero LCG state."""
    if isinstance(seed, Integral):
        value = int(seed)
    elif isinstance(seed, Real) and math.isfinite(float(seed)) and float(seed).is_integer():
        value = int(seed)
    else:
        return DEFAULT_SEED

    if value < 1:
        return DEFAULT_SEED
    if value >= RAN1_M:
        value %= RAN1_M
    return value or DEFAULT_SEED


@dataclass(frozen=True)
class Ran1State:
    state: int
    table: tuple[int, ...]
    carry: int


@dataclass
class Ran1Rng:
    """ran1: minimal standard LCG behind a Bays-Durham shuffle table."""

    seed: int = DEFAULT_SEED
    _state: int = field(init=False, repr=False, default=DEFAULT_SEED)
    _table: list[int] = field(init=False, repr=False, default_factory=list)
    _carry: int = field(init=False, repr=False, default=0)

    def __post_init__(self) -> None:
        self.reset(self.seed)

    def reset(self, seed: object) -> None:
        self.seed = normalize_seed(seed)
        self._state = self.seed
        self._table = [0] * TABLE_SIZE

        for j in range(WARMUP_STEPS - 1, -1, -1):
            self._state = schrage_step(self._state)
            if j < TABLE_SIZE:
                self._table[j] = self._state

        self._carry = self._table[0]

    def next_uniform(self) -> float:
        self._state = schrage_step(self._state)

        j = self._carry // NDIV
        self._carry = self._table[j]
        self._table[j] = self._state

        return min(AM * self._carry, RNMX)

    def snapshot(self) -> Ran1State:
        return Ran1State(state=self._state, table=tuple(self._table), carry=self._carry)
