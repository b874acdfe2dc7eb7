"""Seeded linear generator producing values in [0, 1)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import DEFAULT_SEED, RAN1_M, SEEDED_A


@dataclass
class SeededRng:
    """Minimal standard Lehmer generator with the 48271 multiplier."""

    seed: int = DEFAULT_SEED
    _state: int = field(init=False, repr=False, default=DEFAULT_SEED)

    def __post_init__(self) -> None:
        value = abs(int(self.seed)) % RAN1_M
        self.seed = max(DEFAULT_SEED, value)
        self._state = self.seed

    def next(self) -> float:
        self._state = (self._state * SEEDED_A) % RAN1_M
        # State lives in [1, M - 1], so this maps onto [0, 1).
        return (self._state - 1) / (RAN1_M - 1)

    def as_number(self) -> float:
        return self.next()
