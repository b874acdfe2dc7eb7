"""Weighted action bins: pick labelled outcomes a prescribed share of the time."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .constants import BIN_SUM_TOLERANCE
from .int_range import UniformSource, system_uniform


@dataclass(frozen=True)
class Bin:
    percentage: float
    action: str


class WeightedBins:
    def __init__(self, uniform: UniformSource | None = None) -> None:
        self._uniform = uniform if uniform is not None else system_uniform()
        self._bounds: list[float] = []
        self._actions: list[str] = []

    @property
    def num_bins(self) -> int:
        return len(self._bounds)

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(self._actions)

    @property
    def bounds(self) -> tuple[float, ...]:
        return tuple(self._bounds)

    def create(self, bins: Sequence[Bin]) -> bool:
        """Replace the current bins; percentages must total 100."""
        self.clear()
        if not bins:
            return False

        total = sum(float(item.percentage) for item in bins)
        if abs(100.0 - total) >= BIN_SUM_TOLERANCE:
            return False

        ordered = sorted(bins, key=lambda item: float(item.percentage), reverse=True)

        running = 0.0
        for item in ordered:
            running += float(item.percentage) * 0.01
            self._bounds.append(running)
            self._actions.append(item.action)

        # roundoff
        self._bounds[-1] = 1.0
        return True

    def next_action(self) -> str | None:
        if not self._bounds:
            return None

        test = self._uniform()
        for bound, action in zip(self._bounds, self._actions):
            if bound >= test:
                return action
        return None

    def clear(self) -> None:
        self._bounds.clear()
        self._actions.clear()
