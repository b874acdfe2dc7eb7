from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .int_range import UniformSource, generate_in_range, system_uniform

T = TypeVar("T")


def fisher_yates(items: Sequence[T] | None, uniform: UniformSource | None = None) -> list[T]:
    """Return a shuffled copy of ``items``; the input is left untouched."""
    if not items:
        return []

    draw = uniform if uniform is not None else system_uniform()
    out = list(items)
    for i in range(len(out)):
        j = generate_in_range(0, i, draw)
        if i != j:
            out[i], out[j] = out[j], out[i]
    return out
