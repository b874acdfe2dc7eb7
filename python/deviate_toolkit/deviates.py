"""Deviates from several distributions sharing one reproducible ran1 stream.

Typical usage is to call a transform with a starting seed and
``reinitialize=True``, then keep calling it with ``reinitialize=False`` to
continue the same sequence. Every transform consumes the same underlying
uniform stream, so interleaving transforms on one instance is deterministic.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any

import numpy as np

from .constants import (
    DISTRIBUTIONS,
    GAMMA_DEFAULT_ALPHA,
    GAMMA_DEFAULT_BETA,
    GAMMA_MIN_BETA,
    LOGISTIC_SCALE,
    MAX_ITERATIONS,
)
from .errors import RejectionLimitExceeded
from .ran1_rng import Ran1Rng


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and math.isfinite(float(value))


def _location(mean: object) -> float:
    # Negative means fall back to zero along with NaN and infinities.
    return float(mean) if _is_number(mean) and float(mean) >= 0.0 else 0.0


def _scale(std_dev: object) -> float:
    return float(std_dev) if _is_number(std_dev) and float(std_dev) > 0.0 else 1.0


@dataclass(frozen=True)
class LocationScale:
    mean: float = 0.0
    std_dev: float = 1.0

    @classmethod
    def adopt(cls, mean: object, std_dev: object) -> LocationScale:
        return cls(mean=_location(mean), std_dev=_scale(std_dev))


@dataclass(frozen=True)
class GammaParams:
    alpha: float = GAMMA_DEFAULT_ALPHA
    beta: float = GAMMA_DEFAULT_BETA

    @classmethod
    def adopt(cls, alpha: object, beta: object) -> GammaParams:
        a = float(alpha) if _is_number(alpha) and float(alpha) > 0.0 else GAMMA_DEFAULT_ALPHA
        if a < 1.0:
            # The rejection method needs alpha >= 1; callers see Gamma(alpha + 1).
            a += 1.0

        b = float(beta) if _is_number(beta) else GAMMA_DEFAULT_BETA
        if b < GAMMA_MIN_BETA:
            b = GAMMA_DEFAULT_BETA
        return cls(alpha=a, beta=b)

    @property
    def a1(self) -> float:
        return self.alpha - 1.0 / 3.0

    @property
    def a2(self) -> float:
        return 1.0 / math.sqrt(9.0 * self.a1)


class DeviateGenerator:
    """Owns the ran1 engine, the cached normal and the active parameters."""

    def __init__(self, *, max_iterations: int = MAX_ITERATIONS) -> None:
        if int(max_iterations) <= 0:
            raise ValueError("max_iterations must be positive")

        self.max_iterations = int(max_iterations)
        self.engine = Ran1Rng()
        self._started = False
        self._cached_normal: float | None = None
        self._cached_gamma_normal: float | None = None
        self._normal_params = LocationScale()
        self._logistic_params = LocationScale()
        self._gamma_params = GammaParams()

    @property
    def cached_normal(self) -> float | None:
        return self._cached_normal

    def _prepare(self, seed: object, reinitialize: bool) -> bool:
        """Restart the stream when asked to, or when nothing has been drawn yet."""
        if not reinitialize and self._started:
            return False

        self.engine.reset(seed)
        self._started = True
        self._cached_normal = None
        self._cached_gamma_normal = None
        return True

    def _adopt_params(
        self,
        kind: str,
        mean: object = None,
        std_dev: object = None,
        alpha: object = None,
        beta: object = None,
    ) -> None:
        """Swap in new parameters mid-stream; omitted ones keep their current value."""
        if kind == "normal":
            current = self._normal_params
            self._normal_params = LocationScale.adopt(
                current.mean if mean is None else mean,
                current.std_dev if std_dev is None else std_dev,
            )
        elif kind == "logistic":
            current = self._logistic_params
            self._logistic_params = LocationScale.adopt(
                current.mean if mean is None else mean,
                current.std_dev if std_dev is None else std_dev,
            )
        elif kind == "gamma":
            shape = self._gamma_params
            self._gamma_params = GammaParams.adopt(
                shape.alpha if alpha is None else alpha,
                shape.beta if beta is None else beta,
            )

    def _draw(self) -> float:
        return self.engine.next_uniform()

    def _polar_pair(self, distribution: str) -> tuple[float, float]:
        for _ in range(self.max_iterations):
            v1 = 2.0 * self._draw() - 1.0
            v2 = 2.0 * self._draw() - 1.0
            rsq = v1 * v1 + v2 * v2
            if 0.0 < rsq < 1.0:
                fac = math.sqrt(-2.0 * math.log(rsq) / rsq)
                return v1 * fac, v2 * fac
        raise RejectionLimitExceeded(distribution, self.max_iterations)

    def _gamma_normal(self) -> float:
        # Gamma keeps its own half-pair so it never disturbs the normal cache.
        if self._cached_gamma_normal is not None:
            x = self._cached_gamma_normal
            self._cached_gamma_normal = None
            return x

        first, second = self._polar_pair("gamma")
        self._cached_gamma_normal = first
        return second

    def uniform(self, seed: object, reinitialize: bool = True) -> float:
        self._prepare(seed, reinitialize)
        return self._draw()

    def exponential(self, seed: object, reinitialize: bool = True) -> float:
        """Exponential deviate with unit mean."""
        self._prepare(seed, reinitialize)

        for _ in range(self.max_iterations):
            u = self._draw()
            if u != 0.0:
                return -math.log(u)
        raise RejectionLimitExceeded("exponential", self.max_iterations)

    def normal(
        self,
        seed: object,
        mean: float = 0.0,
        std_dev: float = 1.0,
        reinitialize: bool = True,
    ) -> float:
        """Polar Box-Muller; every other call is served from the cached half-pair."""
        if self._prepare(seed, reinitialize):
            self._normal_params = LocationScale.adopt(mean, std_dev)
        params = self._normal_params

        if self._cached_normal is not None:
            cached = self._cached_normal
            self._cached_normal = None
            return params.mean + params.std_dev * cached

        first, second = self._polar_pair("normal")
        self._cached_normal = first
        return params.mean + params.std_dev * second

    def gamma(
        self,
        seed: object,
        alpha: float = GAMMA_DEFAULT_ALPHA,
        beta: float = GAMMA_DEFAULT_BETA,
        reinitialize: bool = True,
    ) -> float:
        """Gamma deviate with shape ``alpha`` and rate ``beta`` (Marsaglia-Tsang).

        Shapes below one are shifted up by one before sampling.
        """
        if self._prepare(seed, reinitialize):
            self._gamma_params = GammaParams.adopt(alpha, beta)
        params = self._gamma_params
        a1 = params.a1
        a2 = params.a2

        for _ in range(self.max_iterations):
            x = self._gamma_normal()
            v = 1.0 + a2 * x
            if v <= 0.0:
                continue

            v = v * v * v
            u = self._draw()
            x_sq = x * x
            if u <= 1.0 - x_sq * x_sq:
                return a1 * v / params.beta
            if math.log(u) <= 0.5 * x_sq + a1 * (1.0 - v + math.log(v)):
                return a1 * v / params.beta
        raise RejectionLimitExceeded("gamma", self.max_iterations)

    def logistic(
        self,
        seed: object,
        mean: float = 0.0,
        std_dev: float = 1.0,
        reinitialize: bool = True,
    ) -> float:
        if self._prepare(seed, reinitialize):
            self._logistic_params = LocationScale.adopt(mean, std_dev)
        params = self._logistic_params

        for _ in range(self.max_iterations):
            v = self._draw()
            if v * (1.0 - v) != 0.0:
                return params.mean + LOGISTIC_SCALE * params.std_dev * math.log(v / (1.0 - v))
        raise RejectionLimitExceeded("logistic", self.max_iterations)

    def sample(
        self,
        kind: str,
        size: int | tuple[int, ...],
        seed: object = None,
        **params: Any,
    ) -> np.ndarray:
        """Fill an array with deviates of one kind.

        Passing ``seed`` restarts the sequence on the first draw; otherwise the
        current stream continues and any ``params`` replace the active ones.
        """
        if kind not in DISTRIBUTIONS:
            raise ValueError(f"Unsupported distribution: {kind}")

        shape = (int(size),) if isinstance(size, Integral) else tuple(int(dim) for dim in size)
        if any(int(dim) < 0 for dim in shape):
            raise ValueError("size must be non-negative")

        method: Callable[..., float] = getattr(self, kind)
        out = np.empty(shape, dtype=np.float64)
        flat = out.reshape(-1)

        restart = seed is not None
        if not restart and params and self._started:
            self._adopt_params(kind, **params)

        for i in range(flat.size):
            flat[i] = method(seed, reinitialize=restart, **params)
            restart = False
        return out
