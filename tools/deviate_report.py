from __future__ import annotations

# ruff: noqa: E402
import argparse
import json
import math
import sys
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[1]
PYTHON_ROOT = REPO_ROOT / "python"
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from deviate_toolkit import (
    DISTRIBUTIONS,
    DeviateGenerator,
    GammaParams,
    LocationScale,
    schrage_step,
)
from deviate_toolkit.logging import JsonlSampleLogger

# Park & Miller (1988): x_10000 from x_0 = 1 under the minimal standard LCG.
MINSTD_CHECK_STEPS = 10000
MINSTD_CHECK_VALUE = 1043618065


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class DeviateReportConfig:
    output_path: Path | None = None
    trace_path: Path | None = None
    seed: int = 10001
    sample_size: int = 20000
    distributions: tuple[str, ...] = DISTRIBUTIONS

    normal_mean: float = 0.5
    normal_std_dev: float = 0.2
    gamma_alpha: float = 2.0
    gamma_beta: float = 1.0
    logistic_mean: float = 0.0
    logistic_std_dev: float = 1.0

    mean_z_limit: float = 5.0
    std_rel_tol: float = 0.05
    repro_draws: int = 1000
    max_iterations: int = 1_000_000


def _serialize_config(cfg: DeviateReportConfig) -> dict[str, Any]:
    payload = asdict(cfg)
    payload["output_path"] = cfg.output_path.as_posix() if cfg.output_path is not None else None
    payload["trace_path"] = cfg.trace_path.as_posix() if cfg.trace_path is not None else None
    payload["distributions"] = list(cfg.distributions)
    return payload


def _params_for(kind: str, cfg: DeviateReportConfig) -> dict[str, float]:
    if kind == "normal":
        return {"mean": cfg.normal_mean, "std_dev": cfg.normal_std_dev}
    if kind == "gamma":
        return {"alpha": cfg.gamma_alpha, "beta": cfg.gamma_beta}
    if kind == "logistic":
        return {"mean": cfg.logistic_mean, "std_dev": cfg.logistic_std_dev}
    return {}


def expected_moments(kind: str, params: dict[str, float]) -> tuple[float, float]:
    """Theoretical (mean, std) after the generator's own parameter fallbacks."""
    if kind == "uniform":
        return 0.5, math.sqrt(1.0 / 12.0)
    if kind == "exponential":
        return 1.0, 1.0
    if kind in ("normal", "logistic"):
        loc = LocationScale.adopt(params["mean"], params["std_dev"])
        return loc.mean, loc.std_dev
    if kind == "gamma":
        shape = GammaParams.adopt(params["alpha"], params["beta"])
        return shape.alpha / shape.beta, math.sqrt(shape.alpha) / shape.beta
    raise ValueError(f"Unsupported distribution: {kind}")


def _support_ok(kind: str, values: np.ndarray) -> bool:
    if values.size == 0:
        return True
    if kind == "uniform":
        return bool(np.all(values > 0.0) and np.all(values < 1.0))
    if kind == "exponential":
        return bool(np.all(values > 0.0))
    if kind == "gamma":
        return bool(np.all(values >= 0.0))
    return bool(np.all(np.isfinite(values)))


def _draw(kind: str, cfg: DeviateReportConfig, size: int) -> np.ndarray:
    generator = DeviateGenerator(max_iterations=cfg.max_iterations)
    return generator.sample(kind, size, seed=cfg.seed, **_params_for(kind, cfg))


def summarize_distribution(kind: str, cfg: DeviateReportConfig) -> dict[str, Any]:
    params = _params_for(kind, cfg)
    values = _draw(kind, cfg, cfg.sample_size)
    expected_mean, expected_std = expected_moments(kind, params)

    sample_mean = float(np.mean(values))
    sample_std = float(np.std(values, ddof=1)) if values.size > 1 else 0.0
    mean_tol = cfg.mean_z_limit * expected_std / math.sqrt(max(1, values.size))
    std_tol = cfg.std_rel_tol * expected_std

    repro_size = min(cfg.repro_draws, cfg.sample_size)
    reproducible = bool(np.array_equal(_draw(kind, cfg, repro_size), values[:repro_size]))

    checks = {
        "mean": abs(sample_mean - expected_mean) <= mean_tol,
        "std": abs(sample_std - expected_std) <= std_tol,
        "support": _support_ok(kind, values),
        "reproducible": reproducible,
    }
    return {
        "distribution": kind,
        "params": params,
        "count": int(values.size),
        "expected": {"mean": expected_mean, "std": expected_std},
        "sample": {
            "mean": sample_mean,
            "std": sample_std,
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        },
        "tolerance": {"mean": mean_tol, "std": std_tol},
        "checks": checks,
        "pass": all(checks.values()),
    }


def run_deviate_report(cfg: DeviateReportConfig) -> dict[str, Any]:
    if cfg.sample_size <= 1:
        raise ValueError("sample_size must be greater than one")
    for kind in cfg.distributions:
        if kind not in DISTRIBUTIONS:
            raise ValueError(f"Unsupported distribution: {kind}")

    state = 1
    for _ in range(MINSTD_CHECK_STEPS):
        state = schrage_step(state)
    minstd_pass = state == MINSTD_CHECK_VALUE

    trace_logger = JsonlSampleLogger(path=cfg.trace_path) if cfg.trace_path is not None else None
    distributions: list[dict[str, Any]] = []
    for kind in cfg.distributions:
        summary = summarize_distribution(kind, cfg)
        distributions.append(summary)
        if trace_logger is not None:
            trace_logger.log_batch(
                distribution=kind,
                seed=cfg.seed,
                params=summary["params"],
                values=_draw(kind, cfg, min(cfg.repro_draws, cfg.sample_size)),
            )

    report = {
        "generated_at": now_iso(),
        "config": _serialize_config(cfg),
        "summary": {
            "pass": minstd_pass and all(item["pass"] for item in distributions),
            "minstd_check": {"value": state, "expected": MINSTD_CHECK_VALUE, "pass": minstd_pass},
            "failed": [item["distribution"] for item in distributions if not item["pass"]],
        },
        "distributions": distributions,
    }

    if cfg.output_path is not None:
        cfg.output_path.parent.mkdir(parents=True, exist_ok=True)
        cfg.output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    return report


def _parse_args(argv: list[str] | None = None) -> DeviateReportConfig:
    parser = argparse.ArgumentParser(
        description="Sample each ran1-backed distribution and check its moments"
    )
    parser.add_argument("--output-path", type=Path, default=None)
    parser.add_argument("--trace-path", type=Path, default=None)
    parser.add_argument("--seed", type=int, default=10001)
    parser.add_argument("--sample-size", type=int, default=20000)
    parser.add_argument(
        "--distributions", nargs="+", choices=list(DISTRIBUTIONS), default=list(DISTRIBUTIONS)
    )
    parser.add_argument("--normal-mean", type=float, default=0.5)
    parser.add_argument("--normal-std-dev", type=float, default=0.2)
    parser.add_argument("--gamma-alpha", type=float, default=2.0)
    parser.add_argument("--gamma-beta", type=float, default=1.0)
    parser.add_argument("--logistic-mean", type=float, default=0.0)
    parser.add_argument("--logistic-std-dev", type=float, default=1.0)
    parser.add_argument("--mean-z-limit", type=float, default=5.0)
    parser.add_argument("--std-rel-tol", type=float, default=0.05)
    parser.add_argument("--repro-draws", type=int, default=1000)
    parser.add_argument("--max-iterations", type=int, default=1_000_000)

    args = parser.parse_args(argv)
    if args.sample_size <= 1:
        parser.error("--sample-size must be greater than one")

    return DeviateReportConfig(
        output_path=args.output_path,
        trace_path=args.trace_path,
        seed=args.seed,
        sample_size=args.sample_size,
        distributions=tuple(args.distributions),
        normal_mean=args.normal_mean,
        normal_std_dev=args.normal_std_dev,
        gamma_alpha=args.gamma_alpha,
        gamma_beta=args.gamma_beta,
        logistic_mean=args.logistic_mean,
        logistic_std_dev=args.logistic_std_dev,
        mean_z_limit=args.mean_z_limit,
        std_rel_tol=args.std_rel_tol,
        repro_draws=args.repro_draws,
        max_iterations=args.max_iterations,
    )


def main(argv: list[str] | None = None) -> int:
    cfg = _parse_args(argv)
    report = run_deviate_report(cfg)
    print(json.dumps(report, indent=2))
    return 0 if bool(report["summary"]["pass"]) else 2


if __name__ == "__main__":
    raise SystemExit(main())
