from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np


def append_jsonl(path: Path, row: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(row, separators=(",", ":")))
        handle.write("\n")


class JsonlSampleLogger:
    """Appends one compact JSON row per batch of drawn deviates."""

    def __init__(self, *, path: Path) -> None:
        self.path = path

    def log_batch(
        self,
        *,
        distribution: str,
        seed: int,
        params: dict[str, float],
        values: np.ndarray,
    ) -> None:
        append_jsonl(
            self.path,
            {
                "distribution": distribution,
                "seed": int(seed),
                "params": {key: float(value) for key, value in params.items()},
                "count": int(values.size),
                "values": [float(v) for v in values.reshape(-1)],
            },
        )
