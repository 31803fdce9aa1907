from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import pandas as pd


def write_table(df: pd.DataFrame, path: Path, fmt: str = "csv") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
        return path
    if fmt == "csv":
        df.to_csv(path, index=False)
        return path
    raise ValueError(f"Unsupported table format: {fmt}")


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def write_summary(data: dict[str, Any], path: Path) -> Path:
    """Write ``data`` as JSON; NaN and infinite floats become ``null``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(_json_safe(data), indent=2, sort_keys=True, allow_nan=False)
    path.write_text(payload, encoding="utf-8")
    return path
