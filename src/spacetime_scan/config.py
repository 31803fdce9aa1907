from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field


class DataConfig(BaseModel):
    counts_path: str
    baselines_path: str
    zones_path: str
    overdispersion_path: str | None = None
    time_order: Literal["most_recent_first", "oldest_first"] = "most_recent_first"


class ScanConfig(BaseModel):
    distribution: Literal["negbin", "poisson"] = "negbin"
    score: Literal["hotspot", "emerging"] = "hotspot"
    max_duration: int = Field(default=1, ge=1)
    store_everything: bool = False
    num_mcsim: int = Field(default=999, ge=0)
    random_seed: int | None = Field(default=42, ge=0)


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    data: DataConfig
    scan: ScanConfig = Field(default_factory=ScanConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")
DATA_DIR_ENV = "SPACETIME_SCAN_DATA_DIR"


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    env_data_dir = os.getenv(DATA_DIR_ENV)
    base_dir = Path(env_data_dir) if env_data_dir else path.resolve().parent

    config.data.counts_path = _resolve_optional_path(config.data.counts_path, base_dir) or ""
    config.data.baselines_path = _resolve_optional_path(config.data.baselines_path, base_dir) or ""
    config.data.zones_path = _resolve_optional_path(config.data.zones_path, base_dir) or ""
    config.data.overdispersion_path = _resolve_optional_path(
        config.data.overdispersion_path,
        base_dir,
    )
    return config
