from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from spacetime_scan.config import DATA_DIR_ENV, load_config


def _data_section() -> dict[str, str]:
    return {
        "counts_path": "counts.csv",
        "baselines_path": "baselines.csv",
        "overdispersion_path": "overdisp.csv",
        "zones_path": "zones.csv",
    }


def test_load_config_resolves_relative_paths(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"data": _data_section()}), encoding="utf-8")

    cfg = load_config(config_path)

    assert Path(cfg.data.counts_path) == (tmp_path / "counts.csv").resolve()
    assert Path(cfg.data.baselines_path).is_absolute()
    assert Path(cfg.data.zones_path).is_absolute()
    assert Path(cfg.data.overdispersion_path or "").is_absolute()


def test_load_config_defaults_and_overrides(tmp_path: Path) -> None:
    base_path = tmp_path / "base.yaml"
    base_path.write_text(yaml.safe_dump({"data": _data_section()}), encoding="utf-8")
    base_cfg = load_config(base_path)
    assert base_cfg.scan.distribution == "negbin"
    assert base_cfg.scan.score == "hotspot"
    assert base_cfg.scan.max_duration == 1
    assert base_cfg.scan.store_everything is False
    assert base_cfg.scan.num_mcsim == 999
    assert base_cfg.scan.random_seed == 42
    assert base_cfg.data.time_order == "most_recent_first"
    assert base_cfg.outputs.tables_format == "csv"

    override = {
        "data": {**_data_section(), "overdispersion_path": None, "time_order": "oldest_first"},
        "scan": {
            "distribution": "poisson",
            "max_duration": 4,
            "store_everything": True,
            "num_mcsim": 0,
        },
        "outputs": {"tables_format": "parquet"},
    }
    override_path = tmp_path / "override.yaml"
    override_path.write_text(yaml.safe_dump(override), encoding="utf-8")
    override_cfg = load_config(override_path)
    assert override_cfg.scan.distribution == "poisson"
    assert override_cfg.scan.max_duration == 4
    assert override_cfg.scan.store_everything is True
    assert override_cfg.scan.num_mcsim == 0
    assert override_cfg.data.overdispersion_path is None
    assert override_cfg.data.time_order == "oldest_first"
    assert override_cfg.outputs.tables_format == "parquet"


def test_load_config_uses_env_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"data": _data_section()}), encoding="utf-8")
    data_dir = tmp_path / "data"
    monkeypatch.setenv(DATA_DIR_ENV, str(data_dir))

    cfg = load_config(config_path)
    assert Path(cfg.data.counts_path) == (data_dir / "counts.csv").resolve()


@pytest.mark.parametrize(
    "payload",
    [
        {"scan": {"max_duration": 1}},
        {"data": _data_section(), "scan": {"max_duration": 0}},
        {"data": _data_section(), "scan": {"num_mcsim": -1}},
        {"data": _data_section(), "scan": {"score": "cusum"}},
        {"data": _data_section(), "report": {}},
    ],
)
def test_load_config_rejects_invalid_settings(tmp_path: Path, payload: dict) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(payload), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(config_path)


def test_default_config_loads() -> None:
    cfg = load_config(Path(__file__).resolve().parents[1] / "configs/default.yaml")

    assert Path(cfg.data.counts_path).exists()
    assert Path(cfg.data.zones_path).exists()
    assert cfg.scan.max_duration == 3
