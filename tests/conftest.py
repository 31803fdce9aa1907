from __future__ import annotations

from pathlib import Path

import pytest
import yaml


def _write_matrix(path: Path, rows: list[list[object]]) -> None:
    header = "period,a,b,c"
    body = [",".join(str(value) for value in row) for row in rows]
    path.write_text("\n".join([header, *body]) + "\n", encoding="utf-8")


@pytest.fixture
def scan_data_dir(tmp_path: Path) -> Path:
    _write_matrix(tmp_path / "counts.csv", [["t3", 9, 1, 2], ["t2", 7, 2, 2], ["t1", 2, 1, 3]])
    _write_matrix(
        tmp_path / "baselines.csv",
        [["t3", 2.0, 1.5, 2.5], ["t2", 2.0, 1.5, 2.5], ["t1", 2.0, 1.5, 2.5]],
    )
    _write_matrix(
        tmp_path / "overdisp.csv",
        [["t3", 1.0, 1.0, 1.0], ["t2", 1.0, 1.0, 1.0], ["t1", 1.0, 1.0, 1.0]],
    )
    (tmp_path / "zones.csv").write_text(
        "zone,location\nA,a\nB,b\nC,c\nAB,a\nAB,b\nBC,b\nBC,c\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def scan_config_path(scan_data_dir: Path) -> Path:
    config_path = scan_data_dir / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "data": {
                    "counts_path": "counts.csv",
                    "baselines_path": "baselines.csv",
                    "overdispersion_path": "overdisp.csv",
                    "zones_path": "zones.csv",
                },
                "scan": {"max_duration": 2, "num_mcsim": 9, "random_seed": 3},
            }
        ),
        encoding="utf-8",
    )
    return config_path
