from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from spacetime_scan.config import AppConfig
from spacetime_scan.scan.zones import flatten_zones

REQUIRED_ZONE_COLUMNS = ["zone", "location"]


@dataclass(frozen=True)
class ScanInputs:
    counts: np.ndarray
    baselines: np.ndarray
    overdisp: np.ndarray | None
    zones: np.ndarray
    zone_lengths: np.ndarray
    location_names: list[str]
    zone_labels: list[str]

    @property
    def num_locs(self) -> int:
        return int(self.counts.shape[1])

    @property
    def num_zones(self) -> int:
        return int(self.zone_lengths.size)

    @property
    def num_times(self) -> int:
        return int(self.counts.shape[0])


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"Unsupported table file type: {path.suffix}")


def load_matrix(path: Path) -> pd.DataFrame:
    """Read a time x location table; the first column labels the time periods."""
    table = load_table(path)
    if table.shape[1] < 2:
        raise ValueError(f"Matrix table needs a time column and at least one location: {path}")
    frame = table.set_index(table.columns[0])
    frame.columns = [str(column) for column in frame.columns]
    return frame


def load_zones(path: Path, location_names: list[str]) -> tuple[list[list[int]], list[str]]:
    """Read long-format ``zone,location`` rows into 0-based location id lists.

    Zones keep the order in which they first appear in the file.
    """
    table = load_table(path)
    for column in REQUIRED_ZONE_COLUMNS:
        if column not in table.columns:
            raise ValueError(f"Zone table missing column: {column}")
    if table.empty:
        raise ValueError("Zone table has no rows")

    positions = {name: idx for idx, name in enumerate(location_names)}
    unknown = sorted(set(table["location"].astype(str)) - set(positions))
    if unknown:
        raise ValueError(f"Zone table references unknown locations: {', '.join(unknown)}")

    zones: dict[str, list[int]] = {}
    for zone, location in zip(table["zone"].astype(str), table["location"].astype(str)):
        zones.setdefault(zone, []).append(positions[location])
    return list(zones.values()), list(zones.keys())


def _aligned(frame: pd.DataFrame, reference: pd.DataFrame, label: str) -> pd.DataFrame:
    if frame.shape != reference.shape:
        raise ValueError(
            f"{label} shape {frame.shape} does not match counts shape {reference.shape}"
        )
    missing = [column for column in reference.columns if column not in frame.columns]
    if missing:
        raise ValueError(f"{label} missing locations: {', '.join(missing)}")
    return frame[list(reference.columns)]


def load_scan_inputs(config: AppConfig) -> ScanInputs:
    """Load and check the matrices and zones named in ``config.data``."""
    data = config.data
    counts_frame = load_matrix(Path(data.counts_path))
    baselines_frame = _aligned(load_matrix(Path(data.baselines_path)), counts_frame, "baselines")
    overdisp_frame = (
        _aligned(load_matrix(Path(data.overdispersion_path)), counts_frame, "overdispersion")
        if data.overdispersion_path
        else None
    )
    if config.scan.distribution == "negbin" and overdisp_frame is None:
        raise ValueError("data.overdispersion_path must be set when scan.distribution is 'negbin'")

    counts = counts_frame.to_numpy()
    if not np.issubdtype(counts.dtype, np.integer):
        raise ValueError("counts must be integers")
    if (counts < 0).any():
        raise ValueError("counts must be non-negative")

    baselines = baselines_frame.to_numpy(dtype=float)
    if not (baselines > 0.0).all():
        raise ValueError("baselines must be strictly positive")

    overdisp = None
    if overdisp_frame is not None:
        overdisp = overdisp_frame.to_numpy(dtype=float)
        if not (overdisp > 0.0).all():
            raise ValueError("overdispersion must be strictly positive")

    if data.time_order == "oldest_first":
        counts = counts[::-1]
        baselines = baselines[::-1]
        overdisp = None if overdisp is None else overdisp[::-1]

    location_names = list(counts_frame.columns)
    zone_lists, zone_labels = load_zones(Path(data.zones_path), location_names)
    zones, zone_lengths = flatten_zones(zone_lists)

    if config.scan.max_duration > counts.shape[0]:
        raise ValueError(
            f"scan.max_duration={config.scan.max_duration} exceeds "
            f"the {counts.shape[0]} available time periods"
        )

    return ScanInputs(
        counts=np.ascontiguousarray(counts).astype(int),
        baselines=np.ascontiguousarray(baselines),
        overdisp=None if overdisp is None else np.ascontiguousarray(overdisp),
        zones=zones,
        zone_lengths=zone_lengths,
        location_names=location_names,
        zone_labels=zone_labels,
    )
