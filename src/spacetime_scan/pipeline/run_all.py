from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from spacetime_scan.config import AppConfig
from spacetime_scan.io.read import ScanInputs, load_scan_inputs
from spacetime_scan.io.write import write_summary, write_table
from spacetime_scan.paths import build_output_paths
from spacetime_scan.results import scan_eb_negbin, scan_eb_poisson
from spacetime_scan.stats import summarize_scan

LOGGER = logging.getLogger(__name__)


def run_configured_scan(inputs: ScanInputs, config: AppConfig) -> dict[str, pd.DataFrame]:
    scan_cfg = config.scan
    rng = np.random.default_rng(scan_cfg.random_seed)
    if scan_cfg.distribution == "poisson":
        return scan_eb_poisson(
            counts=inputs.counts,
            baselines=inputs.baselines,
            zones=inputs.zones,
            zone_lengths=inputs.zone_lengths,
            num_locs=inputs.num_locs,
            num_zones=inputs.num_zones,
            max_dur=scan_cfg.max_duration,
            store_everything=scan_cfg.store_everything,
            num_mcsim=scan_cfg.num_mcsim,
            rng=rng,
        )
    return scan_eb_negbin(
        counts=inputs.counts,
        baselines=inputs.baselines,
        overdisp=inputs.overdisp,
        zones=inputs.zones,
        zone_lengths=inputs.zone_lengths,
        num_locs=inputs.num_locs,
        num_zones=inputs.num_zones,
        max_dur=scan_cfg.max_duration,
        store_everything=scan_cfg.store_everything,
        num_mcsim=scan_cfg.num_mcsim,
        score_hotspot=scan_cfg.score == "hotspot",
        rng=rng,
    )


def _with_zone_labels(table: pd.DataFrame, zone_labels: list[str]) -> pd.DataFrame:
    labels = pd.Series(zone_labels, index=range(1, len(zone_labels) + 1), dtype=object)
    return table.assign(zone_label=table["zone"].map(labels))


def run_all(config: AppConfig, out_dir: Path, *, inputs: ScanInputs | None = None) -> Path:
    paths = build_output_paths(out_dir)
    if inputs is None:
        inputs = load_scan_inputs(config)
    LOGGER.info(
        "Loaded %d time periods x %d locations and %d zones",
        inputs.num_times,
        inputs.num_locs,
        inputs.num_zones,
    )

    tables = run_configured_scan(inputs, config)
    suffix = config.outputs.tables_format
    for name, table in tables.items():
        write_table(
            _with_zone_labels(table, inputs.zone_labels),
            paths.tables / f"{name}.{suffix}",
            fmt=suffix,
        )

    summary = summarize_scan(tables["observed"], tables["simulated"])
    if summary["mlc_zone"] is not None and int(summary["mlc_zone"]) >= 1:
        summary["mlc_zone_label"] = inputs.zone_labels[int(summary["mlc_zone"]) - 1]
    summary.update(
        {
            "distribution": config.scan.distribution,
            "score": config.scan.score if config.scan.distribution == "negbin" else "poisson",
            "max_duration": config.scan.max_duration,
            "store_everything": config.scan.store_everything,
            "random_seed": config.scan.random_seed,
        }
    )
    summary_path = write_summary(summary, paths.summary / "scan.json")
    LOGGER.info("Scan summary written to %s", summary_path)
    return summary_path
