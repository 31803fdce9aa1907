from __future__ import annotations

import numpy as np
import pandas as pd

from spacetime_scan.scan.engine import ScanEngine
from spacetime_scan.scan.models import ScanModel, eb_negbin_model, eb_poisson_model
from spacetime_scan.scan.storage import ResultArrays

RESULT_COLUMNS = ["zone", "duration", "score"]


def result_frame(arrays: ResultArrays) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "zone": arrays.zones.astype(int),
            "duration": arrays.durations.astype(int),
            "score": arrays.scores.astype(float),
        },
        columns=RESULT_COLUMNS,
    )


def get_scan(engine: ScanEngine) -> pd.DataFrame:
    return result_frame(engine.observed)


def get_mcsim(engine: ScanEngine) -> pd.DataFrame:
    return result_frame(engine.simulated)


def run_engine(engine: ScanEngine) -> dict[str, pd.DataFrame]:
    engine.run_scan()
    engine.run_mcsim()
    return {"observed": get_scan(engine), "simulated": get_mcsim(engine)}


def _build_engine(
    model: ScanModel,
    counts: np.ndarray,
    baselines: np.ndarray,
    overdisp: np.ndarray | None,
    zones: np.ndarray,
    zone_lengths: np.ndarray,
    num_locs: int,
    num_zones: int,
    max_dur: int,
    store_everything: bool,
    num_mcsim: int,
    rng: np.random.Generator | None,
    seed: int | None,
) -> ScanEngine:
    return ScanEngine(
        counts=counts,
        baselines=baselines,
        overdisp=overdisp,
        zones=zones,
        zone_lengths=zone_lengths,
        num_locs=num_locs,
        num_zones=num_zones,
        max_dur=max_dur,
        store_everything=store_everything,
        num_mcsim=num_mcsim,
        model=model,
        rng=rng if rng is not None else np.random.default_rng(seed),
    )


def scan_eb_negbin(
    counts: np.ndarray,
    baselines: np.ndarray,
    overdisp: np.ndarray,
    zones: np.ndarray,
    zone_lengths: np.ndarray,
    num_locs: int,
    num_zones: int,
    max_dur: int,
    store_everything: bool,
    num_mcsim: int,
    score_hotspot: bool,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> dict[str, pd.DataFrame]:
    """Expectation-based negative binomial scan with Monte Carlo replicates."""
    engine = _build_engine(
        eb_negbin_model(score_hotspot),
        counts,
        baselines,
        overdisp,
        zones,
        zone_lengths,
        num_locs,
        num_zones,
        max_dur,
        store_everything,
        num_mcsim,
        rng,
        seed,
    )
    return run_engine(engine)


def scan_eb_poisson(
    counts: np.ndarray,
    baselines: np.ndarray,
    zones: np.ndarray,
    zone_lengths: np.ndarray,
    num_locs: int,
    num_zones: int,
    max_dur: int,
    store_everything: bool,
    num_mcsim: int,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> dict[str, pd.DataFrame]:
    """Expectation-based Poisson scan with Monte Carlo replicates."""
    engine = _build_engine(
        eb_poisson_model(),
        counts,
        baselines,
        None,
        zones,
        zone_lengths,
        num_locs,
        num_zones,
        max_dur,
        store_everything,
        num_mcsim,
        rng,
        seed,
    )
    return run_engine(engine)
