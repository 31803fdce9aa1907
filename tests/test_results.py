from __future__ import annotations

import numpy as np
import pandas as pd

from spacetime_scan.results import RESULT_COLUMNS, result_frame, scan_eb_negbin, scan_eb_poisson
from spacetime_scan.scan.storage import ResultArrays
from spacetime_scan.scan.zones import flatten_zones


def _inputs() -> dict[str, object]:
    baselines = np.array(
        [
            [2.0, 1.5, 3.0, 2.5],
            [2.0, 1.5, 3.0, 2.5],
            [2.1, 1.4, 2.9, 2.4],
        ]
    )
    counts = np.array([[9, 1, 3, 2], [6, 2, 2, 3], [2, 1, 3, 2]])
    zones, zone_lengths = flatten_zones([[0], [1], [2], [3], [0, 1], [2, 3]])
    return {
        "counts": counts,
        "baselines": baselines,
        "zones": zones,
        "zone_lengths": zone_lengths,
        "num_locs": 4,
        "num_zones": 6,
        "max_dur": 3,
    }


def test_result_frame_reports_internal_first_window_as_one_one() -> None:
    arrays = ResultArrays(1)
    arrays.store_best(0, 2.5, 0, 0)

    frame = result_frame(arrays)
    assert list(frame.columns) == RESULT_COLUMNS
    assert frame.to_dict(orient="records") == [{"zone": 1, "duration": 1, "score": 2.5}]
    assert pd.api.types.is_integer_dtype(frame["zone"])
    assert pd.api.types.is_integer_dtype(frame["duration"])
    assert pd.api.types.is_float_dtype(frame["score"])


def test_scan_eb_negbin_returns_observed_and_simulated_tables() -> None:
    inputs = _inputs()
    overdisp = np.full_like(inputs["baselines"], 2.0)

    tables = scan_eb_negbin(
        overdisp=overdisp,
        store_everything=False,
        num_mcsim=25,
        score_hotspot=True,
        seed=8,
        **inputs,
    )

    assert set(tables) == {"observed", "simulated"}
    observed = tables["observed"]
    assert len(observed) == 1
    assert observed.loc[0, "zone"] == 1
    assert observed.loc[0, "duration"] == 1
    assert observed.loc[0, "score"] == 3.5
    assert len(tables["simulated"]) == 25
    assert list(tables["simulated"].columns) == RESULT_COLUMNS


def test_scan_eb_negbin_exhaustive_and_emerging_variants() -> None:
    inputs = _inputs()
    overdisp = np.full_like(inputs["baselines"], 2.0)

    hotspot = scan_eb_negbin(
        overdisp=overdisp, store_everything=True, num_mcsim=0, score_hotspot=True, **inputs
    )
    emerging = scan_eb_negbin(
        overdisp=overdisp, store_everything=True, num_mcsim=0, score_hotspot=False, **inputs
    )

    assert len(hotspot["observed"]) == 6 * 3
    assert hotspot["simulated"].empty
    # single-step windows coincide, longer windows differ
    single_step = hotspot["observed"]["duration"] == 1
    np.testing.assert_allclose(
        hotspot["observed"].loc[single_step, "score"],
        emerging["observed"].loc[single_step, "score"],
    )
    assert not np.allclose(
        hotspot["observed"].loc[~single_step, "score"],
        emerging["observed"].loc[~single_step, "score"],
    )


def test_scan_eb_poisson_is_reproducible_with_seed() -> None:
    inputs = _inputs()

    first = scan_eb_poisson(store_everything=False, num_mcsim=10, seed=4, **inputs)
    second = scan_eb_poisson(store_everything=False, num_mcsim=10, seed=4, **inputs)

    assert first["observed"].loc[0, "zone"] == 1
    assert first["observed"].loc[0, "duration"] == 2
    assert first["observed"].loc[0, "score"] > 0.0
    pd.testing.assert_frame_equal(first["simulated"], second["simulated"])
    assert (first["simulated"]["score"] >= 0.0).all()
