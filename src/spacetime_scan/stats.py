from __future__ import annotations

import math

import numpy as np
import pandas as pd
from scipy.stats import gumbel_r


def empirical_tail_p_values(observed: np.ndarray, null_samples: np.ndarray) -> np.ndarray:
    """Compute one-sided empirical tail probabilities with +1 smoothing."""
    if observed.size == 0:
        return np.array([], dtype=float)
    if null_samples.size == 0:
        return np.full(observed.size, np.nan, dtype=float)

    sorted_null = np.sort(null_samples.astype(float))
    n = float(sorted_null.size)
    idx = np.searchsorted(sorted_null, observed.astype(float), side="left")
    tail = sorted_null.size - idx
    return (tail + 1.0) / (n + 1.0)


def mc_pvalue(observed: float, replicates: np.ndarray) -> float:
    """Monte Carlo p-value: share of replicate maxima at least as large as ``observed``."""
    return float(empirical_tail_p_values(np.array([observed], dtype=float), replicates)[0])


def gumbel_pvalue(observed: float, replicates: np.ndarray) -> float:
    """Upper-tail p-value from a Gumbel law fitted to the replicate maxima."""
    values = np.asarray(replicates, dtype=float)
    values = values[np.isfinite(values)]
    if values.size < 2 or np.ptp(values) == 0.0:
        return math.nan
    loc, scale = gumbel_r.fit(values)
    return float(gumbel_r.sf(observed, loc=loc, scale=scale))


def summarize_scan(observed: pd.DataFrame, simulated: pd.DataFrame) -> dict[str, object]:
    """Most likely cluster of the observed table and its calibrated significance."""
    if observed.empty:
        return {
            "n_windows": 0,
            "n_replicates": int(len(simulated)),
            "mlc_zone": None,
            "mlc_duration": None,
            "mlc_score": None,
            "mc_pvalue": None,
            "gumbel_pvalue": None,
        }

    scores = observed["score"].to_numpy(dtype=float)
    # First-found maximum; NaN scores are never selected.
    best = int(np.argmax(np.where(np.isnan(scores), -np.inf, scores)))
    mlc = observed.iloc[best]
    mlc_score = float(mlc["score"])
    replicates = simulated["score"].to_numpy(dtype=float)
    mc = mc_pvalue(mlc_score, replicates)
    gumbel = gumbel_pvalue(mlc_score, replicates)
    return {
        "n_windows": int(len(observed)),
        "n_replicates": int(len(simulated)),
        "mlc_zone": int(mlc["zone"]),
        "mlc_duration": int(mlc["duration"]),
        "mlc_score": mlc_score,
        "mc_pvalue": None if math.isnan(mc) else mc,
        "gumbel_pvalue": None if math.isnan(gumbel) else gumbel,
    }
