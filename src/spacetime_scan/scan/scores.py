from __future__ import annotations

import numpy as np

# Window arrays are (duration + 1, zone size) slices with row 0 the most recent
# period; ``d`` is the 0-based duration index.


def score_hotspot(y: np.ndarray, mu: np.ndarray, omega: np.ndarray, d: int) -> float:
    """Excess-risk estimate assuming the risk is uniformly elevated in the window."""
    return float(np.sum((y - mu) / omega) / np.sum(mu / omega))


def score_emerging(y: np.ndarray, mu: np.ndarray, omega: np.ndarray, d: int) -> float:
    """Excess-risk estimate for a risk that ramps up toward the present.

    The most recent row carries weight ``d + 1`` and the oldest row weight 1.
    """
    weights = (d + 1.0 - np.arange(d + 1, dtype=float))[:, np.newaxis]
    numerator = np.sum(weights * (y - mu) / omega)
    denominator = np.sum(weights**2 * mu / omega)
    return float(numerator / denominator)


def score_poisson(y: np.ndarray, mu: np.ndarray, omega: np.ndarray | None, d: int) -> float:
    """Expectation-based Poisson log-likelihood ratio for the window totals."""
    observed = float(np.sum(y))
    expected = float(np.sum(mu))
    if observed > expected:
        return float(observed * np.log(observed / expected) + expected - observed)
    return 0.0
