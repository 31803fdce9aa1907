from __future__ import annotations

import numpy as np


def negbin_parameters(mu: np.ndarray, omega: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Map (mean, overdispersion) onto numpy's (n, p) negative binomial parameters.

    With ``n = omega`` and ``p = omega / (omega + mu)`` the draw has mean ``mu``
    and variance ``mu + mu**2 / omega``.
    """
    n = np.asarray(omega, dtype=float)
    mean = np.asarray(mu, dtype=float)
    return n, n / (n + mean)


def draw_negbin(
    rng: np.random.Generator,
    mu: np.ndarray | float,
    omega: np.ndarray | float | None,
) -> np.ndarray:
    n, p = negbin_parameters(np.asarray(mu), np.asarray(omega))
    return rng.negative_binomial(n, p).astype(int)


def draw_poisson(
    rng: np.random.Generator,
    mu: np.ndarray | float,
    omega: np.ndarray | float | None = None,
) -> np.ndarray:
    return rng.poisson(lam=np.asarray(mu, dtype=float)).astype(int)
