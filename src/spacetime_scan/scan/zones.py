from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def flatten_zones(zones: Sequence[Sequence[int]]) -> tuple[np.ndarray, np.ndarray]:
    """Concatenate zones into a flat id array plus a per-zone length table."""
    lengths = np.array([len(zone) for zone in zones], dtype=int)
    if not len(zones):
        return np.array([], dtype=int), lengths
    flat = np.concatenate([np.asarray(zone, dtype=int) for zone in zones])
    return flat, lengths


def split_zones(zones: np.ndarray, zone_lengths: np.ndarray) -> list[np.ndarray]:
    """Inverse of ``flatten_zones``: one 0-based location id array per zone."""
    flat = np.asarray(zones, dtype=int)
    lengths = np.asarray(zone_lengths, dtype=int)
    if lengths.size == 0:
        return []
    offsets = np.cumsum(lengths)[:-1]
    return [part.copy() for part in np.split(flat, offsets)]
