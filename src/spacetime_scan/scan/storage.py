from __future__ import annotations

from collections.abc import Callable

import numpy as np

StoreFunction = Callable[[int, float, int, int], None]


class ResultArrays:
    """Flat zone/duration/score arrays written by the scan engine.

    Zones and durations are received 0-based and kept 1-based.
    """

    def __init__(self, size: int) -> None:
        self.zones = np.zeros(size, dtype=int)
        self.durations = np.zeros(size, dtype=int)
        self.scores = np.full(size, -np.inf, dtype=float)

    def __len__(self) -> int:
        return int(self.scores.size)

    def reset(self, slot: int) -> None:
        self.zones[slot] = 0
        self.durations[slot] = 0
        self.scores[slot] = -np.inf

    def store_all(self, storage_index: int, score: float, zone: int, duration: int) -> None:
        self.scores[storage_index] = score
        self.zones[storage_index] = zone + 1
        self.durations[storage_index] = duration + 1

    def store_best_at(self, slot: int, score: float, zone: int, duration: int) -> None:
        # Strict comparison: ties keep the first window found and NaN never wins.
        if score > self.scores[slot]:
            self.scores[slot] = score
            self.zones[slot] = zone + 1
            self.durations[slot] = duration + 1

    def store_best(self, storage_index: int, score: float, zone: int, duration: int) -> None:
        self.store_best_at(0, score, zone, duration)

    def replicate_store(self, replicate: int) -> StoreFunction:
        """Bind best-only storage to one simulation replicate's slot."""
        self.reset(replicate)

        def _store(storage_index: int, score: float, zone: int, duration: int) -> None:
            self.store_best_at(replicate, score, zone, duration)

        return _store


def observed_arrays(store_everything: bool, num_zones: int, max_dur: int) -> ResultArrays:
    return ResultArrays(num_zones * max_dur if store_everything else 1)
