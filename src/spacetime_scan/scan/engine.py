from __future__ import annotations

import logging

import numpy as np

from spacetime_scan.scan.models import ScanModel
from spacetime_scan.scan.storage import ResultArrays, StoreFunction, observed_arrays
from spacetime_scan.scan.zones import split_zones

LOGGER = logging.getLogger(__name__)


class ScanEngine:
    """Zone x duration scan over a count matrix, plus Monte Carlo replicates.

    Row 0 of every matrix is the most recent time period. Dimensions and
    parameter positivity are the caller's responsibility; ``num_locs`` is
    accepted alongside the zone ids but zones are not checked against it.
    """

    def __init__(
        self,
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
        model: ScanModel,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.counts = _read_only(np.asarray(counts))
        self.baselines = _read_only(np.asarray(baselines, dtype=float))
        self.overdisp = None if overdisp is None else _read_only(np.asarray(overdisp, dtype=float))
        self.zones = split_zones(zones, zone_lengths)
        self.num_zones = int(num_zones)
        self.max_dur = int(max_dur)
        self.store_everything = bool(store_everything)
        self.num_mcsim = max(0, int(num_mcsim))
        self.model = model
        self.rng = rng if rng is not None else np.random.default_rng()

        self.observed = observed_arrays(self.store_everything, self.num_zones, self.max_dur)
        self.simulated = ResultArrays(self.num_mcsim)
        self._store: StoreFunction = (
            self.observed.store_all if self.store_everything else self.observed.store_best
        )

    def run_scan(self) -> None:
        LOGGER.info(
            "Scanning %d zones x %d durations with %s",
            len(self.zones),
            self.max_dur,
            self.model.name,
        )
        self._enumerate(self.counts, self._store)

    def run_mcsim(self) -> None:
        if self.num_mcsim == 0:
            LOGGER.info("Monte Carlo simulation skipped (num_mcsim=0)")
            return
        LOGGER.info("Running %d Monte Carlo replicates with %s", self.num_mcsim, self.model.name)
        for replicate in range(self.num_mcsim):
            synthetic = self.draw_counts()
            self._enumerate(synthetic, self.simulated.replicate_store(replicate))
            LOGGER.debug(
                "Replicate %d best score %.6g", replicate + 1, self.simulated.scores[replicate]
            )

    def draw_counts(self) -> np.ndarray:
        """One synthetic count matrix, each cell drawn from its own null parameters."""
        return self.model.draw_sample(self.rng, self.baselines, self.overdisp)

    def _enumerate(self, counts: np.ndarray, store: StoreFunction) -> None:
        for zone_index, zone in enumerate(self.zones):
            for duration in range(self.max_dur):
                rows = slice(0, duration + 1)
                omega = None if self.overdisp is None else self.overdisp[rows, zone]
                score = self.model.score(
                    counts[rows, zone],
                    self.baselines[rows, zone],
                    omega,
                    duration,
                )
                store(zone_index * self.max_dur + duration, score, zone_index, duration)


def _read_only(values: np.ndarray) -> np.ndarray:
    view = values.view()
    view.flags.writeable = False
    return view
