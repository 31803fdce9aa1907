from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from spacetime_scan.scan.sampling import draw_negbin, draw_poisson
from spacetime_scan.scan.scores import score_emerging, score_hotspot, score_poisson

ScoreFunction = Callable[[np.ndarray, np.ndarray, np.ndarray | None, int], float]
SampleFunction = Callable[[np.random.Generator, np.ndarray, np.ndarray | None], np.ndarray]


@dataclass(frozen=True)
class ScanModel:
    """Scoring and null sampling plugged into the shared scan enumeration."""

    name: str
    score: ScoreFunction
    draw_sample: SampleFunction


def eb_negbin_model(score_hotspot_variant: bool = True) -> ScanModel:
    if score_hotspot_variant:
        return ScanModel(name="eb_negbin_hotspot", score=score_hotspot, draw_sample=draw_negbin)
    return ScanModel(name="eb_negbin_emerging", score=score_emerging, draw_sample=draw_negbin)


def eb_poisson_model() -> ScanModel:
    return ScanModel(name="eb_poisson", score=score_poisson, draw_sample=draw_poisson)
