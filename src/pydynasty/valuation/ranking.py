"""Percentile normalization and weighted composite ranking across a league."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from statistics import median
from typing import Dict, Iterable, List, Sequence

from pydynasty.config import COMPONENTS, CompositeWeights


@dataclass(frozen=True)
class ComponentValues:
    """Raw per-team inputs, or their percentile scores, one per component."""

    starters: float
    bench: float
    picks: float
    window: float
    age: float

    def get(self, name: str) -> float:
        return float(getattr(self, name))


@dataclass(frozen=True)
class NormStats:
    min: float
    max: float
    median: float


def percentile_rank(value: float, values: Sequence[float]) -> float:
    """Share of the other teams with a strictly lower value, scaled to 0-100.

    A league of one team puts it at the 100th percentile.
    """

    n = len(values)
    if n <= 1:
        return 100.0
    lower = sum(1 for other in values if other < value)
    return lower / (n - 1) * 100.0


def normalize_components(raw: Sequence[ComponentValues]) -> List[ComponentValues]:
    columns: Dict[str, List[float]] = {name: [entry.get(name) for entry in raw] for name in COMPONENTS}
    return [
        ComponentValues(**{name: percentile_rank(entry.get(name), columns[name]) for name in COMPONENTS})
        for entry in raw
    ]


def round_half_up(value: float, ndigits: int = 1) -> float:
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def composite_score(scores: ComponentValues, weights: CompositeWeights) -> float:
    total = sum(scores.get(name) * getattr(weights, name) for name in COMPONENTS)
    return round_half_up(total / weights.total)


def rank_order(composites: Sequence[float], starters_values: Sequence[float]) -> List[int]:
    """Indices ordered by composite desc, then raw starters value desc.

    Remaining ties keep input order.
    """

    return sorted(
        range(len(composites)),
        key=lambda idx: (-composites[idx], -starters_values[idx], idx),
    )


def value_rank(values: Sequence[float]) -> List[int]:
    """1-based rank for each value (1 = highest); ties keep input order."""

    order = sorted(range(len(values)), key=lambda idx: (-values[idx], idx))
    ranks = [0] * len(values)
    for rank, idx in enumerate(order, start=1):
        ranks[idx] = rank
    return ranks


def norm_stats(values: Iterable[float]) -> NormStats:
    values = list(values)
    if not values:
        return NormStats(min=0.0, max=0.0, median=0.0)
    return NormStats(min=min(values), max=max(values), median=float(median(values)))


def component_stats(raw: Sequence[ComponentValues]) -> Dict[str, NormStats]:
    return {field.name: norm_stats(entry.get(field.name) for entry in raw) for field in fields(ComponentValues)}
