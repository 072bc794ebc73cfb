import itertools

import pytest

from pydynasty.config import COMPONENTS, CompositeWeights
from pydynasty.valuation.ranking import (
    ComponentValues,
    composite_score,
    norm_stats,
    normalize_components,
    percentile_rank,
    rank_order,
    round_half_up,
    value_rank,
)


def test_percentile_counts_strictly_lower_teams():
    values = [10.0, 20.0, 20.0, 40.0]

    assert [percentile_rank(v, values) for v in values] == pytest.approx([0.0, 100 / 3, 100 / 3, 100.0])


def test_single_team_is_hundredth_percentile():
    assert percentile_rank(5.0, [5.0]) == 100.0
    scores = normalize_components([ComponentValues(1, 2, 3, 4, 5)])
    assert scores[0] == ComponentValues(100.0, 100.0, 100.0, 100.0, 100.0)


def test_percentiles_span_full_range_with_distinct_values():
    raw = [ComponentValues(float(i), 0, 0, 0, 0) for i in (3, 9, 1, 5)]

    starters = [entry.starters for entry in normalize_components(raw)]

    assert min(starters) == 0.0
    assert max(starters) == 100.0


def _dominates(a: ComponentValues, b: ComponentValues) -> bool:
    return all(a.get(name) >= b.get(name) for name in COMPONENTS)


@pytest.mark.parametrize(
    "weights",
    [CompositeWeights(), CompositeWeights(starters=1, bench=0, picks=3, window=0, age=2)],
)
def test_composite_is_monotonic_over_dominating_pairs(weights):
    raw = [ComponentValues(*combo) for combo in itertools.product((10.0, 20.0, 30.0), repeat=5)]

    composites = [composite_score(s, weights) for s in normalize_components(raw)]

    checked = 0
    for i, j in itertools.permutations(range(len(raw)), 2):
        if _dominates(raw[i], raw[j]):
            assert composites[i] >= composites[j]
            checked += 1
    assert checked > 0


def test_composite_rounds_halves_up():
    scores = ComponentValues(62.25, 62.25, 62.25, 62.25, 62.25)

    assert composite_score(scores, CompositeWeights()) == 62.3
    assert round_half_up(0.05) == 0.1


def test_composite_divides_by_weight_total():
    scores = ComponentValues(100.0, 0.0, 0.0, 0.0, 0.0)
    assert composite_score(scores, CompositeWeights(starters=1, bench=1, picks=1, window=1, age=0)) == 25.0


def test_rank_order_breaks_ties_by_starters_value():
    assert rank_order([50.0, 60.0, 50.0], [10.0, 5.0, 20.0]) == [1, 2, 0]


def test_value_rank_is_one_based_descending():
    assert value_rank([5.0, 9.0, 5.0]) == [2, 1, 3]


def test_norm_stats():
    stats = norm_stats([1.0, 3.0, 10.0])
    assert (stats.min, stats.max, stats.median) == (1.0, 10.0, 3.0)
