import itertools

import pytest

from pydynasty.valuation.archetypes import ARCHETYPES, classify_archetype


def _label(starters_rank, picks_rank, window, prime_years, total=10):
    return classify_archetype(
        starters_rank=starters_rank,
        picks_rank=picks_rank,
        window_score=window,
        avg_prime_years_left=prime_years,
        total_rosters=total,
    ).label


@pytest.mark.parametrize(
    "args, expected",
    [
        ((1, 8, 70.0, 3.0), "all-in-contender"),
        ((1, 2, 70.0, 3.0), "fragile-contender"),
        ((3, 8, 70.0, 1.0), "fragile-contender"),
        ((9, 1, 80.0, 5.0), "rebuilder"),
        ((5, 8, 50.0, 1.0), "rebuilder"),
        ((4, 2, 50.0, 3.5), "productive-struggle"),
        ((7, 2, 50.0, 3.5), "dead-zone"),
        ((2, 8, 60.0, 3.0), "productive-struggle"),
    ],
)
def test_decision_order(args, expected):
    assert _label(*args) == expected


def test_classification_is_idempotent_and_always_labels():
    grid = itertools.product(range(1, 11), range(1, 11), (40.0, 60.0, 61.0, 90.0), (0.0, 1.9, 2.0, 3.0, 6.0))
    for starters_rank, picks_rank, window, prime_years in grid:
        first = classify_archetype(
            starters_rank=starters_rank,
            picks_rank=picks_rank,
            window_score=window,
            avg_prime_years_left=prime_years,
            total_rosters=10,
        )
        second = classify_archetype(
            starters_rank=starters_rank,
            picks_rank=picks_rank,
            window_score=window,
            avg_prime_years_left=prime_years,
            total_rosters=10,
        )
        assert first == second
        assert first.label in ARCHETYPES
        assert first.reasons
