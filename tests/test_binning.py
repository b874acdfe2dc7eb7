import numpy as np
import pytest
from deviate_toolkit import Bin, WeightedBins


def test_empty_bins_return_no_action() -> None:
    bins = WeightedBins()

    assert bins.num_bins == 0
    assert bins.next_action() is None
    assert bins.create([]) is False


def test_singleton_bin_always_selected() -> None:
    bins = WeightedBins()

    assert bins.create([Bin(100, "blah")]) is True
    assert bins.num_bins == 1
    assert bins.next_action() == "blah"


def test_percentages_must_total_one_hundred() -> None:
    bins = WeightedBins()
    bins.create([Bin(100, "keep")])

    assert bins.create([Bin(60, "blah"), Bin(45, "blah2")]) is False
    assert bins.num_bins == 0
    assert bins.next_action() is None


def test_bounds_are_cumulative_in_decreasing_share() -> None:
    bins = WeightedBins()
    created = bins.create(
        [Bin(10, "action4"), Bin(50, "action1"), Bin(20, "action2"), Bin(20, "action3")]
    )

    assert created is True
    assert bins.num_bins == 4
    assert bins.actions == ("action1", "action2", "action3", "action4")
    assert bins.bounds == pytest.approx((0.5, 0.7, 0.9, 1.0))
    assert bins.bounds[-1] == 1.0


def test_actions_follow_their_percentages() -> None:
    draws = iter([0.2, 0.95, 0.85, 0.0])
    bins = WeightedBins(uniform=lambda: next(draws))
    bins.create([Bin(10, "rare"), Bin(90, "common")])

    assert [bins.next_action() for _ in range(4)] == ["common", "rare", "common", "common"]


def test_selection_frequencies_track_percentages() -> None:
    rng = np.random.default_rng(3)
    bins = WeightedBins(uniform=lambda: float(rng.random()))
    bins.create([Bin(50, "a"), Bin(20, "b"), Bin(20, "c"), Bin(10, "d")])

    counts = {"a": 0, "b": 0, "c": 0, "d": 0}
    for _ in range(10000):
        counts[bins.next_action()] += 1

    assert counts["a"] > counts["b"]
    assert counts["a"] > counts["c"]
    assert counts["b"] > counts["d"]
    assert abs(counts["a"] / 10000 - 0.5) < 0.03


def test_clear_removes_all_bins() -> None:
    bins = WeightedBins()
    bins.create([Bin(60, "x"), Bin(40, "y")])
    bins.clear()

    assert bins.num_bins == 0
    assert bins.actions == ()
