"""
Tests for aggregation, ranking and the merge sort behind it.
"""

import itertools
import random

import pytest

from stormharm.aggregate import aggregate, grand_total
from stormharm.dsa import merge_sort
from stormharm.models import AggregateRow
from stormharm.ranking import rank, top


@pytest.fixture
def mixed_events(event):
    return [
        event("TSTM WIND", fatalities=1, injuries=4),
        event("THUNDERSTORM WIND", fatalities=2, injuries=0),
        event("HEAT", fatalities=7, injuries=1),
        event("TSTM WIND", fatalities=0, injuries=3),
        event("HEAT", fatalities=1, injuries=None),
        event("Heat", fatalities=1, injuries=0),
    ]


class TestAggregate:

    def test_groups_in_first_seen_order(self, mixed_events):
        rows = aggregate(mixed_events, "fatalities")
        assert [r.event_type for r in rows] == ["TSTM WIND", "THUNDERSTORM WIND", "HEAT", "Heat"]
        assert [r.total for r in rows] == [1, 2, 8, 1]

    def test_near_duplicate_labels_stay_distinct(self, mixed_events):
        labels = {r.event_type for r in aggregate(mixed_events, "injuries")}
        assert {"TSTM WIND", "THUNDERSTORM WIND", "HEAT", "Heat"} == labels

    def test_missing_values_are_skipped(self, mixed_events):
        rows = {r.event_type: r.total for r in aggregate(mixed_events, "injuries")}
        assert rows["HEAT"] == 1

    def test_group_with_only_missing_values_is_absent(self, event):
        rows = aggregate([event("FOG", injuries=None), event("HAIL", injuries=2)], "injuries")
        assert [r.as_tuple() for r in rows] == [("HAIL", 2)]

    def test_order_independent(self, mixed_events):
        expected = {r.as_tuple() for r in aggregate(mixed_events, "fatalities")}
        for perm in itertools.permutations(mixed_events):
            assert {r.as_tuple() for r in aggregate(perm, "fatalities")} == expected

    def test_totals_conserved(self, event):
        rng = random.Random(7)
        labels = ["A", "B", "C", "D"]
        events = [event(rng.choice(labels), fatalities=rng.randint(0, 50)) for _ in range(200)]
        rows = aggregate(events, "fatalities")
        assert grand_total(rows) == sum(e.fatalities for e in events)

    def test_empty_input(self):
        assert aggregate([], "fatalities") == []

    def test_unknown_metric(self, mixed_events):
        with pytest.raises(ValueError):
            aggregate(mixed_events, "casualties")

    def test_accepts_generator(self, event):
        rows = aggregate((event("HAIL", fatalities=i) for i in range(4)), "fatalities")
        assert rows == [AggregateRow("HAIL", 6)]


class TestRank:

    @pytest.fixture
    def rows(self):
        return [
            AggregateRow("A", 3),
            AggregateRow("B", 10),
            AggregateRow("C", 3),
            AggregateRow("D", 0),
            AggregateRow("E", 10),
        ]

    def test_descending(self, rows):
        ranked = rank(rows)
        assert all(a.total >= b.total for a, b in zip(ranked, ranked[1:]))

    def test_ties_keep_group_order(self, rows):
        assert [r.event_type for r in rank(rows)] == ["B", "E", "A", "C", "D"]

    def test_ascending_is_stable_too(self, rows):
        assert [r.event_type for r in rank(rows, descending=False)] == ["D", "A", "C", "B", "E"]

    def test_input_not_modified(self, rows):
        before = list(rows)
        rank(rows)
        assert rows == before

    def test_empty(self):
        assert rank([]) == []

    @pytest.mark.parametrize("n", [0, 1, 3, 5, 50])
    def test_top_is_prefix(self, rows, n):
        ranked = rank(rows)
        out = top(ranked, n)
        assert len(out) == min(n, len(rows))
        assert out == ranked[:len(out)]

    def test_top_of_empty(self):
        assert top([], 10) == []

    def test_top_negative(self, rows):
        with pytest.raises(ValueError):
            top(rows, -1)


class TestMergeSort:

    def test_matches_sorted(self):
        rng = random.Random(3)
        data = [rng.randint(0, 20) for _ in range(100)]
        assert merge_sort(data) == sorted(data)
        assert merge_sort(data, reverse=True) == sorted(data, reverse=True)

    def test_stable_descending(self):
        pairs = [(1, "a"), (2, "b"), (1, "c"), (2, "d")]
        assert merge_sort(pairs, key=lambda p: p[0], reverse=True) == [(2, "b"), (2, "d"), (1, "a"), (1, "c")]
