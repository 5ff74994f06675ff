"""
Tests for the aggregator (counts, ranking, percentages, maxima)
"""
import pandas as pd
import pytest

from catalog_pipeline.transform.aggregate import (
    group_count,
    longest_by_metric,
    percentage_by_group,
    round_half_up,
    top_n_per_partition,
)


@pytest.fixture
def items():
    return pd.DataFrame({
        "kind": ["Movie", "Series", "Movie", "Movie", "Series", "Movie"],
        "rating": ["PG", "TV-MA", "R", "R", "TV-14", "PG"],
        "minutes": [90, None, 120, 45, None, 120],
    })


class TestGroupCount:
    def test_first_seen_order(self, items):
        counts = group_count(items, "rating")
        assert list(counts.index) == ["PG", "TV-MA", "R", "TV-14"]
        assert counts.tolist() == [2, 1, 2, 1]

    def test_counts_sum_to_items(self, items):
        assert group_count(items, "kind").sum() == len(items)

    def test_sort_desc_is_stable(self, items):
        counts = group_count(items, "rating", sort_desc=True)
        assert list(counts.items()) == [("PG", 2), ("R", 2), ("TV-MA", 1), ("TV-14", 1)]

    def test_top_n(self, items):
        counts = group_count(items, "rating", sort_desc=True, top_n=1)
        assert list(counts.items()) == [("PG", 2)]

    def test_callable_key(self, items):
        counts = group_count(items, lambda df: df["rating"].str.startswith("TV"))
        assert dict(counts) == {False: 4, True: 2}

    def test_missing_keys_do_not_count(self):
        df = pd.DataFrame({"rating": ["PG", None, "PG"]})
        assert dict(group_count(df, "rating")) == {"PG": 2}

    def test_empty(self, items):
        assert group_count(items.iloc[0:0], "rating").empty


class TestTopNPerPartition:
    def test_most_common_per_partition(self, items):
        ranked = top_n_per_partition(items, "kind", "rating", 1)
        # PG and R tie for movies; PG was seen first
        assert ranked == {"Movie": [("PG", 2)], "Series": [("TV-MA", 1)]}

    def test_never_more_than_n_and_sorted(self, items):
        ranked = top_n_per_partition(items, "kind", "rating", 2)
        for entries in ranked.values():
            assert len(entries) <= 2
            counts = [c for _, c in entries]
            assert counts == sorted(counts, reverse=True)
        assert ranked["Movie"] == [("PG", 2), ("R", 2)]

    def test_empty(self, items):
        assert top_n_per_partition(items.iloc[0:0], "kind", "rating", 3) == {}


class TestPercentageByGroup:
    def test_rounding_half_up(self):
        df = pd.DataFrame({"year": [2019] + [2020] * 7})
        shares = percentage_by_group(df, "year")
        # 1/8 = 12.5, 7/8 = 87.5
        assert dict(shares) == {2019: 12.5, 2020: 87.5}

    def test_thirds(self):
        df = pd.DataFrame({"year": [2019, 2020, 2021]})
        shares = percentage_by_group(df, "year")
        assert shares.tolist() == [33.33, 33.33, 33.33]
        assert shares.sum() <= 100.0

    def test_denominator_predicate(self):
        df = pd.DataFrame({"year": [2019, 2019, None, 2020]})
        shares = percentage_by_group(df, "year", denominator=lambda d: d["year"].notna())
        assert dict(shares) == {2019.0: 66.67, 2020.0: 33.33}

    def test_zero_denominator_gives_zero(self):
        df = pd.DataFrame({"year": [2019, 2020]})
        shares = percentage_by_group(df, "year", denominator=lambda d: d["year"] > 3000)
        assert shares.tolist() == [0.0, 0.0]

    def test_empty(self):
        assert percentage_by_group(pd.DataFrame({"year": []}), "year").empty


class TestLongestByMetric:
    def test_returns_all_ties(self, items):
        longest = longest_by_metric(items, "minutes")
        assert len(longest) == 2
        assert (longest["minutes"] == 120).all()

    def test_no_metric_gives_empty(self, items):
        assert longest_by_metric(items[items["kind"] == "Series"], "minutes").empty


@pytest.mark.parametrize("value,expected", [
    (0.125, 0.13),
    (2.675, 2.68),
    (33.333333, 33.33),
    (66.665, 66.67),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
