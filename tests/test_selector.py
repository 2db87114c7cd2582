"""
Tests for recency-bounded random selection.
"""

import random

import pytest

from mealpicker import selector as selector_module
from mealpicker.recency import RecencyCache
from mealpicker.selector import EmptyCandidateList, select, select_and_remember

from conftest import ScriptedRandom


class TestSelect:
    """Core selection policy."""

    def test_empty_candidates_raises(self):
        with pytest.raises(EmptyCandidateList):
            select([], RecencyCache(2))

    def test_empty_candidate_list_is_value_error(self):
        with pytest.raises(ValueError):
            select([], RecencyCache(2))

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError):
            select(["A"], RecencyCache(2), max_attempts=0)

    def test_returns_member_of_candidates(self):
        rng = random.Random(1234)
        candidates = ["A", "B", "C", "D", "E"]
        cache = RecencyCache(3)
        for _ in range(200):
            assert select(candidates, cache, rng=rng) in candidates

    def test_skips_cached_ids(self):
        """Cached draws are retried until an uncached id comes up."""
        cache = RecencyCache(5)
        cache.add("A")
        cache.add("B")
        rng = ScriptedRandom([0, 1, 0, 2])

        assert select(["A", "B", "C"], cache, max_attempts=5, rng=rng) == "C"
        assert rng.calls == 4
        assert len(cache) == 2  # select itself never inserts

    def test_single_candidate_uncached(self):
        cache = RecencyCache(2)
        rng = ScriptedRandom([0])
        assert select(["X"], cache, max_attempts=5, rng=rng) == "X"
        assert rng.calls == 1

    def test_exhaustion_clears_cache_and_returns_final_draw(self):
        cache = RecencyCache(2)
        cache.add("A")
        cache.add("B")
        rng = ScriptedRandom([0, 1, 0, 1, 0, 1])

        result = select(["A", "B"], cache, max_attempts=5, rng=rng)

        assert result == "B"  # sixth draw, returned unconditionally
        assert rng.calls == 6
        assert len(cache) == 0

    def test_duplicates_are_not_collapsed(self):
        """Index draws map straight onto the list, duplicates included."""
        cache = RecencyCache(2)
        rng = ScriptedRandom([2])
        assert select(["A", "B", "A"], cache, rng=rng) == "A"

    def test_zero_capacity_is_pure_random(self):
        cache = RecencyCache(0)
        rng = ScriptedRandom([1, 1, 1])
        for _ in range(3):
            assert select_and_remember(["A", "B"], cache, rng=rng) == "B"
        assert len(cache) == 0


class TestSelectAndRemember:
    """Post-selection insertion and the worked scenarios."""

    def test_scenario_empty_cache(self):
        cache = RecencyCache(2)
        result = select_and_remember(["A", "B", "C"], cache, max_attempts=5, rng=random.Random(7))
        assert result in ("A", "B", "C")
        assert list(cache) == [result]

    def test_scenario_full_cache_resets(self):
        cache = RecencyCache(2)
        cache.add("A")
        cache.add("B")
        result = select_and_remember(["A", "B"], cache, max_attempts=5, rng=random.Random(7))
        assert result in ("A", "B")
        assert len(cache) == 1
        assert result in cache

    def test_scenario_single_candidate(self):
        cache = RecencyCache(10)
        assert select_and_remember(["X"], cache, max_attempts=5) == "X"

    def test_no_repeats_until_pool_exhausted(self):
        """With room in the cache, every candidate appears before any repeat."""
        candidates = ["A", "B", "C", "D"]
        cache = RecencyCache(10)
        rng = random.Random(42)

        picks = [select_and_remember(candidates, cache, max_attempts=100, rng=rng) for _ in range(4)]

        assert sorted(picks) == candidates

    def test_cache_bounded_across_many_selections(self):
        candidates = [str(i) for i in range(30)]
        cache = RecencyCache(5)
        rng = random.Random(3)
        for _ in range(100):
            select_and_remember(candidates, cache, rng=rng)
            assert len(cache) <= 5

    def test_records_selection_metrics(self):
        logger = selector_module.logger
        before = dict(logger.metrics)
        cache = RecencyCache(1)
        cache.add("A")

        select_and_remember(["A"], cache, max_attempts=2)

        assert logger.metrics["recipes_selected"] == before["recipes_selected"] + 1
        assert logger.metrics["selector_resets"] == before["selector_resets"] + 1
