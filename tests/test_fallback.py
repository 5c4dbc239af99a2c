"""
Unit Tests for the rule-based fallback selector
"""
import asyncio
import random

import pytest

from papersmith.errors import GenerationCancelled
from papersmith.generation.assembler import WARNING_EMPTY, WARNING_UNDER_TARGET
from papersmith.generation.fallback import build_fallback_paper, select_fallback_questions
from papersmith.models import FallbackReason, GenerationMethod, PaperStatus, Unit


class TestSelectFallbackQuestions:
    """Tests for select_fallback_questions"""

    def test_covers_every_selected_unit(self, config, pool, rng):
        """Test each selected unit gets at least one question"""
        selected = select_fallback_questions(config, pool, rng=rng)

        assert {q.unit_id for q in selected} >= {1, 2}

    @pytest.mark.parametrize("seed", range(10))
    def test_reaches_target_when_pool_is_large_enough(self, config, pool, seed):
        """Test accumulated marks reach the 30 mark target from a 100 mark pool"""
        selected = select_fallback_questions(config, pool, rng=random.Random(seed))

        assert sum(q.marks for q in selected) >= 30

    @pytest.mark.parametrize("seed", range(10))
    def test_selection_is_subset_of_pool(self, make_config, pool, seed):
        """Test selected questions come from the pool and never exceed its marks"""
        config = make_config(total_marks=70)

        selected = select_fallback_questions(config, pool, rng=random.Random(seed))

        ids = [q.id for q in selected]
        assert len(ids) == len(set(ids))
        assert set(ids) <= {q.id for q in pool}
        assert sum(q.marks for q in selected) <= sum(q.marks for q in pool)

    def test_stops_once_target_reached(self, make_config, pool, rng):
        """Test no further question is added after the target is met"""
        config = make_config(total_marks=30)

        selected = select_fallback_questions(config, pool, rng=rng)

        marks_without_last = sum(q.marks for q in selected[:-1])
        assert marks_without_last < 30 or len(selected) <= len(config.units)

    def test_pool_smaller_than_target(self, make_config, pool, rng):
        """Test the whole pool is used when it cannot reach the target"""
        config = make_config(total_marks=500)

        selected = select_fallback_questions(config, pool, rng=rng)

        assert len(selected) == len(pool)
        assert sum(q.marks for q in selected) == 100

    def test_unit_without_questions_is_skipped(self, make_config, units, pool, rng):
        """Test a unit with no available questions does not cause an error"""
        empty_unit = Unit(id=3, course_id=1, unit_number=3, title="Empty")
        config = make_config(units=[*units, empty_unit])

        selected = select_fallback_questions(config, pool, rng=rng)

        assert {q.unit_id for q in selected} >= {1, 2}
        assert 3 not in {q.unit_id for q in selected}

    def test_same_seed_same_selection(self, config, pool):
        """Test an injected random source makes the selection reproducible"""
        first = select_fallback_questions(config, pool, rng=random.Random(7))
        second = select_fallback_questions(config, pool, rng=random.Random(7))

        assert [q.id for q in first] == [q.id for q in second]

    def test_pool_is_not_mutated(self, config, pool, rng):
        """Test the caller's pool keeps its order"""
        before = [q.id for q in pool]

        select_fallback_questions(config, pool, rng=rng)

        assert [q.id for q in pool] == before

    def test_cancelled_between_passes(self, config, pool, rng):
        """Test a set cancellation event stops the selection"""
        cancel = asyncio.Event()
        cancel.set()

        with pytest.raises(GenerationCancelled):
            select_fallback_questions(config, pool, rng=rng, cancel=cancel)


class TestBuildFallbackPaper:
    """Tests for build_fallback_paper"""

    def test_paper_metadata(self, config, pool, rng):
        """Test the fallback paper is final and tagged as fallback"""
        paper = build_fallback_paper(config, pool, rng=rng, reason=FallbackReason.exhausted)

        assert paper.generation_method == GenerationMethod.fallback
        assert paper.status == PaperStatus.final
        assert paper.fallback_reason == FallbackReason.exhausted
        assert paper.requested_total_marks == 30
        assert paper.achieved_total_marks == sum(q.marks for q in paper.questions)
        assert paper.config == config

    def test_empty_pool(self, config, rng):
        """Test an empty pool gives an empty paper without raising"""
        paper = build_fallback_paper(config, [], rng=rng)

        assert paper.questions == []
        assert paper.achieved_total_marks == 0
        assert paper.is_empty
        assert paper.shortfall_marks == 30
        assert paper.warnings == [WARNING_EMPTY, WARNING_UNDER_TARGET]

    def test_no_warnings_when_target_met(self, config, pool, rng):
        """Test a paper meeting the target carries no warnings"""
        paper = build_fallback_paper(config, pool, rng=rng)

        assert paper.warnings == []
        assert paper.shortfall_marks == 0
