"""
Unit tests for QuestionSelector.

Tests:
- Fallback rules (exact, Bloom only, difficulty only, anything left)
- Lowest-id tie-break
- No repeats within a session and exhaustion
- NO_CONTENT for empty and unknown concepts
"""

import pytest

from adaptive_practice.adaptive.progression import CEILING, START, Target
from adaptive_practice.adaptive.question_selector import (
    MatchRule,
    QuestionSelector,
    SelectionOutcome,
    choose,
)
from adaptive_practice.core.models import BloomLevel, Difficulty

CONCEPT = "c-photosynthesis"
STUDENT = "student-1"

R, C, AP, AN = BloomLevel.ordered()
E, M, H = Difficulty.ordered()


class TestChoose:
    """Matching rules applied to a fixed candidate list."""

    def test_exact_match_wins(self, question_factory):
        candidates = [question_factory("q11", C, M), question_factory("q10", C, E)]
        question, rule = choose(candidates, Target(C, E))
        assert question.id == "q10"
        assert rule is MatchRule.EXACT

    def test_exact_ties_go_to_lowest_id(self, question_factory):
        candidates = [question_factory("q10-b", C, E), question_factory("q10-a", C, E)]
        question, _ = choose(candidates, Target(C, E))
        assert question.id == "q10-a"

    def test_bloom_only(self, question_factory):
        candidates = [
            question_factory("q20", AP, E),
            question_factory("q12", C, H),
            question_factory("q11", C, M),
        ]
        question, rule = choose(candidates, Target(C, E))
        assert question.id == "q11"
        assert rule is MatchRule.BLOOM

    def test_difficulty_only(self, question_factory):
        candidates = [question_factory("q01", R, M), question_factory("q30", AN, E), question_factory("q20", AP, E)]
        question, rule = choose(candidates, Target(C, E))
        assert question.id == "q20"
        assert rule is MatchRule.DIFFICULTY

    def test_anything_left(self, question_factory):
        candidates = [question_factory("q32", AN, H), question_factory("q01", R, M)]
        question, rule = choose(candidates, Target(C, E))
        assert question.id == "q01"
        assert rule is MatchRule.ANY

    def test_no_candidates(self):
        assert choose([], START) is None


class TestSelect:
    """Selection against the in-memory ladder pool."""

    @pytest.mark.asyncio
    async def test_without_session_starts_at_recall_easy(self, service):
        selection = await service.select_next(STUDENT, CONCEPT)

        assert selection.outcome is SelectionOutcome.SELECTED
        assert selection.target == START
        assert selection.question.id == "q00"
        assert selection.attempted == 0
        assert selection.pool_size == 12

    @pytest.mark.asyncio
    async def test_correct_then_incorrect_falls_back_to_bloom_match(self, service):
        await service.start_session(STUDENT, "ch-1")
        await service.record_and_score(None, "q00", True)

        selection = await service.select_next(STUDENT, CONCEPT)
        assert selection.target == Target(C, E)
        assert selection.question.id == "q10"

        await service.record_and_score(None, "q10", False)
        selection = await service.select_next(STUDENT, CONCEPT)

        # Recall/Easy is used up, so the next Recall question is chosen
        assert selection.target == Target(R, E)
        assert selection.rule is MatchRule.BLOOM
        assert selection.question.id == "q01"

    @pytest.mark.asyncio
    async def test_incorrect_at_start_does_not_repeat(self, service):
        await service.start_session(STUDENT, "ch-1")
        await service.record_and_score(None, "q00", False)

        selection = await service.select_next(STUDENT, CONCEPT)
        assert selection.target == START
        assert selection.question.id != "q00"

    @pytest.mark.asyncio
    async def test_all_correct_walks_the_ladder_then_exhausts(self, service):
        await service.start_session(STUDENT, "ch-1")

        seen = []
        for _ in range(12):
            selection = await service.select_next(STUDENT, CONCEPT)
            assert selection.rule is MatchRule.EXACT
            seen.append(selection.question.id)
            await service.record_and_score(None, selection.question.id, True)

        assert seen[:5] == ["q00", "q10", "q20", "q30", "q01"]
        assert seen[-1] == "q32"

        selection = await service.select_next(STUDENT, CONCEPT)
        assert selection.outcome is SelectionOutcome.EXHAUSTED
        assert selection.is_complete
        assert selection.question is None
        assert selection.attempted == 12
        assert await service.compute_next_question(STUDENT, CONCEPT) is None

    @pytest.mark.asyncio
    async def test_new_session_starts_over(self, service):
        await service.start_session(STUDENT, "ch-1")
        await service.record_and_score(None, "q00", True)
        await service.end_session()

        await service.start_session(STUDENT, "ch-1")
        question = await service.compute_next_question(STUDENT, CONCEPT)
        assert question.id == "q00"

    @pytest.mark.asyncio
    async def test_started_session_snapshot_sees_later_attempts(self, service):
        """The Session returned by start_session stays usable for every round."""
        session = await service.start_session(STUDENT, "ch-1")

        seen = []
        for _ in range(12):
            question = await service.compute_next_question(STUDENT, CONCEPT, session)
            seen.append(question.id)
            await service.record_and_score(session, question.id, True, "a")

        assert len(set(seen)) == 12
        assert seen[:5] == ["q00", "q10", "q20", "q30", "q01"]

        selection = await service.select_next(STUDENT, CONCEPT, session)
        assert selection.outcome is SelectionOutcome.EXHAUSTED

    @pytest.mark.asyncio
    async def test_started_session_snapshot_follows_wrong_answers(self, service):
        session = await service.start_session(STUDENT, "ch-1")
        await service.record_and_score(session, "q00", True)
        await service.record_and_score(session, "q10", False)

        selection = await service.select_next(STUDENT, CONCEPT, session)
        assert selection.target == Target(R, E)
        assert selection.rule is MatchRule.BLOOM
        assert selection.question.id == "q01"
        assert selection.attempted == 2

    @pytest.mark.asyncio
    async def test_other_students_session_is_ignored(self, service):
        session = await service.start_session(STUDENT, "ch-1")
        await service.record_and_score(session, "q00", True)

        for given in (None, session):
            selection = await service.select_next("student-2", CONCEPT, given)
            assert selection.target == START
            assert selection.question.id == "q00"
            assert selection.attempted == 0

    @pytest.mark.asyncio
    async def test_empty_concept_has_no_content(self, service):
        selection = await service.select_next(STUDENT, "c-empty")
        assert selection.outcome is SelectionOutcome.NO_CONTENT
        assert selection.question is None

    @pytest.mark.asyncio
    async def test_unknown_concept_has_no_content(self, service):
        selection = await service.select_next(STUDENT, "c-missing")
        assert selection.outcome is SelectionOutcome.NO_CONTENT

    @pytest.mark.asyncio
    async def test_custom_policy(self, service):
        selector = QuestionSelector(service.pool, service.ledger, policy=lambda last, ok: CEILING)
        question = await selector.next_question(STUDENT, CONCEPT)
        assert question.id == "q32"
