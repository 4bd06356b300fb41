"""
Unit tests for the attempt ledger and in-memory repositories.
"""

import pytest

from adaptive_practice.content.pool import QuestionPool
from adaptive_practice.core.errors import (
    ConceptNotFound,
    NoActiveSession,
    QuestionNotFound,
    SessionNotFound,
)
from adaptive_practice.core.models import BloomLevel, Difficulty
from adaptive_practice.sessions.ledger import AttemptLedger

STUDENT = "student-1"


@pytest.fixture
def ledger(content, sessions):
    return AttemptLedger(sessions, QuestionPool(content))


class TestAttemptLedger:
    @pytest.mark.asyncio
    async def test_record_without_session_fails(self, ledger):
        with pytest.raises(NoActiveSession):
            await ledger.record_attempt(None, "q00", True)

    @pytest.mark.asyncio
    async def test_record_into_finished_session_fails(self, ledger):
        session = await ledger.start_session(STUDENT, "ch-1")
        finished = await ledger.end_session()
        assert finished.id == session.id

        with pytest.raises(NoActiveSession):
            await ledger.record_attempt(finished, "q00", True)

    @pytest.mark.asyncio
    async def test_stale_snapshot_of_finished_session_fails(self, ledger, sessions):
        session = await ledger.start_session(STUDENT, "ch-1")
        await ledger.end_session()

        # The snapshot from start_session still reads as active
        assert session.is_active
        with pytest.raises(NoActiveSession):
            await ledger.record_attempt(session, "q00", True)

        stored = await sessions.get_session(session.id)
        assert stored.attempts == ()

    @pytest.mark.asyncio
    async def test_end_without_session_fails(self, ledger):
        with pytest.raises(NoActiveSession):
            await ledger.end_session()

    @pytest.mark.asyncio
    async def test_attempts_append_in_order(self, ledger, sessions):
        session = await ledger.start_session(STUDENT, "ch-1")
        await ledger.record_attempt(None, "q00", True, "a")
        await ledger.record_attempt(None, "q10", False, "b")

        current = ledger.current_session()
        assert [a.question_id for a in current.attempts] == ["q00", "q10"]
        assert current.attempts[1].selected_option_id == "b"

        stored = await sessions.get_session(session.id)
        assert stored.attempts == current.attempts

    @pytest.mark.asyncio
    async def test_attempts_for_concept(self, ledger, content, question_factory):
        content.add_question(question_factory("x1", BloomLevel.RECALL, Difficulty.EASY, concept_id="c-empty"))
        await ledger.start_session(STUDENT, "ch-1")
        await ledger.record_attempt(None, "q00", True)
        await ledger.record_attempt(None, "x1", True)

        session = ledger.current_session()
        attempts = await ledger.attempts_for_concept(session, "c-photosynthesis")
        assert [a.question_id for a in attempts] == ["q00"]
        assert await ledger.attempts_for_concept(None, "c-photosynthesis") == []

    @pytest.mark.asyncio
    async def test_resume_picks_up_open_session(self, content, sessions, ledger):
        session = await ledger.start_session(STUDENT, "ch-1")
        await ledger.record_attempt(None, "q00", True)

        other = AttemptLedger(sessions, QuestionPool(content))
        resumed = await other.resume_session(STUDENT)
        assert resumed.id == session.id
        assert len(resumed.attempts) == 1

        assert await other.resume_session("someone-else") is None


class TestInMemoryRepositories:
    @pytest.mark.asyncio
    async def test_unknown_concept_raises(self, content):
        with pytest.raises(ConceptNotFound):
            await content.get_questions_by_concept("c-missing")

    @pytest.mark.asyncio
    async def test_question_lookup(self, content):
        pool = QuestionPool(content)
        assert (await pool.question_by_id("q00")).id == "q00"
        with pytest.raises(QuestionNotFound):
            await pool.question_by_id("q99")

    def test_question_for_unknown_concept_is_rejected(self, content, question_factory):
        with pytest.raises(ConceptNotFound):
            content.add_question(question_factory("z1", BloomLevel.RECALL, Difficulty.EASY, concept_id="nope"))

    @pytest.mark.asyncio
    async def test_append_to_unknown_session(self, sessions):
        with pytest.raises(SessionNotFound):
            await sessions.append_attempt("missing", "q00", True)

    @pytest.mark.asyncio
    async def test_append_to_finished_session(self, sessions):
        session = await sessions.start_session(STUDENT, "ch-1")
        await sessions.end_session(session.id)

        with pytest.raises(NoActiveSession):
            await sessions.append_attempt(session.id, "q00", True)

    @pytest.mark.asyncio
    async def test_end_session_is_idempotent(self, sessions):
        session = await sessions.start_session(STUDENT, "ch-1")
        first = await sessions.end_session(session.id)
        second = await sessions.end_session(session.id)
        assert first.finished_at == second.finished_at
        assert await sessions.get_current_session(STUDENT) is None

    @pytest.mark.asyncio
    async def test_history_filters_by_concept(self, sessions, history, content, question_factory):
        content.add_question(question_factory("x1", BloomLevel.RECALL, Difficulty.EASY, concept_id="c-empty"))
        session = await sessions.start_session(STUDENT, "ch-1")
        await sessions.append_attempt(session.id, "q00", True)
        await sessions.append_attempt(session.id, "x1", False)

        attempts = await history.get_all_attempts_for_concept_by_student(STUDENT, "c-empty")
        assert [a.question_id for a in attempts] == ["x1"]
        assert len(await history.get_attempts_by_student(STUDENT)) == 2
