"""
Attempt Ledger.

Session-scoped, append-only record of attempts. Holds the single
"current session" pointer for one student context; everything else lives
in the session repository.
"""
from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from adaptive_practice.content.pool import QuestionPool
from adaptive_practice.core.errors import NoActiveSession
from adaptive_practice.core.models import Attempt, Question, Session
from adaptive_practice.repositories.base import SessionRepository


def attempts_on(attempts: Iterable[Attempt], questions: Iterable[Question]) -> list[Attempt]:
    """Attempts whose question is in the given pool, insertion order kept."""
    question_ids = {question.id for question in questions}
    return [attempt for attempt in attempts if attempt.question_id in question_ids]


class AttemptLedger:
    def __init__(self, sessions: SessionRepository, pool: QuestionPool):
        self.sessions = sessions
        self.pool = pool
        self._current: Session | None = None

    def current_session(self) -> Session | None:
        return self._current

    async def start_session(self, student_id: str, chapter_id: str) -> Session:
        session = await self.sessions.start_session(student_id, chapter_id)
        self._current = session
        logger.info(f"Started session {session.id} for {student_id} (chapter {chapter_id})")
        return session

    async def resume_session(self, student_id: str) -> Session | None:
        """Point at the student's open session in the repository, if one exists."""
        session = await self.sessions.get_current_session(student_id)
        self._current = session
        if session is not None:
            logger.info(f"Resumed session {session.id} with {len(session.attempts)} attempts")
        return session

    async def end_session(self) -> Session:
        if self._current is None:
            raise NoActiveSession()
        finished = await self.sessions.end_session(self._current.id)
        logger.info(f"Ended session {finished.id} after {len(finished.attempts)} attempts")
        self._current = None
        return finished

    async def refresh(self, session: Session | None) -> Session | None:
        """Stored state of a session; callers may hold an older snapshot."""
        if session is None:
            return None
        return await self.sessions.get_session(session.id)

    async def _resolve_session(self, session: Session | None) -> Session:
        stored = await self.refresh(session or self._current)
        if stored is None or not stored.is_active:
            logger.error("Attempt recorded without an active session")
            raise NoActiveSession()
        return stored

    async def record_attempt(
        self,
        session: Session | None,
        question_id: str,
        is_correct: bool,
        selected_option_id: str | None = None,
    ) -> Attempt:
        """
        Append an attempt to a session.

        Args:
            session: Session to append to (None means the current session)
            question_id: Question answered
            is_correct: Whether the answer was correct
            selected_option_id: Option the student picked, if known

        Returns:
            The persisted Attempt

        Raises:
            NoActiveSession: no session given and none current, or the stored
                session is missing or finished
        """
        session = await self._resolve_session(session)
        attempt = await self.sessions.append_attempt(
            session.id, question_id, is_correct, selected_option_id
        )
        if self._current is not None and self._current.id == session.id:
            self._current = session.with_attempt(attempt)
        logger.info(
            f"Recorded attempt {attempt.id} on {question_id}: "
            f"{'correct' if is_correct else 'incorrect'}"
        )
        return attempt

    async def attempts_for_concept(self, session: Session | None, concept_id: str) -> list[Attempt]:
        """Chronological attempts of a session on the concept's questions."""
        session = await self.refresh(session)
        if session is None:
            return []
        questions = await self.pool.questions_for_concept(concept_id)
        return attempts_on(session.attempts, questions)
