"""
In-memory repositories.

Reference implementations of the collaborator protocols, used by the
terminal front end and the test suite. History reads straight from the
session repository, so an appended attempt is visible immediately.
"""
from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from datetime import datetime

from loguru import logger

from adaptive_practice.core.errors import ConceptNotFound, NoActiveSession, SessionNotFound
from adaptive_practice.core.models import Attempt, Concept, Question, Session, utcnow


class InMemoryContentRepository:
    """Concepts and questions held in dicts, keyed by id."""

    def __init__(
        self,
        concepts: Iterable[Concept] = (),
        questions: Iterable[Question] = (),
    ):
        self.concepts: dict[str, Concept] = {}
        self.questions: dict[str, Question] = {}
        for concept in concepts:
            self.add_concept(concept)
        for question in questions:
            self.add_question(question)

    def add_concept(self, concept: Concept) -> None:
        self.concepts[concept.id] = concept

    def add_question(self, question: Question) -> None:
        if question.concept_id not in self.concepts:
            raise ConceptNotFound(question.concept_id)
        self.questions[question.id] = question

    async def get_concept(self, concept_id: str) -> Concept | None:
        return self.concepts.get(concept_id)

    async def get_questions_by_concept(self, concept_id: str) -> list[Question]:
        if concept_id not in self.concepts:
            raise ConceptNotFound(concept_id)
        return [q for q in self.questions.values() if q.concept_id == concept_id]

    async def get_question_by_id(self, question_id: str) -> Question | None:
        return self.questions.get(question_id)

    async def get_concept_name(self, concept_id: str) -> str | None:
        concept = self.concepts.get(concept_id)
        return concept.name if concept else None

    async def get_concepts_by_chapter(self, chapter_id: str) -> list[Concept]:
        return [c for c in self.concepts.values() if c.chapter_id == chapter_id]


class InMemorySessionRepository:
    """Sessions kept in insertion order; attempts are appended, never replaced."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    async def get_current_session(self, student_id: str) -> Session | None:
        open_sessions = [
            s for s in self._sessions.values()
            if s.student_id == student_id and s.is_active
        ]
        return open_sessions[-1] if open_sessions else None

    async def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    async def start_session(self, student_id: str, chapter_id: str) -> Session:
        session = Session(
            id=str(uuid.uuid4()),
            student_id=student_id,
            chapter_id=chapter_id,
            started_at=self._clock(),
        )
        self._sessions[session.id] = session
        return session

    async def append_attempt(
        self,
        session_id: str,
        question_id: str,
        is_correct: bool,
        selected_option_id: str | None = None,
    ) -> Attempt:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if not session.is_active:
            raise NoActiveSession(f"Session {session_id} is finished")

        attempt = Attempt(
            id=str(uuid.uuid4()),
            session_id=session_id,
            question_id=question_id,
            is_correct=is_correct,
            answered_at=self._clock(),
            selected_option_id=selected_option_id,
        )
        self._sessions[session_id] = session.with_attempt(attempt)
        return attempt

    async def end_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if not session.is_active:
            logger.debug(f"Session {session_id} already finished")
            return session
        finished = session.finish(self._clock())
        self._sessions[session_id] = finished
        return finished


class InMemoryHistoryRepository:
    """Student history view joined against the content repository."""

    def __init__(
        self,
        sessions: InMemorySessionRepository,
        content: InMemoryContentRepository,
    ):
        self._sessions = sessions
        self._content = content

    async def get_sessions_for_student(self, student_id: str) -> list[Session]:
        return [s for s in self._sessions.sessions() if s.student_id == student_id]

    async def get_attempts_by_student(self, student_id: str) -> list[Attempt]:
        sessions = await self.get_sessions_for_student(student_id)
        return [attempt for session in sessions for attempt in session.attempts]

    async def get_all_attempts_for_concept_by_student(
        self, student_id: str, concept_id: str
    ) -> list[Attempt]:
        attempts = await self.get_attempts_by_student(student_id)
        result = []
        for attempt in attempts:
            question = self._content.questions.get(attempt.question_id)
            if question is not None and question.concept_id == concept_id:
                result.append(attempt)
        return result
