"""
Collaborator interfaces consumed by the practice engine.

Storage is an async I/O boundary. The engine takes snapshots through these
protocols and never holds storage state of its own.
"""
from __future__ import annotations

from typing import Protocol

from adaptive_practice.core.models import Attempt, Concept, Question, Session


class ContentRepository(Protocol):
    """Read access to concepts and their generated questions."""

    async def get_questions_by_concept(self, concept_id: str) -> list[Question]:
        """All questions of a concept. Raises ConceptNotFound for unknown concepts."""
        ...

    async def get_question_by_id(self, question_id: str) -> Question | None:
        ...

    async def get_concept_name(self, concept_id: str) -> str | None:
        ...

    async def get_concepts_by_chapter(self, chapter_id: str) -> list[Concept]:
        ...


class SessionRepository(Protocol):
    """Practice sessions and their append-only attempt logs."""

    async def get_current_session(self, student_id: str) -> Session | None:
        """Most recent unfinished session of the student, if any."""
        ...

    async def get_session(self, session_id: str) -> Session | None:
        ...

    async def start_session(self, student_id: str, chapter_id: str) -> Session:
        ...

    async def append_attempt(
        self,
        session_id: str,
        question_id: str,
        is_correct: bool,
        selected_option_id: str | None = None,
    ) -> Attempt:
        """
        Append an attempt. Concurrent appends must keep their order.

        Raises SessionNotFound for unknown sessions and NoActiveSession for
        finished ones.
        """
        ...

    async def end_session(self, session_id: str) -> Session:
        ...


class HistoryRepository(Protocol):
    """Student-wide attempt history across all sessions."""

    async def get_all_attempts_for_concept_by_student(
        self, student_id: str, concept_id: str
    ) -> list[Attempt]:
        ...

    async def get_attempts_by_student(self, student_id: str) -> list[Attempt]:
        ...

    async def get_sessions_for_student(self, student_id: str) -> list[Session]:
        ...
