"""
Practice Service: the engine's caller-facing facade.

One instance per student context. It holds only the current-session pointer
(through the attempt ledger); stars, proficiency and mastery are always
recomputed from the injected repositories.

Flow for one answer:
    record attempt -> derive star -> rebuild mastery -> select next question
"""
from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from config import Settings, get_settings
from adaptive_practice.adaptive.question_selector import QuestionSelector, Selection
from adaptive_practice.content.pool import QuestionPool
from adaptive_practice.core.errors import NoActiveSession
from adaptive_practice.core.mastery import ConceptMastery, MasteryTracker
from adaptive_practice.core.models import Attempt, Question, Session, Star, StarType
from adaptive_practice.core.rewards import star_for
from adaptive_practice.repositories.base import (
    ContentRepository,
    HistoryRepository,
    SessionRepository,
)
from adaptive_practice.sessions.ledger import AttemptLedger


@dataclass(frozen=True)
class ScoredAttempt:
    """Everything the UI needs after an answer."""

    attempt: Attempt
    star: StarType
    updated_mastery: ConceptMastery
    question: Question
    misconception_tag: str | None = None

    @property
    def mastered(self) -> bool:
        return self.updated_mastery.mastered


class PracticeService:
    """
    Orchestrates sessions, selection, scoring and mastery for one student context.

    Exposes:
    - compute_next_question / select_next: adaptive question choice
    - record_and_score: append an attempt and report star + mastery
    - is_concept_mastered / concept_mastery / concept_masteries: mastery views
    """

    def __init__(
        self,
        content: ContentRepository,
        sessions: SessionRepository,
        history: HistoryRepository,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.content = content
        self.pool = QuestionPool(content)
        self.ledger = AttemptLedger(sessions, self.pool)
        self.selector = QuestionSelector(self.pool, self.ledger)
        self.tracker = MasteryTracker(
            content,
            history,
            medium_plus_required=self.settings.mastery_medium_plus_required,
            hard_required=self.settings.mastery_hard_required,
        )

    # ========================================
    # Sessions
    # ========================================

    def current_session(self) -> Session | None:
        return self.ledger.current_session()

    async def start_session(self, student_id: str, chapter_id: str) -> Session:
        return await self.ledger.start_session(student_id, chapter_id)

    async def resume_session(self, student_id: str) -> Session | None:
        return await self.ledger.resume_session(student_id)

    async def end_session(self) -> Session:
        return await self.ledger.end_session()

    # ========================================
    # Selection
    # ========================================

    async def select_next(
        self,
        student_id: str,
        concept_id: str,
        session: Session | None = None,
    ) -> Selection:
        return await self.selector.select(student_id, concept_id, session)

    async def compute_next_question(
        self,
        student_id: str,
        concept_id: str,
        session: Session | None = None,
    ) -> Question | None:
        """
        Next question for the student, or None.

        None means either no content or an exhausted concept; use
        select_next() to tell the two apart.
        """
        return await self.selector.next_question(student_id, concept_id, session)

    # ========================================
    # Scoring
    # ========================================

    async def record_and_score(
        self,
        session: Session | None,
        question_id: str,
        is_correct: bool,
        selected_option_id: str | None = None,
    ) -> ScoredAttempt:
        """
        Record an answer and score it.

        Args:
            session: Session to record into (None means the current session)
            question_id: Question answered
            is_correct: Whether the answer was correct
            selected_option_id: Option chosen, used for misconception lookup

        Returns:
            ScoredAttempt with the attempt, its star and the rebuilt mastery

        Raises:
            NoActiveSession: no usable session
            QuestionNotFound: question does not exist
        """
        session = session or self.ledger.current_session()
        if session is None:
            logger.error(f"Cannot record answer to {question_id}: no active session")
            raise NoActiveSession()

        question = await self.pool.question_by_id(question_id)
        attempt = await self.ledger.record_attempt(
            session, question_id, is_correct, selected_option_id
        )
        star = star_for(attempt.is_correct, question.difficulty)
        mastery = await self.tracker.concept_mastery(session.student_id, question.concept_id)

        return ScoredAttempt(
            attempt=attempt,
            star=star,
            updated_mastery=mastery,
            question=question,
            misconception_tag=None if is_correct else question.misconception_for(selected_option_id),
        )

    # ========================================
    # Mastery
    # ========================================

    async def is_concept_mastered(self, student_id: str, concept_id: str) -> bool:
        return await self.tracker.is_mastered(student_id, concept_id)

    async def concept_mastery(self, student_id: str, concept_id: str) -> ConceptMastery:
        return await self.tracker.concept_mastery(student_id, concept_id)

    async def concept_masteries(self, student_id: str) -> list[ConceptMastery]:
        return await self.tracker.concept_masteries(student_id)

    async def stars_for_student(self, student_id: str) -> list[Star]:
        return await self.tracker.stars_for_student(student_id)
