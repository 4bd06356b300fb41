"""
Practice Analytics.

Classroom reports built from attempt history:
- StudentAnalytics: per-student totals, time spent, misconceptions hit
- ClassAnalytics: per-chapter heatmap, hardest concepts, suggested interventions

Like mastery, reports are recomputed on every call.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from config import Settings, get_settings
from adaptive_practice.core.mastery import ConceptMastery, MasteryTracker
from adaptive_practice.core.models import Question
from adaptive_practice.repositories.base import ContentRepository, HistoryRepository


@dataclass(frozen=True)
class StudentAnalytics:
    student_id: str
    concept_masteries: list[ConceptMastery] = field(default_factory=list)
    time_spent_seconds: float = 0.0
    total_attempts: int = 0
    correct_attempts: int = 0
    misconceptions_encountered: list[str] = field(default_factory=list)

    @property
    def accuracy(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.correct_attempts / self.total_attempts


@dataclass(frozen=True)
class ConceptHeat:
    concept_id: str
    concept_name: str
    average_proficiency: int


@dataclass(frozen=True)
class ConceptEffort:
    concept_id: str
    concept_name: str
    average_attempts: float


@dataclass(frozen=True)
class Intervention:
    concept_id: str
    concept_name: str
    reason: str


@dataclass(frozen=True)
class ClassAnalytics:
    chapter_id: str
    concept_heatmap: list[ConceptHeat] = field(default_factory=list)
    hardest_concepts: list[ConceptEffort] = field(default_factory=list)
    suggested_interventions: list[Intervention] = field(default_factory=list)


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


class AnalyticsService:
    """Builds student and class reports from the history repository."""

    def __init__(
        self,
        content: ContentRepository,
        history: HistoryRepository,
        tracker: MasteryTracker | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.content = content
        self.history = history
        self.tracker = tracker or MasteryTracker(
            content,
            history,
            medium_plus_required=self.settings.mastery_medium_plus_required,
            hard_required=self.settings.mastery_hard_required,
        )

    async def _question(self, cache: dict[str, Question | None], question_id: str) -> Question | None:
        if question_id not in cache:
            cache[question_id] = await self.content.get_question_by_id(question_id)
        return cache[question_id]

    async def student_analytics(self, student_id: str) -> StudentAnalytics:
        """
        Summarize a student's practice.

        Time spent only counts finished sessions. Misconception tags come from
        wrong answers whose selected option carries one, unique and in the
        order first seen.
        """
        sessions = await self.history.get_sessions_for_student(student_id)
        if not sessions:
            return StudentAnalytics(student_id=student_id)

        attempts = [attempt for session in sessions for attempt in session.attempts]
        cache: dict[str, Question | None] = {}
        misconceptions: list[str] = []
        for attempt in attempts:
            if attempt.is_correct or not attempt.selected_option_id:
                continue
            question = await self._question(cache, attempt.question_id)
            if question is None:
                continue
            tag = question.misconception_for(attempt.selected_option_id)
            if tag and tag not in misconceptions:
                misconceptions.append(tag)

        return StudentAnalytics(
            student_id=student_id,
            concept_masteries=await self.tracker.concept_masteries(student_id),
            time_spent_seconds=sum(session.duration_seconds for session in sessions),
            total_attempts=len(attempts),
            correct_attempts=sum(1 for attempt in attempts if attempt.is_correct),
            misconceptions_encountered=misconceptions,
        )

    async def class_analytics(self, chapter_id: str, student_ids: list[str]) -> ClassAnalytics:
        """
        Summarize a chapter across a class.

        Args:
            chapter_id: Chapter to report on
            student_ids: Students in the class

        Returns:
            ClassAnalytics with heatmap, hardest concepts and interventions
        """
        concepts = await self.content.get_concepts_by_chapter(chapter_id)
        cache: dict[str, Question | None] = {}

        heatmap: list[ConceptHeat] = []
        for concept in concepts:
            total = count = 0
            for student_id in student_ids:
                mastery = await self.tracker.concept_mastery(student_id, concept.id)
                if mastery.total_stars > 0:
                    total += mastery.proficiency_score
                    count += 1
            heatmap.append(
                ConceptHeat(
                    concept_id=concept.id,
                    concept_name=concept.name,
                    average_proficiency=_round_half_up(total, count) if count else 0,
                )
            )

        # Attempts per concept per student, limited to this chapter's sessions
        per_student: dict[str, dict[str, int]] = {}
        for student_id in student_ids:
            counts: dict[str, int] = {}
            sessions = await self.history.get_sessions_for_student(student_id)
            for session in sessions:
                if session.chapter_id != chapter_id:
                    continue
                for attempt in session.attempts:
                    question = await self._question(cache, attempt.question_id)
                    if question is not None:
                        counts[question.concept_id] = counts.get(question.concept_id, 0) + 1
            per_student[student_id] = counts

        efforts: list[ConceptEffort] = []
        for concept in concepts:
            attempted = [c[concept.id] for c in per_student.values() if c.get(concept.id, 0) > 0]
            average = _round_half_up(10 * sum(attempted), len(attempted)) / 10 if attempted else 0.0
            efforts.append(ConceptEffort(concept.id, concept.name, average))
        efforts.sort(key=lambda effort: effort.average_attempts, reverse=True)

        threshold = self.settings.intervention_proficiency_threshold
        struggling = sorted(
            (heat for heat in heatmap if heat.average_proficiency < threshold),
            key=lambda heat: heat.average_proficiency,
        )
        interventions = [
            Intervention(
                concept_id=heat.concept_id,
                concept_name=heat.concept_name,
                reason=f"Low class proficiency ({heat.average_proficiency}%)",
            )
            for heat in struggling[: self.settings.max_suggested_interventions]
        ]

        logger.info(
            f"Class analytics for chapter {chapter_id}: {len(concepts)} concepts, "
            f"{len(student_ids)} students, {len(interventions)} interventions"
        )
        return ClassAnalytics(
            chapter_id=chapter_id,
            concept_heatmap=heatmap,
            hardest_concepts=efforts[: self.settings.max_hardest_concepts],
            suggested_interventions=interventions,
        )
