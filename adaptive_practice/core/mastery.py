"""
Core Mastery Module.

Mastery is a durable property of (student, concept), rebuilt on demand by
replaying the student's entire attempt history. It is never cached as a
source of truth.

Design:
- MasteryLevel: Enum for categorizing proficiency scores
- ConceptMastery: Derived aggregate (stars, proficiency, mastered flag)
- summarize_attempts: Pure replay of attempts into a ConceptMastery
- MasteryTracker: Loads history through the repositories and replays it

The mastered flag and the proficiency score are independent: a single hard
correct answer masters a concept even when most attempts were wrong.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from adaptive_practice.core.models import Attempt, Difficulty, Question, Star
from adaptive_practice.core.rewards import star_for, star_for_attempt

if TYPE_CHECKING:
    from adaptive_practice.repositories.base import ContentRepository, HistoryRepository

UNKNOWN_CONCEPT = "Unknown Concept"

# Mastery gate defaults
MEDIUM_PLUS_REQUIRED = 2
HARD_REQUIRED = 1


class MasteryLevel(str, Enum):
    """
    Proficiency level categorization for display.

    Derived from the proficiency score only; it says nothing about the
    mastered gate.
    """

    NOT_STARTED = "not_started"  # no attempts
    NOVICE = "novice"  # 1-39%
    DEVELOPING = "developing"  # 40-69%
    PROFICIENT = "proficient"  # 70-89%
    EXPERT = "expert"  # 90-100%

    @classmethod
    def from_score(cls, score: float) -> MasteryLevel:
        """
        Convert a 0-1 proficiency score to a level.

        Args:
            score: Proficiency between 0 and 1

        Returns:
            Corresponding MasteryLevel
        """
        if score <= 0:
            return cls.NOT_STARTED
        elif score < 0.4:
            return cls.NOVICE
        elif score < 0.7:
            return cls.DEVELOPING
        elif score < 0.9:
            return cls.PROFICIENT
        else:
            return cls.EXPERT

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ").title()

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            MasteryLevel.NOT_STARTED: "dim",
            MasteryLevel.NOVICE: "red",
            MasteryLevel.DEVELOPING: "yellow",
            MasteryLevel.PROFICIENT: "cyan",
            MasteryLevel.EXPERT: "green",
        }[self]


@dataclass(frozen=True)
class ConceptMastery:
    """
    Mastery state for one (student, concept) pair.

    total_stars counts every attempt, colored_stars the correct ones.
    """

    concept_id: str
    concept_name: str = UNKNOWN_CONCEPT
    total_stars: int = 0
    colored_stars: int = 0
    proficiency_score: int = 0  # 0-100
    medium_plus_correct: int = 0
    hard_correct: int = 0
    mastered: bool = False

    @property
    def level(self) -> MasteryLevel:
        if self.total_stars == 0:
            return MasteryLevel.NOT_STARTED
        return MasteryLevel.from_score(self.proficiency_score / 100)


def proficiency_score(colored_stars: int, total_stars: int) -> int:
    """
    Percentage of correct attempts, rounded half up and capped at 100.

    Integer arithmetic keeps .5 cases exact (1 of 8 gives 13, not 12).
    """
    if total_stars <= 0:
        return 0
    return min(100, (200 * colored_stars + total_stars) // (2 * total_stars))


def is_mastered(
    medium_plus_correct: int,
    hard_correct: int,
    medium_plus_required: int = MEDIUM_PLUS_REQUIRED,
    hard_required: int = HARD_REQUIRED,
) -> bool:
    """Mastery gate: enough correct answers at Medium+ or at Hard."""
    return medium_plus_correct >= medium_plus_required or hard_correct >= hard_required


def summarize_attempts(
    concept_id: str,
    graded: Iterable[tuple[Attempt, Difficulty]],
    concept_name: str = UNKNOWN_CONCEPT,
    medium_plus_required: int = MEDIUM_PLUS_REQUIRED,
    hard_required: int = HARD_REQUIRED,
) -> ConceptMastery:
    """
    Replay attempts (paired with their question difficulty) into a ConceptMastery.

    Args:
        concept_id: Concept the attempts belong to
        graded: (attempt, difficulty) pairs in any order
        concept_name: Display name for the concept
        medium_plus_required: Medium+ correct answers needed for mastery
        hard_required: Hard correct answers needed for mastery

    Returns:
        ConceptMastery built from scratch
    """
    total = colored = medium_plus = hard = 0
    for attempt, tag in graded:
        difficulty = Difficulty(tag)
        total += 1
        if not star_for(attempt.is_correct, difficulty).is_colored:
            continue
        colored += 1
        if difficulty in (Difficulty.MEDIUM, Difficulty.HARD):
            medium_plus += 1
        if difficulty is Difficulty.HARD:
            hard += 1

    return ConceptMastery(
        concept_id=concept_id,
        concept_name=concept_name,
        total_stars=total,
        colored_stars=colored,
        proficiency_score=proficiency_score(colored, total),
        medium_plus_correct=medium_plus,
        hard_correct=hard,
        mastered=is_mastered(medium_plus, hard, medium_plus_required, hard_required),
    )


class MasteryTracker:
    """
    Rebuild mastery from the student's full attempt history.

    Question metadata (difficulty, concept) is resolved through the content
    repository; attempts whose question no longer exists are skipped.
    """

    def __init__(
        self,
        content: ContentRepository,
        history: HistoryRepository,
        medium_plus_required: int = MEDIUM_PLUS_REQUIRED,
        hard_required: int = HARD_REQUIRED,
    ):
        self.content = content
        self.history = history
        self.medium_plus_required = medium_plus_required
        self.hard_required = hard_required

    async def _resolve(
        self, attempts: Iterable[Attempt]
    ) -> list[tuple[Attempt, Question]]:
        cache: dict[str, Question | None] = {}
        resolved = []
        for attempt in attempts:
            if attempt.question_id not in cache:
                cache[attempt.question_id] = await self.content.get_question_by_id(
                    attempt.question_id
                )
            question = cache[attempt.question_id]
            if question is None:
                logger.debug(f"Skipping attempt {attempt.id}: question {attempt.question_id} is gone")
                continue
            resolved.append((attempt, question))
        return resolved

    async def _concept_name(self, concept_id: str) -> str:
        return await self.content.get_concept_name(concept_id) or UNKNOWN_CONCEPT

    def _summarize(
        self, concept_id: str, concept_name: str, pairs: list[tuple[Attempt, Question]]
    ) -> ConceptMastery:
        return summarize_attempts(
            concept_id,
            ((attempt, question.difficulty) for attempt, question in pairs),
            concept_name=concept_name,
            medium_plus_required=self.medium_plus_required,
            hard_required=self.hard_required,
        )

    async def concept_mastery(self, student_id: str, concept_id: str) -> ConceptMastery:
        """
        Compute mastery for one concept.

        Args:
            student_id: Student identifier
            concept_id: Concept identifier

        Returns:
            ConceptMastery (all zeros when the student never attempted it)
        """
        attempts = await self.history.get_all_attempts_for_concept_by_student(
            student_id, concept_id
        )
        pairs = await self._resolve(attempts)
        mastery = self._summarize(concept_id, await self._concept_name(concept_id), pairs)
        logger.debug(
            f"Mastery {student_id}/{concept_id}: {mastery.colored_stars}/{mastery.total_stars} "
            f"({mastery.proficiency_score}%), mastered={mastery.mastered}"
        )
        return mastery

    async def is_mastered(self, student_id: str, concept_id: str) -> bool:
        mastery = await self.concept_mastery(student_id, concept_id)
        return mastery.mastered

    async def concept_masteries(self, student_id: str) -> list[ConceptMastery]:
        """Mastery for every concept the student has attempted, in first-attempt order."""
        attempts = await self.history.get_attempts_by_student(student_id)
        by_concept: dict[str, list[tuple[Attempt, Question]]] = {}
        for attempt, question in await self._resolve(attempts):
            by_concept.setdefault(question.concept_id, []).append((attempt, question))

        return [
            self._summarize(concept_id, await self._concept_name(concept_id), pairs)
            for concept_id, pairs in by_concept.items()
        ]

    async def stars_for_student(self, student_id: str) -> list[Star]:
        """Every star the student earned, oldest first."""
        attempts = await self.history.get_attempts_by_student(student_id)
        pairs = await self._resolve(attempts)
        stars = [star_for_attempt(attempt, question) for attempt, question in pairs]
        return sorted(stars, key=lambda star: star.earned_at)
