"""
Domain models for adaptive practice.

Design:
- BloomLevel / Difficulty: ordered tags that place a question on the ladder
- Option / Question: immutable multiple-choice snapshot (exactly one correct option)
- Attempt / Session: append-only practice record
- Star: per-attempt feedback token derived from an attempt and its question
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum

from adaptive_practice.core.errors import InvalidQuestion


class BloomLevel(str, Enum):
    """Cognitive demand of a question, lowest first."""

    RECALL = "Recall"
    CONCEPTUAL = "Conceptual"
    APPLICATION = "Application"
    ANALYSIS = "Analysis"

    @classmethod
    def ordered(cls) -> tuple[BloomLevel, ...]:
        return (cls.RECALL, cls.CONCEPTUAL, cls.APPLICATION, cls.ANALYSIS)

    @property
    def rank(self) -> int:
        """Position in the escalation order (0 = Recall)."""
        return BloomLevel.ordered().index(self)


class Difficulty(str, Enum):
    """Difficulty tier of a question, easiest first."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def ordered(cls) -> tuple[Difficulty, ...]:
        return (cls.EASY, cls.MEDIUM, cls.HARD)

    @property
    def rank(self) -> int:
        """Position in the escalation order (0 = Easy)."""
        return Difficulty.ordered().index(self)


class StarType(str, Enum):
    """Star colors awarded per attempt."""

    WHITE = "white"  # incorrect
    BRONZE = "bronze"  # correct at Easy
    SILVER = "silver"  # correct at Medium
    GOLD = "gold"  # correct at Hard

    @property
    def is_colored(self) -> bool:
        return self is not StarType.WHITE

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            StarType.WHITE: "white",
            StarType.BRONZE: "dark_orange3",
            StarType.SILVER: "grey70",
            StarType.GOLD: "gold1",
        }[self]


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Concept:
    id: str
    chapter_id: str
    name: str


@dataclass(frozen=True)
class Option:
    """One answer choice of a question."""

    id: str
    text: str
    is_correct: bool = False
    misconception_tag: str | None = None


@dataclass(frozen=True)
class Question:
    """
    Immutable multiple-choice question.

    Questions are value snapshots: edits elsewhere produce a new version,
    so the engine never mutates one.
    """

    id: str
    concept_id: str
    bloom_level: BloomLevel
    difficulty: Difficulty
    stem: str
    options: tuple[Option, ...] = ()

    def __post_init__(self):
        correct = sum(1 for option in self.options if option.is_correct)
        if correct != 1:
            raise InvalidQuestion(self.id, f"expected exactly one correct option, found {correct}")

    @property
    def correct_option(self) -> Option:
        return next(option for option in self.options if option.is_correct)

    def option_by_id(self, option_id: str) -> Option | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def misconception_for(self, option_id: str | None) -> str | None:
        """Misconception tag of the selected option, if it is a tagged distractor."""
        if option_id is None:
            return None
        option = self.option_by_id(option_id)
        if option is None or option.is_correct:
            return None
        return option.misconception_tag


@dataclass(frozen=True)
class Attempt:
    """A single recorded answer. Never mutated once appended."""

    id: str
    session_id: str
    question_id: str
    is_correct: bool
    answered_at: datetime
    selected_option_id: str | None = None


@dataclass(frozen=True)
class Session:
    """Bounded practice interval with its ordered attempt log."""

    id: str
    student_id: str
    chapter_id: str
    started_at: datetime
    attempts: tuple[Attempt, ...] = field(default_factory=tuple)
    finished_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.finished_at is None

    @property
    def duration_seconds(self) -> float:
        """Elapsed seconds for finished sessions, 0 for open ones."""
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def with_attempt(self, attempt: Attempt) -> Session:
        return replace(self, attempts=self.attempts + (attempt,))

    def finish(self, at: datetime | None = None) -> Session:
        return replace(self, finished_at=at or utcnow())


@dataclass(frozen=True)
class Star:
    type: StarType
    earned_at: datetime
    question_id: str
