"""
Core Module - Shared domain models and rules.

Components:
- models: Questions, attempts, sessions, stars and their ordered tags
- errors: Error taxonomy (NoActiveSession, NotFound, InvalidQuestion)
- rewards: Star derivation from correctness and difficulty
- mastery: Mastery replay (ConceptMastery, MasteryTracker)

Design Principle:
Selection, session and analytics modules import from adaptive_practice.core
rather than reimplementing shared concepts.
"""

from adaptive_practice.core.errors import (
    ConceptNotFound,
    InvalidQuestion,
    NoActiveSession,
    NotFound,
    PracticeError,
    QuestionNotFound,
    SessionNotFound,
)
from adaptive_practice.core.mastery import (
    ConceptMastery,
    MasteryLevel,
    MasteryTracker,
    proficiency_score,
    summarize_attempts,
)
from adaptive_practice.core.models import (
    Attempt,
    BloomLevel,
    Concept,
    Difficulty,
    Option,
    Question,
    Session,
    Star,
    StarType,
)
from adaptive_practice.core.rewards import star_for, star_for_attempt

__all__ = [
    # Models
    "Attempt",
    "BloomLevel",
    "Concept",
    "Difficulty",
    "Option",
    "Question",
    "Session",
    "Star",
    "StarType",
    # Errors
    "PracticeError",
    "NoActiveSession",
    "NotFound",
    "ConceptNotFound",
    "QuestionNotFound",
    "SessionNotFound",
    "InvalidQuestion",
    # Rewards
    "star_for",
    "star_for_attempt",
    # Mastery
    "ConceptMastery",
    "MasteryLevel",
    "MasteryTracker",
    "proficiency_score",
    "summarize_attempts",
]
