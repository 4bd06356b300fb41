"""
Star rewards.

white = incorrect; bronze / silver / gold = correct at Easy / Medium / Hard.
"""
from __future__ import annotations

from adaptive_practice.core.models import Attempt, Difficulty, Question, Star, StarType

_CORRECT_STARS = {
    Difficulty.EASY: StarType.BRONZE,
    Difficulty.MEDIUM: StarType.SILVER,
    Difficulty.HARD: StarType.GOLD,
}


def star_for(is_correct: bool, difficulty: Difficulty | str) -> StarType:
    """Star type for an answer at the given difficulty."""
    if not is_correct:
        return StarType.WHITE
    return _CORRECT_STARS[Difficulty(difficulty)]


def star_for_attempt(attempt: Attempt, question: Question) -> Star:
    """Project an attempt and its question onto a Star."""
    return Star(
        type=star_for(attempt.is_correct, question.difficulty),
        earned_at=attempt.answered_at,
        question_id=attempt.question_id,
    )
