"""
Progression Policy.

Walks a student along the Bloom x difficulty ladder based on the last
attempt recorded for the concept in the current session:

- Correct: raise Bloom first; at Analysis raise difficulty and restart at Recall
- Incorrect: lower difficulty first; at Easy lower Bloom and restart at Easy
- (Analysis, Hard) after a correct answer and (Recall, Easy) after a wrong
  one hold their position

Pure and deterministic, so it can run on a snapshot after storage calls.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from adaptive_practice.core.models import BloomLevel, Difficulty

BLOOM_ORDER = BloomLevel.ordered()
DIFFICULTY_ORDER = Difficulty.ordered()


@dataclass(frozen=True)
class Target:
    """A cell of the ladder: the desired tags of the next question."""

    bloom_level: BloomLevel
    difficulty: Difficulty

    def __str__(self) -> str:
        return f"{self.bloom_level.value}/{self.difficulty.value}"

    @classmethod
    def of(cls, tagged) -> Target:
        """Target from anything carrying bloom_level and difficulty (e.g. a Question)."""
        return cls(BloomLevel(tagged.bloom_level), Difficulty(tagged.difficulty))


START = Target(BloomLevel.RECALL, Difficulty.EASY)
CEILING = Target(BloomLevel.ANALYSIS, Difficulty.HARD)


def escalate(current: Target) -> Target:
    bloom, difficulty = current.bloom_level.rank, current.difficulty.rank
    if bloom < len(BLOOM_ORDER) - 1:
        return Target(BLOOM_ORDER[bloom + 1], current.difficulty)
    if difficulty < len(DIFFICULTY_ORDER) - 1:
        return Target(BLOOM_ORDER[0], DIFFICULTY_ORDER[difficulty + 1])
    return current


def de_escalate(current: Target) -> Target:
    bloom, difficulty = current.bloom_level.rank, current.difficulty.rank
    if difficulty > 0:
        return Target(current.bloom_level, DIFFICULTY_ORDER[difficulty - 1])
    if bloom > 0:
        return Target(BLOOM_ORDER[bloom - 1], DIFFICULTY_ORDER[0])
    return current


def next_target(last: Target | None, last_was_correct: bool) -> Target:
    """
    Desired tags for the next question.

    Args:
        last: Tags of the last question attempted for this concept in the
            session, or None when there is no such attempt
        last_was_correct: Whether that attempt was correct

    Returns:
        Target cell for the next question
    """
    if last is None:
        return START
    return escalate(last) if last_was_correct else de_escalate(last)


def ladder() -> Iterator[tuple[Target, Target, Target]]:
    """Every cell with its target after a correct and after an incorrect answer."""
    for difficulty in DIFFICULTY_ORDER:
        for bloom in BLOOM_ORDER:
            cell = Target(bloom, difficulty)
            yield cell, next_target(cell, True), next_target(cell, False)
