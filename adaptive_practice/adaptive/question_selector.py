"""
Question Selector.

Turns the progression target into a concrete, unattempted question:

1. Load the concept pool (empty or unknown concept -> NO_CONTENT)
2. Drop questions already attempted in this session (none left -> EXHAUSTED)
3. Feed the last attempt for the concept into the progression policy
4. Pick among unattempted questions, earliest rule first:
   exact cell, same Bloom level, same difficulty, anything left

Ties inside a rule go to the lowest question id. The session is re-read
from storage before use. Without a session of this student the target is
the ladder start and nothing is excluded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from adaptive_practice.adaptive.progression import START, Target, next_target
from adaptive_practice.content.pool import QuestionPool
from adaptive_practice.core.errors import ConceptNotFound
from adaptive_practice.core.models import Attempt, Question, Session
from adaptive_practice.sessions.ledger import AttemptLedger, attempts_on

Policy = Callable[[Target | None, bool], Target]


class SelectionOutcome(str, Enum):
    SELECTED = "selected"
    NO_CONTENT = "no_content"  # concept missing or has no questions
    EXHAUSTED = "exhausted"  # every question attempted this session


class MatchRule(str, Enum):
    EXACT = "exact"
    BLOOM = "bloom"
    DIFFICULTY = "difficulty"
    ANY = "any"


@dataclass(frozen=True)
class Selection:
    """Result of a selection, including why nothing was chosen."""

    outcome: SelectionOutcome
    target: Target = START
    question: Question | None = None
    rule: MatchRule | None = None
    pool_size: int = 0
    attempted: int = 0

    @property
    def is_complete(self) -> bool:
        return self.outcome is SelectionOutcome.EXHAUSTED


def choose(
    candidates: Iterable[Question], target: Target
) -> tuple[Question, MatchRule] | None:
    """
    Pick the best candidate for a target.

    Args:
        candidates: Unattempted questions
        target: Desired (Bloom level, difficulty)

    Returns:
        (question, rule that matched) or None when there are no candidates
    """
    ordered = sorted(candidates, key=lambda q: q.id)
    rules = (
        (MatchRule.EXACT, lambda q: q.bloom_level == target.bloom_level and q.difficulty == target.difficulty),
        (MatchRule.BLOOM, lambda q: q.bloom_level == target.bloom_level),
        (MatchRule.DIFFICULTY, lambda q: q.difficulty == target.difficulty),
        (MatchRule.ANY, lambda q: True),
    )
    for rule, matches in rules:
        for question in ordered:
            if matches(question):
                return question, rule
    return None


class QuestionSelector:
    """
    Select the next question for a student on a concept.

    All storage reads happen up front; the policy and matching then run on
    that snapshot.
    """

    def __init__(
        self,
        pool: QuestionPool,
        ledger: AttemptLedger,
        policy: Policy = next_target,
    ):
        self.pool = pool
        self.ledger = ledger
        self.policy = policy

    async def select(
        self,
        student_id: str,
        concept_id: str,
        session: Session | None = None,
    ) -> Selection:
        """
        Compute the next question and report which case occurred.

        Args:
            student_id: Student identifier
            concept_id: Concept to practice
            session: Session to use (None means the ledger's current session);
                ignored when it belongs to another student

        Returns:
            Selection with outcome, target and chosen question
        """
        try:
            questions = await self.pool.questions_for_concept(concept_id)
        except ConceptNotFound:
            logger.warning(f"Concept {concept_id} not found - nothing to practice")
            return Selection(outcome=SelectionOutcome.NO_CONTENT)

        if not questions:
            logger.info(f"Concept {concept_id} has no questions")
            return Selection(outcome=SelectionOutcome.NO_CONTENT)

        session = await self.ledger.refresh(session or self.ledger.current_session())
        if session is not None and session.student_id != student_id:
            logger.debug(f"Session {session.id} belongs to {session.student_id}, not {student_id}")
            session = None
        if session is None:
            logger.debug(f"No session for {student_id}; starting {concept_id} at {START}")
            attempts: list[Attempt] = []
        else:
            attempts = attempts_on(session.attempts, questions)

        attempted_ids = {attempt.question_id for attempt in attempts}
        unattempted = [q for q in questions if q.id not in attempted_ids]
        if not unattempted:
            logger.info(f"Concept {concept_id} exhausted for {student_id} this session")
            return Selection(
                outcome=SelectionOutcome.EXHAUSTED,
                pool_size=len(questions),
                attempted=len(attempted_ids),
            )

        target = self._target(questions, attempts)
        question, rule = choose(unattempted, target)
        logger.debug(f"Target {target} for {student_id}/{concept_id}: {question.id} ({rule.value})")
        return Selection(
            outcome=SelectionOutcome.SELECTED,
            target=target,
            question=question,
            rule=rule,
            pool_size=len(questions),
            attempted=len(attempted_ids),
        )

    def _target(self, questions: list[Question], attempts: list[Attempt]) -> Target:
        if not attempts:
            return self.policy(None, False)
        last = attempts[-1]
        by_id = {question.id: question for question in questions}
        return self.policy(Target.of(by_id[last.question_id]), last.is_correct)

    async def next_question(
        self,
        student_id: str,
        concept_id: str,
        session: Session | None = None,
    ) -> Question | None:
        selection = await self.select(student_id, concept_id, session)
        return selection.question
