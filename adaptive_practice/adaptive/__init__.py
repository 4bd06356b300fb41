"""
Adaptive Selection Engine.

Components:
- progression: Bloom x difficulty ladder policy (pure)
- question_selector: Resolves the policy target to an unattempted question
"""
from adaptive_practice.adaptive.progression import (
    BLOOM_ORDER,
    CEILING,
    DIFFICULTY_ORDER,
    START,
    Target,
    de_escalate,
    escalate,
    ladder,
    next_target,
)
from adaptive_practice.adaptive.question_selector import (
    MatchRule,
    QuestionSelector,
    Selection,
    SelectionOutcome,
    choose,
)

__all__ = [
    # Policy
    "Target",
    "START",
    "CEILING",
    "BLOOM_ORDER",
    "DIFFICULTY_ORDER",
    "next_target",
    "escalate",
    "de_escalate",
    "ladder",
    # Selector
    "QuestionSelector",
    "Selection",
    "SelectionOutcome",
    "MatchRule",
    "choose",
]
