"""
Error taxonomy for the practice engine.

- NoActiveSession: recording an attempt without a session (fatal to the call)
- NotFound: a concept, question or session is absent (recoverable)
- InvalidQuestion: question data that breaks the one-correct-option rule

Running out of unattempted questions is not an error; the selector reports
it as an outcome.
"""
from __future__ import annotations


class PracticeError(Exception):
    """Base class for practice engine errors."""


class NoActiveSession(PracticeError):
    """Raised when an attempt is recorded with no current session."""

    def __init__(self, message: str = "No active session"):
        super().__init__(message)


class NotFound(PracticeError):
    """Raised when a requested entity does not exist."""

    kind = "entity"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"{self.kind.capitalize()} not found: {identifier}")


class ConceptNotFound(NotFound):
    kind = "concept"


class QuestionNotFound(NotFound):
    kind = "question"


class SessionNotFound(NotFound):
    kind = "session"


class InvalidQuestion(PracticeError):
    """Raised when question data violates the option invariants."""

    def __init__(self, question_id: str, reason: str):
        self.question_id = question_id
        self.reason = reason
        super().__init__(f"Invalid question {question_id}: {reason}")
