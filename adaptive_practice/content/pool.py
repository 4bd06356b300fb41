"""
Question Pool Accessor.

Read-only view over the questions of a concept. Order of the returned
questions carries no meaning.
"""
from __future__ import annotations

from loguru import logger

from adaptive_practice.core.errors import QuestionNotFound
from adaptive_practice.core.models import Question
from adaptive_practice.repositories.base import ContentRepository


class QuestionPool:
    def __init__(self, content: ContentRepository):
        self.content = content

    async def questions_for_concept(self, concept_id: str) -> list[Question]:
        """Questions of a concept. Raises ConceptNotFound for unknown concepts."""
        questions = await self.content.get_questions_by_concept(concept_id)
        return list(questions)

    async def question_by_id(self, question_id: str) -> Question:
        question = await self.content.get_question_by_id(question_id)
        if question is None:
            logger.warning(f"Question {question_id} not found")
            raise QuestionNotFound(question_id)
        return question
