"""
Question pool documents.

A pool file is a JSON document holding one chapter, its concepts and their
generated questions:

    {
      "chapter": {"id": "ch-1", "title": "Plants", "grade": 6, "subject": "Science"},
      "concepts": [{"id": "c-1", "name": "Photosynthesis"}],
      "questions": [
        {"id": "q-1", "concept_id": "c-1", "bloom_level": "Recall",
         "difficulty": "Easy", "stem": "...",
         "options": [{"id": "o-1", "text": "...", "is_correct": true}, ...]}
      ]
    }

Documents are validated with Pydantic and loaded into an
InMemoryContentRepository.
"""
from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, model_validator

from adaptive_practice.core.models import BloomLevel, Concept, Difficulty, Option, Question
from adaptive_practice.repositories.memory import InMemoryContentRepository

OPTIONS_PER_QUESTION = 4


class OptionDocument(BaseModel):
    id: str
    text: str
    is_correct: bool = False
    misconception_tag: str | None = None


class QuestionDocument(BaseModel):
    id: str
    concept_id: str
    bloom_level: BloomLevel
    difficulty: Difficulty
    stem: str
    options: list[OptionDocument] = Field(
        min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION
    )

    @model_validator(mode="after")
    def _one_correct_option(self) -> QuestionDocument:
        correct = sum(1 for option in self.options if option.is_correct)
        if correct != 1:
            raise ValueError(f"question {self.id} must have exactly one correct option, found {correct}")
        return self

    def to_question(self) -> Question:
        return Question(
            id=self.id,
            concept_id=self.concept_id,
            bloom_level=self.bloom_level,
            difficulty=self.difficulty,
            stem=self.stem,
            options=tuple(
                Option(
                    id=option.id,
                    text=option.text,
                    is_correct=option.is_correct,
                    misconception_tag=option.misconception_tag,
                )
                for option in self.options
            ),
        )


class ConceptDocument(BaseModel):
    id: str
    name: str


class ChapterDocument(BaseModel):
    id: str
    title: str = ""
    grade: int | None = None
    subject: str | None = None


class PoolDocument(BaseModel):
    chapter: ChapterDocument
    concepts: list[ConceptDocument] = Field(default_factory=list)
    questions: list[QuestionDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def _questions_reference_concepts(self) -> PoolDocument:
        known = {concept.id for concept in self.concepts}
        orphans = sorted({q.concept_id for q in self.questions} - known)
        if orphans:
            raise ValueError(f"questions reference unknown concepts: {', '.join(orphans)}")
        return self

    def to_repository(self) -> InMemoryContentRepository:
        return InMemoryContentRepository(
            concepts=[
                Concept(id=c.id, chapter_id=self.chapter.id, name=c.name)
                for c in self.concepts
            ],
            questions=[q.to_question() for q in self.questions],
        )


def load_pool(path: Path) -> InMemoryContentRepository:
    """
    Load a pool file into an in-memory content repository.

    Args:
        path: Path to the JSON pool document

    Returns:
        Populated InMemoryContentRepository

    Raises:
        FileNotFoundError: path does not exist
        pydantic.ValidationError: document is malformed
    """
    document = PoolDocument.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        f"Loaded pool {path.name}: chapter {document.chapter.id}, "
        f"{len(document.concepts)} concepts, {len(document.questions)} questions"
    )
    return document.to_repository()
