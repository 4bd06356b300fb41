"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.

The shared pool is a full ladder: one question per (Bloom level, difficulty)
cell of concept "c-photosynthesis", with ids "q<bloom><difficulty>" so that
"q00" is Recall/Easy and "q32" is Analysis/Hard. Option "a" is always correct.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings
from adaptive_practice.core.models import BloomLevel, Concept, Difficulty, Option, Question
from adaptive_practice.repositories.memory import (
    InMemoryContentRepository,
    InMemoryHistoryRepository,
    InMemorySessionRepository,
)
from adaptive_practice.study.practice_service import PracticeService

CHAPTER_ID = "ch-1"
CONCEPT_ID = "c-photosynthesis"
STUDENT_ID = "student-1"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (in-memory repositories)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_question(
    question_id: str,
    bloom_level: BloomLevel,
    difficulty: Difficulty,
    concept_id: str = CONCEPT_ID,
) -> Question:
    """Four-option question; option "a" is correct, "b" carries a misconception tag."""
    return Question(
        id=question_id,
        concept_id=concept_id,
        bloom_level=bloom_level,
        difficulty=difficulty,
        stem=f"{bloom_level.value} question at {difficulty.value}",
        options=(
            Option(id="a", text="Right", is_correct=True),
            Option(id="b", text="Wrong", misconception_tag=f"misconception-{question_id}"),
            Option(id="c", text="Also wrong"),
            Option(id="d", text="Still wrong"),
        ),
    )


def ladder_questions(concept_id: str = CONCEPT_ID) -> list[Question]:
    return [
        make_question(f"q{b}{d}", bloom, difficulty, concept_id)
        for b, bloom in enumerate(BloomLevel.ordered())
        for d, difficulty in enumerate(Difficulty.ordered())
    ]


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def question_factory():
    """Build standalone questions: question_factory("q00", BloomLevel.RECALL, Difficulty.EASY)."""
    return make_question


@pytest.fixture
def settings():
    """Settings with defaults, independent of any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def content():
    """Content repository holding the full ladder pool plus an empty concept."""
    return InMemoryContentRepository(
        concepts=[
            Concept(id=CONCEPT_ID, chapter_id=CHAPTER_ID, name="Photosynthesis"),
            Concept(id="c-empty", chapter_id=CHAPTER_ID, name="Empty Concept"),
        ],
        questions=ladder_questions(),
    )


@pytest.fixture
def sessions():
    return InMemorySessionRepository()


@pytest.fixture
def history(sessions, content):
    return InMemoryHistoryRepository(sessions, content)


@pytest.fixture
def service(content, sessions, history, settings):
    """Practice service wired to the in-memory repositories."""
    return PracticeService(content, sessions, history, settings)
