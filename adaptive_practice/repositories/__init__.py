"""
Repositories: storage collaborators of the practice engine.

- base: async protocols (content, sessions, history)
- memory: in-memory reference implementations
"""

from adaptive_practice.repositories.base import (
    ContentRepository,
    HistoryRepository,
    SessionRepository,
)
from adaptive_practice.repositories.memory import (
    InMemoryContentRepository,
    InMemoryHistoryRepository,
    InMemorySessionRepository,
)

__all__ = [
    "ContentRepository",
    "SessionRepository",
    "HistoryRepository",
    "InMemoryContentRepository",
    "InMemorySessionRepository",
    "InMemoryHistoryRepository",
]
