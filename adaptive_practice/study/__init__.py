"""
Study Module.

Provides the practice service used by the application layer:
- Session lifecycle (start, resume, end)
- Adaptive next-question selection
- Answer scoring with stars and mastery
"""

from adaptive_practice.study.practice_service import PracticeService, ScoredAttempt

__all__ = [
    "PracticeService",
    "ScoredAttempt",
]
