"""
Content access: question pools and pool documents.
"""

from adaptive_practice.content.pool import QuestionPool
from adaptive_practice.content.pool_file import PoolDocument, load_pool

__all__ = [
    "QuestionPool",
    "PoolDocument",
    "load_pool",
]
