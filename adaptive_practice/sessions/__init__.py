"""
Sessions: the session-scoped attempt ledger.
"""

from adaptive_practice.sessions.ledger import AttemptLedger, attempts_on

__all__ = [
    "AttemptLedger",
    "attempts_on",
]
