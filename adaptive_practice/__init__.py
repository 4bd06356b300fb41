"""
Adaptive Practice: question selection and mastery tracking for K-12 practice.

Packages:
- core: domain models, errors, stars and mastery
- adaptive: progression ladder and question selection
- content: question pools and pool documents
- sessions: session-scoped attempt ledger
- study: practice service facade
- analytics: student and class reports
- repositories: storage protocols and in-memory implementations
- cli: terminal front end
"""

__version__ = "1.0.0"
