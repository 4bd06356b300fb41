"""
Analytics: student and class practice reports.
"""

from adaptive_practice.analytics.reports import (
    AnalyticsService,
    ClassAnalytics,
    ConceptEffort,
    ConceptHeat,
    Intervention,
    StudentAnalytics,
)

__all__ = [
    "AnalyticsService",
    "StudentAnalytics",
    "ClassAnalytics",
    "ConceptHeat",
    "ConceptEffort",
    "Intervention",
]
