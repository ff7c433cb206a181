"""
Goal analytics and streak engine.
Turns goals and their dated completions into streaks, calendars, rates and achievements.
"""
from goal_analytics.models import Category, Completion, Frequency, Goal
from goal_analytics.services.analytics_service import AnalyticsService

__version__ = "1.0.0"

__all__ = [
    "AnalyticsService",
    "Category",
    "Completion",
    "Frequency",
    "Goal",
]
