"""
Shared fixtures for analytics engine tests.
"""
import pytest
from datetime import date, timedelta

from goal_analytics.core.config import AnalyticsSettings
from goal_analytics.models import Goal, Completion


@pytest.fixture
def as_of():
    """Fixed 'today' (a Saturday)"""
    return date(2024, 6, 15)


@pytest.fixture
def yesterday(as_of):
    return as_of - timedelta(days=1)


@pytest.fixture
def default_settings():
    return AnalyticsSettings()


def days_back(as_of: date, start: int, end: int):
    """Days from as_of - end through as_of - start, oldest first"""
    return [as_of - timedelta(days=offset) for offset in range(end, start - 1, -1)]


def build_goal(
    goal_id="g1",
    days=(),
    target_count=1,
    category="health",
    count=None,
    created_at=date(2023, 1, 1)
):
    """Build a goal satisfied (or set to `count`) on each of `days`"""
    value = target_count if count is None else count
    return Goal(
        id=goal_id,
        title=f"Goal {goal_id}",
        category=category,
        target_count=target_count,
        created_at=created_at,
        completions=tuple(Completion(date=day, count=value) for day in days)
    )


@pytest.fixture
def make_goal():
    return build_goal
