"""
Streak calculation service.
A day counts toward a streak only when every goal in the set was satisfied.
"""
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from goal_analytics.models import Goal
from goal_analytics.core.config import AnalyticsSettings
from goal_analytics.services.completion_service import CompletionService
from goal_analytics.services.date_service import DateService

logger = logging.getLogger("goal_analytics.streaks")


class StreakService:
    """Service for current and longest streaks across a goal set"""

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()
        self.date_service = DateService()

    @staticmethod
    def is_day_complete(goals: Sequence[Goal], day: date) -> bool:
        """
        Check whether every goal was satisfied on a day.

        An empty goal set is never complete.
        """
        if not goals:
            return False
        return all(CompletionService.is_satisfied(goal, day) for goal in goals)

    def current_streak(self, goals: Sequence[Goal], as_of: date) -> int:
        """
        Count complete days walking backward from as_of (inclusive).

        Stops at the first incomplete day. Looks back at most
        streak_lookback_days days; older streaks are not tracked.

        Args:
            goals: Goal set
            as_of: Day to count back from

        Returns:
            Number of consecutive complete days ending at as_of
        """
        if not goals:
            return 0

        indexes = self._build_indexes(goals)
        streak = 0
        for offset in range(self.settings.streak_lookback_days):
            day = as_of - timedelta(days=offset)
            if not self._complete(indexes, day):
                break
            streak += 1

        logger.debug(f"Current streak as of {as_of.isoformat()}: {streak}")
        return streak

    def longest_streak(self, goals: Sequence[Goal], as_of: date) -> int:
        """
        Find the longest run of complete days in the lookback window.

        Scans from as_of - streak_lookback_days through as_of, oldest first,
        resetting the running count on each incomplete day.

        Args:
            goals: Goal set
            as_of: Last day of the window

        Returns:
            Length of the longest run
        """
        if not goals:
            return 0

        indexes = self._build_indexes(goals)
        start = self.date_service.add_days(as_of, -self.settings.streak_lookback_days)
        longest = 0
        running = 0

        for day in self.date_service.date_range(start, as_of):
            if self._complete(indexes, day):
                running += 1
                longest = max(longest, running)
            else:
                running = 0

        logger.debug(f"Longest streak as of {as_of.isoformat()}: {longest}")
        return longest

    def goal_streak(self, goal: Goal, as_of: date) -> int:
        """Current streak of a single goal"""
        return self.current_streak([goal], as_of)

    @staticmethod
    def _build_indexes(goals: Sequence[Goal]) -> List[Tuple[int, Dict[date, int]]]:
        return [(goal.target_count, CompletionService.index(goal)) for goal in goals]

    @staticmethod
    def _complete(indexes: List[Tuple[int, Dict[date, int]]], day: date) -> bool:
        return all(index.get(day, 0) >= target for target, index in indexes)
