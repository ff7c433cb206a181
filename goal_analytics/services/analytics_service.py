"""
Analytics service.
Single entry point the dashboard, analytics, profile and feed views call for
derived statistics, plus the user-facing completion toggle.
"""
import logging
from datetime import date
from typing import Optional, Sequence, Tuple

from goal_analytics.models import Goal
from goal_analytics.core.config import AnalyticsSettings
from goal_analytics.exceptions import GoalNotFoundException
from goal_analytics.schemas import AnalyticsSnapshot
from goal_analytics.services.achievement_service import AchievementService
from goal_analytics.services.aggregation_service import AggregationService
from goal_analytics.services.completion_service import CompletionService
from goal_analytics.services.date_service import DateService
from goal_analytics.services.streak_service import StreakService

logger = logging.getLogger("goal_analytics.analytics")


class AnalyticsService:
    """Service computing derived statistics for a goal set"""

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()
        self.date_service = DateService()
        self.streak_service = StreakService(self.settings)
        self.aggregation_service = AggregationService(self.settings)
        self.achievement_service = AchievementService(self.settings)

    def snapshot(
        self,
        goals: Sequence[Goal],
        as_of: Optional[date] = None
    ) -> AnalyticsSnapshot:
        """
        Compute every derived statistic for a goal set.

        The result depends only on (goals, as_of): identical inputs give an
        identical snapshot.

        Args:
            goals: Goal set, in display order
            as_of: Day treated as "today" (defaults to today, read once)

        Returns:
            Immutable snapshot of all statistics
        """
        if as_of is None:
            as_of = self.date_service.today()
        else:
            as_of = self.date_service.parse_day(as_of)
        goals = tuple(goals)

        logger.debug(f"Computing snapshot for {len(goals)} goals as of {as_of.isoformat()}")

        current_streak = self.streak_service.current_streak(goals, as_of)
        longest_streak = self.streak_service.longest_streak(goals, as_of)
        summary = self.aggregation_service.summary(goals, as_of)
        category_rollup = self.aggregation_service.category_rollup(goals, as_of)

        achievements = self.achievement_service.derive(
            current_streak=current_streak,
            total_completions=summary.total_completions,
            completion_rate=summary.completion_rate,
            category_rollup=category_rollup
        )

        return AnalyticsSnapshot(
            as_of=as_of,
            current_streak=current_streak,
            longest_streak=longest_streak,
            heatmap=self.aggregation_service.heatmap(goals, as_of),
            monthly_series=self.aggregation_service.monthly_series(goals, as_of),
            yearly_series=self.aggregation_service.yearly_series(goals, as_of),
            category_rollup=category_rollup,
            achievements=achievements,
            summary=summary,
            daily_series=self.aggregation_service.daily_series(goals, as_of),
            weekly_series=self.aggregation_service.weekly_series(goals, as_of),
            weekly_progress={
                goal.id: self.aggregation_service.weekly_progress(goal, as_of)
                for goal in goals
            }
        )

    def toggle_completion(self, goal: Goal, day: date) -> Goal:
        """Flip a goal's completion for a day; returns the updated goal"""
        return CompletionService.toggle(goal, day)

    def toggle_in_goal_set(
        self,
        goals: Sequence[Goal],
        goal_id: str,
        day: date
    ) -> Tuple[Goal, ...]:
        """
        Toggle one goal's completion inside a goal set.

        Args:
            goals: Goal set
            goal_id: ID of the goal to toggle
            day: Day to toggle

        Returns:
            New goal set with only that goal replaced

        Raises:
            GoalNotFoundException: If no goal has goal_id
        """
        if not any(goal.id == goal_id for goal in goals):
            raise GoalNotFoundException(goal_id)

        return tuple(
            self.toggle_completion(goal, day) if goal.id == goal_id else goal
            for goal in goals
        )
