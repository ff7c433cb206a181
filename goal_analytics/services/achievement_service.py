"""
Achievement service.
Derives unlocked achievements from streak and aggregate statistics.
Nothing is persisted: every call re-evaluates all rules from scratch.
"""
import logging
from typing import List, Optional, Sequence

from goal_analytics.core.config import AnalyticsSettings
from goal_analytics.schemas import Achievement, CategoryRollup
from goal_analytics.constants import (
    ACHIEVEMENT_KIND_STREAK, ACHIEVEMENT_KIND_MILESTONE,
    ACHIEVEMENT_KIND_PERFORMANCE, ACHIEVEMENT_KIND_CATEGORY
)

logger = logging.getLogger("goal_analytics.achievements")


class AchievementService:
    """Service for deriving achievements"""

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()

    def derive(
        self,
        current_streak: int,
        total_completions: int,
        completion_rate: int,
        category_rollup: Sequence[CategoryRollup]
    ) -> List[Achievement]:
        """
        Evaluate the achievement rules in order.

        Rules, in output order:
        1. Streak: current streak >= 7
        2. Milestone: Century Club (>= 100) or else Half Century (>= 50)
        3. High Achiever: rolling completion rate >= 80%
        4. Category Master: first category with >= 5 goals at >= 90%

        Args:
            current_streak: Current streak of the goal set
            total_completions: All-time satisfied completions
            completion_rate: Rolling completion rate (percentage)
            category_rollup: Category summaries, in display order

        Returns:
            At most achievement_limit achievements, in rule order
        """
        achievements = []

        streak = self._streak(current_streak)
        if streak:
            achievements.append(streak)

        milestone = self._milestone(total_completions)
        if milestone:
            achievements.append(milestone)

        if completion_rate >= self.settings.high_achiever_rate:
            achievements.append(Achievement(
                kind=ACHIEVEMENT_KIND_PERFORMANCE,
                title="High Achiever",
                description=f"{self.settings.high_achiever_rate}%+ completion rate"
            ))

        master = self._category_master(category_rollup)
        if master:
            achievements.append(master)

        result = achievements[:self.settings.achievement_limit]
        logger.debug(f"Derived achievements: {[a.title for a in result]}")
        return result

    def _streak(self, current_streak: int) -> Optional[Achievement]:
        if current_streak < self.settings.streak_achievement_min:
            return None
        return Achievement(
            kind=ACHIEVEMENT_KIND_STREAK,
            title=f"{current_streak} Day Streak",
            description="Consistent daily goal completion"
        )

    def _milestone(self, total_completions: int) -> Optional[Achievement]:
        """Century Club supersedes Half Century"""
        if total_completions >= self.settings.century_completions:
            return Achievement(
                kind=ACHIEVEMENT_KIND_MILESTONE,
                title="Century Club",
                description=f"{self.settings.century_completions}+ goals completed"
            )
        if total_completions >= self.settings.half_century_completions:
            return Achievement(
                kind=ACHIEVEMENT_KIND_MILESTONE,
                title="Half Century",
                description=f"{self.settings.half_century_completions}+ goals completed"
            )
        return None

    def _category_master(
        self,
        category_rollup: Sequence[CategoryRollup]
    ) -> Optional[Achievement]:
        for rollup in category_rollup:
            if (rollup.total >= self.settings.category_master_min_goals
                    and rollup.percentage >= self.settings.category_master_min_rate):
                return Achievement(
                    kind=ACHIEVEMENT_KIND_CATEGORY,
                    title=f"{rollup.name} Master",
                    description=f"Excellent in {rollup.name.lower()} goals"
                )
        return None
