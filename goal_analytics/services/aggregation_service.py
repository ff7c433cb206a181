"""
Aggregation service.
Rolls goal completions into calendar buckets (daily, weekly, monthly, yearly)
and per-category summaries.

Every view counts satisfied completions only: a day counts for a goal when its
count reached the goal's target_count. All percentages use round-half-up and
a zero denominator yields 0.
"""
import logging
import math
from collections import Counter, OrderedDict
from datetime import date, timedelta
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

from goal_analytics.models import Goal
from goal_analytics.core.config import AnalyticsSettings
from goal_analytics.schemas import (
    HeatmapCell, MonthlyRate, YearlyRate, CategoryRollup,
    DailyRate, WeeklyRate, SummaryStats
)
from goal_analytics.services.completion_service import CompletionService
from goal_analytics.services.date_service import DateService
from goal_analytics.constants import (
    HEATMAP_MAX_LEVEL, CALENDAR_GRID_WEEKS, DAYS_PER_YEAR,
    MONTH_LABELS, WEEKLY_PROGRESS_DAYS
)

logger = logging.getLogger("goal_analytics.aggregation")


def round_percentage(numerator, denominator) -> int:
    """
    Percentage of numerator over denominator, rounded half up.

    Accepts ints or Fractions. Returns 0 when denominator is not positive.
    """
    if denominator <= 0:
        return 0
    value = Fraction(numerator) * 100 / Fraction(denominator)
    return math.floor(value + Fraction(1, 2))


def heat_level(count: int) -> int:
    """Map a satisfied-goal count onto intensity levels 0-4"""
    return max(0, min(count, HEATMAP_MAX_LEVEL))


class AggregationService:
    """Service for calendar and category rollups of completions"""

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()
        self.date_service = DateService()

    def heatmap(
        self,
        goals: Sequence[Goal],
        as_of: date,
        days: Optional[int] = None
    ) -> Dict[str, HeatmapCell]:
        """
        Build the contribution calendar for [as_of - days, as_of].

        Args:
            goals: Goal set
            as_of: Last day of the window
            days: Days to look back (defaults to heatmap_window_days)

        Returns:
            Ordered mapping of YYYY-MM-DD -> cell, oldest first. A cell's count
            is the number of distinct goals satisfied that day.
        """
        if days is None:
            days = self.settings.heatmap_window_days

        indexes = self._indexes(goals)
        start = self.date_service.add_days(as_of, -days)
        cells = OrderedDict()

        for day in self.date_service.date_range(start, as_of):
            count = self._satisfied_on(indexes, day)
            cells[self.date_service.to_key(day)] = HeatmapCell(
                date=day, count=count, level=heat_level(count)
            )

        return cells

    def calendar_grid(
        self,
        heatmap: Dict[str, HeatmapCell],
        as_of: date
    ) -> List[List[HeatmapCell]]:
        """
        Lay a heat-map out as Sunday-started weeks.

        The grid starts on the Sunday on or before as_of - 364 and spans
        53 weeks of 7 days. Days missing from the heat-map (including days
        after as_of) are empty cells.
        """
        start = self.date_service.start_of_week(self.date_service.add_days(as_of, -364))
        weeks = []

        for week in range(CALENDAR_GRID_WEEKS):
            week_days = []
            for weekday in range(7):
                day = start + timedelta(days=week * 7 + weekday)
                cell = heatmap.get(self.date_service.to_key(day))
                week_days.append(cell if cell is not None else HeatmapCell(date=day))
            weeks.append(week_days)

        return weeks

    def monthly_series(
        self,
        goals: Sequence[Goal],
        as_of: date,
        months: Optional[int] = None
    ) -> List[MonthlyRate]:
        """
        Completion rate for each of the trailing calendar months.

        rate = completions / (len(goals) * days_in_month). Every goal counts
        for the whole month even if it was created part-way through it.

        Args:
            goals: Goal set
            as_of: Day whose month is the last in the series
            months: Number of months (defaults to monthly_series_months)

        Returns:
            Monthly rates, oldest first
        """
        if months is None:
            months = self.settings.monthly_series_months

        per_month = Counter(
            (day.year, day.month) for day in self._all_satisfied_days(goals)
        )
        series = []

        for offset in range(months - 1, -1, -1):
            month_start = self.date_service.shift_month(as_of, -offset)
            completions = per_month[(month_start.year, month_start.month)]
            possible = len(goals) * self.date_service.days_in_month(
                month_start.year, month_start.month
            )
            series.append(MonthlyRate(
                year=month_start.year,
                month=month_start.month,
                label=MONTH_LABELS[month_start.month - 1],
                completions=completions,
                possible=possible,
                rate=round_percentage(completions, possible)
            ))

        return series

    def yearly_series(
        self,
        goals: Sequence[Goal],
        as_of: date,
        years: Optional[int] = None
    ) -> List[YearlyRate]:
        """
        Completion rate for each of the trailing calendar years.

        possible = len(goals) * 365 for every year, leap years included.
        """
        if years is None:
            years = self.settings.yearly_series_years

        per_year = Counter(day.year for day in self._all_satisfied_days(goals))
        series = []

        for offset in range(years - 1, -1, -1):
            year = as_of.year - offset
            completions = per_year[year]
            possible = len(goals) * DAYS_PER_YEAR
            series.append(YearlyRate(
                year=year,
                completions=completions,
                possible=possible,
                rate=round_percentage(completions, possible)
            ))

        return series

    def category_rollup(
        self,
        goals: Sequence[Goal],
        as_of: date,
        days: Optional[int] = None
    ) -> List[CategoryRollup]:
        """
        Summarize each category present in the goal set.

        A goal counts as completed when it has at least one satisfied day in
        the trailing window [as_of - days + 1, as_of].

        Args:
            goals: Goal set
            as_of: Last day of the window
            days: Window length (defaults to category_window_days)

        Returns:
            One rollup per category, in order of first appearance
        """
        if days is None:
            days = self.settings.category_window_days

        window = self.date_service.trailing_days(as_of, days)
        totals = OrderedDict()

        for goal in goals:
            completed, total = totals.get(goal.category, (0, 0))
            index = CompletionService.index(goal)
            recent = any(index.get(day, 0) >= goal.target_count for day in window)
            totals[goal.category] = (completed + (1 if recent else 0), total + 1)

        return [
            CategoryRollup(
                category=category,
                name=category.display_name,
                completed=completed,
                total=total,
                percentage=round_percentage(completed, total)
            )
            for category, (completed, total) in totals.items()
        ]

    def weekly_progress(self, goal: Goal, as_of: date) -> List[bool]:
        """Satisfied flags for the 7 days ending at as_of, oldest first"""
        index = CompletionService.index(goal)
        return [
            index.get(day, 0) >= goal.target_count
            for day in self.date_service.trailing_days(as_of, WEEKLY_PROGRESS_DAYS)
        ]

    def daily_series(
        self,
        goals: Sequence[Goal],
        as_of: date,
        days: Optional[int] = None
    ) -> List[DailyRate]:
        """Per-day completion rates for the trailing days, oldest first"""
        if days is None:
            days = self.settings.daily_series_days

        indexes = self._indexes(goals)
        series = []

        for day in self.date_service.trailing_days(as_of, days):
            completed = self._satisfied_on(indexes, day)
            series.append(DailyRate(
                date=day,
                completed_goals=completed,
                total_goals=len(goals),
                total_completions=sum(index.get(day, 0) for _, index in indexes),
                completion_rate=round_percentage(completed, len(goals))
            ))

        return series

    def weekly_series(
        self,
        goals: Sequence[Goal],
        as_of: date,
        weeks: Optional[int] = None
    ) -> List[WeeklyRate]:
        """
        Fully completed days per Sunday-started week.

        Covers the week containing as_of and the weeks before it; a day is
        complete only when every goal was satisfied. Days after as_of in the
        current week are counted like any other day.
        """
        if weeks is None:
            weeks = self.settings.weekly_series_weeks

        indexes = self._indexes(goals)
        series = []

        for offset in range(weeks - 1, -1, -1):
            week_start = self.date_service.start_of_week(
                self.date_service.add_days(as_of, -7 * offset)
            )
            week_end = self.date_service.add_days(week_start, 6)
            completed_days = 0
            if goals:
                completed_days = sum(
                    1 for day in self.date_service.date_range(week_start, week_end)
                    if self._satisfied_on(indexes, day) == len(goals)
                )
            series.append(WeeklyRate(
                week_start=week_start,
                label=f"Week {weeks - offset}",
                completed_days=completed_days,
                percentage=round_percentage(completed_days, 7)
            ))

        return series

    def summary(
        self,
        goals: Sequence[Goal],
        as_of: date,
        rolling_days: Optional[int] = None
    ) -> SummaryStats:
        """
        Headline numbers shown on the dashboard and profile.

        Args:
            goals: Goal set
            as_of: Day treated as "today"
            rolling_days: Window of the rolling completion rate
                (defaults to rolling_rate_days)

        Returns:
            Summary statistics
        """
        if rolling_days is None:
            rolling_days = self.settings.rolling_rate_days

        total_goals = len(goals)
        indexes = self._indexes(goals)

        # Partial credit per goal, capped at 1
        progress = sum(
            (Fraction(min(index.get(as_of, 0), target), target) for target, index in indexes),
            Fraction(0)
        )

        weekly = sum(
            self._satisfied_on(indexes, day)
            for day in self.date_service.trailing_days(as_of, WEEKLY_PROGRESS_DAYS)
        )
        rolling = sum(
            self._satisfied_on(indexes, day)
            for day in self.date_service.trailing_days(as_of, rolling_days)
        )

        return SummaryStats(
            total_goals=total_goals,
            today_completed=self._satisfied_on(indexes, as_of),
            today_progress=round_percentage(progress, total_goals),
            weekly_completions=weekly,
            weekly_rate=round_percentage(weekly, total_goals * WEEKLY_PROGRESS_DAYS),
            monthly_completions=rolling,
            completion_rate=round_percentage(rolling, total_goals * rolling_days),
            total_completions=len(self._all_satisfied_days(goals))
        )

    @staticmethod
    def _indexes(goals: Sequence[Goal]) -> List[Tuple[int, Dict[date, int]]]:
        return [(goal.target_count, CompletionService.index(goal)) for goal in goals]

    @staticmethod
    def _satisfied_on(indexes: List[Tuple[int, Dict[date, int]]], day: date) -> int:
        return sum(1 for target, index in indexes if index.get(day, 0) >= target)

    @staticmethod
    def _all_satisfied_days(goals: Sequence[Goal]) -> List[date]:
        """Satisfied days of every goal, one entry per goal per day"""
        days = []
        for goal in goals:
            days.extend(CompletionService.satisfied_days(goal))
        return days
