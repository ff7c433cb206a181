"""
Tests for AggregationService.

Tests cover:
1. Percentage rounding
2. Contribution heat-map and calendar grid
3. Monthly and yearly rate series
4. Category rollups
5. Daily, weekly and summary views
"""
import pytest
from datetime import date, timedelta
from fractions import Fraction

from goal_analytics.services.aggregation_service import (
    AggregationService, round_percentage, heat_level
)
from goal_analytics.models import Category
from goal_analytics.tests.conftest import build_goal, days_back


class TestRoundPercentage:
    """Tests for round_percentage function"""

    @pytest.mark.parametrize("numerator,denominator,expected", [
        (1, 3, 33),
        (2, 3, 67),
        (1, 2, 50),
        (1, 8, 13),  # 12.5 rounds up
        (3, 8, 38),  # 37.5 rounds up
        (0, 5, 0),
        (5, 5, 100),
    ])
    def test_half_up(self, numerator, denominator, expected):
        assert round_percentage(numerator, denominator) == expected

    def test_zero_denominator_is_zero(self):
        assert round_percentage(0, 0) == 0
        assert round_percentage(5, 0) == 0

    def test_accepts_fractions(self):
        assert round_percentage(Fraction(3, 2), 2) == 75


class TestHeatmap:
    """Tests for heatmap and calendar_grid functions"""

    def test_heat_levels(self):
        assert [heat_level(n) for n in (0, 1, 2, 3, 4, 9)] == [0, 1, 2, 3, 4, 4]

    def test_empty_goal_set_all_zero(self, as_of):
        heatmap = AggregationService().heatmap([], as_of)

        assert len(heatmap) == 365
        assert all(cell.count == 0 and cell.level == 0 for cell in heatmap.values())

    def test_window_bounds_and_order(self, as_of):
        heatmap = AggregationService().heatmap([], as_of)
        keys = list(heatmap)

        assert keys[0] == (as_of - timedelta(days=364)).isoformat()
        assert keys[-1] == as_of.isoformat()
        assert keys == sorted(keys)

    def test_counts_distinct_satisfied_goals(self, as_of):
        goals = [
            build_goal("a", [as_of]),
            build_goal("b", [as_of], target_count=2),
            build_goal("c", [as_of], target_count=3, count=1),
        ]

        cell = AggregationService().heatmap(goals, as_of)[as_of.isoformat()]

        assert cell.count == 2
        assert cell.level == 2

    def test_level_clipped_at_four(self, as_of):
        goals = [build_goal(f"g{i}", [as_of]) for i in range(6)]

        cell = AggregationService().heatmap(goals, as_of)[as_of.isoformat()]

        assert cell.count == 6
        assert cell.level == 4

    def test_completions_outside_window_ignored(self, as_of):
        old = as_of - timedelta(days=400)
        goal = build_goal(days=[old, as_of + timedelta(days=1)])

        heatmap = AggregationService().heatmap([goal], as_of)

        assert old.isoformat() not in heatmap
        assert sum(cell.count for cell in heatmap.values()) == 0

    def test_custom_window(self, as_of):
        heatmap = AggregationService().heatmap([], as_of, days=6)

        assert len(heatmap) == 7

    def test_calendar_grid_shape(self, as_of):
        service = AggregationService()
        goal = build_goal(days=[as_of])
        grid = service.calendar_grid(service.heatmap([goal], as_of), as_of)

        assert len(grid) == 53
        assert all(len(week) == 7 for week in grid)
        assert grid[0][0].date.weekday() == 6  # Sunday
        assert grid[0][0].date == date(2023, 6, 11)

    def test_calendar_grid_places_cells(self, as_of):
        service = AggregationService()
        before_window = date(2023, 6, 12)  # In the first grid week, outside the heat-map
        goal = build_goal(days=[as_of, before_window])
        grid = service.calendar_grid(service.heatmap([goal], as_of), as_of)

        assert grid[-1][-1].date == as_of
        assert grid[-1][-1].count == 1
        assert grid[0][1].date == before_window
        assert grid[0][1].count == 0


class TestMonthlySeries:
    """Tests for monthly_series function"""

    def test_trailing_twelve_months(self, as_of):
        series = AggregationService().monthly_series([], as_of)

        assert len(series) == 12
        assert (series[0].year, series[0].month, series[0].label) == (2023, 7, "Jul")
        assert (series[-1].year, series[-1].month, series[-1].label) == (2024, 6, "Jun")

    def test_empty_goal_set_zero_rates(self, as_of):
        series = AggregationService().monthly_series([], as_of)

        assert all(m.rate == 0 and m.possible == 0 for m in series)

    def test_rate_for_current_month(self, as_of):
        """15 satisfied days out of 30 possible in June"""
        goal = build_goal(days=[date(2024, 6, day) for day in range(1, 16)])

        june = AggregationService().monthly_series([goal], as_of)[-1]

        assert june.completions == 15
        assert june.possible == 30
        assert june.rate == 50

    def test_leap_february_possible(self, as_of):
        goals = [build_goal("a", [date(2024, 2, 10)]), build_goal("b")]

        february = next(
            m for m in AggregationService().monthly_series(goals, as_of)
            if (m.year, m.month) == (2024, 2)
        )

        assert february.possible == 58
        assert february.completions == 1
        assert february.rate == 2

    def test_partial_counts_excluded(self, as_of):
        goal = build_goal(days=[date(2024, 6, 1)], target_count=3, count=2)

        assert AggregationService().monthly_series([goal], as_of)[-1].completions == 0

    def test_goal_created_mid_month_counts_full_month(self, as_of):
        goal = build_goal(created_at=date(2024, 6, 10))

        june = AggregationService().monthly_series([goal], as_of)[-1]

        assert june.possible == 30


class TestYearlySeries:
    """Tests for yearly_series function"""

    def test_trailing_three_years(self, as_of):
        series = AggregationService().yearly_series([], as_of)

        assert [y.year for y in series] == [2022, 2023, 2024]
        assert all(y.rate == 0 for y in series)

    def test_rate_uses_365_possible(self, as_of):
        goal = build_goal(days=[date(2024, 1, 1) + timedelta(days=n) for n in range(73)])

        current = AggregationService().yearly_series([goal], as_of)[-1]

        assert current.completions == 73
        assert current.possible == 365
        assert current.rate == 20


class TestCategoryRollup:
    """Tests for category_rollup function"""

    def test_empty_goal_set(self, as_of):
        assert AggregationService().category_rollup([], as_of) == []

    def test_rollup_counts_recent_goals(self, as_of):
        goals = [
            build_goal("a", [as_of - timedelta(days=2)], category="health"),
            build_goal("b", [as_of - timedelta(days=7)], category="health"),
            build_goal("c", category="work"),
        ]

        rollup = AggregationService().category_rollup(goals, as_of)

        assert [r.category for r in rollup] == [Category.HEALTH, Category.WORK]
        assert (rollup[0].completed, rollup[0].total, rollup[0].percentage) == (1, 2, 50)
        assert (rollup[1].completed, rollup[1].total, rollup[1].percentage) == (0, 1, 0)
        assert rollup[0].name == "Health"

    def test_window_includes_sixth_day_back(self, as_of):
        goal = build_goal(days=[as_of - timedelta(days=6)])

        assert AggregationService().category_rollup([goal], as_of)[0].completed == 1

    def test_future_completions_not_counted(self, as_of):
        goal = build_goal(days=[as_of + timedelta(days=1)])

        assert AggregationService().category_rollup([goal], as_of)[0].completed == 0

    def test_unknown_category_falls_back_to_other(self, as_of):
        goal = build_goal(category="Fitness")

        assert AggregationService().category_rollup([goal], as_of)[0].category == Category.OTHER

    def test_percentages_bounded(self, as_of):
        goals = [
            build_goal(f"g{i}", [as_of] if i % 2 else [], category=cat)
            for i, cat in enumerate(["health", "work", "learning", "health", "personal"])
        ]

        rollup = AggregationService().category_rollup(goals, as_of)

        assert all(0 <= r.percentage <= 100 for r in rollup)


class TestGoalViews:
    """Tests for weekly_progress, daily_series, weekly_series and summary"""

    def test_weekly_progress_oldest_first(self, as_of):
        goal = build_goal(days=[as_of, as_of - timedelta(days=6)])

        assert AggregationService().weekly_progress(goal, as_of) == [
            True, False, False, False, False, False, True
        ]

    def test_daily_series(self, as_of):
        goals = [build_goal("a", [as_of], target_count=3, count=2), build_goal("b", [as_of])]

        series = AggregationService().daily_series(goals, as_of)
        today = series[-1]

        assert len(series) == 30
        assert today.date == as_of
        assert today.completed_goals == 1
        assert today.total_goals == 2
        assert today.total_completions == 3
        assert today.completion_rate == 50

    def test_weekly_series(self, as_of):
        goal = build_goal(days=days_back(as_of, 0, 6))

        series = AggregationService().weekly_series([goal], as_of)

        assert len(series) == 12
        assert series[0].label == "Week 1"
        assert series[-1].label == "Week 12"
        assert series[-1].week_start == date(2024, 6, 9)
        assert series[-1].completed_days == 7
        assert series[-1].percentage == 100
        assert series[-2].completed_days == 0

    def test_weekly_series_empty_goal_set(self, as_of):
        series = AggregationService().weekly_series([], as_of)

        assert all(w.completed_days == 0 and w.percentage == 0 for w in series)

    def test_summary(self, as_of):
        goals = [
            build_goal("a", [as_of], target_count=2, count=1),
            build_goal("b", days_back(as_of, 0, 29)),
        ]

        summary = AggregationService().summary(goals, as_of)

        assert summary.total_goals == 2
        assert summary.today_completed == 1
        assert summary.today_progress == 75
        assert summary.weekly_completions == 7
        assert summary.weekly_rate == 50
        assert summary.monthly_completions == 30
        assert summary.completion_rate == 50
        assert summary.total_completions == 30

    def test_summary_empty_goal_set(self, as_of):
        summary = AggregationService().summary([], as_of)

        assert summary.model_dump() == {
            "total_goals": 0,
            "today_completed": 0,
            "today_progress": 0,
            "weekly_completions": 0,
            "weekly_rate": 0,
            "monthly_completions": 0,
            "completion_rate": 0,
            "total_completions": 0,
        }
