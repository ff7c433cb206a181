"""
Completion store service.
Reads and updates a goal's per-day completion counts without mutating the goal.
"""
import logging
from datetime import date
from typing import Dict, List

from goal_analytics.models import Goal, Completion
from goal_analytics.exceptions import InvalidTargetCountException, ValidationException
from goal_analytics.services.date_service import DateService

logger = logging.getLogger("goal_analytics.completions")


class CompletionService:
    """Service for reading and updating goal completions"""

    @staticmethod
    def require_valid_target(goal: Goal) -> None:
        """
        Refuse to work with a goal whose target count is not positive.

        Pydantic already rejects this at construction; this catches goals
        built around validation (e.g. model_construct).

        Raises:
            InvalidTargetCountException: If target_count < 1
        """
        target = goal.target_count
        if not isinstance(target, int) or isinstance(target, bool) or target < 1:
            raise InvalidTargetCountException(goal.id, target)

    @staticmethod
    def index(goal: Goal) -> Dict[date, int]:
        """Build a day -> count lookup for a goal"""
        CompletionService.require_valid_target(goal)
        return {completion.date: completion.count for completion in goal.completions}

    @staticmethod
    def get(goal: Goal, day: date) -> int:
        """Get the completion count for a day (0 if absent)"""
        CompletionService.require_valid_target(goal)
        day = DateService.parse_day(day)
        for completion in goal.completions:
            if completion.date == day:
                return completion.count
        return 0

    @staticmethod
    def is_satisfied(goal: Goal, day: date) -> bool:
        """Check whether the goal's target was met on a day"""
        return CompletionService.get(goal, day) >= goal.target_count

    @staticmethod
    def satisfied_days(goal: Goal) -> List[date]:
        """Get all days on which the goal was satisfied, ascending"""
        CompletionService.require_valid_target(goal)
        return sorted(
            c.date for c in goal.completions if c.count >= goal.target_count
        )

    @staticmethod
    def toggle(goal: Goal, day: date) -> Goal:
        """
        Flip a day between satisfied and cleared.

        A satisfied day is cleared to count 0; any other day is set to exactly
        target_count. Never increments and never produces partial counts.

        Args:
            goal: Goal to update
            day: Day to toggle (date or YYYY-MM-DD string)

        Returns:
            New goal with the updated completion set
        """
        day = DateService.parse_day(day)
        if CompletionService.is_satisfied(goal, day):
            new_count = 0
        else:
            new_count = goal.target_count

        logger.info(f"Toggle goal {goal.id} on {day.isoformat()}: count -> {new_count}")
        return CompletionService._set_count(goal, day, new_count)

    @staticmethod
    def upsert(goal: Goal, day: date, count: int) -> Goal:
        """
        Set a day's count directly, inserting or overwriting the record.

        Used by bulk and import paths.

        Args:
            goal: Goal to update
            day: Day to set (date or YYYY-MM-DD string)
            count: New count (>= 0)

        Returns:
            New goal with the updated completion set

        Raises:
            ValidationException: If count is negative
        """
        CompletionService.require_valid_target(goal)
        if count < 0:
            raise ValidationException("count", f"must be >= 0, got {count}")
        day = DateService.parse_day(day)

        logger.debug(f"Upsert goal {goal.id} on {day.isoformat()}: count = {count}")
        return CompletionService._set_count(goal, day, count)

    @staticmethod
    def _set_count(goal: Goal, day: date, count: int) -> Goal:
        """
        Return a copy of goal with exactly one record for day.

        model_copy skips validation, so day must already be a parsed date.
        """
        assert type(day) is date, f"expected a parsed date, got {day!r}"
        updated = Completion(date=day, count=count)
        completions = []
        replaced = False

        for completion in goal.completions:
            if completion.date == day:
                completions.append(updated)
                replaced = True
            else:
                completions.append(completion)

        if not replaced:
            completions.append(updated)

        return goal.model_copy(update={"completions": tuple(completions)})
