"""
Goal construction service.
Builds and edits goal values at the boundary, before they reach the engine.
"""
import logging
import uuid
from datetime import date
from typing import Optional

from goal_analytics.models import Goal
from goal_analytics.schemas import GoalCreate, GoalUpdate
from goal_analytics.services.date_service import DateService

logger = logging.getLogger("goal_analytics.goals")


class GoalService:
    """Service for creating and editing goal values"""

    def __init__(self):
        self.date_service = DateService()

    def create_goal(
        self,
        goal_data: GoalCreate,
        goal_id: Optional[str] = None,
        created_at: Optional[date] = None
    ) -> Goal:
        """
        Create a new goal with no completions.

        Args:
            goal_data: Validated goal fields
            goal_id: Explicit ID (a UUID is generated when omitted)
            created_at: Creation day (defaults to today)

        Returns:
            New goal
        """
        goal = Goal(
            id=goal_id or str(uuid.uuid4()),
            created_at=created_at or self.date_service.today(),
            **goal_data.model_dump()
        )
        logger.info(f"Created goal {goal.id} ({goal.category.value}, target {goal.target_count})")
        return goal

    def update_goal(self, goal: Goal, goal_update: GoalUpdate) -> Goal:
        """
        Apply an edit to a goal, keeping its ID, creation day and completions.

        Only fields explicitly set to a non-None value on goal_update change;
        None means "leave as is". The result is re-validated, so a bad edit
        raises pydantic.ValidationError.
        """
        update_data = goal_update.model_dump(exclude_unset=True, exclude_none=True)
        merged = {**goal.model_dump(), **update_data}
        return Goal(**merged)
