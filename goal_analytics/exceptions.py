"""
Custom exceptions for the goal analytics engine.
Raised at the boundary when input cannot produce a meaningful statistic.
"""


class GoalAnalyticsException(Exception):
    """Base exception for goal analytics"""
    pass


class GoalNotFoundException(GoalAnalyticsException):
    """Raised when a goal is not found in a goal set"""
    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal with ID {goal_id} not found")


class InvalidCalendarDayException(GoalAnalyticsException, ValueError):
    """Raised when a calendar day string is malformed"""
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid calendar day: {value!r}. Expected YYYY-MM-DD")


class InvalidTargetCountException(GoalAnalyticsException):
    """Raised when a goal's target count is not a positive integer"""
    def __init__(self, goal_id: str, target_count: object):
        self.goal_id = goal_id
        self.target_count = target_count
        super().__init__(
            f"Goal {goal_id} has invalid target_count {target_count}: must be >= 1"
        )


class ValidationException(GoalAnalyticsException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")
