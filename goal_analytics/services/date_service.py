"""
Calendar day service.
Handles day keys, day arithmetic and day ranges for the analytics engine.
All days are timezone-naive calendar dates.
"""
import calendar
import re
from datetime import date, datetime, timedelta
from typing import List

from goal_analytics.exceptions import InvalidCalendarDayException

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateService:
    """Service for calendar-day operations"""

    @staticmethod
    def today() -> date:
        """
        Get the current machine-local calendar day.

        Callers capture this once per computation and pass it on as `as_of`,
        so a computation never straddles midnight.

        Returns:
            Today's date
        """
        return datetime.now().date()

    @staticmethod
    def add_days(day: date, n: int) -> date:
        """Shift a day by n days (n may be negative)"""
        return day + timedelta(days=n)

    @staticmethod
    def date_range(start: date, end: date) -> List[date]:
        """
        Get every day from start to end, both inclusive.

        Args:
            start: First day
            end: Last day

        Returns:
            Ascending list of days, empty when start is after end
        """
        span = (end - start).days
        return [start + timedelta(days=offset) for offset in range(span + 1)]

    @staticmethod
    def trailing_days(as_of: date, n: int) -> List[date]:
        """Get the n days ending at as_of, oldest first"""
        if n <= 0:
            return []
        return DateService.date_range(as_of - timedelta(days=n - 1), as_of)

    @staticmethod
    def start_of_week(day: date) -> date:
        """
        Get the Sunday of the week containing day.

        Weeks run Sunday (0) to Saturday (6). Python's weekday() is
        Monday=0, so Sunday is (weekday + 1) % 7 days back.
        """
        return day - timedelta(days=(day.weekday() + 1) % 7)

    @staticmethod
    def days_in_month(year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]

    @staticmethod
    def shift_month(day: date, months: int) -> date:
        """
        Get the first day of the month that is `months` away from day's month.

        Args:
            day: Reference day
            months: Month offset (negative goes back)

        Returns:
            First day of the target month
        """
        index = day.year * 12 + (day.month - 1) + months
        return date(index // 12, index % 12 + 1, 1)

    @staticmethod
    def to_key(day: date) -> str:
        """Canonical YYYY-MM-DD key for a day"""
        return day.isoformat()

    @staticmethod
    def parse_day(value) -> date:
        """
        Parse a calendar day from a date, datetime or YYYY-MM-DD string.

        Datetimes are truncated to their date.

        Raises:
            InvalidCalendarDayException: If value is not a valid calendar day
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DAY_KEY_PATTERN.match(value):
            raise InvalidCalendarDayException(value)
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise InvalidCalendarDayException(value)
