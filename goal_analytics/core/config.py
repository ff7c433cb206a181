"""
Engine configuration.
Windows and thresholds for the analytics engine, overridable from the environment.
"""
import os
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from goal_analytics import constants
from goal_analytics.exceptions import ValidationException


class AnalyticsSettings(BaseModel):
    # Scan windows (days unless noted)
    streak_lookback_days: int = Field(default=constants.STREAK_LOOKBACK_DAYS, ge=1)
    heatmap_window_days: int = Field(default=constants.HEATMAP_WINDOW_DAYS, ge=0)
    monthly_series_months: int = Field(default=constants.MONTHLY_SERIES_MONTHS, ge=1)
    yearly_series_years: int = Field(default=constants.YEARLY_SERIES_YEARS, ge=1)
    category_window_days: int = Field(default=constants.CATEGORY_WINDOW_DAYS, ge=1)
    rolling_rate_days: int = Field(default=constants.ROLLING_RATE_DAYS, ge=1)
    daily_series_days: int = Field(default=constants.DAILY_SERIES_DAYS, ge=1)
    weekly_series_weeks: int = Field(default=constants.WEEKLY_SERIES_WEEKS, ge=1)

    # Achievement thresholds
    streak_achievement_min: int = Field(default=constants.ACHIEVEMENT_STREAK_MIN, ge=1)
    half_century_completions: int = Field(default=constants.ACHIEVEMENT_HALF_CENTURY, ge=1)
    century_completions: int = Field(default=constants.ACHIEVEMENT_CENTURY, ge=1)
    high_achiever_rate: int = Field(default=constants.ACHIEVEMENT_HIGH_RATE, ge=0, le=100)
    category_master_min_goals: int = Field(default=constants.ACHIEVEMENT_CATEGORY_MIN_GOALS, ge=1)
    category_master_min_rate: int = Field(default=constants.ACHIEVEMENT_CATEGORY_MIN_RATE, ge=0, le=100)
    achievement_limit: int = Field(default=constants.ACHIEVEMENT_LIMIT, ge=0)

    class Config:
        frozen = True


def load_settings(environ: Optional[Dict[str, str]] = None) -> AnalyticsSettings:
    """
    Build settings from GOAL_ANALYTICS_* environment variables.

    Example: GOAL_ANALYTICS_STREAK_LOOKBACK_DAYS=180 overrides
    streak_lookback_days. Unset variables keep their defaults.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated settings

    Raises:
        ValidationException: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    overrides = {}

    for field in AnalyticsSettings.model_fields:
        raw = env.get(f"{constants.ENV_PREFIX}{field.upper()}")
        if raw is None or raw.strip() == "":
            continue
        overrides[field] = raw.strip()

    try:
        return AnalyticsSettings(**overrides)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "settings"
        raise ValidationException(field, error["msg"])


def get_log_settings() -> Dict[str, str]:
    """Read logging configuration from the environment"""
    return {
        "log_dir": os.getenv(
            f"{constants.ENV_PREFIX}LOG_DIR", constants.DEFAULT_LOG_DIRECTORY_PROD
        ),
        "log_file": os.getenv(
            f"{constants.ENV_PREFIX}LOG_FILE", constants.DEFAULT_LOG_FILE
        ),
        "log_level": os.getenv(
            f"{constants.ENV_PREFIX}LOG_LEVEL", constants.DEFAULT_LOG_LEVEL
        ).upper(),
    }
