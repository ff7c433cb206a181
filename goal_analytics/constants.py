"""
Application constants.
Default windows, thresholds and labels used by the analytics engine.
"""

# Goal categories
CATEGORY_HEALTH = "health"
CATEGORY_WORK = "work"
CATEGORY_PERSONAL = "personal"
CATEGORY_LEARNING = "learning"
CATEGORY_OTHER = "other"

# Goal frequencies
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_MONTHLY = "monthly"

# Streak scanning
STREAK_LOOKBACK_DAYS = 365  # Current streak walks at most this many days

# Contribution calendar
HEATMAP_WINDOW_DAYS = 364  # [as_of - 364, as_of]
HEATMAP_MAX_LEVEL = 4  # Levels 0, 1, 2, 3, >=4
CALENDAR_GRID_WEEKS = 53

# Rate series
MONTHLY_SERIES_MONTHS = 12
YEARLY_SERIES_YEARS = 3
DAYS_PER_YEAR = 365  # Possible completions per goal per year
CATEGORY_WINDOW_DAYS = 7
ROLLING_RATE_DAYS = 30
DAILY_SERIES_DAYS = 30
WEEKLY_SERIES_WEEKS = 12
WEEKLY_PROGRESS_DAYS = 7

# Achievements
ACHIEVEMENT_STREAK_MIN = 7
ACHIEVEMENT_HALF_CENTURY = 50
ACHIEVEMENT_CENTURY = 100
ACHIEVEMENT_HIGH_RATE = 80
ACHIEVEMENT_CATEGORY_MIN_GOALS = 5
ACHIEVEMENT_CATEGORY_MIN_RATE = 90
ACHIEVEMENT_LIMIT = 4

ACHIEVEMENT_KIND_STREAK = "streak"
ACHIEVEMENT_KIND_MILESTONE = "milestone"
ACHIEVEMENT_KIND_PERFORMANCE = "performance"
ACHIEVEMENT_KIND_CATEGORY = "category"

MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
]

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/goal_analytics"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"
DEFAULT_LOG_FILE = "analytics.log"
DEFAULT_LOG_LEVEL = "INFO"
ENV_PREFIX = "GOAL_ANALYTICS_"
