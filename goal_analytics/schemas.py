from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Dict, List, Optional

from goal_analytics.models import Category, Frequency


# Goal input schemas
class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Category = Category.OTHER
    frequency: Frequency = Frequency.DAILY
    target_count: int = Field(default=1, ge=1)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value):
        return Category.coerce(value)


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[Category] = None
    frequency: Optional[Frequency] = None
    target_count: Optional[int] = Field(None, ge=1)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value):
        if value is None:
            return None
        return Category.coerce(value)


# Derived statistics
class HeatmapCell(BaseModel):
    date: date
    count: int = 0  # Distinct goals satisfied that day
    level: int = 0  # 0-4 intensity

    class Config:
        frozen = True


class MonthlyRate(BaseModel):
    year: int
    month: int
    label: str  # "Jan", "Feb", ...
    completions: int
    possible: int
    rate: int

    class Config:
        frozen = True


class YearlyRate(BaseModel):
    year: int
    completions: int
    possible: int
    rate: int

    class Config:
        frozen = True


class CategoryRollup(BaseModel):
    category: Category
    name: str  # Display name, e.g. "Health"
    completed: int
    total: int
    percentage: int

    class Config:
        frozen = True


class DailyRate(BaseModel):
    date: date
    completed_goals: int
    total_goals: int
    total_completions: int  # Raw count units logged that day
    completion_rate: int

    class Config:
        frozen = True


class WeeklyRate(BaseModel):
    week_start: date
    label: str  # "Week 1" is the oldest
    completed_days: int
    percentage: int

    class Config:
        frozen = True


class SummaryStats(BaseModel):
    total_goals: int = 0
    today_completed: int = 0
    today_progress: int = 0
    weekly_completions: int = 0
    weekly_rate: int = 0
    monthly_completions: int = 0
    completion_rate: int = 0  # Rolling rate used by achievements
    total_completions: int = 0

    class Config:
        frozen = True


class Achievement(BaseModel):
    kind: str  # streak, milestone, performance, category
    title: str
    description: str

    class Config:
        frozen = True


class AnalyticsSnapshot(BaseModel):
    as_of: date
    current_streak: int
    longest_streak: int
    heatmap: Dict[str, HeatmapCell]
    monthly_series: List[MonthlyRate]
    yearly_series: List[YearlyRate]
    category_rollup: List[CategoryRollup]
    achievements: List[Achievement]

    summary: SummaryStats
    daily_series: List[DailyRate]
    weekly_series: List[WeeklyRate]
    weekly_progress: Dict[str, List[bool]]  # goal id -> last 7 days, oldest first

    class Config:
        frozen = True
