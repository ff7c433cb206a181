"""
Domain models for goals and their dated completions.
Instances are immutable: every change produces a new value.
"""
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from goal_analytics.constants import (
    CATEGORY_HEALTH, CATEGORY_WORK, CATEGORY_PERSONAL, CATEGORY_LEARNING,
    CATEGORY_OTHER, FREQUENCY_DAILY, FREQUENCY_WEEKLY, FREQUENCY_MONTHLY
)
from goal_analytics.services.date_service import DateService


class Category(str, Enum):
    HEALTH = CATEGORY_HEALTH
    WORK = CATEGORY_WORK
    PERSONAL = CATEGORY_PERSONAL
    LEARNING = CATEGORY_LEARNING
    OTHER = CATEGORY_OTHER

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def coerce(cls, value) -> "Category":
        """Map any incoming value onto the closed set, falling back to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class Frequency(str, Enum):
    DAILY = FREQUENCY_DAILY
    WEEKLY = FREQUENCY_WEEKLY
    MONTHLY = FREQUENCY_MONTHLY


class Completion(BaseModel):
    date: date
    count: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @field_validator("date", mode="before")
    @classmethod
    def parse_calendar_day(cls, value):
        return DateService.parse_day(value)


class Goal(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Category = Category.OTHER
    frequency: Frequency = Frequency.DAILY
    target_count: int = Field(default=1, ge=1)  # Count needed per period
    created_at: date
    completions: Tuple[Completion, ...] = ()

    class Config:
        frozen = True

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value):
        return Category.coerce(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, value):
        return DateService.parse_day(value)

    @model_validator(mode="after")
    def check_unique_completion_dates(self):
        seen = set()
        for completion in self.completions:
            if completion.date in seen:
                raise ValueError(
                    f"duplicate completion for {completion.date.isoformat()}"
                )
            seen.add(completion.date)
        return self
