from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, field_validator, model_validator


class HabitType(str, Enum):
    BOOLEAN = "boolean"
    UNIT = "unit"


class HabitColor(str, Enum):
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    INDIGO = "indigo"
    PURPLE = "purple"
    PINK = "pink"


class Habit(BaseModel):
    id: str
    user_id: str
    name: str
    type: HabitType
    target_value: Optional[float] = None
    color: HabitColor
    created_at: str
    updated_at: str


class HabitEntry(BaseModel):
    id: str
    habit_id: str
    date: str
    status: Optional[bool] = None
    value: Optional[float] = None
    percentage: Optional[float] = None
    created_at: str


class HabitCreate(BaseModel):
    name: str
    type: HabitType = HabitType.BOOLEAN
    target_value: Optional[float] = Field(None, ge=0)
    color: HabitColor = HabitColor.BLUE

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Habit name is required")
        return value

    @model_validator(mode="after")
    def _drop_boolean_target(self):
        if self.type == HabitType.BOOLEAN:
            self.target_value = None
        return self


class HabitUpdate(BaseModel):
    name: Optional[str] = None
    target_value: Optional[float] = Field(None, ge=0)
    color: Optional[HabitColor] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Habit name is required")
        return value


class HabitEntryCreate(BaseModel):
    habit_id: str
    date: date
    status: Optional[bool] = None
    value: Optional[float] = None
    percentage: Optional[float] = None


class HabitEntryUpdate(BaseModel):
    status: Optional[bool] = None
    value: Optional[float] = None
    percentage: Optional[float] = None


class Credentials(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("A valid email address is required")
        return value


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[Dict[str, Any]] = None

