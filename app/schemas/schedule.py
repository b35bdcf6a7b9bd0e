# app/schemas/schedule.py
"""Schedule editor payloads"""
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkingHourUpdate(BaseModel):
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    active: bool = True


class DayToggle(BaseModel):
    active: bool


class CopyDayRequest(BaseModel):
    target_days: List[int] = Field(..., min_length=1)


class BreakCreate(BaseModel):
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    label: Optional[str] = Field(None, max_length=100)
