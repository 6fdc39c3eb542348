import datetime as dt
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimeOfDay(str, Enum):
    early_morning = "early_morning"
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


class RunBase(BaseModel):
    date: dt.date
    distance_km: float = Field(allow_inf_nan=False)  # what the user types, e.g. 10.05
    duration: str       # "HH:MM:SS" as seen in the UI, e.g. "00:52:10"

    pace: Optional[str] = None  # computed when omitted
    cadence: Optional[int] = None
    heart_rate: Optional[float] = None
    heart_rate_max: Optional[float] = None
    vo2max: Optional[str] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    time_of_day: Optional[TimeOfDay] = None
    place: Optional[str] = None
    notes: Optional[str] = None


class RunCreate(RunBase):
    """Schema for logging a new run."""
    pass


class RunUpdate(BaseModel):
    """Schema for updating an existing run (all fields optional)."""

    model_config = ConfigDict(extra="ignore")

    date: Optional[dt.date] = None  # field name shadows datetime.date
    distance_km: Optional[float] = Field(None, allow_inf_nan=False)
    duration: Optional[str] = None  # still "HH:MM:SS"
    pace: Optional[str] = None
    cadence: Optional[int] = None
    heart_rate: Optional[float] = None
    heart_rate_max: Optional[float] = None
    vo2max: Optional[str] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    time_of_day: Optional[TimeOfDay] = None
    place: Optional[str] = None
    notes: Optional[str] = None


class RunRead(RunBase):
    """Schema returned when reading a run."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    pace: str


class DailyDistance(BaseModel):
    date: dt.date
    distance_km: float


class YearDistances(BaseModel):
    year: int
    has_data: bool
    days: list[DailyDistance]
