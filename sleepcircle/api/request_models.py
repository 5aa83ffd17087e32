# sleepcircle/api/request_models.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from sleepcircle.core.models.data_models import Metric, CohortSource
from sleepcircle.utils.time_arithmetic import validate_clock_time


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: Optional[str] = None


class StartSleepRequest(BaseModel):
    bed_time: Optional[str] = None  # defaults to now

    @field_validator('bed_time')
    @classmethod
    def validate_bed_time(cls, v):
        return validate_clock_time(v)


class WakeUpRequest(BaseModel):
    wake_time: Optional[str] = None  # defaults to now

    @field_validator('wake_time')
    @classmethod
    def validate_wake_time(cls, v):
        return validate_clock_time(v)


class EditRecordRequest(BaseModel):
    bed_time: str
    wake_time: str
    notes: Optional[str] = None

    @field_validator('bed_time', 'wake_time')
    @classmethod
    def validate_times(cls, v):
        return validate_clock_time(v)


class MetricRequest(BaseModel):
    metric: Metric


class CohortSourceRequest(BaseModel):
    source: CohortSource
