# sleepcircle/core/models/data_models.py

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from enum import Enum

from sleepcircle.utils.time_arithmetic import validate_clock_time, validate_date


# Enum types for better validation
class RecordStatus(str, Enum):
    MISSED = "missed"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


class SleepQuality(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    UNKNOWN = "Unknown"


class Presence(str, Enum):
    SLEEPING = "sleeping"
    AWAKE = "awake"
    OFFLINE = "offline"


class Metric(str, Enum):
    NIGHT_OWL = "owl"
    EARLY_BIRD = "early"


class CohortSource(str, Enum):
    FRIENDS = "friends"
    GLOBAL = "global"


# Sleep Data Models
class SleepRecord(BaseModel):
    """One calendar day's sleep entry"""
    id: str
    date: str
    timestamp: int = 0
    status: RecordStatus = RecordStatus.MISSED
    bed_time: Optional[str] = None
    wake_time: Optional[str] = None
    duration: Optional[float] = Field(None, ge=0.0)
    quality: SleepQuality = SleepQuality.UNKNOWN
    notes: Optional[str] = None

    @field_validator('date')
    @classmethod
    def validate_date_format(cls, v):
        return validate_date(v)

    @field_validator('bed_time', 'wake_time')
    @classmethod
    def validate_time_format(cls, v):
        return validate_clock_time(v)

    @model_validator(mode='after')
    def validate_status_fields(self):
        if self.status == RecordStatus.COMPLETE:
            if not self.bed_time or not self.wake_time:
                raise ValueError('A complete record needs both bed_time and wake_time')
        elif self.status == RecordStatus.MISSED:
            if self.bed_time or self.wake_time:
                raise ValueError('A missed record cannot carry bed_time or wake_time')
        if self.status != RecordStatus.COMPLETE:
            if self.duration is not None or self.quality != SleepQuality.UNKNOWN:
                raise ValueError('Duration and quality are only set on complete records')
        return self


# Cohort Models
class PeerSummary(BaseModel):
    """Leaderboard projection of a user's latest sleep record"""
    id: str
    name: str
    avatar_color: str = "bg-slate-700"
    status: Presence = Presence.OFFLINE
    sleep_score: int = Field(0, ge=0, le=100)
    last_sleep_duration: Optional[float] = None
    bed_time: Optional[str] = None
    wake_time: Optional[str] = None
    is_current_user: bool = False

    @field_validator('bed_time', 'wake_time')
    @classmethod
    def validate_time_format(cls, v):
        return validate_clock_time(v)

    @model_validator(mode='after')
    def sleeping_has_no_score(self):
        if self.status == Presence.SLEEPING and self.sleep_score != 0:
            raise ValueError('A sleeping member has a sleep score of 0')
        return self


# User Models
class UserIdentity(BaseModel):
    """Signed-in user as supplied by the authentication collaborator"""
    id: str
    username: str = Field(..., min_length=1)
    email: Optional[str] = None
    avatar_color: str = "bg-indigo-500"


# Annotation Models
class SleepAnalysis(BaseModel):
    score: int = Field(..., ge=0, le=100)
    insight: str
    suggestion: str


# Leaderboard selection
class LeaderboardConfig(BaseModel):
    """Explicit leaderboard inputs: which metric, which cohort, who is asking"""
    metric: Metric = Metric.NIGHT_OWL
    cohort_source: CohortSource = CohortSource.FRIENDS
    is_authenticated: bool = False
