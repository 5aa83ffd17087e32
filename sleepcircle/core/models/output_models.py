# sleepcircle/core/models/output_models.py

from pydantic import BaseModel, Field
from typing import List, Optional

from sleepcircle.core.models.data_models import (
    SleepRecord, PeerSummary, Metric, CohortSource
)


class LeaderboardEntry(BaseModel):
    """One ranked row of the leaderboard"""
    rank: int = Field(..., ge=1)
    peer: PeerSummary
    display_value: str


class LeaderboardView(BaseModel):
    """Ranked cohort plus the current user's standing"""
    metric: Metric
    cohort_source: CohortSource
    entries: List[LeaderboardEntry] = []
    my_rank: int = Field(0, ge=0)  # 0 when the caller is not ranked
    my_display_value: str = ""


class WeeklySummary(BaseModel):
    """Rolling-window summary signal for the dashboard header"""
    window_days: int
    complete_count: int = 0
    incomplete_count: int = 0
    average_duration: float = 0.0
    message: str


class DashboardState(BaseModel):
    """Everything the dashboard reads from the core"""
    latest_record: Optional[SleepRecord] = None
    weekly_summary: WeeklySummary
