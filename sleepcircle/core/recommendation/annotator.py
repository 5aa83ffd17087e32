"""
Insight annotators for finished sleep records.

An annotator turns a complete record into advisory text. It is never
authoritative over the record: failures are replaced by fixed fallback
values at the call site.
"""

import logging
from abc import ABC, abstractmethod

from sleepcircle.core.models.data_models import SleepRecord, SleepAnalysis, RecordStatus, SleepQuality
from sleepcircle.core.scoring.sleep_score import project_score
from sleepcircle.utils.constants import fallback_analysis as FALLBACK_ANALYSIS
from sleepcircle.utils.time_arithmetic import to_minutes_since_reference_evening

logger = logging.getLogger(__name__)


def fallback_analysis(record: SleepRecord) -> SleepAnalysis:
    """Fixed advisory values used when no annotation is available"""
    key = 'incomplete' if record.status == RecordStatus.INCOMPLETE else 'complete'
    return SleepAnalysis(**FALLBACK_ANALYSIS[key])


class BaseAnnotator(ABC):
    """Base class for annotators"""

    @abstractmethod
    async def annotate(self, record: SleepRecord) -> SleepAnalysis:
        """
        Produce an insight for a complete record.

        May raise or be slow; callers handle both.
        """


class RuleBasedAnnotator(BaseAnnotator):
    """Offline annotator that phrases insights from duration and bedtime"""

    def __init__(self, late_bedtime='00:30'):
        self.late_bedtime_minutes = to_minutes_since_reference_evening(late_bedtime)

    async def annotate(self, record: SleepRecord) -> SleepAnalysis:
        if record.status != RecordStatus.COMPLETE:
            raise ValueError(f"Only complete records can be annotated, got {record.status.value}")

        insight = self._insight(record)
        suggestion = self._suggestion(record)
        logger.debug(f"Annotated {record.date}: {insight}")
        return SleepAnalysis(score=project_score(record), insight=insight, suggestion=suggestion)

    def _insight(self, record):
        if record.quality == SleepQuality.EXCELLENT:
            return f"You slept {record.duration} hours, a properly restful night."
        if record.quality == SleepQuality.GOOD:
            return f"{record.duration} hours of sleep is a solid night."
        if record.quality == SleepQuality.FAIR:
            return f"{record.duration} hours is a little short of what most adults need."
        return f"Only {record.duration} hours of sleep last night."

    def _suggestion(self, record):
        if to_minutes_since_reference_evening(record.bed_time) > self.late_bedtime_minutes:
            return "Try winding down a little earlier tonight."
        if record.quality in (SleepQuality.FAIR, SleepQuality.POOR):
            return "Aim for an extra half hour in bed tonight."
        return "Keep your bed and wake times consistent, even on weekends."
