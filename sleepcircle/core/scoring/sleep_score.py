import logging
from typing import Optional

from sleepcircle.core.models.data_models import SleepRecord, SleepQuality, RecordStatus, Presence
from sleepcircle.utils.constants import (
    quality_thresholds, quality_scores, DEFAULT_COMPLETE_SCORE, SLEEPING_SCORE
)

logger = logging.getLogger(__name__)


def derive_quality(duration: float) -> SleepQuality:
    """
    Derive sleep quality from a duration in hours.

    The bands are asymmetric: Good needs strictly more than 6.0 hours and
    Poor strictly less than 5.0, so 5.0 and 6.0 both fall into Fair, and
    7.5 is Good rather than Excellent.

    Args:
        duration: Sleep duration in hours

    Returns:
        SleepQuality: Derived quality
    """
    if duration > quality_thresholds['excellent_above']:
        return SleepQuality.EXCELLENT
    if duration > quality_thresholds['good_above']:
        return SleepQuality.GOOD
    if duration < quality_thresholds['poor_below']:
        return SleepQuality.POOR
    return SleepQuality.FAIR


def project_score(record: Optional[SleepRecord]) -> int:
    """Display score for a record. Never stored on the record itself."""
    if record is None or record.status != RecordStatus.COMPLETE:
        return SLEEPING_SCORE
    score = quality_scores.get(record.quality.value, DEFAULT_COMPLETE_SCORE)
    logger.debug(f"Projected score {score} for {record.date} ({record.quality.value})")
    return score


def project_presence(record: Optional[SleepRecord]) -> Presence:
    """A member with an open record is asleep, anyone else is awake"""
    if record is not None and record.status == RecordStatus.INCOMPLETE:
        return Presence.SLEEPING
    return Presence.AWAKE
