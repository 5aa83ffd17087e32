"""
State machine for a single day's sleep record.

    missed -> incomplete -> complete
    missed -> complete        (manual add with both times)
    complete -> complete      (manual correction)
    any -> incomplete         (restarting the night)

Every transition returns a new SleepRecord; the input is never mutated.
"""

import logging
import time
from datetime import datetime
from typing import Optional

from sleepcircle.core.models.data_models import SleepRecord, RecordStatus, SleepQuality
from sleepcircle.core.scoring.sleep_score import derive_quality
from sleepcircle.utils.time_arithmetic import elapsed_hours, validate_clock_time, validate_date

logger = logging.getLogger(__name__)


def new_record_id(date: str, now: Optional[datetime] = None) -> str:
    """Opaque id for a freshly created record"""
    return f"record-{date}-{_epoch_ms(now)}"


def _epoch_ms(now: Optional[datetime] = None) -> int:
    if now is None:
        return int(time.time() * 1000)
    return int(now.timestamp() * 1000)


def _rebuild(record: SleepRecord, **changes) -> SleepRecord:
    # Re-validate so status/time invariants hold on every transition
    return SleepRecord(**{**record.model_dump(), **changes})


def complete_record(record: SleepRecord, bed_time: str, wake_time: str) -> SleepRecord:
    """
    Close a record with both times, deriving duration and quality.

    This is the only place duration and quality are computed; wake-up and
    manual edit both go through here.
    """
    duration = elapsed_hours(bed_time, wake_time)
    quality = derive_quality(duration)
    logger.info(f"Completed record {record.date}: {bed_time}-{wake_time}, {duration}h, {quality.value}")
    return _rebuild(
        record,
        status=RecordStatus.COMPLETE,
        bed_time=bed_time,
        wake_time=wake_time,
        duration=duration,
        quality=quality,
    )


def start_sleep(record: Optional[SleepRecord], bed_time: str, on_date: str,
                now: Optional[datetime] = None) -> SleepRecord:
    """
    Open the night for a date.

    Args:
        record: Existing record for the date, or None to create one
        bed_time: Bed time (HH:MM)
        on_date: Date of the record (YYYY-MM-DD), used when creating
        now: Creation instant, defaults to the current time

    Returns:
        SleepRecord: Record in the incomplete state
    """
    validate_clock_time(bed_time)

    if record is None:
        validate_date(on_date)
        logger.info(f"Starting sleep for {on_date} at {bed_time} (new record)")
        return SleepRecord(
            id=new_record_id(on_date, now),
            date=on_date,
            timestamp=_epoch_ms(now),
            status=RecordStatus.INCOMPLETE,
            bed_time=bed_time,
        )

    if record.status != RecordStatus.MISSED:
        logger.info(f"Restarting sleep for {record.date} at {bed_time} (was {record.status.value})")
    else:
        logger.info(f"Starting sleep for {record.date} at {bed_time}")

    return _rebuild(
        record,
        status=RecordStatus.INCOMPLETE,
        bed_time=bed_time,
        wake_time=None,
        duration=None,
        quality=SleepQuality.UNKNOWN,
    )


def wake_up(record: SleepRecord, wake_time: str) -> SleepRecord:
    """
    Close an open night.

    Only an incomplete record with a bed time can be woken up; anything
    else is returned unchanged.
    """
    validate_clock_time(wake_time)

    if record.status != RecordStatus.INCOMPLETE or not record.bed_time:
        logger.debug(f"Ignoring wake-up for {record.date}: status is {record.status.value}")
        return record

    return complete_record(record, record.bed_time, wake_time)


def manual_edit(record: SleepRecord, bed_time: str, wake_time: str) -> SleepRecord:
    """Set both times by hand. Always yields a complete record."""
    return complete_record(record, bed_time, wake_time)


def missed_record(date: str, record_id: Optional[str] = None, timestamp: int = 0) -> SleepRecord:
    """Placeholder for a day with no stored record"""
    return SleepRecord(id=record_id or f"missed-{date}", date=date, timestamp=timestamp,
                       status=RecordStatus.MISSED)
