# sleepcircle/core/repositories/record_repository.py
import logging
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from sleepcircle.core.exceptions import DuplicateRecordDateError
from sleepcircle.core.lifecycle.record_lifecycle import missed_record
from sleepcircle.core.models.data_models import SleepRecord

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ['id', 'date', 'timestamp', 'status', 'bed_time', 'wake_time',
                  'duration', 'quality', 'notes']


class RecordRepository:
    """In-memory store of one user's daily sleep records, kept in date order"""

    def __init__(self, records: Optional[Iterable[SleepRecord]] = None):
        self._records: List[SleepRecord] = []
        for record in records or []:
            self.upsert(record)

    def __len__(self):
        return len(self._records)

    def __iter__(self) -> Iterator[SleepRecord]:
        return iter(list(self._records))

    def all(self) -> List[SleepRecord]:
        """All records, oldest first"""
        return list(self._records)

    def find_by_date(self, date: str) -> Optional[SleepRecord]:
        """Exact lookup. A day without a record is a virtual missed day."""
        for record in self._records:
            if record.date == date:
                return record
        return None

    def find_by_id(self, record_id: str) -> Optional[SleepRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def latest_for(self, date: str) -> Optional[SleepRecord]:
        """Record for the date, else the most recent record, else None"""
        record = self.find_by_date(date)
        if record is not None:
            return record
        if not self._records:
            return None
        return self._records[-1]

    def record_or_missed(self, date: str) -> SleepRecord:
        """Record for the date, or a transient missed record that is never stored"""
        record = self.find_by_date(date)
        if record is None:
            return missed_record(date)
        return record

    def upsert(self, record: SleepRecord) -> SleepRecord:
        """
        Replace the record sharing the id, or add it if new.

        Last write wins per id. A new id for an already-touched date is
        rejected: callers look the date up first and update that record.
        """
        owner = self.find_by_date(record.date)
        if owner is not None and owner.id != record.id:
            raise DuplicateRecordDateError(record.date, owner.id)

        for i, existing in enumerate(self._records):
            if existing.id == record.id:
                if existing.date != record.date:
                    # Moving a record to another day re-sorts it
                    del self._records[i]
                    break
                self._records[i] = record
                logger.debug(f"Updated record {record.id} ({record.status.value})")
                return record

        self._records.append(record)
        self._records.sort(key=lambda r: (r.date, r.timestamp))
        logger.debug(f"Stored record {record.id} for {record.date}")
        return record

    def recent_window(self, n: int) -> List[SleepRecord]:
        """The last n records in date order"""
        if n <= 0:
            return []
        return self._records[-n:]

    def to_dataframe(self, records: Optional[List[SleepRecord]] = None) -> pd.DataFrame:
        """Records as a DataFrame with plain string enum values"""
        rows = [r.model_dump(mode='json') for r in (self._records if records is None else records)]
        if not rows:
            return pd.DataFrame(columns=RECORD_COLUMNS)
        return pd.DataFrame(rows, columns=RECORD_COLUMNS)
