# sleepcircle/core/services/sleep_service.py
import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sleepcircle.core.analysis.sleep_metrics import generate_weekly_summary
from sleepcircle.core.exceptions import AuthenticationRequiredError
from sleepcircle.core.lifecycle import record_lifecycle
from sleepcircle.core.models.data_models import SleepRecord, SleepAnalysis, UserIdentity, RecordStatus
from sleepcircle.core.models.output_models import DashboardState, WeeklySummary
from sleepcircle.core.recommendation.annotator import BaseAnnotator, fallback_analysis
from sleepcircle.core.repositories.record_repository import RecordRepository
from sleepcircle.utils.constants import default_values
from sleepcircle.utils.time_arithmetic import format_clock_time, format_date

logger = logging.getLogger(__name__)


class SleepService:
    """Entry points for the record lifecycle of the signed-in user"""

    def __init__(self, repository: RecordRepository, annotator: Optional[BaseAnnotator] = None,
                 window_days: Optional[int] = None, clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.annotator = annotator
        self.window_days = window_days or default_values['summary_window_days']
        self.clock = clock
        self._identity: Optional[UserIdentity] = None
        self._analyses: Dict[str, SleepAnalysis] = {}
        self._pending = set()

    # Session

    @property
    def identity(self) -> Optional[UserIdentity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def login(self, identity: UserIdentity) -> UserIdentity:
        self._identity = identity
        logger.info(f"User {identity.username} signed in")
        return identity

    def logout(self):
        if self._identity is not None:
            logger.info(f"User {self._identity.username} signed out")
        self._identity = None

    def _require_login(self, action):
        if self._identity is None:
            raise AuthenticationRequiredError(action)

    # Lifecycle

    def start_sleep(self, now: Optional[datetime] = None, bed_time: Optional[str] = None) -> SleepRecord:
        """Open tonight's record, restarting it if the day was already touched"""
        self._require_login('start sleep')
        now = now or self.clock()
        today = format_date(now)
        bed_time = bed_time or format_clock_time(now)

        existing = self.repository.find_by_date(today)
        record = record_lifecycle.start_sleep(existing, bed_time, today, now)
        self._analyses.pop(record.id, None)
        return self.repository.upsert(record)

    def wake_up(self, now: Optional[datetime] = None, wake_time: Optional[str] = None) -> Optional[SleepRecord]:
        """
        Close the open night.

        Looks at today's record, or the most recent one when the night
        started on the previous date. Without an open record this is a
        no-op and the latest record is returned unchanged.
        """
        self._require_login('wake up')
        now = now or self.clock()
        wake_time = wake_time or format_clock_time(now)

        record = self.repository.latest_for(format_date(now))
        if record is None:
            logger.debug("Ignoring wake-up: no records")
            return None

        updated = record_lifecycle.wake_up(record, wake_time)
        if updated is record:
            return record
        self._analyses.pop(updated.id, None)
        return self.repository.upsert(updated)

    def manual_edit(self, date: str, bed_time: str, wake_time: str,
                    now: Optional[datetime] = None, notes: Optional[str] = None) -> SleepRecord:
        """Set both times for a date, creating the record if the day was missed"""
        self._require_login('edit a record')
        record = self.repository.find_by_date(date)
        if record is None:
            now = now or self.clock()
            record = record_lifecycle.missed_record(
                date,
                record_id=record_lifecycle.new_record_id(date, now),
                timestamp=int(now.timestamp() * 1000),
            )

        updated = record_lifecycle.manual_edit(record, bed_time, wake_time)
        if notes is not None:
            updated = updated.model_copy(update={'notes': notes})
        self._analyses.pop(updated.id, None)
        return self.repository.upsert(updated)

    # Reads

    def latest_record(self, now: Optional[datetime] = None) -> Optional[SleepRecord]:
        now = now or self.clock()
        return self.repository.latest_for(format_date(now))

    def recent_records(self, days: Optional[int] = None) -> List[SleepRecord]:
        return self.repository.recent_window(days or self.window_days)

    def weekly_summary(self) -> WeeklySummary:
        window = self.repository.recent_window(self.window_days)
        return generate_weekly_summary(self.repository.to_dataframe(window), self.window_days)

    def dashboard(self, now: Optional[datetime] = None) -> DashboardState:
        return DashboardState(latest_record=self.latest_record(now), weekly_summary=self.weekly_summary())

    # Annotation

    async def analyze(self, record: SleepRecord) -> SleepAnalysis:
        """
        Annotate a record, substituting the fallback on any failure.

        Only complete records reach the annotator.
        """
        if record.status != RecordStatus.COMPLETE or self.annotator is None:
            return fallback_analysis(record)
        try:
            analysis = await self.annotator.annotate(record)
        except Exception as e:
            logger.warning(f"Annotation failed for {record.date}, using fallback: {e}")
            return fallback_analysis(record)
        if analysis is None:
            logger.warning(f"Annotator returned nothing for {record.date}, using fallback")
            return fallback_analysis(record)
        return analysis

    def request_analysis(self, record: SleepRecord,
                         callback: Optional[Callable[[SleepRecord, SleepAnalysis], None]] = None) -> asyncio.Task:
        """
        Schedule annotation without waiting for it.

        Must be called from a running event loop. The result is passed to
        the callback and cached only if the stored record still matches the
        one annotated; the record itself is never touched.
        """
        task = asyncio.get_running_loop().create_task(self.analyze(record))
        self._pending.add(task)

        def _deliver(done: asyncio.Task):
            self._pending.discard(done)
            if done.cancelled():
                logger.debug(f"Annotation for {record.date} abandoned")
                return
            analysis = done.result()
            if self.repository.find_by_id(record.id) == record:
                self._analyses[record.id] = analysis
            else:
                logger.debug(f"Not caching annotation for {record.date}: record changed")
            if callback is not None:
                callback(record, analysis)

        task.add_done_callback(_deliver)
        return task

    def cached_analysis(self, record_id: str) -> Optional[SleepAnalysis]:
        return self._analyses.get(record_id)
