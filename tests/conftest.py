"""
Pytest configuration and fixtures

Every test gets a fresh in-memory repository and session; nothing is
shared between tests.
"""
import pytest
import sys
import os
from datetime import datetime

# Add the repository root to the path so we can import sleepcircle
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sleepcircle.core.models.data_models import PeerSummary, Presence, UserIdentity, SleepRecord, RecordStatus
from sleepcircle.core.repositories.record_repository import RecordRepository
from sleepcircle.core.services.sleep_service import SleepService

NOW = datetime(2024, 3, 10, 23, 30)


class FixedClock:
    """Clock that returns a settable instant"""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def repository():
    return RecordRepository()


@pytest.fixture
def identity():
    return UserIdentity(id="user-1", username="dreamer", email="dreamer@example.com", avatar_color="bg-blue-500")


@pytest.fixture
def sleep_service(repository, clock):
    return SleepService(repository, clock=clock)


@pytest.fixture
def signed_in_service(sleep_service, identity):
    sleep_service.login(identity)
    return sleep_service


def make_peer(peer_id, bed_time=None, wake_time=None, status=Presence.AWAKE, score=80, **kwargs):
    return PeerSummary(
        id=peer_id,
        name=peer_id.upper(),
        status=status,
        sleep_score=0 if status == Presence.SLEEPING else score,
        bed_time=bed_time,
        wake_time=wake_time,
        **kwargs
    )


def make_record(date, status=RecordStatus.COMPLETE, bed_time="23:00", wake_time="07:00",
                duration=8.0, quality="Excellent", record_id=None):
    if status == RecordStatus.MISSED:
        return SleepRecord(id=record_id or f"r-{date}", date=date, status=status)
    if status == RecordStatus.INCOMPLETE:
        return SleepRecord(id=record_id or f"r-{date}", date=date, status=status, bed_time=bed_time)
    return SleepRecord(
        id=record_id or f"r-{date}", date=date, status=status,
        bed_time=bed_time, wake_time=wake_time, duration=duration, quality=quality
    )
