# sleepcircle/api/routes/sleep_routes.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from sleepcircle.api.dependencies import get_sleep_service
from sleepcircle.api.request_models import StartSleepRequest, WakeUpRequest, EditRecordRequest
from sleepcircle.core.exceptions import RecordNotFoundError
from sleepcircle.core.models.data_models import SleepRecord, SleepAnalysis, RecordStatus
from sleepcircle.core.models.output_models import WeeklySummary, DashboardState
from sleepcircle.core.services.sleep_service import SleepService
from sleepcircle.utils.time_arithmetic import validate_date

router = APIRouter(
    prefix="/sleep",
    tags=["Sleep"],
    responses={404: {"description": "Not found"}}
)


@router.get("/latest", response_model=Optional[SleepRecord])
async def get_latest_record(service: SleepService = Depends(get_sleep_service)):
    """Today's record, or the most recent one"""
    return service.latest_record()


@router.get("/dashboard", response_model=DashboardState)
async def get_dashboard(service: SleepService = Depends(get_sleep_service)):
    """Latest record and weekly summary"""
    return service.dashboard()


@router.get("/records", response_model=List[SleepRecord])
async def get_records(
    days: int = Query(7, ge=1, le=366),
    service: SleepService = Depends(get_sleep_service)
):
    """The most recent records, oldest first"""
    return service.recent_records(days)


@router.get("/summary", response_model=WeeklySummary)
async def get_summary(service: SleepService = Depends(get_sleep_service)):
    """Rolling weekly summary"""
    return service.weekly_summary()


@router.post("/start", response_model=SleepRecord)
async def start_sleep(request: StartSleepRequest, service: SleepService = Depends(get_sleep_service)):
    """Go to bed: open or restart today's record"""
    return service.start_sleep(bed_time=request.bed_time)


@router.post("/wake", response_model=Optional[SleepRecord])
async def wake_up(request: WakeUpRequest, service: SleepService = Depends(get_sleep_service)):
    """Wake up: close the open record, a no-op if none is open"""
    before = service.latest_record()
    record = service.wake_up(wake_time=request.wake_time)
    was_open = before is not None and before.status == RecordStatus.INCOMPLETE
    if was_open and record.status == RecordStatus.COMPLETE:
        service.request_analysis(record)
    return record


@router.put("/records/{date}", response_model=SleepRecord)
async def edit_record(date: str, request: EditRecordRequest, service: SleepService = Depends(get_sleep_service)):
    """Set both times for a day, adding it if it was missed"""
    validate_date(date)
    record = service.manual_edit(date, request.bed_time, request.wake_time, notes=request.notes)
    service.request_analysis(record)
    return record


@router.get("/records/{date}", response_model=SleepRecord)
async def get_record(date: str, service: SleepService = Depends(get_sleep_service)):
    """A day's record, or a transient missed one if nothing was logged"""
    validate_date(date)
    return service.repository.record_or_missed(date)


@router.get("/records/{date}/analysis", response_model=SleepAnalysis)
async def get_analysis(date: str, service: SleepService = Depends(get_sleep_service)):
    """Insight for a day's record"""
    validate_date(date)
    record = service.repository.find_by_date(date)
    if record is None:
        raise RecordNotFoundError(date)
    cached = service.cached_analysis(record.id)
    if cached is not None:
        return cached
    return await service.analyze(record)
