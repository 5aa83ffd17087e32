# sleepcircle/api/routes/leaderboard_routes.py
from fastapi import APIRouter, Depends
from typing import Optional

from sleepcircle.api.dependencies import get_leaderboard_service
from sleepcircle.api.request_models import MetricRequest, CohortSourceRequest
from sleepcircle.core.models.data_models import LeaderboardConfig, Metric, CohortSource
from sleepcircle.core.models.output_models import LeaderboardView
from sleepcircle.core.services.leaderboard_service import LeaderboardService

router = APIRouter(
    prefix="/leaderboard",
    tags=["Leaderboard"]
)


@router.get("/", response_model=LeaderboardView)
async def get_leaderboard(
    metric: Optional[Metric] = None,
    source: Optional[CohortSource] = None,
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Ranked cohort for the current (or given) metric and source"""
    if metric is not None:
        service.select_metric(metric)
    if source is not None:
        service.select_cohort_source(source)
    return service.view()


@router.put("/metric", response_model=LeaderboardConfig)
async def select_metric(request: MetricRequest, service: LeaderboardService = Depends(get_leaderboard_service)):
    """Switch between Night Owl and Early Bird"""
    return service.select_metric(request.metric)


@router.put("/source", response_model=LeaderboardConfig)
async def select_source(request: CohortSourceRequest, service: LeaderboardService = Depends(get_leaderboard_service)):
    """Switch between friends and global"""
    return service.select_cohort_source(request.source)
