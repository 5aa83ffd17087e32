# sleepcircle/api/routes/session_routes.py
import random
import time

from fastapi import APIRouter, Depends
from typing import Optional

from sleepcircle.api.dependencies import get_sleep_service
from sleepcircle.api.request_models import LoginRequest
from sleepcircle.core.models.data_models import UserIdentity
from sleepcircle.core.services.sleep_service import SleepService
from sleepcircle.utils.constants import avatar_colors

router = APIRouter(
    prefix="/session",
    tags=["Session"]
)


@router.get("/", response_model=Optional[UserIdentity])
async def get_session(service: SleepService = Depends(get_sleep_service)):
    """The signed-in user, if any"""
    return service.identity


@router.post("/login", response_model=UserIdentity)
async def login(request: LoginRequest, service: SleepService = Depends(get_sleep_service)):
    """Sign in. Credentials are not checked or stored."""
    identity = UserIdentity(
        id=f"user-{int(time.time() * 1000)}",
        username=request.username,
        email=request.email,
        avatar_color=random.choice(avatar_colors),
    )
    return service.login(identity)


@router.post("/logout", status_code=204)
async def logout(service: SleepService = Depends(get_sleep_service)):
    """Sign out"""
    service.logout()
    return None
