"""
Application routes - applying with tokens and reviewing applicants.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_application_service, get_current_user, get_employer_user
from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_WALLET
from app.models.profile import Profile
from app.schemas.application import (
    ApplyRequest,
    ApplyResult,
    MyApplicationsResponse,
    SeekerStatsResponse,
    UpdateStatusRequest,
)
from app.schemas.base import SuccessResponse
from app.services.application_service import ApplicationService

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post(
    "/apply",
    response_model=ApplyResult,
    response_model_exclude_none=True,
)
@limiter.limit(RATE_WALLET)
async def apply_to_job(
    request: Request,
    body: ApplyRequest,
    background_tasks: BackgroundTasks,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    application_service: ApplicationService = Depends(get_application_service),
):
    """
    Spend tokens to apply. Refusals are a 200 with success=false.
    """
    result = await application_service.apply(db, current_user, body.job_id)
    if result.success:
        background_tasks.add_task(
            application_service.notify_application_received,
            current_user.email,
            result.job_title,
        )
    return result


@router.post(
    "/update-status",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
)
async def update_status(
    body: UpdateStatusRequest,
    current_user: Profile = Depends(get_employer_user),
    db: AsyncSession = Depends(get_db),
    application_service: ApplicationService = Depends(get_application_service),
):
    """Shortlisted and rejected applicants get an email; other statuses are silent."""
    return await application_service.update_status(
        db,
        current_user,
        application_id=body.application_id,
        status=body.status,
        notes=body.notes,
    )


@router.get("/mine", response_model=MyApplicationsResponse)
async def list_my_applications(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    application_service: ApplicationService = Depends(get_application_service),
):
    return await application_service.list_mine(db, current_user)


@router.get("/stats", response_model=SeekerStatsResponse)
async def get_my_stats(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    application_service: ApplicationService = Depends(get_application_service),
):
    return await application_service.seeker_stats(db, current_user)
