"""
Authentication routes.

Sign-up and sign-in happen against the hosted auth service directly; these
endpoints cover what needs the service-role key or the caller's profile.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_auth_service, get_current_user
from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_EMAIL
from app.models.profile import Profile
from app.schemas.auth import ProfileResponse, ResendVerificationRequest
from app.schemas.base import SuccessResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/resend-verification",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
)
@limiter.limit(RATE_EMAIL)
async def resend_verification(
    request: Request,
    body: ResendVerificationRequest,
    db: AsyncSession = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Mail a fresh magic sign-in link, or an application receipt when
    type is "application_confirmation".
    """
    return await auth_service.resend_verification(
        db,
        email=body.email,
        type=body.type,
        job_id=body.job_id,
    )


@router.get("/me", response_model=ProfileResponse)
async def get_me(current_user: Profile = Depends(get_current_user)):
    """The signed-in user's profile, including their role."""
    return current_user
