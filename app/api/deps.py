"""
API dependencies for dependency injection.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import bind_actor
from app.core.security import decode_token
from app.core.exceptions import (
    UnauthorizedException,
    InvalidTokenException,
    ForbiddenException,
)
from app.core.resend import ResendClient
from app.core.supabase_auth import SupabaseAuthAdmin
from app.models.profile import Profile
from app.repositories.profile_repository import ProfileRepository
from app.services.analytics_service import AnalyticsService
from app.services.application_service import ApplicationService
from app.services.auth_service import AuthService
from app.services.email_service import EmailService
from app.services.job_service import JobService
from app.services.wallet_service import WalletService


# Security scheme
security = HTTPBearer(auto_error=False)

_mailer = ResendClient()
_auth_admin = SupabaseAuthAdmin()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """
    Get the profile behind the bearer token.

    Raises:
        UnauthorizedException: If no token provided
        InvalidTokenException: If the token is invalid, expired or has no profile
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    payload = decode_token(credentials.credentials)
    if not payload:
        raise InvalidTokenException()

    try:
        profile_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise InvalidTokenException()

    profile = await ProfileRepository().get_by_id(db, profile_id)
    if not profile:
        raise InvalidTokenException()

    # Rate limits key on the profile once it's known
    request.state.current_user = profile
    bind_actor(str(profile.id), profile.role)
    return profile


async def get_employer_user(
    current_user: Profile = Depends(get_current_user),
) -> Profile:
    """Employers, and admins acting on their behalf."""
    if not (current_user.is_employer or current_user.is_admin):
        raise ForbiddenException("Employer access required")
    return current_user


async def get_admin_user(
    current_user: Profile = Depends(get_current_user),
) -> Profile:
    """
    Get current user, ensuring they are an admin.

    Raises:
        ForbiddenException: If user is not an admin
    """
    if not current_user.is_admin:
        raise ForbiddenException("Admin access required")
    return current_user


# Outbound clients. Tests swap these through app.dependency_overrides.

def get_mailer() -> ResendClient:
    return _mailer


def get_auth_admin() -> SupabaseAuthAdmin:
    return _auth_admin


def get_email_service(mailer: ResendClient = Depends(get_mailer)) -> EmailService:
    return EmailService(mailer)


def get_auth_service(
    email_service: EmailService = Depends(get_email_service),
    auth_admin: SupabaseAuthAdmin = Depends(get_auth_admin),
) -> AuthService:
    return AuthService(email_service=email_service, auth_admin=auth_admin)


def get_application_service(
    email_service: EmailService = Depends(get_email_service),
) -> ApplicationService:
    return ApplicationService(email_service=email_service)


def get_wallet_service() -> WalletService:
    return WalletService()


def get_job_service() -> JobService:
    return JobService()


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService()
