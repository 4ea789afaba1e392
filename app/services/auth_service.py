"""
Auth service - verification and application-receipt emails.

Sign-up, sign-in and sessions belong to the hosted auth service; the only
server-side auth work left here is producing magic links (which needs the
service-role key) and mailing them.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.supabase_auth import SupabaseAuthAdmin
from app.repositories.job_repository import JobRepository
from app.schemas.auth import APPLICATION_CONFIRMATION
from app.schemas.base import SuccessResponse
from app.services.email_service import EmailService

logger = get_logger(__name__)


class AuthService:
    """Handles the resend-verification flow."""

    def __init__(
        self,
        email_service: Optional[EmailService] = None,
        auth_admin: Optional[SupabaseAuthAdmin] = None,
    ):
        self.email_service = email_service or EmailService()
        self.auth_admin = auth_admin or SupabaseAuthAdmin()
        self.job_repo = JobRepository()

    async def resend_verification(
        self,
        db: AsyncSession,
        *,
        email: str,
        type: Optional[str] = None,
        job_id: Optional[UUID] = None,
    ) -> SuccessResponse:
        """
        Either mail an application receipt or a fresh magic sign-in link.

        Raises:
            MagicLinkException: the auth service refused to generate a link.
            EmailDeliveryException: the email provider rejected the send.
        """
        if type == APPLICATION_CONFIRMATION:
            job = await self.job_repo.get_by_id(db, job_id) if job_id else None
            await self.email_service.send_application_confirmation(
                email, job.title if job else None
            )
            logger.info("application_confirmation_sent", email=email, job_id=str(job_id))
            return SuccessResponse()

        link = await self.auth_admin.generate_magic_link(
            email, redirect_to=f"{settings.app_url.rstrip('/')}/"
        )
        await self.email_service.send_verification(email, link)
        logger.info("verification_email_sent", email=email)
        return SuccessResponse(message="Verification email sent")
