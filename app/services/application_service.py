"""
Application service - applying to jobs and reviewing applicants.

apply() is the one consistency-critical operation in the platform:
"deduct the job's token cost and create the application, or do neither".
It runs as a single transaction with the applicant's wallet row locked, so
concurrent applies from one wallet serialize and cannot double-spend.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ApplicationNotFoundException,
    ExternalServiceException,
    ForbiddenException,
)
from app.core.logging import get_logger
from app.models.application import Application
from app.models.profile import Profile
from app.models.transaction import TX_DEDUCTION
from app.repositories.application_repository import ApplicationRepository
from app.repositories.job_repository import JobRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.wallet_repository import WalletRepository
from app.schemas.application import (
    ApplyResult,
    EmployerApplicationResponse,
    MyApplicationResponse,
    MyApplicationsResponse,
    SeekerStatsResponse,
)
from app.schemas.base import SuccessResponse
from app.services.email_service import EmailService

logger = get_logger(__name__)

ERR_JOB_NOT_FOUND = "Job not found"
ERR_WALLET_NOT_FOUND = "Wallet not found"
ERR_EXPIRED = "Your tokens have expired. Please top up to reactivate."
ERR_ALREADY_APPLIED = "You have already applied to this job"
ERR_INSUFFICIENT = "Insufficient tokens"


class ApplicationService:
    """Handles the apply transaction, status changes and applicant listings."""

    def __init__(self, email_service: Optional[EmailService] = None):
        self.email_service = email_service or EmailService()
        self.app_repo = ApplicationRepository()
        self.job_repo = JobRepository()
        self.wallet_repo = WalletRepository()
        self.tx_repo = TransactionRepository()

    # ── Apply ────────────────────────────────────────────────────────────────

    async def apply(
        self,
        db: AsyncSession,
        user: Profile,
        job_id: UUID,
    ) -> ApplyResult:
        """
        Spend job.token_cost tokens to apply to a job.

        Refusals come back as ApplyResult(success=False, error=...) with
        nothing written.
        """
        try:
            result = await self._apply_locked(db, user, job_id)
        except IntegrityError:
            # A concurrent apply for the same (job, user) won the race
            await db.rollback()
            result = ApplyResult(success=False, error=ERR_ALREADY_APPLIED)
        except Exception:
            await db.rollback()
            raise

        if result.success:
            await db.commit()
            logger.info(
                "application_created",
                user_id=str(user.id),
                job_id=str(job_id),
                application_id=str(result.application_id),
                new_balance=result.new_balance,
            )
        else:
            await db.rollback()
            logger.info(
                "application_refused",
                user_id=str(user.id),
                job_id=str(job_id),
                reason=result.error,
            )
        return result

    async def _apply_locked(
        self,
        db: AsyncSession,
        user: Profile,
        job_id: UUID,
    ) -> ApplyResult:
        job = await self.job_repo.get_by_id(db, job_id)
        if not job:
            return ApplyResult(success=False, error=ERR_JOB_NOT_FOUND)

        wallet = await self.wallet_repo.get_by_user(db, user.id, for_update=True)
        if not wallet:
            return ApplyResult(success=False, error=ERR_WALLET_NOT_FOUND)

        if wallet.is_expired():
            return ApplyResult(success=False, error=ERR_EXPIRED)

        if await self.app_repo.find_by_job_and_user(db, job.id, user.id):
            return ApplyResult(success=False, error=ERR_ALREADY_APPLIED)

        if wallet.token_balance < job.token_cost:
            return ApplyResult(success=False, error=ERR_INSUFFICIENT)

        application = await self.app_repo.create(db, job_id=job.id, user_id=user.id)
        await self.tx_repo.record(
            db,
            wallet_id=wallet.id,
            tokens_added=-job.token_cost,
            tx_type=TX_DEDUCTION,
            reference_id=f"APPLY-{application.id}",
        )
        wallet = await self.wallet_repo.update(
            db, wallet, token_balance=wallet.token_balance - job.token_cost
        )

        return ApplyResult(
            success=True,
            application_id=application.id,
            job_title=job.title,
            new_balance=wallet.token_balance,
        )

    async def notify_application_received(
        self,
        email: str,
        job_title: Optional[str],
    ) -> None:
        """Background receipt email; a failed send is logged, not raised."""
        try:
            await self.email_service.send_application_confirmation(email, job_title)
        except ExternalServiceException as exc:
            logger.warning("application_receipt_failed", email=email, error=exc.message)

    # ── Status ───────────────────────────────────────────────────────────────

    async def update_status(
        self,
        db: AsyncSession,
        actor: Profile,
        *,
        application_id: UUID,
        status: str,
        notes: Optional[str] = None,
    ) -> SuccessResponse:
        """
        Set an application's status/notes and email the applicant.

        Any status string is stored; only shortlisted/rejected send email.

        Raises:
            ApplicationNotFoundException: unknown application id.
            ForbiddenException: an employer touching another employer's job.
            EmailDeliveryException: the status email failed (the update stays).
        """
        application = await self.app_repo.get_with_details(db, application_id)
        if not application:
            raise ApplicationNotFoundException()

        if not actor.is_admin and application.job.posted_by != actor.id:
            raise ForbiddenException("You can only review applications to your own jobs")

        # Read what the email needs before the refresh in update() expires relationships
        recipient = application.applicant.email
        applicant_name = application.applicant.full_name
        job_title = application.job.title

        try:
            await self.app_repo.update(db, application, status=status, notes=notes)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "application_status_updated",
            application_id=str(application_id),
            status=status,
            actor_id=str(actor.id),
        )

        await self.email_service.send_status_update(
            recipient,
            status=status,
            applicant_name=applicant_name,
            job_title=job_title,
            notes=notes,
        )
        return SuccessResponse()

    # ── Reads ────────────────────────────────────────────────────────────────

    async def list_mine(
        self,
        db: AsyncSession,
        user: Profile,
    ) -> MyApplicationsResponse:
        applications = await self.app_repo.list_for_user(db, user.id)
        return MyApplicationsResponse(
            applications=[
                MyApplicationResponse(
                    id=app.id,
                    status=app.status,
                    created_at=app.created_at,
                    job_title=app.job.title if app.job else None,
                )
                for app in applications
            ],
            applied_job_ids=[app.job_id for app in applications],
        )

    async def seeker_stats(
        self,
        db: AsyncSession,
        user: Profile,
    ) -> SeekerStatsResponse:
        count = await self.app_repo.count(db, Application.user_id == user.id)
        wallet = await self.wallet_repo.get_by_user(db, user.id)
        spent = await self.tx_repo.tokens_spent(db, wallet.id) if wallet else 0
        return SeekerStatsResponse(applications=count, spent=spent)

    async def list_for_employer(
        self,
        db: AsyncSession,
        employer: Profile,
    ) -> List[EmployerApplicationResponse]:
        applications = await self.app_repo.list_for_employer(db, employer.id)
        return [
            EmployerApplicationResponse(
                id=app.id,
                status=app.status or "pending",
                notes=app.notes,
                created_at=app.created_at,
                job_title=app.job.title,
                applicant_name=app.applicant.full_name,
                applicant_email=app.applicant.email,
            )
            for app in applications
        ]
