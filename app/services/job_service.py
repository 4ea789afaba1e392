"""
Job service - the job board, employer postings and admin job moderation.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenException, JobNotFoundException
from app.core.logging import get_logger
from app.models.job import Job
from app.models.profile import Profile
from app.repositories.application_repository import ApplicationRepository
from app.repositories.job_repository import JobRepository
from app.schemas.job import (
    AdminJobResponse,
    ApplicantResponse,
    EmployerJobResponse,
    JobCreate,
    JobResponse,
)

logger = get_logger(__name__)


class JobService:
    """Handles job listing, posting and deletion."""

    def __init__(self):
        self.job_repo = JobRepository()
        self.app_repo = ApplicationRepository()

    async def list_jobs(
        self,
        db: AsyncSession,
        *,
        job_type: Optional[str] = None,
    ) -> List[JobResponse]:
        """Public board, newest first. job_type narrows to one category."""
        jobs = await self.job_repo.list_jobs(db, job_type=job_type)
        return [JobResponse.model_validate(job) for job in jobs]

    async def create_job(
        self,
        db: AsyncSession,
        employer: Profile,
        data: JobCreate,
    ) -> JobResponse:
        try:
            job = await self.job_repo.create(
                db,
                title=data.title,
                description=data.description,
                job_type=data.job_type,
                token_cost=data.token_cost,
                posted_by=employer.id,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("job_posted", job_id=str(job.id), employer_id=str(employer.id))
        return JobResponse.model_validate(job)

    async def list_employer_jobs(
        self,
        db: AsyncSession,
        employer: Profile,
    ) -> List[EmployerJobResponse]:
        rows = await self.job_repo.list_with_application_counts(db, posted_by=employer.id)
        return [
            EmployerJobResponse(
                **JobResponse.model_validate(job).model_dump(),
                applications_count=count,
            )
            for job, count in rows
        ]

    async def list_applicants(
        self,
        db: AsyncSession,
        employer: Profile,
        job_id: UUID,
    ) -> List[ApplicantResponse]:
        """
        Seekers who applied to one of the employer's jobs.

        Raises:
            JobNotFoundException: unknown job.
            ForbiddenException: the job belongs to someone else.
        """
        job = await self._get_owned_job(db, employer, job_id)
        applications = await self.app_repo.list_for_job(db, job.id)
        return [
            ApplicantResponse(
                id=app.applicant.id,
                full_name=app.applicant.full_name,
                email=app.applicant.email,
                created_at=app.created_at,
            )
            for app in applications
        ]

    async def list_all_with_poster(self, db: AsyncSession) -> List[AdminJobResponse]:
        jobs = await self.job_repo.list_with_poster(db)
        return [
            AdminJobResponse(
                **JobResponse.model_validate(job).model_dump(),
                poster_name=job.poster.full_name if job.poster else None,
                poster_email=job.poster.email if job.poster else None,
            )
            for job in jobs
        ]

    async def delete_job(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> None:
        """Admin removal, applications included. An unknown id is a no-op."""
        job = await self.job_repo.get_by_id(db, job_id)
        if job is None:
            logger.warning("job_delete_missing", job_id=str(job_id))
            return

        try:
            await self.job_repo.delete(db, job)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("job_deleted", job_id=str(job_id))

    async def _get_owned_job(
        self,
        db: AsyncSession,
        employer: Profile,
        job_id: UUID,
    ) -> Job:
        job = await self.job_repo.get_by_id(db, job_id)
        if not job:
            raise JobNotFoundException()
        if not employer.is_admin and job.posted_by != employer.id:
            raise ForbiddenException("You can only view applicants to your own jobs")
        return job
