"""
Application repository - data access for Application entity.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.application import Application
from app.models.job import Job
from app.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    def __init__(self):
        super().__init__(Application)

    async def get_with_details(
        self,
        db: AsyncSession,
        application_id: UUID,
    ) -> Optional[Application]:
        """Get an application with its job and applicant eagerly loaded."""
        result = await db.execute(
            select(Application)
            .options(selectinload(Application.job), selectinload(Application.applicant))
            .where(Application.id == application_id)
        )
        return result.scalar_one_or_none()

    async def find_by_job_and_user(
        self,
        db: AsyncSession,
        job_id: UUID,
        user_id: UUID,
    ) -> Optional[Application]:
        result = await db.execute(
            select(Application).where(
                Application.job_id == job_id,
                Application.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Application]:
        """A seeker's applications, newest first, with job loaded."""
        result = await db.execute(
            select(Application)
            .options(selectinload(Application.job))
            .where(Application.user_id == user_id)
            .order_by(Application.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_job(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> List[Application]:
        """Applicants to one job, oldest first, with applicant loaded."""
        result = await db.execute(
            select(Application)
            .options(selectinload(Application.applicant))
            .where(Application.job_id == job_id)
            .order_by(Application.created_at.asc())
        )
        return list(result.scalars().all())

    async def list_for_employer(
        self,
        db: AsyncSession,
        employer_id: UUID,
    ) -> List[Application]:
        """Every application to jobs posted by one employer, newest first."""
        result = await db.execute(
            select(Application)
            .join(Job, Job.id == Application.job_id)
            .options(selectinload(Application.job), selectinload(Application.applicant))
            .where(Job.posted_by == employer_id)
            .order_by(Application.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_status(
        self,
        db: AsyncSession,
        status: str,
    ) -> List[Application]:
        result = await db.execute(
            select(Application).where(Application.status == status)
        )
        return list(result.scalars().all())

    async def created_at_since(
        self,
        db: AsyncSession,
        since: datetime,
    ) -> List[datetime]:
        result = await db.execute(
            select(Application.created_at).where(Application.created_at >= since)
        )
        return list(result.scalars().all())
