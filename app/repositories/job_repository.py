"""
Job repository - data access for Job entity.
"""
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.application import Application
from app.models.job import Job
from app.repositories.base import BaseRepository


class JobRepository(BaseRepository[Job]):
    def __init__(self):
        super().__init__(Job)

    async def list_jobs(
        self,
        db: AsyncSession,
        *,
        job_type: Optional[str] = None,
    ) -> List[Job]:
        """All postings, newest first, optionally restricted to one category."""
        query = select(Job)
        if job_type:
            query = query.where(Job.job_type == job_type)
        query = query.order_by(Job.created_at.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_with_poster(self, db: AsyncSession) -> List[Job]:
        """All postings with the employer profile eagerly loaded."""
        result = await db.execute(
            select(Job)
            .options(selectinload(Job.poster))
            .order_by(Job.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_with_application_counts(
        self,
        db: AsyncSession,
        *,
        posted_by: Optional[UUID] = None,
    ) -> List[Tuple[Job, int]]:
        """
        Postings paired with their application count, newest first.

        The poster is eagerly loaded for reports that name the employer.
        """
        counts = (
            select(Application.job_id, func.count(Application.id).label("n"))
            .group_by(Application.job_id)
            .subquery()
        )
        query = (
            select(Job, func.coalesce(counts.c.n, 0))
            .outerjoin(counts, counts.c.job_id == Job.id)
            .options(selectinload(Job.poster))
        )
        if posted_by is not None:
            query = query.where(Job.posted_by == posted_by)
        query = query.order_by(Job.created_at.desc())

        result = await db.execute(query)
        return [(job, int(n)) for job, n in result.all()]

    async def application_counts_by_type(self, db: AsyncSession) -> Dict[str, int]:
        """Number of applications per job category."""
        result = await db.execute(
            select(Job.job_type, func.count(Application.id))
            .outerjoin(Application, Application.job_id == Job.id)
            .group_by(Job.job_type)
        )
        return {job_type: int(n) for job_type, n in result.all()}
