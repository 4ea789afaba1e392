"""
Job routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_employer_user, get_job_service
from app.core.database import get_db
from app.models.profile import Profile
from app.schemas.job import JobCreate, JobResponse
from app.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    job_type: Optional[str] = Query(None, description="Category filter"),
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    """
    List jobs, newest first.
    """
    return await job_service.list_jobs(db, job_type=job_type)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    current_user: Profile = Depends(get_employer_user),
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    return await job_service.create_job(db, current_user, data)
