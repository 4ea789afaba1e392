"""
Employer routes - own postings and their applicants.
"""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_application_service, get_employer_user, get_job_service
from app.core.database import get_db
from app.models.profile import Profile
from app.schemas.application import EmployerApplicationResponse
from app.schemas.job import ApplicantResponse, EmployerJobResponse
from app.services.application_service import ApplicationService
from app.services.job_service import JobService

router = APIRouter(prefix="/employer", tags=["employer"])


@router.get("/jobs", response_model=List[EmployerJobResponse])
async def list_my_jobs(
    current_user: Profile = Depends(get_employer_user),
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    return await job_service.list_employer_jobs(db, current_user)


@router.get("/jobs/{job_id}/applicants", response_model=List[ApplicantResponse])
async def list_job_applicants(
    job_id: UUID,
    current_user: Profile = Depends(get_employer_user),
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    return await job_service.list_applicants(db, current_user, job_id)


@router.get("/applications", response_model=List[EmployerApplicationResponse])
async def list_received_applications(
    current_user: Profile = Depends(get_employer_user),
    db: AsyncSession = Depends(get_db),
    application_service: ApplicationService = Depends(get_application_service),
):
    """Every application to the employer's jobs, newest first."""
    return await application_service.list_for_employer(db, current_user)
