"""
Job schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import Field
from app.schemas.base import BaseSchema, CamelSchema


class JobCreate(BaseSchema):
    """Employer's new posting."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    job_type: str = Field(..., min_length=1, max_length=50)
    token_cost: int = Field(1, ge=1)


class JobResponse(BaseSchema):
    """Job as listed on the board."""

    id: UUID
    title: str
    description: Optional[str] = None
    job_type: str
    token_cost: int
    posted_by: Optional[UUID] = None
    created_at: datetime


class EmployerJobResponse(JobResponse):
    """Employer's own posting with its applicant count."""

    applications_count: int = 0


class AdminJobResponse(JobResponse):
    """Posting with the employer's contact details."""

    poster_name: Optional[str] = None
    poster_email: Optional[str] = None


class ApplicantResponse(BaseSchema):
    """A seeker who applied to one of the employer's jobs."""

    id: UUID
    full_name: Optional[str] = None
    email: str
    created_at: datetime


class JobDeleteRequest(CamelSchema):
    """Body of POST /admin/jobs/delete."""

    job_id: UUID
