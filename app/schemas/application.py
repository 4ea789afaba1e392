"""
Application schemas.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field
from app.schemas.base import BaseSchema, CamelSchema


class ApplyRequest(CamelSchema):
    """Body of POST /applications/apply."""

    job_id: UUID


class ApplyResult(CamelSchema):
    """
    Outcome of the apply transaction.

    Business refusals (expired, insufficient tokens, duplicate) come back as
    success=false with a human-readable error rather than an HTTP error.
    """

    success: bool
    error: Optional[str] = None
    application_id: Optional[UUID] = None
    # For the receipt email only, not part of the response body
    job_title: Optional[str] = Field(None, exclude=True)
    new_balance: Optional[int] = None


class UpdateStatusRequest(CamelSchema):
    """Body of POST /applications/update-status."""

    application_id: UUID
    status: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = None


class MyApplicationResponse(BaseSchema):
    id: UUID
    status: str
    created_at: datetime
    job_title: Optional[str] = None


class MyApplicationsResponse(BaseSchema):
    """A seeker's applications plus the job ids they've already paid for."""

    applications: List[MyApplicationResponse]
    applied_job_ids: List[UUID]


class SeekerStatsResponse(BaseSchema):
    applications: int
    spent: int


class EmployerApplicationResponse(BaseSchema):
    """Row in the employer's applicant review table."""

    id: UUID
    status: str
    notes: Optional[str] = None
    created_at: datetime
    job_title: str
    applicant_name: Optional[str] = None
    applicant_email: str
