"""
Authentication schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import EmailStr
from app.schemas.base import BaseSchema, CamelSchema


APPLICATION_CONFIRMATION = "application_confirmation"


class ResendVerificationRequest(CamelSchema):
    """
    Body of POST /auth/resend-verification.

    type="application_confirmation" (with jobId) sends an application receipt
    instead of a magic sign-in link.
    """

    email: EmailStr
    type: Optional[str] = None
    job_id: Optional[UUID] = None


class ProfileResponse(BaseSchema):
    """The signed-in user's profile."""

    id: UUID
    email: str
    full_name: Optional[str] = None
    role: str
    created_at: datetime
