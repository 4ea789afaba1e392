"""
Application model - a seeker's paid application to a job.
"""
import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.job import Job
    from app.models.profile import Profile


STATUS_PENDING = "pending"
STATUS_SHORTLISTED = "shortlisted"
STATUS_REJECTED = "rejected"


class Application(BaseModel):
    """
    Created exactly once per (job, user) by the apply transaction.

    status is free text on purpose: employers may set any value, only
    shortlisted/rejected trigger an email.
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_application_job_user"),
    )

    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=STATUS_PENDING,
        index=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    job: Mapped["Job"] = relationship("Job", back_populates="applications")
    applicant: Mapped["Profile"] = relationship("Profile", back_populates="applications")

    def __repr__(self) -> str:
        return f"<Application job={self.job_id} user={self.user_id} {self.status}>"
