"""
Job model - a posting seekers spend tokens to apply to.
"""
import uuid
from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.profile import Profile
    from app.models.application import Application


class Job(BaseModel):
    """
    Job posting entity.

    Posted by an employer; deleted by an admin (applications go with it).
    """

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("token_cost >= 1", name="ck_job_token_cost_positive"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    job_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )  # the category shown in filters and revenue breakdowns
    token_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    posted_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    poster: Mapped[Optional["Profile"]] = relationship("Profile", back_populates="jobs")
    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Job {self.title}>"
