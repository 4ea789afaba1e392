"""
Profile model - the public face of an auth user.
"""
from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.wallet import Wallet
    from app.models.application import Application
    from app.models.job import Job


ROLE_SEEKER = "seeker"
ROLE_EMPLOYER = "employer"
ROLE_ADMIN = "admin"


class Profile(BaseModel):
    """
    One row per registered user, keyed by the auth user id.

    Rows are created by the store's sign-up trigger, never by this API.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_SEEKER,
        index=True,
    )

    # Relationships
    wallet: Mapped[Optional["Wallet"]] = relationship(
        "Wallet",
        back_populates="owner",
        uselist=False,
    )
    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="applicant",
    )
    jobs: Mapped[List["Job"]] = relationship(
        "Job",
        back_populates="poster",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_employer(self) -> bool:
        return self.role == ROLE_EMPLOYER

    def __repr__(self) -> str:
        return f"<Profile {self.email} ({self.role})>"
