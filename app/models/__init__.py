"""
Database models for JobToken.

The tables live in the hosted Postgres instance; these classes mirror them.
"""
from app.models.base import BaseModel, TimestampMixin, UUIDMixin, CreatedAtMixin
from app.models.profile import Profile
from app.models.wallet import Wallet
from app.models.job import Job
from app.models.application import Application
from app.models.transaction import Transaction

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "CreatedAtMixin",
    "Profile",
    "Wallet",
    "Job",
    "Application",
    "Transaction",
]
