"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from app.repositories.base import BaseRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.wallet_repository import WalletRepository
from app.repositories.job_repository import JobRepository
from app.repositories.application_repository import ApplicationRepository
from app.repositories.transaction_repository import TransactionRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "WalletRepository",
    "JobRepository",
    "ApplicationRepository",
    "TransactionRepository",
]
