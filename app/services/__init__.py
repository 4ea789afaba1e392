"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and own the transaction boundary (commit/rollback).

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from app.services.analytics_service import AnalyticsService
from app.services.application_service import ApplicationService
from app.services.auth_service import AuthService
from app.services.email_service import EmailService
from app.services.job_service import JobService
from app.services.wallet_service import WalletService

__all__ = [
    "AnalyticsService",
    "ApplicationService",
    "AuthService",
    "EmailService",
    "JobService",
    "WalletService",
]
