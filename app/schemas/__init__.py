"""
Pydantic schemas for API validation and serialization.
"""
from app.schemas.base import (
    BaseSchema,
    CamelSchema,
    SuccessResponse,
)
from app.schemas.auth import (
    ResendVerificationRequest,
    ProfileResponse,
)
from app.schemas.wallet import (
    TopupRequest,
    TopupResponse,
    WalletResponse,
    TransactionResponse,
)
from app.schemas.job import (
    JobCreate,
    JobResponse,
    EmployerJobResponse,
    AdminJobResponse,
    ApplicantResponse,
    JobDeleteRequest,
)
from app.schemas.application import (
    ApplyRequest,
    ApplyResult,
    UpdateStatusRequest,
    MyApplicationResponse,
    MyApplicationsResponse,
    SeekerStatsResponse,
    EmployerApplicationResponse,
)
from app.schemas.admin import (
    GrantTokensRequest,
    AdminStats,
    AdvancedStats,
    AnalyticsReportRow,
    ChartPoint,
    AdminTransactionResponse,
    SearchProfile,
    GlobalSearchResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",
    "SuccessResponse",
    # Auth
    "ResendVerificationRequest",
    "ProfileResponse",
    # Wallet
    "TopupRequest",
    "TopupResponse",
    "WalletResponse",
    "TransactionResponse",
    # Job
    "JobCreate",
    "JobResponse",
    "EmployerJobResponse",
    "AdminJobResponse",
    "ApplicantResponse",
    "JobDeleteRequest",
    # Application
    "ApplyRequest",
    "ApplyResult",
    "UpdateStatusRequest",
    "MyApplicationResponse",
    "MyApplicationsResponse",
    "SeekerStatsResponse",
    "EmployerApplicationResponse",
    # Admin
    "GrantTokensRequest",
    "AdminStats",
    "AdvancedStats",
    "AnalyticsReportRow",
    "ChartPoint",
    "AdminTransactionResponse",
    "SearchProfile",
    "GlobalSearchResponse",
]
