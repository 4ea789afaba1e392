"""
Admin portal schemas.
"""
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID
from pydantic import EmailStr, Field
from app.schemas.base import BaseSchema, CamelSchema


class GrantTokensRequest(CamelSchema):
    """Body of POST /admin/tokens/grant."""

    email: EmailStr
    amount: int = Field(..., gt=0)


class AdminStats(BaseSchema):
    total_revenue: int
    active_seekers: int
    registered_employers: int
    total_applications: int


class AdvancedStats(BaseSchema):
    token_liability: int
    revenue_per_category: Dict[str, int]
    avg_time_to_hire: float  # days, one decimal


class AnalyticsReportRow(BaseSchema):
    id: UUID
    title: str
    category: str
    employer: Optional[str] = None
    applicant_count: int
    posted_at: datetime


class ChartPoint(BaseSchema):
    date: str  # YYYY-MM-DD (UTC)
    applications: int
    revenue: int


class AdminTransactionResponse(BaseSchema):
    """Ledger row with the wallet owner's email."""

    id: UUID
    tokens_added: int
    type: str
    reference_id: Optional[str] = None
    created_at: datetime
    email: Optional[str] = None


class SearchProfile(BaseSchema):
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: str


class GlobalSearchResponse(BaseSchema):
    transactions: List[AdminTransactionResponse] = []
    profiles: List[SearchProfile] = []
