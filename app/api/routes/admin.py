"""
Admin routes - platform statistics, moderation and manual adjustments.
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import (
    get_admin_user,
    get_analytics_service,
    get_job_service,
    get_wallet_service,
)
from app.core.database import get_db
from app.schemas.admin import (
    AdminStats,
    AdminTransactionResponse,
    AdvancedStats,
    ChartPoint,
    GlobalSearchResponse,
    GrantTokensRequest,
)
from app.schemas.base import SuccessResponse
from app.schemas.job import AdminJobResponse, JobDeleteRequest
from app.services.analytics_service import AnalyticsService
from app.services.job_service import JobService
from app.services.wallet_service import WalletService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_admin_user)],
)


@router.post("/jobs/delete", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_job(
    body: JobDeleteRequest,
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    """Remove a posting; its applications go with it."""
    await job_service.delete_job(db, body.job_id)
    return SuccessResponse()


@router.post("/tokens/grant", response_model=SuccessResponse, response_model_exclude_none=True)
async def grant_tokens(
    body: GrantTokensRequest,
    db: AsyncSession = Depends(get_db),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    """Credit tokens to a user by email. Expiry is not extended."""
    await wallet_service.grant(db, email=body.email, amount=body.amount)
    return SuccessResponse()


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.stats(db)


@router.get("/advanced-stats", response_model=AdvancedStats)
async def get_advanced_stats(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.advanced_stats(db)


@router.get("/analytics-report", response_model=List[Dict[str, Any]])
async def get_analytics_report(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """One row per job: category, employer and applicant count."""
    return await analytics.analytics_report(db)


@router.get("/chart-data", response_model=List[ChartPoint])
async def get_chart_data(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Daily applications and top-up revenue for the last week."""
    return await analytics.chart_data(db)


@router.get("/export-csv")
async def export_csv(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    content = await analytics.export_csv(db)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=financial_log.csv"},
    )


@router.get("/global-search", response_model=GlobalSearchResponse)
async def global_search(
    query: str = Query("", description="Reference id or email fragment"),
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.global_search(db, query)


@router.get("/jobs", response_model=List[AdminJobResponse])
async def list_jobs(
    db: AsyncSession = Depends(get_db),
    job_service: JobService = Depends(get_job_service),
):
    return await job_service.list_all_with_poster(db)


@router.get("/transactions", response_model=List[AdminTransactionResponse])
async def list_recent_transactions(
    db: AsyncSession = Depends(get_db),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return await analytics.recent_transactions(db)
