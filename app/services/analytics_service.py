"""
Analytics service - aggregate reads for the admin portal.

Revenue figures are derived, not stored: each top-up is worth
settings.topup_price_ksh and each application settings.token_price_ksh.
"""
import csv
import io
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.models.application import STATUS_SHORTLISTED
from app.models.profile import ROLE_EMPLOYER, ROLE_SEEKER
from app.models.transaction import Transaction, TX_TOPUP
from app.repositories.application_repository import ApplicationRepository
from app.repositories.job_repository import JobRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.wallet_repository import WalletRepository
from app.schemas.admin import (
    AdminStats,
    AdminTransactionResponse,
    AdvancedStats,
    AnalyticsReportRow,
    ChartPoint,
    GlobalSearchResponse,
    SearchProfile,
)
from app.utils.helpers import as_utc, utcnow

logger = get_logger(__name__)

ANALYTICS_VIEW = "admin_analytics_report"
CSV_HEADER = ["Date", "User Email", "Tokens", "Type", "Reference ID"]
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _owner_email(tx: Transaction) -> Optional[str]:
    if tx.wallet is None or tx.wallet.owner is None:
        return None
    return tx.wallet.owner.email


def _to_admin_transaction(tx: Transaction) -> AdminTransactionResponse:
    return AdminTransactionResponse(
        id=tx.id,
        tokens_added=tx.tokens_added,
        type=tx.type,
        reference_id=tx.reference_id,
        created_at=tx.created_at,
        email=_owner_email(tx),
    )


class AnalyticsService:
    """Platform-wide counters, charts, exports and search."""

    def __init__(self):
        self.profile_repo = ProfileRepository()
        self.wallet_repo = WalletRepository()
        self.tx_repo = TransactionRepository()
        self.job_repo = JobRepository()
        self.app_repo = ApplicationRepository()

    async def stats(self, db: AsyncSession) -> AdminStats:
        topups = await self.tx_repo.count_by_type(db, TX_TOPUP)
        return AdminStats(
            total_revenue=topups * settings.topup_price_ksh,
            active_seekers=await self.profile_repo.count_by_role(db, ROLE_SEEKER),
            registered_employers=await self.profile_repo.count_by_role(db, ROLE_EMPLOYER),
            total_applications=await self.app_repo.count(db),
        )

    async def advanced_stats(self, db: AsyncSession) -> AdvancedStats:
        """
        Token liability, estimated revenue per job category and the mean
        days from application to shortlisting.
        """
        liability = await self.wallet_repo.total_balance(db)

        counts = await self.job_repo.application_counts_by_type(db)
        revenue_per_category = {
            job_type: n * settings.token_price_ksh for job_type, n in counts.items()
        }

        shortlisted = await self.app_repo.list_by_status(db, STATUS_SHORTLISTED)
        avg_days = 0.0
        if shortlisted:
            total_seconds = sum(
                (as_utc(app.updated_at) - as_utc(app.created_at)).total_seconds()
                for app in shortlisted
            )
            avg_days = total_seconds / len(shortlisted) / 86400

        return AdvancedStats(
            token_liability=liability,
            revenue_per_category=revenue_per_category,
            avg_time_to_hire=round(avg_days, 1),
        )

    async def analytics_report(self, db: AsyncSession) -> List[Dict[str, Any]]:
        """
        Per-job report. Reads the admin_analytics_report view when the
        database defines one, otherwise computes the same columns.
        """
        has_view = await db.run_sync(
            lambda sync_session: inspect(sync_session.connection()).has_table(ANALYTICS_VIEW)
        )
        if has_view:
            result = await db.execute(text(f"SELECT * FROM {ANALYTICS_VIEW}"))
            return [dict(row) for row in result.mappings().all()]

        logger.warning("analytics_view_missing", view=ANALYTICS_VIEW)
        rows = await self.job_repo.list_with_application_counts(db)
        return [
            AnalyticsReportRow(
                id=job.id,
                title=job.title,
                category=job.job_type,
                employer=job.poster.full_name if job.poster else None,
                applicant_count=count,
                posted_at=job.created_at,
            ).model_dump(mode="json")
            for job, count in rows
        ]

    async def chart_data(self, db: AsyncSession) -> List[ChartPoint]:
        """One point per UTC day, oldest first, ending today."""
        today = utcnow().date()
        days = [today - timedelta(days=i) for i in range(settings.chart_window_days - 1, -1, -1)]
        since = datetime.combine(days[0], datetime.min.time(), tzinfo=timezone.utc)

        applications = Counter(
            as_utc(ts).date() for ts in await self.app_repo.created_at_since(db, since)
        )
        topups = Counter(
            as_utc(ts).date()
            for ts in await self.tx_repo.created_at_since(db, since, tx_type=TX_TOPUP)
        )

        return [
            ChartPoint(
                date=day.isoformat(),
                applications=applications.get(day, 0),
                revenue=topups.get(day, 0) * settings.topup_price_ksh,
            )
            for day in days
        ]

    async def export_csv(self, db: AsyncSession) -> str:
        """Financial log of the last export_window_days, newest first."""
        since = utcnow() - timedelta(days=settings.export_window_days)
        transactions = await self.tx_repo.list_with_owner(db, since=since)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for tx in transactions:
            writer.writerow([
                as_utc(tx.created_at).strftime(CSV_DATE_FORMAT),
                _owner_email(tx) or "N/A",
                tx.tokens_added,
                tx.type,
                tx.reference_id or "",
            ])

        logger.info("financial_log_exported", rows=len(transactions))
        return buffer.getvalue()

    async def global_search(self, db: AsyncSession, query: str) -> GlobalSearchResponse:
        """Match reference ids and emails; short queries return nothing."""
        query = (query or "").strip()
        if len(query) < settings.search_min_length:
            return GlobalSearchResponse()

        transactions = await self.tx_repo.list_with_owner(
            db, reference_fragment=query, limit=settings.search_result_limit
        )
        profiles = await self.profile_repo.search_by_email(
            db, query, limit=settings.search_result_limit
        )
        return GlobalSearchResponse(
            transactions=[_to_admin_transaction(tx) for tx in transactions],
            profiles=[SearchProfile.model_validate(p) for p in profiles],
        )

    async def recent_transactions(self, db: AsyncSession) -> List[AdminTransactionResponse]:
        transactions = await self.tx_repo.list_with_owner(
            db, limit=settings.recent_transactions_limit
        )
        return [_to_admin_transaction(tx) for tx in transactions]
