"""
Transaction repository - data access for the token ledger.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.transaction import Transaction, TX_DEDUCTION
from app.models.wallet import Wallet
from app.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    def __init__(self):
        super().__init__(Transaction)

    async def record(
        self,
        db: AsyncSession,
        *,
        wallet_id: UUID,
        tokens_added: int,
        tx_type: str,
        reference_id: Optional[str],
    ) -> Transaction:
        """Append one ledger row (flushed, not committed)."""
        return await self.create(
            db,
            wallet_id=wallet_id,
            tokens_added=tokens_added,
            type=tx_type,
            reference_id=reference_id,
        )

    async def list_for_wallet(
        self,
        db: AsyncSession,
        wallet_id: UUID,
        *,
        limit: int = 10,
    ) -> List[Transaction]:
        """Most recent ledger rows for one wallet."""
        result = await db.execute(
            select(Transaction)
            .where(Transaction.wallet_id == wallet_id)
            .order_by(Transaction.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def tokens_spent(
        self,
        db: AsyncSession,
        wallet_id: UUID,
    ) -> int:
        """Total tokens deducted from a wallet, as a positive number."""
        result = await db.execute(
            select(func.coalesce(func.sum(func.abs(Transaction.tokens_added)), 0)).where(
                Transaction.wallet_id == wallet_id,
                Transaction.type == TX_DEDUCTION,
            )
        )
        return int(result.scalar() or 0)

    async def count_by_type(
        self,
        db: AsyncSession,
        tx_type: str,
    ) -> int:
        return await self.count(db, Transaction.type == tx_type)

    async def created_at_since(
        self,
        db: AsyncSession,
        since: datetime,
        *,
        tx_type: str,
    ) -> List[datetime]:
        """Timestamps of one transaction type since a cutoff (for charts)."""
        result = await db.execute(
            select(Transaction.created_at).where(
                Transaction.type == tx_type,
                Transaction.created_at >= since,
            )
        )
        return list(result.scalars().all())

    async def list_with_owner(
        self,
        db: AsyncSession,
        *,
        since: Optional[datetime] = None,
        reference_fragment: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """
        Ledger rows newest first with wallet -> owner eagerly loaded,
        so callers can read the owner's email.
        """
        query = select(Transaction).options(
            selectinload(Transaction.wallet).selectinload(Wallet.owner)
        )
        if since is not None:
            query = query.where(Transaction.created_at >= since)
        if reference_fragment:
            query = query.where(Transaction.reference_id.ilike(f"%{reference_fragment}%"))
        query = query.order_by(Transaction.created_at.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())
