"""
Wallet repository - data access for Wallet entity.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.wallet import Wallet
from app.repositories.base import BaseRepository


class WalletRepository(BaseRepository[Wallet]):
    def __init__(self):
        super().__init__(Wallet)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        for_update: bool = False,
    ) -> Optional[Wallet]:
        """
        Find a user's wallet.

        for_update=True takes a row lock held until the surrounding
        transaction ends; every balance mutation must go through it.
        """
        query = select(Wallet).where(Wallet.user_id == user_id)
        if for_update:
            query = query.with_for_update()
            # Re-read the row even if it's already in the identity map
            query = query.execution_options(populate_existing=True)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def total_balance(self, db: AsyncSession) -> int:
        """Sum of all outstanding tokens (the platform's liability)."""
        result = await db.execute(select(func.coalesce(func.sum(Wallet.token_balance), 0)))
        return int(result.scalar() or 0)
