"""
Profile repository - data access for Profile entity.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile
from app.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self):
        super().__init__(Profile)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Optional[Profile]:
        """Find a profile by email address."""
        result = await db.execute(
            select(Profile).where(Profile.email == email)
        )
        return result.scalar_one_or_none()

    async def count_by_role(
        self,
        db: AsyncSession,
        role: str,
    ) -> int:
        return await self.count(db, Profile.role == role)

    async def search_by_email(
        self,
        db: AsyncSession,
        fragment: str,
        *,
        limit: int = 5,
    ) -> List[Profile]:
        """Case-insensitive substring match on email."""
        result = await db.execute(
            select(Profile)
            .where(Profile.email.ilike(f"%{fragment}%"))
            .order_by(Profile.email)
            .limit(limit)
        )
        return list(result.scalars().all())
