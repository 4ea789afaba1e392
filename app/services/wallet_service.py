"""
Wallet service - token balances, top-ups and admin grants.

Every balance change happens in one transaction that holds the wallet row
lock, writes the ledger row and updates the balance together. Either both
land or neither does.
"""
import asyncio
from datetime import timedelta
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import UserNotFoundException, WalletNotFoundException
from app.core.logging import get_logger
from app.models.transaction import TX_ADMIN_GRANT, TX_TOPUP
from app.repositories.profile_repository import ProfileRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.wallet_repository import WalletRepository
from app.schemas.wallet import TopupResponse, TransactionResponse, WalletResponse
from app.utils.helpers import generate_reference, utcnow

logger = get_logger(__name__)


class WalletService:
    """Reads and mutates token wallets."""

    def __init__(self):
        self.wallet_repo = WalletRepository()
        self.tx_repo = TransactionRepository()
        self.profile_repo = ProfileRepository()

    async def get_wallet(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> WalletResponse:
        wallet = await self.wallet_repo.get_by_user(db, user_id)
        if not wallet:
            raise WalletNotFoundException()

        return WalletResponse(
            token_balance=wallet.token_balance,
            expires_at=wallet.expires_at,
            is_expired=wallet.is_expired(),
        )

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[TransactionResponse]:
        """Latest ledger rows for the wallet history tab."""
        wallet = await self.wallet_repo.get_by_user(db, user_id)
        if not wallet:
            return []

        rows = await self.tx_repo.list_for_wallet(
            db, wallet.id, limit=settings.wallet_history_limit
        )
        return [TransactionResponse.model_validate(tx) for tx in rows]

    async def topup(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> TopupResponse:
        """
        Credit a completed M-Pesa top-up.

        Payment is simulated: we wait out the callback delay, then credit
        settings.topup_tokens and push expiry to now + wallet_validity_days.

        Raises:
            WalletNotFoundException: the user has no wallet.
        """
        wallet = await self.wallet_repo.get_by_user(db, user_id)
        if not wallet:
            raise WalletNotFoundException()
        # Don't hold a transaction open across the simulated callback
        await db.commit()

        if settings.topup_callback_delay_seconds > 0:
            await asyncio.sleep(settings.topup_callback_delay_seconds)

        reference = generate_reference("MPESA", 8)
        try:
            wallet = await self.wallet_repo.get_by_user(db, user_id, for_update=True)
            if not wallet:
                raise WalletNotFoundException()

            await self.tx_repo.record(
                db,
                wallet_id=wallet.id,
                tokens_added=settings.topup_tokens,
                tx_type=TX_TOPUP,
                reference_id=reference,
            )
            wallet = await self.wallet_repo.update(
                db,
                wallet,
                token_balance=wallet.token_balance + settings.topup_tokens,
                expires_at=utcnow() + timedelta(days=settings.wallet_validity_days),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "topup_completed",
            user_id=str(user_id),
            reference_id=reference,
            new_balance=wallet.token_balance,
        )
        return TopupResponse(new_balance=wallet.token_balance)

    async def grant(
        self,
        db: AsyncSession,
        *,
        email: str,
        amount: int,
    ) -> int:
        """
        Admin credit of `amount` tokens to the wallet of the profile with `email`.

        Expiry is left untouched. Returns the new balance.

        Raises:
            UserNotFoundException: no profile with that email.
            WalletNotFoundException: the profile has no wallet.
        """
        try:
            profile = await self.profile_repo.get_by_email(db, email)
            if not profile:
                raise UserNotFoundException()

            wallet = await self.wallet_repo.get_by_user(db, profile.id, for_update=True)
            if not wallet:
                raise WalletNotFoundException()

            reference = generate_reference("ADMIN", 6)
            wallet = await self.wallet_repo.update(
                db, wallet, token_balance=wallet.token_balance + amount
            )
            await self.tx_repo.record(
                db,
                wallet_id=wallet.id,
                tokens_added=amount,
                tx_type=TX_ADMIN_GRANT,
                reference_id=reference,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "tokens_granted",
            email=email,
            amount=amount,
            reference_id=reference,
            new_balance=wallet.token_balance,
        )
        return wallet.token_balance
