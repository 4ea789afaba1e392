"""
Wallet routes - balance, history and M-Pesa top-ups.
"""
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_wallet_service
from app.core.database import get_db
from app.core.exceptions import ForbiddenException
from app.core.rate_limit import limiter, RATE_WALLET
from app.models.profile import Profile
from app.schemas.wallet import (
    TopupRequest,
    TopupResponse,
    TransactionResponse,
    WalletResponse,
)
from app.services.wallet_service import WalletService

router = APIRouter(tags=["wallet"])


@router.post("/topup", response_model=TopupResponse)
@limiter.limit(RATE_WALLET)
async def topup(
    request: Request,
    body: TopupRequest,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    """
    Buy a token bundle.

    The payment callback is simulated; the wallet is credited once it "arrives".
    """
    if body.user_id != current_user.id and not current_user.is_admin:
        raise ForbiddenException("You can only top up your own wallet")

    return await wallet_service.topup(db, body.user_id)


@router.get("/wallet", response_model=WalletResponse)
async def get_wallet(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    return await wallet_service.get_wallet(db, current_user.id)


@router.get("/wallet/transactions", response_model=List[TransactionResponse])
async def list_wallet_transactions(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    wallet_service: WalletService = Depends(get_wallet_service),
):
    """Most recent ledger rows, newest first."""
    return await wallet_service.list_transactions(db, current_user.id)
