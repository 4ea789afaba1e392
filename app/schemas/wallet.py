"""
Wallet and ledger schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from app.schemas.base import BaseSchema, CamelSchema


class TopupRequest(CamelSchema):
    """Body of POST /topup."""

    user_id: UUID


class TopupResponse(CamelSchema):
    success: bool = True
    new_balance: int


class WalletResponse(BaseSchema):
    """Balance card shown on the seeker dashboard."""

    token_balance: int
    expires_at: Optional[datetime] = None
    is_expired: bool


class TransactionResponse(BaseSchema):
    """One ledger row in the wallet history tab."""

    id: UUID
    tokens_added: int
    type: str
    reference_id: Optional[str] = None
    created_at: datetime
