"""
Wallet model - a user's prepaid token balance.
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.utils.helpers import as_utc, utcnow

if TYPE_CHECKING:
    from app.models.profile import Profile
    from app.models.transaction import Transaction


class Wallet(BaseModel):
    """
    Token wallet, one per profile.

    token_balance must always equal the sum of the wallet's ledger rows.
    expires_at is pushed out on every top-up; NULL means never topped up.
    """

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint("token_balance >= 0", name="ck_wallet_balance_non_negative"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    token_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    owner: Mapped["Profile"] = relationship("Profile", back_populates="wallet")
    transactions: Mapped[List["Transaction"]] = relationship(
        "Transaction",
        back_populates="wallet",
        order_by="Transaction.created_at.desc()",
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """True once expires_at has passed."""
        if self.expires_at is None:
            return False
        return as_utc(self.expires_at) < (now or utcnow())

    def __repr__(self) -> str:
        return f"<Wallet {self.user_id} balance={self.token_balance}>"
