"""
Transaction model - the append-only token ledger.
"""
import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import UUIDMixin, CreatedAtMixin

if TYPE_CHECKING:
    from app.models.wallet import Wallet


TX_TOPUP = "topup"
TX_ADMIN_GRANT = "admin_grant"
TX_DEDUCTION = "deduction"


class Transaction(Base, UUIDMixin, CreatedAtMixin):
    """
    One balance-affecting event. Rows are inserted, never updated.

    tokens_added is signed: positive for topup/admin_grant, negative for deduction.
    """

    __tablename__ = "transactions"

    wallet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("wallets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tokens_added: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    reference_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )

    # Relationships
    wallet: Mapped["Wallet"] = relationship("Wallet", back_populates="transactions")

    def __repr__(self) -> str:
        return f"<Transaction {self.type} {self.tokens_added:+d} {self.reference_id}>"
