"""Deal model module.

One table backs both proposals and invoices; ``status == "invoice"`` marks a
converted row and ``invoice_status`` is only populated on those rows.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealdesk.models.base import Base, CreatedAtMixin, IdMixin, OwnedMixin
from dealdesk.models.enums import DealStatus


class Deal(Base, IdMixin, CreatedAtMixin, OwnedMixin):
    __tablename__ = "deals"
    __table_args__ = (
        Index("idx_deals_owner_status", "user_id", "status"),
        Index("idx_deals_contact", "contact_id"),
    )

    contact_id: Mapped[str] = mapped_column(ForeignKey("contacts.id", ondelete="RESTRICT"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(20), default=DealStatus.OPEN.value, nullable=False)
    invoice_status: Mapped[str | None] = mapped_column(String(20))

    contact = relationship("Contact", back_populates="deals")
