"""Contact model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealdesk.models.base import Base, CreatedAtMixin, IdMixin, OwnedMixin


class Contact(Base, IdMixin, CreatedAtMixin, OwnedMixin):
    __tablename__ = "contacts"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(64))
    last_interaction: Mapped[datetime | None] = mapped_column(DateTime)

    deals = relationship("Deal", back_populates="contact")
    comments = relationship("Comment", back_populates="contact", cascade="all, delete-orphan")
