"""Shared SQLAlchemy base and common mixins for dealdesk models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from dealdesk.utils.ids import new_id


def utcnow() -> datetime:
    """Return UTC now as a naive datetime; dates are compared per calendar day."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base class for the dealdesk schema."""


class IdMixin:
    """Opaque string primary key assigned on insert."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class CreatedAtMixin:
    """Creation timestamp set once by the store."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class OwnedMixin:
    """Mixin scoping business rows to the owning user."""

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
