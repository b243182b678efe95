"""Comment model module.

Comments hang off a contact, so every deal of that contact shares one thread.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealdesk.models.base import Base, CreatedAtMixin, IdMixin, OwnedMixin


class Comment(Base, IdMixin, CreatedAtMixin, OwnedMixin):
    __tablename__ = "comments"

    contact_id: Mapped[str] = mapped_column(ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    contact = relationship("Contact", back_populates="comments")
