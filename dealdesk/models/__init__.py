"""SQLAlchemy model package for the dealdesk schema."""

from dealdesk.models.base import Base
from dealdesk.models.comment import Comment
from dealdesk.models.contact import Contact
from dealdesk.models.deal import Deal
from dealdesk.models.enums import DealStatus, InvoiceStatus, ProposalStatus

__all__ = [
    "Base",
    "Comment",
    "Contact",
    "Deal",
    "DealStatus",
    "InvoiceStatus",
    "ProposalStatus",
]
