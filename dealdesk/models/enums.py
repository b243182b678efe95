"""Canonical enum values for deal status columns."""

from __future__ import annotations

import enum


class DealStatus(str, enum.Enum):
    OPEN = "open"
    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"
    LOST = "lost"
    INVOICE = "invoice"


class ProposalStatus(str, enum.Enum):
    OPEN = "open"
    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"
    LOST = "lost"


class InvoiceStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


PROPOSAL_STATUS_VALUES = frozenset(status.value for status in ProposalStatus)
INVOICE_STATUS_VALUES = frozenset(status.value for status in InvoiceStatus)
