"""Proposal/invoice domain types.

Rows of the shared ``deals`` table are loaded as either a :class:`Proposal` or
an :class:`Invoice`. Engines branch on the type, never on a raw status string,
so invoice rows cannot leak into proposal figures and vice versa.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from dealdesk.models.enums import DealStatus, InvoiceStatus, ProposalStatus

INVOICE_TITLE_PREFIX = "Invoice for: "


@dataclass(frozen=True)
class ContactRef:
    """Read-only contact fields joined onto a deal for display."""

    id: str
    name: str
    company: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class DealBase:
    id: str
    user_id: str
    contact_id: str
    title: str
    amount: Decimal
    created_at: datetime
    due_date: date | None = None
    notes: str | None = None
    contact: ContactRef | None = field(default=None, compare=False)

    @property
    def client_name(self) -> str:
        if self.contact is None or not self.contact.name:
            return "Unknown"
        return self.contact.name


@dataclass(frozen=True)
class Proposal(DealBase):
    proposal_status: ProposalStatus = ProposalStatus.OPEN

    @property
    def status(self) -> str:
        return self.proposal_status.value

    @property
    def invoice_status(self) -> None:
        return None

    def to_invoice_draft(self) -> "InvoiceDraft":
        """Snapshot this proposal into the fields of a new invoice row."""
        return InvoiceDraft(
            user_id=self.user_id,
            contact_id=self.contact_id,
            title=f"{INVOICE_TITLE_PREFIX}{self.title}",
            amount=self.amount,
            due_date=self.due_date,
            notes=self.notes,
        )


@dataclass(frozen=True)
class Invoice(DealBase):
    payment_status: InvoiceStatus = InvoiceStatus.PENDING

    @property
    def status(self) -> str:
        return DealStatus.INVOICE.value

    @property
    def invoice_status(self) -> str:
        return self.payment_status.value

    @property
    def is_paid(self) -> bool:
        return self.payment_status is InvoiceStatus.PAID


Deal = Proposal | Invoice


@dataclass(frozen=True)
class ProposalDraft:
    """Fields of a proposal before the store assigns id and created_at."""

    user_id: str
    contact_id: str
    title: str
    amount: Decimal
    due_date: date | None = None
    notes: str | None = None

    def to_row_fields(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "contact_id": self.contact_id,
            "title": self.title,
            "amount": self.amount,
            "due_date": self.due_date,
            "notes": self.notes,
            "status": DealStatus.OPEN.value,
            "invoice_status": None,
        }


@dataclass(frozen=True)
class InvoiceDraft:
    """Fields of an invoice row; only built by :meth:`Proposal.to_invoice_draft`."""

    user_id: str
    contact_id: str
    title: str
    amount: Decimal
    due_date: date | None = None
    notes: str | None = None

    def to_row_fields(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "contact_id": self.contact_id,
            "title": self.title,
            "amount": self.amount,
            "due_date": self.due_date,
            "notes": self.notes,
            "status": DealStatus.INVOICE.value,
            "invoice_status": InvoiceStatus.PENDING.value,
        }


def list_proposals(deals: Iterable[Deal]) -> list[Proposal]:
    return [deal for deal in deals if isinstance(deal, Proposal)]


def list_invoices(deals: Iterable[Deal]) -> list[Invoice]:
    return [deal for deal in deals if isinstance(deal, Invoice)]


def split_partitions(deals: Iterable[Deal]) -> tuple[list[Proposal], list[Invoice]]:
    """Split deals into (proposals, invoices), preserving input order."""
    proposals: list[Proposal] = []
    invoices: list[Invoice] = []
    for deal in deals:
        if isinstance(deal, Invoice):
            invoices.append(deal)
        else:
            proposals.append(deal)
    return proposals, invoices
