"""List filters for the proposals and invoices views."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable

from dealdesk.core.exceptions import ValidationError
from dealdesk.domain.deals import Deal, Invoice, Proposal, list_invoices, list_proposals
from dealdesk.models.enums import PROPOSAL_STATUS_VALUES
from dealdesk.services.date_classifier import (
    AmountRange,
    TimeRange,
    filter_by_amount_range,
    time_range_start,
)

ALL_STATUSES = "all"


def filter_proposals(deals: Iterable[Deal], status: str | None = ALL_STATUSES) -> list[Proposal]:
    proposals = list_proposals(deals)
    wanted = (status or ALL_STATUSES).strip().lower()
    if wanted == ALL_STATUSES:
        return proposals
    if wanted not in PROPOSAL_STATUS_VALUES:
        raise ValidationError(f"Unknown proposal status filter: {status!r}")
    return [proposal for proposal in proposals if proposal.status == wanted]


def _matches_query(invoice: Invoice, query: str) -> bool:
    haystack = [invoice.title.lower(), format(invoice.amount, "f")]
    if invoice.contact is not None:
        haystack.append((invoice.contact.name or "").lower())
        haystack.append((invoice.contact.company or "").lower())
    return any(query in value for value in haystack)


def filter_invoices(
    deals: Iterable[Deal],
    contact_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    query: str | None = None,
    amount_range: AmountRange | str = AmountRange.ALL,
    time_range: TimeRange | str | None = None,
    today: date | None = None,
) -> list[Invoice]:
    """Invoices matching every given criterion.

    The date window applies to the creation day and is inclusive; an open
    ``date_to`` keeps everything from ``date_from`` on. ``time_range``
    keeps only invoices created between its start and ``today``.
    """
    if date_from and date_to and date_to < date_from:
        raise ValidationError("date_to must not be before date_from.")
    range_start = None
    if time_range:
        if today is None:
            raise ValidationError("today is required with time_range.")
        try:
            range_start = time_range_start(time_range, today)
        except ValueError as exc:
            raise ValidationError(f"Unknown time range: {time_range!r}") from exc
    needle = (query or "").strip().lower()

    matched: list[Invoice] = []
    for invoice in list_invoices(deals):
        if contact_id and contact_id != ALL_STATUSES and invoice.contact_id != contact_id:
            continue
        created = invoice.created_at.date()
        if date_from and created < date_from:
            continue
        if date_to and created > date_to:
            continue
        if range_start and not range_start <= created <= today:
            continue
        if needle and not _matches_query(invoice, needle):
            continue
        if not filter_by_amount_range(invoice.amount, amount_range):
            continue
        matched.append(invoice)
    return matched


def total_amount(deals: Iterable[Deal]) -> Decimal:
    return sum((deal.amount for deal in deals), Decimal("0"))
