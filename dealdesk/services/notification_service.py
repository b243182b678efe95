"""Overdue follow-up and payment notifications derived from deals."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from dealdesk.domain.deals import Deal, Invoice
from dealdesk.models.enums import InvoiceStatus, ProposalStatus
from dealdesk.services.date_classifier import is_overdue


class NotificationKind(str, enum.Enum):
    PROPOSAL = "proposal"
    INVOICE = "invoice"


@dataclass(frozen=True)
class Notification:
    deal_id: str
    title: str
    client_name: str
    due_date: date
    kind: NotificationKind


def _kind_for(deal: Deal, today: date) -> NotificationKind | None:
    if deal.due_date is None or not is_overdue(deal.due_date, today):
        return None
    if isinstance(deal, Invoice):
        if deal.payment_status is InvoiceStatus.PENDING:
            return NotificationKind.INVOICE
        return None
    if deal.proposal_status is ProposalStatus.OPEN:
        return NotificationKind.PROPOSAL
    return None


def derive_notifications(deals: Iterable[Deal], today: date) -> list[Notification]:
    """Open proposals past their follow-up date and pending invoices past due.

    The list is advisory and keeps input order. Dismissal state, if any, lives
    with the client.
    """
    notifications: list[Notification] = []
    for deal in deals:
        kind = _kind_for(deal, today)
        if kind is None:
            continue
        notifications.append(
            Notification(
                deal_id=deal.id,
                title=deal.title,
                client_name=deal.client_name,
                due_date=deal.due_date,
                kind=kind,
            )
        )
    return notifications
