"""Dashboard and payments aggregates computed from an owner's deals.

Functions here take already-fetched deals and never touch storage. Revenue is
cash-realized: only invoices marked paid contribute.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from dealdesk.core.exceptions import ValidationError
from dealdesk.domain.deals import Deal, Invoice, split_partitions
from dealdesk.models.enums import InvoiceStatus, ProposalStatus
from dealdesk.services.date_classifier import days_until, is_overdue, shift_months

ZERO = Decimal("0")


class Period(str, enum.Enum):
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"
    ONE_YEAR = "1year"

    @property
    def months(self) -> int:
        return {"3months": 3, "6months": 6, "1year": 12}[self.value]


class ReportGranularity(str, enum.Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


@dataclass(frozen=True)
class DashboardMetrics:
    open_proposals: int
    overdue_invoices: int
    total_revenue: Decimal
    conversion_rate: float
    proposal_count: int = 0
    invoice_count: int = 0
    billed_amount: Decimal = ZERO


@dataclass
class MonthBucket:
    label: str
    year: int
    month: int
    revenue: Decimal = ZERO
    proposals: int = 0
    open_proposals: int = 0
    accepted_proposals: int = 0
    refused_proposals: int = 0


@dataclass(frozen=True)
class ClientRevenue:
    contact_id: str
    name: str
    company: str | None
    revenue: Decimal
    invoice_count: int


@dataclass(frozen=True)
class UpcomingInvoice:
    deal_id: str
    title: str
    client_name: str
    due_date: date
    amount: Decimal
    days_remaining: int


@dataclass
class PaymentsBucket:
    label: str
    total: Decimal = ZERO
    count: int = 0


@dataclass(frozen=True)
class Dashboard:
    period: Period
    metrics: DashboardMetrics
    time_series: list[MonthBucket] = field(default_factory=list)
    top_clients: list[ClientRevenue] = field(default_factory=list)
    upcoming: list[UpcomingInvoice] = field(default_factory=list)


def _paid(invoices: Iterable[Invoice]) -> list[Invoice]:
    return [invoice for invoice in invoices if invoice.is_paid]


def compute_metrics(deals: Iterable[Deal], today: date) -> DashboardMetrics:
    proposals, invoices = split_partitions(deals)

    open_count = sum(1 for p in proposals if p.proposal_status is ProposalStatus.OPEN)
    accepted_count = sum(1 for p in proposals if p.proposal_status is ProposalStatus.ACCEPTED)
    overdue_count = sum(
        1 for inv in invoices if not inv.is_paid and is_overdue(inv.due_date, today)
    )
    revenue = sum((inv.amount for inv in _paid(invoices)), ZERO)
    billed = sum((inv.amount for inv in invoices), ZERO)
    rate = round(accepted_count / len(proposals) * 100, 2) if proposals else 0.0

    return DashboardMetrics(
        open_proposals=open_count,
        overdue_invoices=overdue_count,
        total_revenue=revenue,
        conversion_rate=rate,
        proposal_count=len(proposals),
        invoice_count=len(invoices),
        billed_amount=billed,
    )


def _month_buckets(start: date, end: date) -> list[MonthBucket]:
    buckets: list[MonthBucket] = []
    cursor = start.replace(day=1)
    last = end.replace(day=1)
    while cursor <= last:
        buckets.append(MonthBucket(label=cursor.strftime("%b %Y"), year=cursor.year, month=cursor.month))
        cursor = shift_months(cursor, 1)
    return buckets


def build_time_series(deals: Iterable[Deal], period: Period | str, today: date) -> list[MonthBucket]:
    """Monthly buckets from ``today - period`` through the current month.

    Always ``period.months + 1`` gap-free buckets in ascending order.
    """
    resolved = _resolve_period(period)
    buckets = _month_buckets(shift_months(today, -resolved.months), today)
    by_month = {(bucket.year, bucket.month): bucket for bucket in buckets}

    proposals, invoices = split_partitions(deals)
    for invoice in _paid(invoices):
        bucket = by_month.get((invoice.created_at.year, invoice.created_at.month))
        if bucket is not None:
            bucket.revenue += invoice.amount

    for proposal in proposals:
        bucket = by_month.get((proposal.created_at.year, proposal.created_at.month))
        if bucket is None:
            continue
        bucket.proposals += 1
        if proposal.proposal_status is ProposalStatus.OPEN:
            bucket.open_proposals += 1
        elif proposal.proposal_status is ProposalStatus.ACCEPTED:
            bucket.accepted_proposals += 1
        elif proposal.proposal_status is ProposalStatus.REFUSED:
            bucket.refused_proposals += 1
    return buckets


def top_clients_by_revenue(deals: Iterable[Deal], limit: int) -> list[ClientRevenue]:
    """Clients ranked by paid revenue; ties keep first-seen order."""
    if limit < 0:
        raise ValidationError("limit must be >= 0.")
    _, invoices = split_partitions(deals)

    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    names: dict[str, tuple[str, str | None]] = {}
    for invoice in _paid(invoices):
        key = invoice.contact_id
        if key not in totals:
            totals[key] = ZERO
            counts[key] = 0
            company = invoice.contact.company if invoice.contact else None
            names[key] = (invoice.client_name, company)
        totals[key] += invoice.amount
        counts[key] += 1

    ranked = sorted(totals, key=lambda key: totals[key], reverse=True)
    return [
        ClientRevenue(
            contact_id=key,
            name=names[key][0],
            company=names[key][1],
            revenue=totals[key],
            invoice_count=counts[key],
        )
        for key in ranked[:limit]
    ]


def upcoming_due(deals: Iterable[Deal], limit: int, today: date) -> list[UpcomingInvoice]:
    """Pending invoices due today or later, soonest first."""
    if limit < 0:
        raise ValidationError("limit must be >= 0.")
    _, invoices = split_partitions(deals)
    candidates = [
        invoice
        for invoice in invoices
        if invoice.payment_status is InvoiceStatus.PENDING
        and invoice.due_date is not None
        and not is_overdue(invoice.due_date, today)
    ]
    candidates.sort(key=lambda invoice: invoice.due_date)
    return [
        UpcomingInvoice(
            deal_id=invoice.id,
            title=invoice.title,
            client_name=invoice.client_name,
            due_date=invoice.due_date,
            amount=invoice.amount,
            days_remaining=days_until(invoice.due_date, today),
        )
        for invoice in candidates[:limit]
    ]


def build_dashboard(
    deals: Iterable[Deal],
    period: Period | str,
    today: date,
    top_clients_limit: int = 5,
    upcoming_limit: int = 5,
) -> Dashboard:
    items = list(deals)
    resolved = _resolve_period(period)
    return Dashboard(
        period=resolved,
        metrics=compute_metrics(items, today),
        time_series=build_time_series(items, resolved, today),
        top_clients=top_clients_by_revenue(items, top_clients_limit),
        upcoming=upcoming_due(items, upcoming_limit, today),
    )


def build_payments_report(
    deals: Iterable[Deal],
    year: int,
    granularity: ReportGranularity | str = ReportGranularity.MONTHLY,
) -> list[PaymentsBucket]:
    """Paid invoice totals for one calendar year, by month or quarter."""
    try:
        resolved = ReportGranularity(granularity)
    except ValueError as exc:
        raise ValidationError(f"Unknown report granularity: {granularity!r}") from exc

    if resolved is ReportGranularity.MONTHLY:
        buckets = [PaymentsBucket(label=date(year, month, 1).strftime("%b")) for month in range(1, 13)]
    else:
        buckets = [PaymentsBucket(label=f"Q{quarter}") for quarter in range(1, 5)]

    _, invoices = split_partitions(deals)
    for invoice in _paid(invoices):
        if invoice.created_at.year != year:
            continue
        index = invoice.created_at.month - 1
        if resolved is ReportGranularity.QUARTERLY:
            index //= 3
        buckets[index].total += invoice.amount
        buckets[index].count += 1
    return buckets


def _resolve_period(period: Period | str) -> Period:
    try:
        return Period(period)
    except ValueError as exc:
        raise ValidationError(f"Unknown dashboard period: {period!r}") from exc
