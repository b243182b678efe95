"""Dashboard, notification and payments report schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from dealdesk.services.aggregation_service import Period
from dealdesk.services.notification_service import NotificationKind


class MetricsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    open_proposals: int
    overdue_invoices: int
    total_revenue: float
    conversion_rate: float
    proposal_count: int
    invoice_count: int
    billed_amount: float


class MonthBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    year: int
    month: int
    revenue: float
    proposals: int
    open_proposals: int
    accepted_proposals: int
    refused_proposals: int


class ClientRevenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    contact_id: str
    name: str
    company: str | None = None
    revenue: float
    invoice_count: int


class UpcomingInvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deal_id: str
    title: str
    client_name: str
    due_date: date
    amount: float
    days_remaining: int


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: Period
    metrics: MetricsResponse
    time_series: list[MonthBucketResponse]
    top_clients: list[ClientRevenueResponse]
    upcoming: list[UpcomingInvoiceResponse]


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deal_id: str
    title: str
    client_name: str
    due_date: date
    kind: NotificationKind


class PaymentsBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    total: float
    count: int


class PaymentsReportResponse(BaseModel):
    year: int
    granularity: str
    buckets: list[PaymentsBucketResponse]
    total: float
