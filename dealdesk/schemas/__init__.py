"""Pydantic schema package for API contracts."""

from dealdesk.schemas.common import ErrorEnvelope
from dealdesk.schemas.dashboard import (
    ClientRevenueResponse,
    DashboardResponse,
    MetricsResponse,
    MonthBucketResponse,
    NotificationResponse,
    PaymentsBucketResponse,
    PaymentsReportResponse,
    UpcomingInvoiceResponse,
)
from dealdesk.schemas.deals import (
    ContactSummary,
    ConversionResponse,
    DealListResponse,
    DealResponse,
    DueDateUpdateRequest,
    InvoiceStatusUpdateRequest,
    ProposalCreateRequest,
    ProposalStatusUpdateRequest,
)

__all__ = [
    "ClientRevenueResponse",
    "ContactSummary",
    "ConversionResponse",
    "DashboardResponse",
    "DealListResponse",
    "DealResponse",
    "DueDateUpdateRequest",
    "ErrorEnvelope",
    "InvoiceStatusUpdateRequest",
    "MetricsResponse",
    "MonthBucketResponse",
    "NotificationResponse",
    "PaymentsBucketResponse",
    "PaymentsReportResponse",
    "ProposalCreateRequest",
    "ProposalStatusUpdateRequest",
    "UpcomingInvoiceResponse",
]
