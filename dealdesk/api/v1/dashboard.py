"""Dashboard, notification and payments report endpoints for API v1."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Header, Query, Response

from dealdesk.api.v1._authz import authorize
from dealdesk.core.config import Config
from dealdesk.core.dependencies import get_deal_store, get_settings, get_today
from dealdesk.schemas.dashboard import (
    DashboardResponse,
    NotificationResponse,
    PaymentsBucketResponse,
    PaymentsReportResponse,
)
from dealdesk.services.aggregation_service import ReportGranularity, build_dashboard, build_payments_report
from dealdesk.services.deal_store import DealStore
from dealdesk.services.export_service import payments_report_to_csv
from dealdesk.services.notification_service import derive_notifications

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    period: str | None = None,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    settings: Config = Depends(get_settings),
    today: date = Depends(get_today),
) -> DashboardResponse:
    owner_id = authorize(authorization)
    result = build_dashboard(
        store.list_deals(owner_id),
        period=period or settings.DASHBOARD_DEFAULT_PERIOD,
        today=today,
        top_clients_limit=settings.TOP_CLIENTS_LIMIT,
        upcoming_limit=settings.UPCOMING_DUE_LIMIT,
    )
    return DashboardResponse.model_validate(result)


@router.get("/notifications", response_model=list[NotificationResponse])
def notifications(
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    today: date = Depends(get_today),
) -> list[NotificationResponse]:
    owner_id = authorize(authorization)
    return [
        NotificationResponse.model_validate(item)
        for item in derive_notifications(store.list_deals(owner_id), today)
    ]


def _report(store: DealStore, owner_id: str, year: int, granularity: str):
    return build_payments_report(store.list_deals(owner_id), year=year, granularity=granularity)


@router.get("/payments/report", response_model=PaymentsReportResponse)
def payments_report(
    year: int | None = Query(default=None, ge=1900, le=9999),
    granularity: str = ReportGranularity.MONTHLY.value,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    today: date = Depends(get_today),
) -> PaymentsReportResponse:
    owner_id = authorize(authorization)
    report_year = year or today.year
    buckets = _report(store, owner_id, report_year, granularity)
    return PaymentsReportResponse(
        year=report_year,
        granularity=granularity,
        buckets=[PaymentsBucketResponse.model_validate(bucket) for bucket in buckets],
        total=float(sum(bucket.total for bucket in buckets)),
    )


@router.get("/payments/report.csv")
def export_payments_report(
    year: int | None = Query(default=None, ge=1900, le=9999),
    granularity: str = ReportGranularity.MONTHLY.value,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    today: date = Depends(get_today),
) -> Response:
    owner_id = authorize(authorization)
    report_year = year or today.year
    buckets = _report(store, owner_id, report_year, granularity)
    return Response(
        content=payments_report_to_csv(buckets),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="payments_{granularity}_{report_year}.csv"'},
    )
