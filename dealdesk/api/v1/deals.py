"""Proposal and invoice endpoints for API v1."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Header, Query, Response, status

from dealdesk.api.v1._authz import authorize
from dealdesk.core.dependencies import get_deal_store, get_today
from dealdesk.domain.deals import Deal
from dealdesk.schemas.deals import (
    ConversionResponse,
    DealListResponse,
    DealResponse,
    DueDateUpdateRequest,
    InvoiceStatusUpdateRequest,
    ProposalCreateRequest,
    ProposalStatusUpdateRequest,
)
from dealdesk.services.deal_filters import filter_invoices, filter_proposals, total_amount
from dealdesk.services.deal_store import DealStore
from dealdesk.services.export_service import invoices_to_csv
from dealdesk.services.lifecycle_service import LifecycleService

router = APIRouter(tags=["deals"])


def _list_response(deals: list[Deal]) -> DealListResponse:
    return DealListResponse(
        items=[DealResponse.model_validate(deal) for deal in deals],
        count=len(deals),
        total_amount=float(total_amount(deals)),
    )


@router.get("/proposals", response_model=DealListResponse)
def list_proposals(
    status_filter: str = Query(default="all", alias="status"),
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealListResponse:
    owner_id = authorize(authorization)
    return _list_response(filter_proposals(store.list_deals(owner_id), status_filter))


def _filtered_invoices(
    store: DealStore,
    owner_id: str,
    contact_id: str | None,
    date_from: date | None,
    date_to: date | None,
    q: str | None,
    amount_range: str,
    time_range: str | None,
    today: date,
):
    return filter_invoices(
        store.list_deals(owner_id),
        contact_id=contact_id,
        date_from=date_from,
        date_to=date_to,
        query=q,
        amount_range=amount_range,
        time_range=time_range,
        today=today,
    )


@router.get("/invoices", response_model=DealListResponse)
def list_invoices(
    contact_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    q: str | None = None,
    amount_range: str = "all",
    time_range: str | None = None,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    today: date = Depends(get_today),
) -> DealListResponse:
    owner_id = authorize(authorization)
    invoices = _filtered_invoices(
        store, owner_id, contact_id, date_from, date_to, q, amount_range, time_range, today
    )
    return _list_response(invoices)


@router.get("/invoices/export.csv")
def export_invoices(
    contact_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    q: str | None = None,
    amount_range: str = "all",
    time_range: str | None = None,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
    today: date = Depends(get_today),
) -> Response:
    owner_id = authorize(authorization)
    invoices = _filtered_invoices(
        store, owner_id, contact_id, date_from, date_to, q, amount_range, time_range, today
    )
    return Response(
        content=invoices_to_csv(invoices),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="invoices_{today.isoformat()}.csv"'},
    )


@router.post("/deals", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
def create_proposal(
    payload: ProposalCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealResponse:
    owner_id = authorize(authorization)
    proposal = LifecycleService(store, owner_id=owner_id).create_proposal(
        owner_id=owner_id,
        contact_id=payload.contact_id,
        title=payload.title,
        amount=payload.amount,
        due_date=payload.due_date,
        notes=payload.notes,
    )
    return DealResponse.model_validate(proposal)


@router.get("/deals/{deal_id}", response_model=DealResponse)
def get_deal(
    deal_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealResponse:
    owner_id = authorize(authorization)
    return DealResponse.model_validate(LifecycleService(store, owner_id=owner_id).get_deal(deal_id))


@router.delete("/deals/{deal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_deal(
    deal_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> Response:
    owner_id = authorize(authorization)
    LifecycleService(store, owner_id=owner_id).delete_deal(deal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/deals/{deal_id}/status", response_model=DealResponse)
def change_proposal_status(
    deal_id: str,
    payload: ProposalStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealResponse:
    owner_id = authorize(authorization)
    updated = LifecycleService(store, owner_id=owner_id).change_proposal_status(deal_id, payload.status)
    return DealResponse.model_validate(updated)


@router.post("/deals/{deal_id}/convert", response_model=ConversionResponse, status_code=status.HTTP_201_CREATED)
def convert_to_invoice(
    deal_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> ConversionResponse:
    owner_id = authorize(authorization)
    invoice_id = LifecycleService(store, owner_id=owner_id).convert_to_invoice(deal_id)
    return ConversionResponse(proposal_id=deal_id, invoice_id=invoice_id)


@router.patch("/deals/{deal_id}/invoice-status", response_model=DealResponse)
def change_invoice_status(
    deal_id: str,
    payload: InvoiceStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealResponse:
    owner_id = authorize(authorization)
    updated = LifecycleService(store, owner_id=owner_id).change_invoice_status(deal_id, payload.invoice_status)
    return DealResponse.model_validate(updated)


@router.patch("/deals/{deal_id}/due-date", response_model=DealResponse)
def set_due_date(
    deal_id: str,
    payload: DueDateUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: DealStore = Depends(get_deal_store),
) -> DealResponse:
    owner_id = authorize(authorization)
    updated = LifecycleService(store, owner_id=owner_id).set_due_date(deal_id, payload.due_date)
    return DealResponse.model_validate(updated)
