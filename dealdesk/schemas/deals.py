"""Proposal and invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProposalCreateRequest(BaseModel):
    contact_id: str = Field(min_length=1, max_length=36)
    title: str | None = Field(default=None, max_length=1000)
    amount: Decimal | None = None
    due_date: date | None = None
    notes: str | None = Field(default=None, max_length=10000)


class ProposalStatusUpdateRequest(BaseModel):
    status: str = Field(min_length=2, max_length=20)


class InvoiceStatusUpdateRequest(BaseModel):
    invoice_status: str = Field(min_length=2, max_length=20)


class DueDateUpdateRequest(BaseModel):
    due_date: date | None = None


class ContactSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company: str | None = None
    email: str | None = None
    phone: str | None = None


class DealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    contact_id: str
    title: str
    notes: str | None = None
    amount: float
    due_date: date | None = None
    status: str
    invoice_status: str | None = None
    created_at: datetime
    contact: ContactSummary | None = None


class ConversionResponse(BaseModel):
    proposal_id: str
    invoice_id: str


class DealListResponse(BaseModel):
    items: list[DealResponse]
    count: int
    total_amount: float
