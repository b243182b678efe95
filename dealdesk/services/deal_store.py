"""Deal store contract and its SQLAlchemy implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from dealdesk.core.exceptions import ConflictError, NotFoundError, ValidationError
from dealdesk.domain.deals import ContactRef, Deal, Invoice, InvoiceDraft, Proposal, ProposalDraft
from dealdesk.models import Contact
from dealdesk.models import Deal as DealRow
from dealdesk.models.enums import DealStatus, InvoiceStatus, ProposalStatus
from dealdesk.services.base_service import BaseService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "notes", "amount", "due_date", "status", "invoice_status"})


class DealStore(ABC):
    """Persistence boundary the lifecycle and aggregation code depends on."""

    @abstractmethod
    def list_deals(self, owner_id: str) -> list[Deal]:
        ...

    @abstractmethod
    def get_deal(self, deal_id: str) -> Deal:
        """Return the deal or raise NotFoundError."""

    @abstractmethod
    def get_contact(self, contact_id: str, owner_id: str | None = None) -> ContactRef:
        """Return the contact (owned by ``owner_id`` when given) or raise NotFoundError."""

    @abstractmethod
    def create_deal(self, draft: ProposalDraft | InvoiceDraft) -> Deal:
        """Persist a new row; the store assigns id and created_at."""

    @abstractmethod
    def update_deal(
        self,
        deal_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> Deal:
        """Apply ``fields`` only if the row still matches ``expected``.

        Raises NotFoundError when the row is gone and ConflictError when it
        exists but no longer matches.
        """

    @abstractmethod
    def delete_deal(self, deal_id: str) -> None:
        ...


def _contact_ref(row: Contact | None) -> ContactRef | None:
    if row is None:
        return None
    return ContactRef(id=row.id, name=row.name, company=row.company, email=row.email, phone=row.phone)


def row_to_domain(row: DealRow) -> Deal:
    """Load a ``deals`` row as a Proposal or an Invoice."""
    common = {
        "id": row.id,
        "user_id": row.user_id,
        "contact_id": row.contact_id,
        "title": row.title,
        "amount": row.amount,
        "created_at": row.created_at,
        "due_date": row.due_date,
        "notes": row.notes,
        "contact": _contact_ref(row.contact),
    }
    try:
        if row.status == DealStatus.INVOICE.value:
            payment_status = InvoiceStatus(row.invoice_status or InvoiceStatus.PENDING.value)
            return Invoice(payment_status=payment_status, **common)
        return Proposal(proposal_status=ProposalStatus(row.status), **common)
    except ValueError as exc:
        raise ValidationError(
            f"Deal {row.id} has unknown status {row.status!r}/{row.invoice_status!r}."
        ) from exc


def _matches_expected(column: str, value: Any):
    # A NULL invoice_status is loaded as pending, so it must also match pending.
    if column == "invoice_status" and value == InvoiceStatus.PENDING.value:
        return or_(DealRow.invoice_status.is_(None), DealRow.invoice_status == value)
    return getattr(DealRow, column) == value


class SqlDealStore(BaseService, DealStore):
    """DealStore backed by the ``deals``/``contacts`` tables."""

    def _query(self):
        return self.db.query(DealRow).options(joinedload(DealRow.contact))

    def list_deals(self, owner_id: str) -> list[Deal]:
        rows = (
            self._query()
            .filter(DealRow.user_id == owner_id)
            .order_by(DealRow.created_at.desc(), DealRow.id)
            .all()
        )
        return [row_to_domain(row) for row in rows]

    def get_deal(self, deal_id: str) -> Deal:
        row = self._query().filter(DealRow.id == deal_id).first()
        if row is None:
            raise NotFoundError(f"Deal {deal_id} not found.")
        return row_to_domain(row)

    def get_contact(self, contact_id: str, owner_id: str | None = None) -> ContactRef:
        query = self.db.query(Contact).filter(Contact.id == contact_id)
        if owner_id is not None:
            query = query.filter(Contact.user_id == owner_id)
        row = query.first()
        if row is None:
            raise NotFoundError(f"Contact {contact_id} not found.")
        return _contact_ref(row)

    def create_deal(self, draft: ProposalDraft | InvoiceDraft) -> Deal:
        row = DealRow(**draft.to_row_fields())
        self.db.add(row)
        self.commit()
        logger.info(
            "deal_store.deal.created",
            extra={"event": "deal_store.deal.created", "deal_id": row.id, "status": row.status},
        )
        return self.get_deal(row.id)

    def update_deal(
        self,
        deal_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> Deal:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}.")

        query = self.db.query(DealRow).filter(DealRow.id == deal_id)
        for column, value in (expected or {}).items():
            query = query.filter(_matches_expected(column, value))
        updated = query.update(dict(fields), synchronize_session=False)

        if updated == 0:
            self.rollback()
            if self.db.query(DealRow.id).filter(DealRow.id == deal_id).first() is None:
                raise NotFoundError(f"Deal {deal_id} not found.")
            logger.warning(
                "deal_store.update.conflict",
                extra={"event": "deal_store.update.conflict", "deal_id": deal_id},
            )
            raise ConflictError(f"Deal {deal_id} was modified concurrently.")

        self.commit()
        return self.get_deal(deal_id)

    def delete_deal(self, deal_id: str) -> None:
        row = self.db.query(DealRow).filter(DealRow.id == deal_id).first()
        if row is None:
            raise NotFoundError(f"Deal {deal_id} not found.")
        self.db.delete(row)
        self.commit()
        logger.info("deal_store.deal.deleted", extra={"event": "deal_store.deal.deleted", "deal_id": deal_id})
