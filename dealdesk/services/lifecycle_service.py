"""Proposal and invoice lifecycle operations.

All writes go through a :class:`DealStore`. Status changes are conditioned on
the status read just before the write, so a concurrent edit surfaces as a
ConflictError instead of being silently overwritten.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from dealdesk.core.exceptions import (
    ConversionError,
    InvalidTransitionError,
    NotAProposalError,
    NotAnInvoiceError,
    NotFoundError,
    ValidationError,
)
from dealdesk.domain.deals import Deal, Invoice, Proposal, ProposalDraft
from dealdesk.models.enums import DealStatus, ProposalStatus
from dealdesk.services.date_classifier import DateLike, to_amount, to_date
from dealdesk.services.deal_store import DealStore
from dealdesk.services.state_machine import INVOICE_MACHINE, PROPOSAL_MACHINE

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255
# deals.amount is Numeric(12, 2)
AMOUNT_MAX = Decimal("9999999999.99")
CENT = Decimal("0.01")


class LifecycleService:
    """State machine and conversion rules for deals.

    When ``owner_id`` is given, deals owned by anyone else are reported as
    missing.
    """

    def __init__(self, store: DealStore, owner_id: str | None = None) -> None:
        self.store = store
        self.owner_id = owner_id

    def get_deal(self, deal_id: str) -> Deal:
        deal = self.store.get_deal(deal_id)
        if self.owner_id is not None and deal.user_id != self.owner_id:
            raise NotFoundError(f"Deal {deal_id} not found.")
        return deal

    def create_proposal(
        self,
        owner_id: str,
        contact_id: str,
        title: str | None,
        amount: object,
        due_date: DateLike = None,
        notes: str | None = None,
    ) -> Proposal:
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValidationError("Title is required.")
        if len(clean_title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters.")
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            raise ValidationError("Amount is required.")
        parsed_amount = to_amount(amount)
        if parsed_amount <= 0:
            raise ValidationError("Amount must be greater than zero.")
        if parsed_amount > AMOUNT_MAX:
            raise ValidationError(f"Amount must not exceed {AMOUNT_MAX}.")
        if parsed_amount != parsed_amount.quantize(CENT):
            raise ValidationError("Amount must have at most two decimal places.")

        contact = self.store.get_contact(contact_id, owner_id=owner_id)
        draft = ProposalDraft(
            user_id=owner_id,
            contact_id=contact.id,
            title=clean_title,
            amount=parsed_amount,
            due_date=to_date(due_date),
            notes=notes,
        )
        proposal = self.store.create_deal(draft)
        logger.info(
            "lifecycle.proposal.created",
            extra={"event": "lifecycle.proposal.created", "deal_id": proposal.id, "owner_id": owner_id},
        )
        return proposal

    def change_proposal_status(self, deal_id: str, new_status: str) -> Proposal:
        deal = self.get_deal(deal_id)
        if isinstance(deal, Invoice):
            raise NotAProposalError(f"Deal {deal_id} is an invoice; proposal status cannot change.")
        target = str(new_status).strip().lower()
        PROPOSAL_MACHINE.assert_transition(deal.status, target)

        updated = self.store.update_deal(
            deal_id,
            {"status": target},
            expected={"status": deal.status},
        )
        logger.info(
            "lifecycle.proposal.status_changed",
            extra={"event": "lifecycle.proposal.status_changed", "deal_id": deal_id, "status": target},
        )
        return updated

    def convert_to_invoice(self, deal_id: str) -> str:
        """Create a pending invoice copied from an accepted proposal.

        Returns the new invoice id. The proposal row is left untouched and no
        dedup is performed; callers must guard against double submission.
        """
        try:
            deal = self.get_deal(deal_id)
        except NotFoundError as exc:
            raise ConversionError(f"Proposal {deal_id} not found.") from exc
        if isinstance(deal, Invoice):
            raise ConversionError(f"Deal {deal_id} is already an invoice.")
        if deal.proposal_status is not ProposalStatus.ACCEPTED:
            raise ConversionError(
                f"Only accepted proposals can be converted; deal {deal_id} is {deal.status}."
            )

        invoice = self.store.create_deal(deal.to_invoice_draft())
        logger.info(
            "lifecycle.invoice.created",
            extra={"event": "lifecycle.invoice.created", "deal_id": deal_id, "invoice_id": invoice.id},
        )
        return invoice.id

    def change_invoice_status(self, deal_id: str, new_status: str) -> Invoice:
        deal = self.get_deal(deal_id)
        if not isinstance(deal, Invoice):
            raise NotAnInvoiceError(f"Deal {deal_id} is not an invoice.")
        target = str(new_status).strip().lower()
        if target not in INVOICE_MACHINE.states:
            raise InvalidTransitionError(f"Unknown invoice status: {new_status!r}")
        INVOICE_MACHINE.assert_transition(deal.invoice_status, target)

        updated = self.store.update_deal(
            deal_id,
            {"invoice_status": target},
            expected={"status": DealStatus.INVOICE.value, "invoice_status": deal.invoice_status},
        )
        logger.info(
            "lifecycle.invoice.status_changed",
            extra={"event": "lifecycle.invoice.status_changed", "deal_id": deal_id, "status": target},
        )
        return updated

    def set_due_date(self, deal_id: str, value: DateLike) -> Deal:
        """Set or clear the follow-up (proposal) or payment (invoice) date."""
        self.get_deal(deal_id)
        due_date: date | None = to_date(value)
        return self.store.update_deal(deal_id, {"due_date": due_date})

    def delete_deal(self, deal_id: str) -> None:
        """Delete the deal row; the contact's comments are kept."""
        self.get_deal(deal_id)
        self.store.delete_deal(deal_id)
        logger.info("lifecycle.deal.deleted", extra={"event": "lifecycle.deal.deleted", "deal_id": deal_id})
