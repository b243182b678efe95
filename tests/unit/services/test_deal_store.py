from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from dealdesk.core.exceptions import NotFoundError, ValidationError
from dealdesk.domain.deals import Invoice, Proposal, ProposalDraft
from dealdesk.models import Deal as DealRow
from dealdesk.services.deal_store import row_to_domain


def _draft(contact, title="Retainer", amount="300"):
    return ProposalDraft(user_id=contact.user_id, contact_id=contact.id, title=title, amount=Decimal(amount))


def test_create_deal_assigns_id_and_created_at(store, contact):
    proposal = store.create_deal(_draft(contact))

    assert proposal.id
    assert proposal.created_at is not None
    assert proposal.contact is not None
    assert proposal.contact.company == "Analytical Engines Ltd"


def test_list_deals_is_scoped_to_owner(store, contact, session):
    store.create_deal(_draft(contact, title="Mine"))
    session.add(DealRow(user_id="other", contact_id=contact.id, title="Theirs", amount=Decimal("5")))
    session.commit()

    titles = [deal.title for deal in store.list_deals(contact.user_id)]
    assert titles == ["Mine"]


def test_row_to_domain_branches_on_status(store, contact, session):
    proposal = store.create_deal(_draft(contact))
    invoice = store.create_deal(proposal.to_invoice_draft())

    assert isinstance(store.get_deal(proposal.id), Proposal)
    loaded = store.get_deal(invoice.id)
    assert isinstance(loaded, Invoice)
    assert loaded.invoice_status == "pending"


def test_row_to_domain_rejects_unknown_status(contact):
    row = DealRow(
        id="x",
        user_id=contact.user_id,
        contact_id=contact.id,
        title="Broken",
        amount=Decimal("1"),
        status="archived",
    )
    with pytest.raises(ValidationError):
        row_to_domain(row)


def test_update_deal_rejects_unknown_fields(store, contact):
    proposal = store.create_deal(_draft(contact))
    with pytest.raises(ValidationError):
        store.update_deal(proposal.id, {"user_id": "hijack"})


def test_update_deal_missing_row_is_not_found(store, contact):
    with pytest.raises(NotFoundError):
        store.update_deal("missing", {"due_date": date(2026, 1, 1)})


def test_get_contact_missing_is_not_found(store):
    with pytest.raises(NotFoundError):
        store.get_contact("missing")
