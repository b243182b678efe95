from __future__ import annotations

from datetime import date

from dealdesk.domain.deals import split_partitions
from dealdesk.models.enums import InvoiceStatus, ProposalStatus


def test_split_partitions_preserves_order(make_proposal, make_invoice):
    deals = [
        make_proposal("p1"),
        make_invoice("i1"),
        make_proposal("p2", status=ProposalStatus.ACCEPTED),
        make_invoice("i2", status=InvoiceStatus.PAID),
    ]

    proposals, invoices = split_partitions(deals)

    assert [p.id for p in proposals] == ["p1", "p2"]
    assert [i.id for i in invoices] == ["i1", "i2"]


def test_invoice_draft_prefixes_title_and_copies_fields(make_proposal):
    proposal = make_proposal(due_date=date(2026, 11, 1), status=ProposalStatus.ACCEPTED)

    fields = proposal.to_invoice_draft().to_row_fields()

    assert fields["title"] == "Invoice for: Website redesign"
    assert fields["status"] == "invoice"
    assert fields["invoice_status"] == "pending"
    assert fields["amount"] == proposal.amount
    assert fields["due_date"] == date(2026, 11, 1)


def test_client_name_falls_back_to_unknown(make_proposal):
    proposal = make_proposal()
    assert proposal.client_name == "Ada"

    orphan = proposal.__class__(**{**proposal.__dict__, "contact": None})
    assert orphan.client_name == "Unknown"
