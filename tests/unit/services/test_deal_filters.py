from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from dealdesk.core.exceptions import ValidationError
from dealdesk.models.enums import InvoiceStatus, ProposalStatus
from dealdesk.services.deal_filters import filter_invoices, filter_proposals, total_amount


def _deals(make_proposal, make_invoice):
    return [
        make_proposal("p1", status=ProposalStatus.OPEN),
        make_proposal("p2", status=ProposalStatus.ACCEPTED),
        make_invoice(
            "i1",
            amount="450",
            created_at=datetime(2026, 9, 1, 8),
            contact_id="c1",
            contact_name="Ada",
            title="Invoice for: Logo",
        ),
        make_invoice(
            "i2",
            status=InvoiceStatus.PAID,
            amount="2500",
            created_at=datetime(2026, 10, 10, 18),
            contact_id="c2",
            contact_name="Grace",
            title="Invoice for: Compiler",
        ),
    ]


def test_filter_proposals_by_status(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)

    assert [p.id for p in filter_proposals(deals)] == ["p1", "p2"]
    assert [p.id for p in filter_proposals(deals, "accepted")] == ["p2"]
    with pytest.raises(ValidationError):
        filter_proposals(deals, "paid")


def test_filter_invoices_never_returns_proposals(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)
    assert [i.id for i in filter_invoices(deals)] == ["i1", "i2"]


def test_filter_invoices_by_contact_date_and_amount(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)

    assert [i.id for i in filter_invoices(deals, contact_id="c2")] == ["i2"]
    assert [i.id for i in filter_invoices(deals, date_from=date(2026, 10, 10))] == ["i2"]
    assert [i.id for i in filter_invoices(deals, date_to=date(2026, 9, 1))] == ["i1"]
    assert [i.id for i in filter_invoices(deals, amount_range="<500")] == ["i1"]
    assert [i.id for i in filter_invoices(deals, amount_range="1000-5000")] == ["i2"]


def test_filter_invoices_by_query(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)

    assert [i.id for i in filter_invoices(deals, query="grace")] == ["i2"]
    assert [i.id for i in filter_invoices(deals, query="logo")] == ["i1"]
    assert [i.id for i in filter_invoices(deals, query="2500")] == ["i2"]
    assert [i.id for i in filter_invoices(deals, query="Co")] == ["i1", "i2"]


def test_filter_invoices_rejects_inverted_range(make_proposal, make_invoice):
    with pytest.raises(ValidationError):
        filter_invoices(
            _deals(make_proposal, make_invoice), date_from=date(2026, 10, 2), date_to=date(2026, 10, 1)
        )


def test_total_amount(make_invoice):
    assert total_amount([make_invoice("a", amount="1.25"), make_invoice("b", amount="2")]) == Decimal("3.25")
    assert total_amount([]) == Decimal("0")


def test_filter_invoices_by_time_range(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)
    today = date(2026, 10, 19)

    assert [i.id for i in filter_invoices(deals, time_range="30days", today=today)] == ["i2"]
    assert [i.id for i in filter_invoices(deals, time_range="3months", today=today)] == ["i1", "i2"]
    assert filter_invoices(deals, time_range="7days", today=today) == []


def test_filter_invoices_time_range_errors(make_proposal, make_invoice):
    deals = _deals(make_proposal, make_invoice)
    with pytest.raises(ValidationError):
        filter_invoices(deals, time_range="2weeks", today=date(2026, 10, 19))
    with pytest.raises(ValidationError):
        filter_invoices(deals, time_range="30days")
