from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from dealdesk.services.aggregation_service import PaymentsBucket
from dealdesk.services.export_service import invoices_to_csv, payments_report_to_csv


def test_invoices_csv_layout(make_invoice):
    csv_text = invoices_to_csv(
        [make_invoice("i1", amount="1234.5", created_at=datetime(2026, 3, 7, 15, 30), title="Invoice for: Audit")]
    )

    lines = csv_text.strip().split("\n")
    assert lines[0] == "Created Date,Contact,Company,Amount,Title"
    assert lines[1] == "03/07/2026,Ada,Ada Co,1234.50,Invoice for: Audit"


def test_invoices_csv_with_no_rows_has_header_only():
    assert invoices_to_csv([]).strip() == "Created Date,Contact,Company,Amount,Title"


def test_payments_report_csv():
    csv_text = payments_report_to_csv(
        [PaymentsBucket(label="Q1", total=Decimal("100"), count=2), PaymentsBucket(label="Q2")]
    )

    assert csv_text.strip().split("\n") == [
        "Month/Quarter,Total Amount,Invoice Count",
        "Q1,100.00,2",
        "Q2,0.00,0",
    ]
