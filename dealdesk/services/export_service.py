"""CSV exports for the invoices list and the payments report."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from dealdesk.domain.deals import Invoice
from dealdesk.services.aggregation_service import PaymentsBucket

INVOICE_COLUMNS = ["Created Date", "Contact", "Company", "Amount", "Title"]
PAYMENT_COLUMNS = ["Total Amount", "Invoice Count"]


def invoices_to_csv(invoices: Iterable[Invoice]) -> str:
    """One row per invoice, dates as MM/DD/YYYY and amounts with two decimals."""
    rows = [
        {
            "Created Date": invoice.created_at.strftime("%m/%d/%Y"),
            "Contact": invoice.client_name,
            "Company": (invoice.contact.company if invoice.contact else None) or "",
            "Amount": f"{invoice.amount:.2f}",
            "Title": invoice.title,
        }
        for invoice in invoices
    ]
    df = pd.DataFrame(rows, columns=INVOICE_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n")


def payments_report_to_csv(buckets: Iterable[PaymentsBucket], label_header: str = "Month/Quarter") -> str:
    rows = [
        {label_header: bucket.label, "Total Amount": f"{bucket.total:.2f}", "Invoice Count": bucket.count}
        for bucket in buckets
    ]
    df = pd.DataFrame(rows, columns=[label_header, *PAYMENT_COLUMNS])
    return df.to_csv(index=False, lineterminator="\n")
