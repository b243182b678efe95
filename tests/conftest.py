from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealdesk.domain.deals import ContactRef, Invoice, Proposal
from dealdesk.models import Base, Contact
from dealdesk.models.enums import InvoiceStatus, ProposalStatus
from dealdesk.services.deal_store import SqlDealStore

TODAY = date(2026, 10, 19)
OWNER_ID = "owner-1"


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def contact(session):
    row = Contact(
        user_id=OWNER_ID,
        name="Ada Lovelace",
        company="Analytical Engines Ltd",
        email="ada@example.com",
    )
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


@pytest.fixture
def store(session):
    return SqlDealStore(session)


def _proposal(
    deal_id: str = "p1",
    status: ProposalStatus = ProposalStatus.OPEN,
    amount: str = "1000",
    created_at: datetime = datetime(2026, 10, 1, 9, 0),
    due_date: date | None = None,
    contact_id: str = "c1",
    contact_name: str = "Ada",
    title: str = "Website redesign",
) -> Proposal:
    return Proposal(
        id=deal_id,
        user_id=OWNER_ID,
        contact_id=contact_id,
        title=title,
        amount=Decimal(amount),
        created_at=created_at,
        due_date=due_date,
        contact=ContactRef(id=contact_id, name=contact_name, company=f"{contact_name} Co"),
        proposal_status=status,
    )


def _invoice(
    deal_id: str = "i1",
    status: InvoiceStatus = InvoiceStatus.PENDING,
    amount: str = "1000",
    created_at: datetime = datetime(2026, 10, 1, 9, 0),
    due_date: date | None = None,
    contact_id: str = "c1",
    contact_name: str = "Ada",
    title: str = "Invoice for: Website redesign",
) -> Invoice:
    return Invoice(
        id=deal_id,
        user_id=OWNER_ID,
        contact_id=contact_id,
        title=title,
        amount=Decimal(amount),
        created_at=created_at,
        due_date=due_date,
        contact=ContactRef(id=contact_id, name=contact_name, company=f"{contact_name} Co"),
        payment_status=status,
    )


@pytest.fixture
def make_proposal():
    return _proposal


@pytest.fixture
def make_invoice():
    return _invoice
