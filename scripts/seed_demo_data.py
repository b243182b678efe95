"""Seed a demo owner with contacts, proposals and invoices.

Usage: python scripts/seed_demo_data.py [owner_id]
"""

import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from dealdesk.auth.jwt import create_access_token
from dealdesk.core.config import get_config
from dealdesk.database.db import init_db, session_scope
from dealdesk.models import Contact
from dealdesk.services.deal_store import SqlDealStore
from dealdesk.services.lifecycle_service import LifecycleService

DEMO_CONTACTS = [
    ("Sarah Connor", "TechCorp Inc.", "sarah@techcorp.example"),
    ("Miles Dyson", "Cyberdyne Systems", "miles@cyberdyne.example"),
    ("Ellen Ripley", "Weyland Logistics", "ripley@weyland.example"),
]


def seed(owner_id: str) -> None:
    init_db()
    today = date.today()
    with session_scope() as session:
        if session.query(Contact).filter(Contact.user_id == owner_id).first():
            print(f"Demo data already exists for {owner_id}.")
            return

        contacts = []
        for name, company, email in DEMO_CONTACTS:
            contact = Contact(user_id=owner_id, name=name, company=company, email=email)
            session.add(contact)
            contacts.append(contact)
        session.commit()

        service = LifecycleService(SqlDealStore(session), owner_id=owner_id)
        won = service.create_proposal(owner_id, contacts[0].id, "Cloud migration", 4800, today + timedelta(days=10))
        service.change_proposal_status(won.id, "accepted")
        service.change_invoice_status(service.convert_to_invoice(won.id), "paid")

        pending = service.create_proposal(owner_id, contacts[1].id, "Security audit", 950, today + timedelta(days=4))
        service.change_proposal_status(pending.id, "accepted")
        service.convert_to_invoice(pending.id)

        service.create_proposal(owner_id, contacts[2].id, "Fleet tracking", 12000, today - timedelta(days=3))
        lost = service.create_proposal(owner_id, contacts[1].id, "Support retainer", 300)
        service.change_proposal_status(lost.id, "lost")

        print(f"Seeded {len(contacts)} contacts and {len(service.store.list_deals(owner_id))} deals for {owner_id}.")


if __name__ == "__main__":
    owner = sys.argv[1] if len(sys.argv) > 1 else "demo-owner"
    seed(owner)
    cfg = get_config()
    print(f"Bearer token: {create_access_token(owner, cfg.JWT_SECRET, cfg.JWT_ACCESS_TTL_MINUTES)}")
