"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from datetime import date

from dealdesk.auth.jwt import owner_from_token
from dealdesk.core.config import Config, get_config
from dealdesk.core.exceptions import AuthenticationError
from dealdesk.database.db import session_scope
from dealdesk.services.deal_store import DealStore, SqlDealStore


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_deal_store() -> Generator[DealStore, None, None]:
    """Yield a request-scoped SQL deal store."""
    with session_scope() as session:
        yield SqlDealStore(session)


def get_today() -> date:
    """Calendar day used by date classification for this request."""
    return date.today()


def extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def get_current_owner(authorization: str | None, settings: Config | None = None) -> str:
    cfg = settings or get_settings()
    return owner_from_token(extract_bearer_token(authorization), secret=cfg.JWT_SECRET)
