"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from dealdesk.api.v1 import dashboard, deals, health
from dealdesk.core.config import get_config


def get_api_router(prefix: str | None = None) -> APIRouter:
    api_router = APIRouter(prefix=prefix if prefix is not None else get_config().API_PREFIX)
    api_router.include_router(health.router)
    api_router.include_router(deals.router)
    api_router.include_router(dashboard.router)
    return api_router
