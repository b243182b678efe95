"""Shared authorization and error mapping helpers for API v1 route modules."""

from __future__ import annotations

from fastapi import HTTPException, status

from dealdesk.core.dependencies import get_current_owner
from dealdesk.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ConversionError,
    DealDeskException,
    InvalidTransitionError,
    NotAProposalError,
    NotAnInvoiceError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[DealDeskException], int, str], ...] = (
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "authentication_error"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (InvalidTransitionError, status.HTTP_409_CONFLICT, "invalid_transition"),
    (NotAnInvoiceError, status.HTTP_409_CONFLICT, "not_an_invoice"),
    (NotAProposalError, status.HTTP_409_CONFLICT, "not_a_proposal"),
    (ConversionError, status.HTTP_409_CONFLICT, "conversion_error"),
    (ConflictError, status.HTTP_409_CONFLICT, "conflict"),
)


def authorize(authorization: str | None) -> str:
    """Resolve the owner id or raise a 401."""
    try:
        return get_current_owner(authorization)
    except AuthenticationError as exc:
        code, _, detail = map_domain_error(exc)
        raise HTTPException(status_code=code, detail=detail) from exc


def map_domain_error(exc: Exception) -> tuple[int, str, str]:
    """Return ``(status_code, error_code, detail)`` for a raised error."""
    for error_type, code, error_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code, error_code, str(exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error."
