"""HS256 bearer tokens identifying the owner of a request."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from dealdesk.core.exceptions import AuthenticationError

ACCESS_TOKEN_USE = "access"


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(f"{data}{padding}".encode("ascii"))


def _sign(message: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return _b64url_encode(digest)


def _compact(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")

    now = datetime.now(timezone.utc)
    claims = dict(payload)
    claims.setdefault("iat", int(now.timestamp()))
    claims.setdefault("exp", int((now + ttl).timestamp()))
    claims.setdefault("jti", str(uuid.uuid4()))

    signing_input = ".".join(
        (
            _b64url_encode(_compact({"alg": "HS256", "typ": "JWT"})),
            _b64url_encode(_compact(claims)),
        )
    )
    return f"{signing_input}.{_sign(signing_input, secret)}"


def decode_jwt(token: str, secret: str, verify_exp: bool = True) -> dict[str, Any]:
    """Verify the signature (and expiry) and return the claims."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    try:
        header_segment, payload_segment, signature = token.split(".")
    except ValueError as exc:
        raise AuthenticationError("Invalid token format.") from exc

    if not hmac.compare_digest(_sign(f"{header_segment}.{payload_segment}", secret), signature):
        raise AuthenticationError("Invalid token signature.")

    try:
        claims = json.loads(_b64url_decode(payload_segment).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise AuthenticationError("Invalid token payload.") from exc
    if not isinstance(claims, dict):
        raise AuthenticationError("Invalid token payload.")

    if verify_exp:
        exp = claims.get("exp")
        if exp is None:
            raise AuthenticationError("Token is missing exp claim.")
        if int(exp) < int(datetime.now(timezone.utc).timestamp()):
            raise AuthenticationError("Token has expired.")
    return claims


def create_access_token(owner_id: str, secret: str, ttl_minutes: int = 60) -> str:
    payload = {"sub": str(owner_id), "token_use": ACCESS_TOKEN_USE}
    return encode_jwt(payload=payload, secret=secret, ttl=timedelta(minutes=ttl_minutes))


def owner_from_token(token: str, secret: str) -> str:
    """Return the owner id carried in an access token's ``sub`` claim."""
    claims = decode_jwt(token=token, secret=secret)
    if claims.get("token_use", ACCESS_TOKEN_USE) != ACCESS_TOKEN_USE:
        raise AuthenticationError("Token is not an access token.")
    owner_id = str(claims.get("sub") or "").strip()
    if not owner_id:
        raise AuthenticationError("Token is missing sub claim.")
    return owner_id
