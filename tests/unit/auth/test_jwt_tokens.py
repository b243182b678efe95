from __future__ import annotations

from datetime import timedelta

import pytest

from dealdesk.auth.jwt import create_access_token, decode_jwt, encode_jwt, owner_from_token
from dealdesk.core.exceptions import AuthenticationError


def test_access_token_carries_owner_in_sub():
    token = create_access_token(owner_id="owner-7", secret="test-secret")
    claims = decode_jwt(token, secret="test-secret")

    assert claims["sub"] == "owner-7"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims
    assert owner_from_token(token, secret="test-secret") == "owner-7"


def test_wrong_secret_is_rejected():
    token = create_access_token(owner_id="owner-7", secret="test-secret")
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="other-secret")


def test_expired_token_is_rejected():
    token = encode_jwt({"sub": "owner-7"}, secret="test-secret", ttl=timedelta(minutes=-5))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(token, secret="test-secret")
    assert decode_jwt(token, secret="test-secret", verify_exp=False)["sub"] == "owner-7"


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="test-secret")


def test_token_without_sub_or_wrong_use_is_rejected():
    no_sub = encode_jwt({"token_use": "access"}, secret="s", ttl=timedelta(minutes=5))
    refresh = encode_jwt({"sub": "x", "token_use": "refresh"}, secret="s", ttl=timedelta(minutes=5))
    with pytest.raises(AuthenticationError):
        owner_from_token(no_sub, secret="s")
    with pytest.raises(AuthenticationError):
        owner_from_token(refresh, secret="s")
