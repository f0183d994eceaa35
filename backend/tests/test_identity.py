"""
Tests for resolving bearer tokens to user ids.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt

from matchday.services.identity import JwtIdentityProvider


def test_unverified_mode_reads_sub():
    token = jwt.encode({"sub": "user-1"}, "whatever", algorithm="HS256")
    assert JwtIdentityProvider().resolve_caller(token) == "user-1"


def test_missing_or_garbage_credentials():
    provider = JwtIdentityProvider()
    assert provider.resolve_caller(None) is None
    assert provider.resolve_caller("") is None
    assert provider.resolve_caller("not-a-jwt") is None


def test_token_without_sub():
    token = jwt.encode({"role": "host"}, "whatever", algorithm="HS256")
    assert JwtIdentityProvider().resolve_caller(token) is None


def test_verified_mode_checks_signature():
    provider = JwtIdentityProvider(secret_key="s3cret")
    good = jwt.encode({"sub": "user-1"}, "s3cret", algorithm="HS256")
    forged = jwt.encode({"sub": "user-1"}, "other", algorithm="HS256")

    assert provider.resolve_caller(good) == "user-1"
    assert provider.resolve_caller(forged) is None


def test_verified_mode_rejects_expired():
    provider = JwtIdentityProvider(secret_key="s3cret")
    expired = jwt.encode(
        {"sub": "user-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=5)}, "s3cret", algorithm="HS256"
    )
    assert provider.resolve_caller(expired) is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "env-secret")
    assert JwtIdentityProvider.from_env().secret_key == "env-secret"
    monkeypatch.delenv("JWT_SECRET_KEY")
    assert JwtIdentityProvider.from_env().secret_key is None
