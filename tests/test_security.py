"""Credential verifier and access token codec (no database involved)."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.exceptions import AccessTokenExpired, TokenInvalid
from utils.security import AccessTokenCodec, hash_password, verify_password

SECRET = "unit-test-secret-key-that-is-long-enough"
NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def codec():
    return AccessTokenCodec(SECRET)


# Credential verifier

def test_hash_is_salted_and_verifiable():
    first = hash_password("s3cret-password")
    second = hash_password("s3cret-password")
    assert first != second
    assert "s3cret-password" not in first
    assert verify_password("s3cret-password", first)
    assert verify_password("s3cret-password", second)


def test_verify_rejects_wrong_password():
    assert verify_password("wrong-password", hash_password("s3cret-password")) is False


def test_verify_rejects_malformed_hash():
    assert verify_password("whatever", "not-an-argon2-hash") is False


# Access token codec

def test_issue_and_verify_round_trip(codec):
    token = codec.issue("alice", NOW)
    assert codec.verify(token, NOW) == "alice"


def test_claims_carry_subject_and_24h_lifetime(codec):
    claims = codec.decode(codec.issue("alice", NOW), NOW)
    assert claims["sub"] == "alice"
    assert claims["exp"] - claims["iat"] == 24 * 3600
    assert claims["iat"] == int(NOW.timestamp())


def test_naive_now_is_treated_as_utc(codec):
    token = codec.issue("alice", NOW.replace(tzinfo=None))
    assert codec.decode(token, NOW)["iat"] == int(NOW.timestamp())


def test_token_valid_until_exact_expiry(codec):
    token = codec.issue("alice", NOW)
    assert codec.verify(token, NOW + timedelta(hours=24)) == "alice"


def test_token_rejected_one_second_after_expiry(codec):
    token = codec.issue("alice", NOW)
    with pytest.raises(AccessTokenExpired):
        codec.verify(token, NOW + timedelta(hours=24, seconds=1))


def test_expired_is_a_kind_of_invalid(codec):
    token = codec.issue("alice", NOW - timedelta(days=2))
    with pytest.raises(TokenInvalid):
        codec.verify(token)


def test_custom_lifetime(codec):
    short = AccessTokenCodec(SECRET, lifetime=timedelta(minutes=5))
    token = short.issue("alice", NOW)
    assert short.verify(token, NOW + timedelta(minutes=5)) == "alice"
    with pytest.raises(AccessTokenExpired):
        short.verify(token, NOW + timedelta(minutes=6))


def test_rejects_token_signed_with_other_key(codec):
    forged = AccessTokenCodec("some-other-secret-key-also-long-enough").issue("alice", NOW)
    with pytest.raises(TokenInvalid):
        codec.verify(forged, NOW)


def test_rejects_tampered_payload(codec):
    header, payload, signature = codec.issue("alice", NOW).split(".")
    other_payload = codec.issue("mallory", NOW).split(".")[1]
    with pytest.raises(TokenInvalid):
        codec.verify(".".join([header, other_payload, signature]), NOW)


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_rejects_malformed_tokens(codec, garbage):
    with pytest.raises(TokenInvalid):
        codec.verify(garbage, NOW)


def test_rejects_token_without_access_type(codec):
    iat = int(NOW.timestamp())
    token = jwt.encode({"sub": "alice", "iat": iat, "exp": iat + 60}, SECRET, algorithm="HS256")
    with pytest.raises(TokenInvalid, match="Wrong token type"):
        codec.verify(token, NOW)


def test_rejects_token_missing_exp(codec):
    token = jwt.encode({"sub": "alice", "iat": 0, "type": "access"}, SECRET, algorithm="HS256")
    with pytest.raises(TokenInvalid):
        codec.verify(token, NOW)


def test_from_config_reads_lifetime():
    codec = AccessTokenCodec.from_config(
        {"JWT_SECRET": SECRET, "JWT_ALGORITHM": "HS256", "ACCESS_TOKEN_EXPIRES": timedelta(hours=1)}
    )
    assert codec.expires_in == 3600


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        AccessTokenCodec("")
