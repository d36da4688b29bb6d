"""Refresh token store: single live token per user, lazy expiry cleanup."""
from datetime import timedelta

import pytest

from models import storage
from models.base_model import utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import TokenExpired, TokenNotFound


@pytest.fixture()
def store(gateway):
    return gateway.refresh_store


@pytest.fixture()
def user(gateway):
    return gateway.register("carol", "carol@example.com", "password-123")


def _tokens_for(user_id):
    return storage.get_session().query(RefreshToken).filter(RefreshToken.user_id == user_id).all()


def test_create_sets_seven_day_expiry(store, user):
    now = utcnow()
    record = store.create(user.id, now)
    assert record.user_id == user.id
    assert record.expires_at == now + timedelta(days=7)
    assert len(record.token) == 36


def test_create_replaces_previous_tokens(store, user):
    first = store.create(user.id)
    second = store.create(user.id)
    assert first.token != second.token
    assert [t.token for t in _tokens_for(user.id)] == [second.token]


def test_create_leaves_other_users_alone(store, gateway, user):
    other = gateway.register("dave", "dave@example.com", "password-123")
    theirs = store.create(other.id)
    store.create(user.id)
    assert [t.token for t in _tokens_for(other.id)] == [theirs.token]


def test_find_by_token(store, user):
    record = store.create(user.id)
    assert store.find_by_token(record.token).id == record.id


@pytest.mark.parametrize("token", ["", "does-not-exist"])
def test_find_unknown_token(store, token):
    with pytest.raises(TokenNotFound):
        store.find_by_token(token)


def test_verify_not_expired_returns_live_record(store, user):
    record = store.create(user.id)
    assert store.verify_not_expired(record) is record


def test_expired_record_is_deleted_then_reported(store, user):
    record = store.create(user.id, utcnow() - timedelta(days=8))
    token = record.token
    with pytest.raises(TokenExpired):
        store.verify_not_expired(record)
    with pytest.raises(TokenNotFound):
        store.find_by_token(token)


def test_expiry_checked_against_supplied_clock(store, user):
    now = utcnow()
    record = store.create(user.id, now)
    assert store.verify_not_expired(record, now + timedelta(days=7)) is record
    with pytest.raises(TokenExpired):
        store.verify_not_expired(record, now + timedelta(days=7, seconds=1))


def test_delete_all_for_user_is_idempotent(store, user):
    store.create(user.id)
    assert store.delete_all_for_user(user.id) == 1
    assert store.delete_all_for_user(user.id) == 0
    assert _tokens_for(user.id) == []
