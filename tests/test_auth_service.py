"""Authentication gateway, exercised without HTTP."""
from datetime import timedelta

import pytest

from models.base_model import utcnow
from services.principal import Principal
from utils.exceptions import (
    AccessTokenExpired,
    BadCredentials,
    EmailTaken,
    NotFound,
    TokenExpired,
    TokenInvalid,
    TokenNotFound,
    UsernameTaken,
)

PASSWORD = "password-123"


@pytest.fixture()
def alice(gateway):
    return gateway.register("alice", "alice@example.com", PASSWORD)


def test_register_stores_hash_not_plaintext(gateway, alice):
    assert alice.id is not None
    assert alice.password_hash != PASSWORD
    assert not hasattr(alice, "password")
    assert alice.created_at is not None


def test_register_username_checked_before_email(gateway, alice):
    with pytest.raises(UsernameTaken):
        gateway.register("alice", "alice@example.com", PASSWORD)


def test_register_duplicate_email(gateway, alice):
    with pytest.raises(EmailTaken):
        gateway.register("alice2", "alice@example.com", PASSWORD)


def test_login_returns_tokens_and_principal(gateway, alice):
    result = gateway.login("alice", PASSWORD)
    assert gateway.codec.verify(result.access_token) == "alice"
    assert result.refresh_token
    assert result.principal == Principal(alice.id, "alice", "alice@example.com")
    assert result.expires_in == 24 * 3600


def test_login_failures_are_indistinguishable(gateway, alice):
    with pytest.raises(BadCredentials) as wrong_password:
        gateway.login("alice", "not-the-password")
    with pytest.raises(BadCredentials) as unknown_user:
        gateway.login("nobody", PASSWORD)
    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.status == unknown_user.value.status == 401


def test_refresh_keeps_refresh_token_and_subject(gateway, alice):
    login = gateway.login("alice", PASSWORD)
    refreshed = gateway.refresh(login.refresh_token)
    assert refreshed.refresh_token == login.refresh_token
    assert gateway.codec.verify(refreshed.access_token) == "alice"
    assert refreshed.access_token != login.access_token


def test_refresh_unknown_token(gateway):
    with pytest.raises(TokenNotFound):
        gateway.refresh("no-such-token")


def test_refresh_with_expired_token_deletes_it(gateway, alice):
    login = gateway.login("alice", PASSWORD, now=utcnow() - timedelta(days=8))
    with pytest.raises(TokenExpired):
        gateway.refresh(login.refresh_token)
    with pytest.raises(TokenNotFound):
        gateway.refresh_store.find_by_token(login.refresh_token)


def test_second_login_invalidates_first_refresh_token(gateway, alice):
    first = gateway.login("alice", PASSWORD)
    second = gateway.login("alice", PASSWORD)
    with pytest.raises(TokenNotFound):
        gateway.refresh(first.refresh_token)
    assert gateway.refresh(second.refresh_token).refresh_token == second.refresh_token


def test_logout_keeps_access_token_alive(gateway, alice):
    login = gateway.login("alice", PASSWORD)
    gateway.logout(alice.id)
    with pytest.raises(TokenNotFound):
        gateway.refresh(login.refresh_token)
    assert gateway.resolve_principal(login.access_token).id == alice.id


def test_logout_without_session_is_noop(gateway, alice):
    gateway.logout(alice.id)
    gateway.logout(alice.id)


def test_update_profile_same_values_is_allowed(gateway, alice):
    user = gateway.update_profile(alice.id, "alice", "alice@example.com")
    assert (user.username, user.email) == ("alice", "alice@example.com")


def test_update_profile_changes_fields(gateway, alice):
    user = gateway.update_profile(alice.id, "alice_b", "alice.b@example.com")
    assert (user.username, user.email) == ("alice_b", "alice.b@example.com")


def test_update_profile_rejects_values_of_other_users(gateway, alice):
    gateway.register("bob", "bob@example.com", PASSWORD)
    with pytest.raises(UsernameTaken):
        gateway.update_profile(alice.id, "bob", "alice@example.com")
    with pytest.raises(EmailTaken):
        gateway.update_profile(alice.id, "alice", "bob@example.com")


def test_update_profile_unknown_user(gateway):
    with pytest.raises(NotFound):
        gateway.update_profile(999, "ghost", "ghost@example.com")


def test_resolve_principal(gateway, alice):
    token = gateway.codec.issue("alice")
    assert gateway.resolve_principal(token) == Principal(alice.id, "alice", "alice@example.com")


def test_resolve_principal_rejects_unknown_subject(gateway):
    with pytest.raises(TokenInvalid):
        gateway.resolve_principal(gateway.codec.issue("ghost"))


def test_resolve_principal_rejects_expired_token(gateway, alice):
    token = gateway.codec.issue("alice", utcnow() - timedelta(hours=25))
    with pytest.raises(AccessTokenExpired):
        gateway.resolve_principal(token)
