"""
Authentication gateway: register / login / refresh / logout / profile update.

Access tokens are stateless (AccessTokenCodec), refresh tokens live in the database
(RefreshTokenStore). Logout only removes the refresh token; an access token that was
already handed out keeps working until it expires.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from flask import current_app

from models.refresh_token import RefreshToken
from models.user import User
from services.principal import Principal
from services.refresh_tokens import DEFAULT_REFRESH_TOKEN_LIFETIME, RefreshTokenStore
from utils.exceptions import BadCredentials, EmailTaken, NotFound, TokenInvalid, UsernameTaken
from utils.security import AccessTokenCodec, hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    access_token: str
    refresh_token: str
    user: User
    expires_in: int

    @property
    def principal(self) -> Principal:
        return Principal.from_user(self.user)


class AuthGateway:
    def __init__(self, storage, codec: AccessTokenCodec, refresh_store: RefreshTokenStore):
        self.storage = storage
        self.codec = codec
        self.refresh_store = refresh_store

    @classmethod
    def from_config(cls, storage, config: Mapping[str, Any]) -> "AuthGateway":
        return cls(
            storage,
            AccessTokenCodec.from_config(config),
            RefreshTokenStore(
                storage, config.get("REFRESH_TOKEN_EXPIRES", DEFAULT_REFRESH_TOKEN_LIFETIME)
            ),
        )

    @property
    def session(self):
        return self.storage.get_session()

    def _username_owner(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    def _email_owner(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()

    def register(self, username: str, email: str, password: str) -> User:
        if self._username_owner(username):
            raise UsernameTaken()
        if self._email_owner(email):
            raise EmailTaken()

        user = User(username=username, email=email, password_hash=hash_password(password))
        self.storage.new(user)
        self.storage.save()
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def login(self, username: str, password: str, now: Optional[datetime] = None) -> AuthResult:
        user = self._username_owner(username)
        # unknown user and wrong password must be indistinguishable to the caller
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login for username %r", username)
            raise BadCredentials()

        access_token = self.codec.issue(user.username, now)
        refresh = self.refresh_store.create(user.id, now)
        logger.info("User %s logged in", user.username)
        return AuthResult(access_token, refresh.token, user, self.codec.expires_in)

    def refresh(self, refresh_token: str, now: Optional[datetime] = None) -> AuthResult:
        record: RefreshToken = self.refresh_store.find_by_token(refresh_token)
        record = self.refresh_store.verify_not_expired(record, now)
        user = record.user
        # the refresh token itself is not rotated on use
        access_token = self.codec.issue(user.username, now)
        return AuthResult(access_token, record.token, user, self.codec.expires_in)

    def logout(self, user_id: int) -> None:
        removed = self.refresh_store.delete_all_for_user(user_id)
        logger.info("User %s logged out (%d refresh token(s) removed)", user_id, removed)

    def update_profile(self, user_id: int, username: str, email: str) -> User:
        user = self.storage.get(User, user_id)
        if user is None:
            raise NotFound(f"User not found with id: {user_id}")

        if username != user.username:
            owner = self._username_owner(username)
            if owner is not None and owner.id != user.id:
                raise UsernameTaken()
        if email != user.email:
            owner = self._email_owner(email)
            if owner is not None and owner.id != user.id:
                raise EmailTaken()

        user.username = username
        user.email = email
        self.storage.new(user)
        self.storage.save()
        return user

    def resolve_principal(self, token: str, now: Optional[datetime] = None) -> Principal:
        username = self.codec.verify(token, now)
        user = self._username_owner(username)
        if user is None:
            raise TokenInvalid("Token subject no longer exists")
        return Principal.from_user(user)


def get_auth_gateway() -> AuthGateway:
    """Gateway bound to the running app (created once in create_app)."""
    return current_app.extensions["auth_gateway"]
