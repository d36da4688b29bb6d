"""
Refresh token store.

One live refresh token per user: create() deletes every earlier row for the user before
inserting the new one, in the same commit. Expiry is checked lazily when a token is
presented; expired rows are deleted at that point rather than swept.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from models.base_model import as_naive_utc, utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import TokenExpired, TokenNotFound
from utils.security import generate_jti

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_TOKEN_LIFETIME = timedelta(days=7)


class RefreshTokenStore:
    def __init__(self, storage, lifetime: timedelta = DEFAULT_REFRESH_TOKEN_LIFETIME):
        self.storage = storage
        self.lifetime = lifetime

    @property
    def session(self):
        return self.storage.get_session()

    def _delete_for_user(self, user_id: int) -> int:
        return (
            self.session.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .delete(synchronize_session="fetch")
        )

    def create(self, user_id: int, now: Optional[datetime] = None) -> RefreshToken:
        now = as_naive_utc(now) if now is not None else utcnow()
        replaced = self._delete_for_user(user_id)
        record = RefreshToken(
            token=generate_jti(),
            user_id=user_id,
            expires_at=now + self.lifetime,
            created_at=now,
        )
        self.storage.new(record)
        self.storage.save()
        if replaced:
            logger.info("Replaced %d refresh token(s) for user %s", replaced, user_id)
        return record

    def find_by_token(self, token: str) -> RefreshToken:
        record = None
        if token:
            record = self.session.query(RefreshToken).filter(RefreshToken.token == token).first()
        if record is None:
            raise TokenNotFound()
        return record

    def verify_not_expired(self, record: RefreshToken, now: Optional[datetime] = None) -> RefreshToken:
        if record.is_expired(now):
            user_id = record.user_id
            self.storage.delete(record)
            self.storage.save()
            logger.info("Deleted expired refresh token for user %s", user_id)
            raise TokenExpired()
        return record

    def delete_all_for_user(self, user_id: int) -> int:
        removed = self._delete_for_user(user_id)
        self.storage.save()
        return removed
