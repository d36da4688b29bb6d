"""
RefreshToken model: one opaque, server-side refresh credential per user.
Fields:
- token (unique random string handed to the client)
- user_id (Integer) - FK to users.id
- expires_at, created_at (naive UTC)
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, as_naive_utc, utcnow


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now=None) -> bool:
        now = as_naive_utc(now) if now is not None else utcnow()
        return as_naive_utc(self.expires_at) < now

    def __repr__(self):
        return f"<RefreshToken user_id={self.user_id} expires_at={self.expires_at}>"
