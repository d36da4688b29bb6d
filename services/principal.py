from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Authenticated identity for one request. Rebuilt from the access token on every call."""

    id: int
    username: str
    email: str

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(id=user.id, username=user.username, email=user.email)

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}
