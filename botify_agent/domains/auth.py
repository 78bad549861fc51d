"""
Domain models for persisted Spotify authorizations.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "AuthRecord",
    "AuthUpdate",
]


class AuthRecord(BaseModel):
    """OAuth credential set for one chat user.

    A record is created empty (pending) when the user is first asked to
    connect Spotify, keyed by a one-time ``auth_id`` that travels through the
    OAuth ``state`` parameter. The code exchange fills in the tokens and each
    refresh replaces them.
    """

    auth_id: str = Field(..., description="One-time id used as OAuth state")
    user_id: str = Field(..., description="Chat user id owning the authorization")
    access_token: str = Field("", description="Spotify access token")
    refresh_token: str = Field("", description="Spotify refresh token")
    expires_in: int = Field(0, description="Expiry of the access token, epoch seconds")
    scope: str = Field("", description="Granted scopes, space separated")
    token_type: str = Field("", description="Token type, usually Bearer")

    @field_validator("auth_id", "user_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Validate that identifiers are not empty."""
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @property
    def is_pending(self) -> bool:
        """True until the OAuth code exchange has populated the tokens."""
        return not self.access_token

    def is_expired(self, now: float, margin_seconds: int = 0) -> bool:
        """Whether the access token should be refreshed at ``now``."""
        return self.expires_in < now + margin_seconds


class AuthUpdate(BaseModel):
    """Fields that can change on an existing AuthRecord."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    token_type: Optional[str] = None
