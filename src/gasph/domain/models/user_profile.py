"""User profile and session domain models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Public profile of an app user."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    username: str | None = None
    avatar_url: str | None = None
    reputation_score: float | None = None
    is_admin: bool = False
    is_pro: bool = False
    created_at: datetime | None = None


class AuthSession(BaseModel):
    """Locally mirrored session issued by the identity service."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    user_id: str
    email: str | None = None
    expires_at: datetime | None = None


class AdminStats(BaseModel):
    """Counters shown on the admin dashboard."""

    model_config = ConfigDict(frozen=True)

    stations_count: int
    active_cycles_count: int
    users_count: int
    last_import_date: datetime | None = None
