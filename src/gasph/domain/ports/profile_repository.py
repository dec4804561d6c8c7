"""User profile repository port."""

from typing import Protocol

from gasph.domain.models.user_profile import UserProfile


class ProfileRepository(Protocol):
    """Port for user profiles."""

    async def find_by_id(self, user_id: str) -> UserProfile | None:
        """Find a profile by user id."""
        ...

    async def count(self) -> int:
        """Count all profiles."""
        ...
