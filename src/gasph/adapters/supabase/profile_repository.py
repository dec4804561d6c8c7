"""Supabase profile repository adapter."""

from gasph.adapters.supabase.constants import PROFILES_TABLE
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_row
from gasph.domain.models.user_profile import UserProfile
from gasph.domain.ports.profile_repository import ProfileRepository


class SupabaseProfileRepository(ProfileRepository):
    """User profiles stored in profiles."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def find_by_id(self, user_id: str) -> UserProfile | None:
        row = await self._client.select_one(Query(PROFILES_TABLE).eq("id", user_id))
        if row is not None:
            # Nullable flags in the table mean "no"
            row = {**row, "is_admin": bool(row.get("is_admin")), "is_pro": bool(row.get("is_pro"))}
        return parse_row(UserProfile, row)

    async def count(self) -> int:
        return await self._client.count(Query(PROFILES_TABLE))
