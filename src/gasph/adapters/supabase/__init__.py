"""Supabase (PostgREST) adapters."""

from gasph.adapters.supabase.favorite_repository import SupabaseFavoriteRepository
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.price_cycle_repository import SupabasePriceCycleRepository
from gasph.adapters.supabase.price_repository import SupabasePriceRepository
from gasph.adapters.supabase.profile_repository import SupabaseProfileRepository
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.station_report_repository import SupabaseStationReportRepository
from gasph.adapters.supabase.station_repository import SupabaseStationRepository

__all__ = [
    "Query",
    "SupabaseClient",
    "SupabaseFavoriteRepository",
    "SupabasePriceCycleRepository",
    "SupabasePriceRepository",
    "SupabaseProfileRepository",
    "SupabaseStationReportRepository",
    "SupabaseStationRepository",
]
