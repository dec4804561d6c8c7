"""Constants for the Supabase (PostgREST) adapter.

API Documentation: https://postgrest.org/en/stable/references/api.html
"""

# Tables and views
GAS_STATIONS_TABLE = "gas_stations"
ACTIVE_PRICE_REPORTS_VIEW = "active_price_reports"
DOE_PRICE_VIEW = "doe_price_view"
USER_PRICE_REPORTS_TABLE = "user_price_reports"
PRICE_CONFIRMATIONS_TABLE = "price_confirmations"
PRICE_REPORTING_CYCLES_TABLE = "price_reporting_cycles"
USER_FAVORITES_TABLE = "user_favorites"
STATION_REPORTS_TABLE = "station_reports"
PROFILES_TABLE = "profiles"

# RPC functions
CONFIRM_PRICE_REPORT_RPC = "confirm_price_report"
FAVORITE_STATION_PRICES_RPC = "get_favorite_station_prices"

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
SINGLE_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"

# Selected columns
COMMUNITY_PRICE_COLUMNS = (
    "id,station_id,fuel_type,price,user_id,reported_at,expires_at,cycle_id,"
    "station_name,station_brand,station_city,station_latitude,station_longitude,"
    "reporter_username,confirmations_count,confidence_score"
)
DOE_PRICE_COLUMNS = (
    "gas_station_id,fuel_type,min_price,common_price,max_price,week_of,source_type"
)
USER_CONTRIBUTION_COLUMNS = (
    "id,fuel_type,price,reported_at,confirmations_count,"
    "station:gas_stations!station_id(id,name,brand,city)"
)
STATION_REPORT_COLUMNS = "*,profile:profiles(username)"

# Trigger message raised by the backend for a second pending report
DUPLICATE_PENDING_REPORT_MESSAGE = "User already has a pending report for this station"
