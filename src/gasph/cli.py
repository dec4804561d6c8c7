"""Command line interface for the GasPh client."""

import argparse
import asyncio
import json
import sys
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from gasph.adapters.formatters import (
    format_confidence_score,
    format_date,
    format_distance,
    format_fuel_type,
    format_operating_hours,
    format_price,
    format_relative_time,
)
from gasph.domain.errors import GasPhError, NotAuthenticatedError
from gasph.domain.geo import distance
from gasph.domain.models.coordinate import Coordinate, LocationData
from gasph.domain.models.fuel_type import FuelType
from gasph.domain.models.station_report import ReportReason
from gasph.domain.models.user_profile import AuthSession
from gasph.main import Application, configure_logging, load_config, location_provider_for

FUEL_CHOICES = [str(ft) for ft in FuelType]


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


def print_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2, ensure_ascii=False, default=str))


def parse_datetime(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _add_location_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, help="Latitude of your position")
    parser.add_argument("--lng", type=float, help="Longitude of your position")


def _distance_label(value: float | None) -> str:
    return format_distance(value) if value is not None else "?"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gasph",
        description="Find cheap fuel near you and share prices with the community",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Distance between two points
  gasph distance 14.5995 120.9842 14.6760 121.0437

  # Stations within 5 km
  gasph nearby --lat 14.5995 --lng 120.9842 --radius 5

  # Cheapest Diesel within 15 km
  gasph best-prices --lat 14.5995 --lng 120.9842 --fuel Diesel

  # Report a price
  gasph report-price <station-id> "RON 95" 62.50
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Distance command
    distance_parser = subparsers.add_parser("distance", help="Distance between two points")
    distance_parser.add_argument("lat1", type=float)
    distance_parser.add_argument("lng1", type=float)
    distance_parser.add_argument("lat2", type=float)
    distance_parser.add_argument("lng2", type=float)
    distance_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Nearby command
    nearby_parser = subparsers.add_parser("nearby", help="List stations near a position")
    _add_location_arguments(nearby_parser)
    nearby_parser.add_argument("--radius", type=float, help="Search radius in km")
    nearby_parser.add_argument("--limit", type=int, help="Maximum number of stations to query")
    nearby_parser.add_argument(
        "--all", action="store_true", help="List every station by distance, paginated"
    )
    nearby_parser.add_argument("--page", type=int, default=0, help="Page for --all (from 0)")
    nearby_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Best prices command
    best_parser = subparsers.add_parser("best-prices", help="Cheapest fuel nearby")
    _add_location_arguments(best_parser)
    best_parser.add_argument("--fuel", choices=FUEL_CHOICES, help="Fuel type")
    best_parser.add_argument("--max-distance", type=float, help="Search radius in km")
    best_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Station command
    station_parser = subparsers.add_parser("station", help="Show a station and its prices")
    station_parser.add_argument("station_id")
    station_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Favorites commands
    favorites_parser = subparsers.add_parser("favorites", help="Manage favorite stations")
    favorites_sub = favorites_parser.add_subparsers(dest="action", required=True)
    favorites_sub.add_parser("list", help="List favorite station ids")
    fav_add = favorites_sub.add_parser("add", help="Add a favorite station")
    fav_add.add_argument("station_id")
    fav_remove = favorites_sub.add_parser("remove", help="Remove a favorite station")
    fav_remove.add_argument("station_id")
    fav_prices = favorites_sub.add_parser("prices", help="Prices at favorite stations")
    _add_location_arguments(fav_prices)
    fav_prices.add_argument("--fuel", choices=FUEL_CHOICES, help="Fuel type")
    fav_prices.add_argument("--json", action="store_true", help="Output as JSON")

    # Price reporting commands
    report_price_parser = subparsers.add_parser("report-price", help="Report a fuel price")
    report_price_parser.add_argument("station_id")
    report_price_parser.add_argument("fuel_type", choices=FUEL_CHOICES)
    report_price_parser.add_argument("price")

    confirm_parser = subparsers.add_parser("confirm", help="Confirm a reported price")
    confirm_parser.add_argument("report_id")

    contributions_parser = subparsers.add_parser(
        "contributions", help="Your recent price reports"
    )
    contributions_parser.add_argument("--limit", type=int, default=10)
    contributions_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Cycle commands
    cycles_parser = subparsers.add_parser("cycles", help="Manage price reporting cycles")
    cycles_sub = cycles_parser.add_subparsers(dest="action", required=True)
    cycles_list = cycles_sub.add_parser("list", help="List cycles")
    cycles_list.add_argument("--all", action="store_true", help="Include archived cycles")
    cycles_list.add_argument("--json", action="store_true", help="Output as JSON")
    cycles_sub.add_parser("active", help="Show the active cycle")
    cycles_create = cycles_sub.add_parser("create", help="Create a new active cycle")
    cycles_create.add_argument("start_date", help="ISO start date")
    cycles_create.add_argument("end_date", help="ISO end date")
    cycles_archive = cycles_sub.add_parser("archive", help="Archive a cycle")
    cycles_archive.add_argument("cycle_id")
    cycles_activate = cycles_sub.add_parser("activate", help="Activate a cycle")
    cycles_activate.add_argument("cycle_id")

    # Station report commands
    reports_parser = subparsers.add_parser("reports", help="Station reports")
    reports_sub = reports_parser.add_subparsers(dest="action", required=True)
    reports_pending = reports_sub.add_parser("pending", help="List pending reports")
    reports_pending.add_argument("--json", action="store_true", help="Output as JSON")
    reports_submit = reports_sub.add_parser("submit", help="Report a problem with a station")
    reports_submit.add_argument("station_id")
    reports_submit.add_argument("reason", choices=[str(r) for r in ReportReason])
    reports_submit.add_argument("--comment", help="Details for incorrect information")
    reports_resolve = reports_sub.add_parser("resolve", help="Approve or reject a report")
    reports_resolve.add_argument("report_id")
    reports_resolve.add_argument("status", choices=["approved", "rejected"])

    subparsers.add_parser("admin-stats", help="Admin dashboard counters")

    # Session commands
    session_parser = subparsers.add_parser("session", help="Manage the stored session")
    session_sub = session_parser.add_subparsers(dest="action", required=True)
    session_sub.add_parser("show", help="Show the stored session")
    session_set = session_sub.add_parser("set", help="Store a session")
    session_set.add_argument("--token", required=True, help="Access token")
    session_set.add_argument("--user-id", required=True)
    session_set.add_argument("--email")
    session_set.add_argument("--expires-at", help="ISO expiry time")
    session_sub.add_parser("clear", help="Forget the stored session")

    # Preferences commands
    preferences_parser = subparsers.add_parser("preferences", help="Manage preferences")
    preferences_sub = preferences_parser.add_subparsers(dest="action", required=True)
    preferences_sub.add_parser("show", help="Show preferences")
    set_fuel = preferences_sub.add_parser("set-fuel", help="Set the default fuel type")
    set_fuel.add_argument("fuel_type", choices=[*FUEL_CHOICES, "none"])

    return parser


def show_distance(args: argparse.Namespace) -> None:
    km = distance(Coordinate(args.lat1, args.lng1), Coordinate(args.lat2, args.lng2))
    if args.json:
        print_json({"distance_km": km, "formatted": format_distance(km)})
    else:
        print(format_distance(km))


async def _resolve_location(app: Application) -> LocationData:
    await app.location.initialize()
    location = app.location.location_with_fallback()
    if location.is_default_location:
        print(
            f"Using default location ({location.latitude}, {location.longitude})",
            file=sys.stderr,
        )
    return location


def _require_user_id(app: Application) -> str:
    user_id = app.current_user_id()
    if not user_id:
        raise NotAuthenticatedError()
    return user_id


async def show_nearby(app: Application, args: argparse.Namespace) -> None:
    location = await _resolve_location(app)
    if args.all:
        page = await app.nearby.list_sorted_by_distance(location, page=args.page)
        stations = page.stations
    else:
        radius = args.radius if args.radius is not None else app.config.nearby_radius_km
        stations = await app.nearby.find_nearby(location, radius, args.limit)

    if args.json:
        print_json(stations)
        return
    if not stations:
        print("No stations found.", file=sys.stderr)
        return
    print(f"\nFound {len(stations)} station(s):\n")
    for station in stations:
        print(f"  {station.name} ({station.brand or 'Unknown'}) - {_distance_label(station.distance)}")
        print(f"    ID: {station.id}")
        if station.address:
            print(f"    {station.address}, {station.city or ''}")
    if args.all and page.has_more:
        print(f"\nMore stations on page {args.page + 1}.")


async def show_best_prices(app: Application, args: argparse.Namespace) -> None:
    location = await _resolve_location(app)
    fuel_type = args.fuel or app.preferences.default_fuel_type
    max_distance = (
        args.max_distance
        if args.max_distance is not None
        else app.config.best_price_max_distance_km
    )
    result = await app.best_prices.get_best_prices(
        location, str(fuel_type) if fuel_type else None, max_distance
    )

    if args.json:
        print_json(result)
        return
    if not result.prices:
        print("No prices found nearby.", file=sys.stderr)
        return
    print()
    for i, entry in enumerate(result.prices, 1):
        price = entry.display_price
        price_label = format_price(price) if price is not None else "n/a"
        source = "community" if entry.price is not None else "DOE"
        print(
            f"{i:2}. {price_label} {format_fuel_type(entry.fuel_type)} at {entry.name}"
            f" - {_distance_label(entry.distance)} ({source})"
        )
    if result.stats and result.stats.average_price is not None:
        print(f"\n{result.stats.count} result(s), average {format_price(result.stats.average_price)}")


async def show_station(app: Application, args: argparse.Namespace) -> None:
    details = await app.prices.get_station_details(args.station_id)
    if details is None:
        print(f"Station {args.station_id} not found.", file=sys.stderr)
        sys.exit(1)
    if args.json:
        print_json(details)
        return

    station = details.station
    print(f"\n{station.name} ({station.brand or 'Unknown'})")
    print(f"  ID: {station.id}")
    print(f"  Address: {station.address or 'Unknown'}, {station.city or ''}")
    print(f"  Hours: {format_operating_hours(station.operating_hours)}")
    print(f"\nCommunity prices: {len(details.community_prices)}")
    for report in details.community_prices:
        confidence = (
            format_confidence_score(report.confidence_score)
            if report.confidence_score is not None
            else "Unknown"
        )
        reported = format_relative_time(report.reported_at) if report.reported_at else ""
        flags = " (yours)" if report.is_own_report else ""
        flags += " (confirmed)" if report.user_has_confirmed else ""
        print(
            f"  {format_fuel_type(report.fuel_type)}: {format_price(report.price)}"
            f" - {confidence} confidence, {report.confirmations_count} confirmation(s)"
            f" {reported}{flags}"
        )
        print(f"    Report ID: {report.id}")
    if details.doe_prices:
        print("\nDOE reference prices:")
        for doe in details.doe_prices:
            low = format_price(doe.min_price) if doe.min_price is not None else "n/a"
            high = format_price(doe.max_price) if doe.max_price is not None else "n/a"
            week = f" (week of {format_date(str(doe.week_of))})" if doe.week_of else ""
            print(f"  {doe.fuel_type}: {low} - {high}{week}")


async def handle_favorites(app: Application, args: argparse.Namespace) -> None:
    user_id = _require_user_id(app)
    if args.action == "list":
        for station_id in await app.favorites.list_favorite_ids(user_id):
            print(station_id)
    elif args.action == "add":
        await app.favorites.add_favorite(user_id, args.station_id)
        print(f"Added {args.station_id} to favorites.")
    elif args.action == "remove":
        await app.favorites.remove_favorite(user_id, args.station_id)
        print(f"Removed {args.station_id} from favorites.")
    elif args.action == "prices":
        location = await _resolve_location(app)
        fuel_type = args.fuel or app.preferences.default_fuel_type
        prices = await app.favorites.get_favorite_prices(
            user_id, str(fuel_type) if fuel_type else None, location
        )
        if args.json:
            print_json(prices)
            return
        if not fuel_type:
            print("No fuel type given and no default fuel type set.", file=sys.stderr)
        for item in prices:
            price_label = format_price(item.price) if item.price is not None else "no price"
            print(f"  {item.name or item.id}: {price_label} - {_distance_label(item.distance)}")


async def handle_cycles(app: Application, args: argparse.Namespace) -> None:
    if args.action == "list":
        cycles = await app.cycles.list_cycles(include_archived=args.all)
        if args.json:
            print_json(cycles)
            return
        for cycle in cycles:
            print(
                f"  #{cycle.cycle_number} {format_date(cycle.start_date)} - "
                f"{format_date(cycle.end_date)} [{cycle.status}] ID: {cycle.id}"
            )
    elif args.action == "active":
        cycle = await app.cycles.get_active_cycle()
        if cycle is None:
            print("No active cycle.")
        else:
            print(f"#{cycle.cycle_number} ends {format_date(cycle.end_date)} (ID: {cycle.id})")
    elif args.action == "create":
        cycle = await app.cycles.create_cycle(
            parse_datetime(args.start_date), parse_datetime(args.end_date)
        )
        print(f"Created cycle #{cycle.cycle_number} (ID: {cycle.id})")
    elif args.action == "archive":
        await app.cycles.archive_cycle(args.cycle_id)
        print(f"Archived cycle {args.cycle_id}")
    elif args.action == "activate":
        await app.cycles.activate_cycle(args.cycle_id)
        print(f"Activated cycle {args.cycle_id}")


async def handle_reports(app: Application, args: argparse.Namespace) -> None:
    if args.action == "pending":
        reports = await app.reports.list_pending_reports()
        if args.json:
            print_json(reports)
            return
        for report in reports:
            print(
                f"  [{report.report_type}] {report.reason or ''} station {report.station_id}"
                f" by {report.reporter_username or report.user_id} (ID: {report.id})"
            )
    elif args.action == "submit":
        await app.reports.submit_report(args.station_id, args.reason, args.comment)
        print("Report submitted.")
    elif args.action == "resolve":
        await app.reports.resolve_report(args.report_id, args.status)
        print(f"Report {args.report_id} {args.status}.")


def handle_session(app: Application, args: argparse.Namespace) -> None:
    if args.action == "show":
        session = app.auth.current()
        if session is None:
            print("Not signed in.")
        else:
            print(f"User: {session.user_id} ({session.email or 'no email'})")
            if session.expires_at:
                print(f"Expires: {session.expires_at.isoformat()}")
    elif args.action == "set":
        app.auth.set(
            AuthSession(
                access_token=args.token,
                user_id=args.user_id,
                email=args.email,
                expires_at=parse_datetime(args.expires_at) if args.expires_at else None,
            )
        )
        print("Session stored.")
    elif args.action == "clear":
        app.auth.clear()
        print("Session cleared.")


def handle_preferences(app: Application, args: argparse.Namespace) -> None:
    if args.action == "show":
        fuel_type = app.preferences.default_fuel_type
        print(f"Default fuel type: {fuel_type or 'not set'}")
    elif args.action == "set-fuel":
        fuel_type = None if args.fuel_type == "none" else FuelType(args.fuel_type)
        app.preferences.set_default_fuel_type(fuel_type)
        print(f"Default fuel type: {fuel_type or 'not set'}")


async def run_command(app: Application, args: argparse.Namespace) -> None:
    """Dispatch a parsed command against the wired application."""
    if args.command == "nearby":
        await show_nearby(app, args)
    elif args.command == "best-prices":
        await show_best_prices(app, args)
    elif args.command == "station":
        await show_station(app, args)
    elif args.command == "favorites":
        await handle_favorites(app, args)
    elif args.command == "report-price":
        await app.prices.report_price(args.station_id, args.fuel_type, args.price)
        print("Price reported.")
    elif args.command == "confirm":
        await app.prices.confirm_price(args.report_id)
        print("Price confirmed.")
    elif args.command == "contributions":
        contributions = await app.prices.get_user_contributions(args.limit)
        if args.json:
            print_json(contributions)
            return
        for item in contributions:
            station_name = item.station.name if item.station else "Unknown station"
            reported = format_date(item.reported_at) if item.reported_at else ""
            print(
                f"  {reported} {station_name}: {format_fuel_type(item.fuel_type)}"
                f" {format_price(item.price)} ({item.confirmations_count} confirmation(s))"
            )
    elif args.command == "cycles":
        await handle_cycles(app, args)
    elif args.command == "reports":
        await handle_reports(app, args)
    elif args.command == "admin-stats":
        stats = await app.admin_stats.get_admin_stats()
        print(f"Stations: {stats.stations_count}")
        print(f"Active cycles: {stats.active_cycles_count}")
        print(f"Users: {stats.users_count}")
        last_import = format_date(stats.last_import_date) if stats.last_import_date else "never"
        print(f"Last import: {last_import}")
    elif args.command == "session":
        handle_session(app, args)
    elif args.command == "preferences":
        handle_preferences(app, args)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)

    try:
        if args.command == "distance":
            show_distance(args)
            return

        config = load_config()
        provider = location_provider_for(getattr(args, "lat", None), getattr(args, "lng", None))
        async with Application(config, provider) as app:
            await run_command(app, args)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (GasPhError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
