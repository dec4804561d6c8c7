"""Display formatting helpers for prices, dates, confidence and opening hours."""

from datetime import UTC, datetime
from typing import Any

from gasph.domain.geo import format_distance

__all__ = [
    "confidence_color",
    "format_confidence_score",
    "format_date",
    "format_distance",
    "format_fuel_type",
    "format_operating_hours",
    "format_percentage",
    "format_price",
    "format_relative_time",
    "price_comparison_color",
]

_FUEL_TYPE_NAMES = {
    "RON 91": "Unleaded",
    "RON 95": "Premium (95)",
    "RON 97": "Premium (97)",
    "RON 100": "Premium (100)",
}

_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

GREEN = "#4caf50"
LIGHT_GREEN = "#8bc34a"
YELLOW = "#ffeb3b"
ORANGE = "#ff9800"
RED = "#f44336"


def format_fuel_type(fuel_type: str) -> str:
    """Locally familiar fuel name; Diesel and Diesel Plus stay as they are."""
    return _FUEL_TYPE_NAMES.get(str(fuel_type), str(fuel_type))


def format_price(price: float) -> str:
    return f"₱{price:.2f}"


def _parse_datetime(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_date(value: str | datetime) -> str:
    """Format as e.g. 'Mar 5, 2025'."""
    dt = _parse_datetime(value)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def _describe_span(seconds: float) -> str:
    minutes = round(seconds / 60)
    if seconds < 30:
        return "less than a minute"
    if minutes < 45:
        return "1 minute" if minutes <= 1 else f"{minutes} minutes"
    if minutes < 90:
        return "about 1 hour"
    hours = round(minutes / 60)
    if minutes < 24 * 60:
        return f"about {hours} hours"
    days = round(minutes / (24 * 60))
    if minutes < 42 * 60:
        return "1 day"
    if days < 30:
        return f"{days} days"
    if days < 45:
        return "about 1 month"
    if days < 365:
        months = round(days / 30)
        return f"{months} months"
    years = round(days / 365)
    return "about 1 year" if years <= 1 else f"about {years} years"


def format_relative_time(value: str | datetime, now: datetime | None = None) -> str:
    """Relative time with a suffix, e.g. '5 minutes ago' or 'in 2 days'.

    Naive datetimes are treated as UTC.
    """
    dt = _parse_datetime(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    reference = now or datetime.now(UTC)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)

    delta = (reference - dt).total_seconds()
    span = _describe_span(abs(delta))
    return f"{span} ago" if delta >= 0 else f"in {span}"


def format_percentage(value: float) -> str:
    return f"{value:.0f}%"


def format_confidence_score(score: float) -> str:
    """Human-readable confidence for a 0-100 score."""
    if score >= 90:
        return "Very High"
    if score >= 70:
        return "High"
    if score >= 50:
        return "Medium"
    if score >= 30:
        return "Low"
    return "Very Low"


def confidence_color(score: float) -> str:
    if score >= 90:
        return GREEN
    if score >= 70:
        return LIGHT_GREEN
    if score >= 50:
        return YELLOW
    if score >= 30:
        return ORANGE
    return RED


def price_comparison_color(price: float, average_price: float) -> str:
    """Green below 95% of the average, red above 105%, yellow in between."""
    if price < average_price * 0.95:
        return GREEN
    if price > average_price * 1.05:
        return RED
    return YELLOW


def format_operating_hours(hours: dict[str, Any] | None) -> str:
    """Summarize an operating-hours mapping keyed by weekday name."""
    if not hours:
        return "No operating hours available"

    if hours.get("is24Hours"):
        return "Open 24 hours"

    monday = hours.get("Monday")
    all_same = all(
        (hours.get(day) or {}).get("open") == (monday or {}).get("open")
        and (hours.get(day) or {}).get("close") == (monday or {}).get("close")
        for day in _WEEKDAYS
    )
    if all_same and monday:
        return f"Daily: {monday['open']} - {monday['close']}"

    return ", ".join(
        f"{day[:3]}: {hours[day]['open']} - {hours[day]['close']}"
        for day in _WEEKDAYS
        if hours.get(day)
    )
