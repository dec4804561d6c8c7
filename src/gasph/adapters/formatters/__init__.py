"""Display formatters."""

from gasph.adapters.formatters.display_formatter import (
    confidence_color,
    format_confidence_score,
    format_date,
    format_distance,
    format_fuel_type,
    format_operating_hours,
    format_percentage,
    format_price,
    format_relative_time,
    price_comparison_color,
)

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
