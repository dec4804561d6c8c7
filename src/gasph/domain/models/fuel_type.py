"""Fuel type domain model."""

from enum import StrEnum


class FuelType(StrEnum):
    """Fuel grades sold at Philippine stations."""

    DIESEL = "Diesel"
    RON_91 = "RON 91"
    RON_95 = "RON 95"
    RON_97 = "RON 97"
    RON_100 = "RON 100"
    DIESEL_PLUS = "Diesel Plus"


ALL_FUEL_TYPES: list[FuelType] = list(FuelType)
