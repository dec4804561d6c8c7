"""GasPh - fuel price discovery and community price reporting for the Philippines."""

__version__ = "0.1.0"
