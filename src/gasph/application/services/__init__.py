"""Use case services."""
