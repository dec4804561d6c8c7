"""Adapters for the backend, configuration, local state and display."""
