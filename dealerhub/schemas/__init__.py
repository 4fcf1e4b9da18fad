"""Pydantic schema package for API contracts."""
