"""Logging configuration."""

from contextio.observability.logs import configure_logging

__all__ = ["configure_logging"]
