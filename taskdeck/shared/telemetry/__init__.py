"""Telemetry: logging configuration."""

from taskdeck.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
