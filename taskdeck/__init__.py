"""Taskdeck server core: auth throttling, cache-aside, and workspace authorization."""

__version__ = "1.0.0"
