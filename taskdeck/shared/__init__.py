"""Shared cross-cutting helpers (logging setup)."""
