"""Infrastructure: Redis cache and SQL membership store."""
