"""Application interfaces (ports): membership store protocols."""

from taskdeck.application.interfaces.services import (
    IMembershipRepository,
    IMembershipStore,
)

__all__ = ["IMembershipRepository", "IMembershipStore"]
