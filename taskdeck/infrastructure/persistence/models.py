"""WorkspaceMember ORM model (membership store)."""

from datetime import datetime

from cuid2 import cuid_wrapper
from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from taskdeck.infrastructure.persistence.database import Base

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2)."""
    return cuid_generator()


class WorkspaceMember(Base):
    """Membership of a user in a workspace. Table: workspace_member. Unique (workspace_id, user_id)."""

    __tablename__ = "workspace_member"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    workspace_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("workspace_id", "user_id", name="uq_workspace_member"),
    )
