"""Task ORM - the single board item table.

Invariants:
    - id is an integer primary key, monotonic and never reused (sqlite_autoincrement)
    - title is non-nullable text; content is not checked
    - status is stored as plain text, default "todo"; the store does not
      constrain it to TaskStatus
    - created_at assigned at insertion (UTC)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class Task(Base):
    """One card on the board."""
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="todo", server_default="todo",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_snapshot(self) -> dict:
        """Plain-dict copy used in change events."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
