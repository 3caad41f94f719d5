"""Sporting event model shared by the spreadsheet and calendar sides."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class SportingEvent(BaseModel):
    """A single scheduled occurrence of a sport with its staff assignments.

    Two events with the same `key` are the same occurrence even when their
    assignments differ; a difference is an update, not a separate event.
    """

    timestamp: datetime = Field(..., description="Start time, minute precision")
    category: str = Field(..., description="Sport name")
    assignments: list[str] = Field(
        default_factory=list, description="Ordered 'Role: Name' lines"
    )
    contacts: set[str] = Field(
        default_factory=set, description="Assignee emails, for invitations only"
    )

    @field_validator("timestamp")
    @classmethod
    def truncate_to_minute(cls, v: datetime) -> datetime:
        """Require an aware timestamp and drop sub-minute precision."""
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("timestamp must be timezone-aware")
        return v.replace(second=0, microsecond=0)

    @property
    def key(self) -> str:
        """Identity key derived from timestamp and category.

        The timestamp is rendered in UTC so equal instants give equal keys
        whatever offset the datetime carries.
        """
        instant = self.timestamp.astimezone(timezone.utc)
        return f"{instant.isoformat()} @ {self.category}"

    def is_mostly_equal(self, other: SportingEvent) -> bool:
        """Check equality for sync purposes.

        Contacts are derived from assignments and are not compared.
        """
        return (
            self.timestamp == other.timestamp
            and self.category == other.category
            and list(self.assignments) == list(other.assignments)
        )

    def format(self) -> str:
        """Human-readable rendering for logs."""
        lines = [f"When: {self.timestamp.isoformat()}", f"Sport: {self.category}"]
        lines.extend(self.assignments)
        return "\n".join(lines) + "\n"
