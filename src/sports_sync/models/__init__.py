"""Domain models for schedule synchronization."""

from sports_sync.models.event import SportingEvent
from sports_sync.models.rows import (
    REQUIRED_HEADERS,
    ContactRow,
    ScheduleRow,
)

__all__ = [
    "SportingEvent",
    "ScheduleRow",
    "ContactRow",
    "REQUIRED_HEADERS",
]
