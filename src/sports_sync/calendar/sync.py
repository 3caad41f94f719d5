"""Calendar synchronization service.

Reconciles the spreadsheet's events into the calendar. The spreadsheet is
always authoritative.

## Sync Process

1. Partition identity keys from both sides:
   - spreadsheet only: missing from the calendar, create
   - calendar only: extra on the calendar, delete
   - both: update when not mostly equal
2. Issue each operation independently. A failed operation is logged and
   counted; the remaining operations still run.
3. Report a summary of missing, extra and updated events

Updates replace the full entry body; there are no field-level patches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sports_sync.calendar.base import CalendarBackend
from sports_sync.calendar.entries import event_to_entry_body
from sports_sync.config import Settings
from sports_sync.models.event import SportingEvent

logger = logging.getLogger(__name__)


@dataclass
class SyncPlan:
    """Disjoint sets of identity keys and what to do with each."""

    to_create: list[str] = field(default_factory=list)
    to_delete: list[str] = field(default_factory=list)
    to_update: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_delete or self.to_update)


def plan_sync(
    sheet_events: dict[str, SportingEvent],
    calendar_events: dict[str, SportingEvent],
) -> SyncPlan:
    """Compute the operations needed to make the calendar match the spreadsheet.

    Args:
        sheet_events: Spreadsheet events by identity key
        calendar_events: Calendar events by identity key

    Returns:
        SyncPlan with keys sorted within each set
    """
    sheet_keys = set(sheet_events)
    calendar_keys = set(calendar_events)

    plan = SyncPlan(
        to_create=sorted(sheet_keys - calendar_keys),
        to_delete=sorted(calendar_keys - sheet_keys),
    )

    for key in sorted(sheet_keys & calendar_keys):
        if calendar_events[key].is_mostly_equal(sheet_events[key]):
            plan.unchanged.append(key)
        else:
            plan.to_update.append(key)

    return plan


@dataclass
class SyncResult:
    """Result of a calendar sync run."""

    calendar_id: str
    dry_run: bool = False
    missing: int = 0
    extra: int = 0
    changed: int = 0
    created: int = 0
    deleted: int = 0
    updated: int = 0
    unchanged: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        """One-line run summary."""
        text = f"Missing: {self.missing}, Extra: {self.extra}, Updated: {self.changed}"
        if self.dry_run:
            return f"{text} (dry run, nothing written)"
        if self.errors:
            text += f" ({len(self.errors)} operations failed)"
        return text


class CalendarSyncService:
    """Applies spreadsheet events to the calendar.

    Example:
        ```python
        service = CalendarSyncService(calendar_client, settings)
        result = service.synchronize(sheet_events, calendar_events, entry_ids)
        print(result.summary())
        ```
    """

    def __init__(
        self,
        backend: CalendarBackend,
        settings: Settings,
        dry_run: bool = False,
    ):
        """Initialize the sync service.

        Args:
            backend: Calendar to write to
            settings: Run settings
            dry_run: Log planned operations without writing
        """
        self.backend = backend
        self.settings = settings
        self.dry_run = dry_run

    @property
    def calendar_id(self) -> str:
        return self.settings.calendar_id

    def synchronize(
        self,
        sheet_events: dict[str, SportingEvent],
        calendar_events: dict[str, SportingEvent],
        entry_ids: dict[str, str],
    ) -> SyncResult:
        """Make the calendar match the spreadsheet.

        Args:
            sheet_events: Spreadsheet events by identity key
            calendar_events: Managed calendar events by identity key
            entry_ids: Calendar entry ids by identity key

        Returns:
            SyncResult with planned and completed operation counts
        """
        plan = plan_sync(sheet_events, calendar_events)
        result = SyncResult(
            calendar_id=self.calendar_id,
            dry_run=self.dry_run,
            missing=len(plan.to_create),
            extra=len(plan.to_delete),
            changed=len(plan.to_update),
            unchanged=len(plan.unchanged),
        )

        logger.info(
            f"Sync plan: {len(plan.to_create)} to create, "
            f"{len(plan.to_update)} to update, "
            f"{len(plan.to_delete)} to delete, "
            f"{len(plan.unchanged)} unchanged"
        )

        for key in plan.to_create:
            self._create(key, sheet_events[key], result)

        for key in plan.to_delete:
            self._delete(key, entry_ids[key], result)

        for key in plan.to_update:
            self._update(key, entry_ids[key], sheet_events[key], result)

        logger.info(result.summary())
        return result

    def _create(self, key: str, event: SportingEvent, result: SyncResult) -> None:
        logger.info(f"Creating {key}")
        logger.debug(event.format())
        if self.dry_run:
            return
        try:
            entry_id = self.backend.create_entry(
                self.calendar_id, event_to_entry_body(event, self.settings)
            )
        except Exception as e:
            logger.exception(f"Error creating calendar event for {key}: {e}")
            result.errors.append(f"create {key}: {e}")
            return
        logger.debug(f"Created {key} as {entry_id}")
        result.created += 1

    def _delete(self, key: str, entry_id: str, result: SyncResult) -> None:
        logger.info(f"Deleting {key}")
        if self.dry_run:
            return
        try:
            self.backend.delete_entry(self.calendar_id, entry_id)
        except Exception as e:
            logger.exception(f"Error deleting {key}: {e}")
            result.errors.append(f"delete {key}: {e}")
            return
        result.deleted += 1

    def _update(
        self,
        key: str,
        entry_id: str,
        event: SportingEvent,
        result: SyncResult,
    ) -> None:
        logger.info(f"Updating {key}")
        logger.debug(event.format())
        if self.dry_run:
            return
        try:
            self.backend.update_entry(
                self.calendar_id, entry_id, event_to_entry_body(event, self.settings)
            )
        except Exception as e:
            logger.exception(f"Error updating {key}: {e}")
            result.errors.append(f"update {key}: {e}")
            return
        result.updated += 1
