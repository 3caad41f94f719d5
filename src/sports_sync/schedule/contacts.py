"""Name to email lookup built from the worker contact tab."""

from __future__ import annotations

import logging
from typing import Any

from sports_sync.errors import RowParseError
from sports_sync.models.rows import ContactRow

logger = logging.getLogger(__name__)


class ContactDirectory:
    """Resolves assignee names from the schedule to email addresses.

    Workers with an organization email are often listed on the schedule by
    first name only, so they are registered under their first name as well as
    their full name. The first worker to claim a first name keeps it.

    Example:
        ```python
        directory = ContactDirectory.from_rows(rows, organization_domain="brown.edu")
        directory.lookup("Alice")  # 'alice_smith@brown.edu'
        ```
    """

    def __init__(self, organization_domain: str = ""):
        self.organization_domain = organization_domain.lstrip("@").lower()
        self._emails: dict[str, str] = {}
        self.duplicate_aliases: list[str] = []

    @classmethod
    def from_rows(
        cls,
        rows: list[list[Any]],
        organization_domain: str = "",
        first_row_number: int = 2,
    ) -> ContactDirectory:
        """Build a directory from raw contact rows.

        Args:
            rows: Contact rows without the header row
            organization_domain: Domain whose members get a first-name alias
            first_row_number: Sheet row number of the first row, for logging
        """
        directory = cls(organization_domain)
        for offset, raw in enumerate(rows):
            row_number = first_row_number + offset
            if not raw:
                continue
            try:
                contact = ContactRow.from_cells(raw, row_number)
            except RowParseError as e:
                logger.debug(f"Skipping contact row: {e}")
                continue
            directory.register(contact.name, contact.email)
        return directory

    def is_organization_email(self, email: str) -> bool:
        if not self.organization_domain:
            return False
        return email.lower().endswith(f"@{self.organization_domain}")

    def register(self, name: str, email: str) -> None:
        """Register a worker under their full name and, if eligible, first name."""
        if self.is_organization_email(email):
            alias = name.split()[0]
            if alias != name:
                if alias in self._emails:
                    logger.warning(
                        f"Duplicate entry for {alias}: keeping {self._emails[alias]}, "
                        f"ignoring {email}"
                    )
                    self.duplicate_aliases.append(alias)
                else:
                    self._emails[alias] = email

        self._emails[name] = email

    def lookup(self, name: str) -> str | None:
        """Get the email for a name, or None if unknown."""
        return self._emails.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._emails

    def __len__(self) -> int:
        return len(self._emails)
