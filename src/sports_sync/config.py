"""Application configuration.

Configuration is loaded with pydantic-settings from, in order of precedence:

1. Keyword arguments passed to `load_settings()`
2. Environment variables
3. A `.env` file in the working directory
4. A `config.yaml` file in the working directory

The settings object is built once at process start and passed explicitly to
the extractors, the reconciler and the backends.

## Required Settings

- SPREADSHEET_ID: Google Sheets ID (from the spreadsheet URL)
- CALENDAR_ID: Google Calendar ID (from the calendar properties, or "primary")

## Example config.yaml

```yaml
spreadsheet_id: 1j_0dCDYpTAgbgJzTfq_SrWXmVTkCMDRpKKWkgfYiPa8
calendar_id: c_0123456789abcdef@group.calendar.google.com
organization_domain: brown.edu
schedule_tabs: [September, October, December]
```

The default `schedule_tabs` skips November: that tab of the live sheet is
missing its "Date" header, and a malformed header is fatal. Add it back
once the sheet is fixed.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from sports_sync.errors import ConfigurationError

DEFAULT_AUTOMATION_MARKER = "\n\nCreated by sports-schedule-sync automation.\n"


class Settings(BaseSettings):
    """Settings for a synchronization run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file="config.yaml",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sources
    spreadsheet_id: str = Field(..., min_length=1, description="Google Sheets ID")
    calendar_id: str = Field(..., min_length=1, description="Google Calendar ID")

    # Spreadsheet layout
    schedule_tabs: list[str] = Field(
        default=[
            "September",
            "October",
            # November is left out until its A1 cell reads "Date"; a tab with
            # a broken header aborts the run.
            "December",
            "January",
            "February",
            "March",
            "April",
            "May",
        ],
        description="Tabs (sheet names) holding the monthly schedules",
    )
    schedule_columns: str = "A:ZZ"
    contacts_range: str = "Worker Contact Info!A2:C"
    organization_domain: str = Field(
        default="brown.edu",
        description="Email domain whose members may be referred to by first name",
    )

    # Calendar entries
    timezone: str = "America/New_York"
    automation_marker: str = DEFAULT_AUTOMATION_MARKER
    event_duration_hours: float = Field(default=2.0, gt=0, le=24)
    invite_assignees: bool = False
    location_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Extra sport -> location entries, merged over the built-in table",
    )

    # Google APIs
    google_client_secrets_file: str = "credentials.json"
    google_token_file: str = "token.json"
    google_scopes: list[str] = Field(
        default=[
            "https://www.googleapis.com/auth/spreadsheets.readonly",
            "https://www.googleapis.com/auth/calendar.events",
        ],
        description="OAuth scopes. Delete the token file after changing these.",
    )
    read_retry_attempts: int = Field(default=3, ge=1, le=10)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the time zone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @field_validator("automation_marker")
    @classmethod
    def validate_automation_marker(cls, v: str) -> str:
        """The marker must carry visible text to be detectable."""
        if len(v.strip()) < 3:
            raise ValueError("automation_marker must contain visible text")
        return v

    @field_validator("organization_domain", mode="before")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        return v.strip().lstrip("@").lower()

    @property
    def tz(self) -> ZoneInfo:
        """The civil time zone all timestamps are normalized to."""
        return ZoneInfo(self.timezone)

    @property
    def event_duration(self) -> timedelta:
        """Length given to every calendar entry."""
        return timedelta(hours=self.event_duration_hours)


def load_settings(**overrides) -> Settings:
    """Build the settings for a run.

    Raises:
        ConfigurationError: If required settings are missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
