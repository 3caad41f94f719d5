"""Google OAuth credentials for the command-line tool.

Uses the installed-application flow: the first run opens a browser for
consent and caches the resulting token; later runs reuse and refresh it.

## Required Setup

1. Create a project in Google Cloud Console
2. Enable the Google Sheets API and the Google Calendar API
3. Create OAuth 2.0 credentials (Desktop application)
4. Download the client secrets JSON as `credentials.json`

## Scopes Used

- https://www.googleapis.com/auth/spreadsheets.readonly: Read the schedule
- https://www.googleapis.com/auth/calendar.events: Create/update/delete events

If the scopes change, delete the cached token file so consent is requested
again.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from sports_sync.config import Settings
from sports_sync.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _load_cached_token(token_file: Path, scopes: list[str]) -> Credentials | None:
    if not token_file.is_file():
        return None
    try:
        return Credentials.from_authorized_user_file(str(token_file), scopes)
    except ValueError as e:
        logger.warning(f"Ignoring unreadable token file {token_file}: {e}")
        return None


def save_token(credentials: Credentials, token_file: Path) -> None:
    """Cache credentials so later runs skip the consent flow."""
    logger.info(f"Saving credential file to: {token_file}")
    token_file.write_text(credentials.to_json())
    token_file.chmod(0o600)


def load_credentials(settings: Settings) -> Credentials:
    """Get valid Google credentials, refreshing or re-authorizing as needed.

    Args:
        settings: Settings naming the client secrets and token files

    Returns:
        Valid credentials for the configured scopes

    Raises:
        ConfigurationError: If no usable token exists and the client
            secrets file is missing
    """
    token_file = Path(settings.google_token_file)
    scopes = settings.google_scopes

    credentials = _load_cached_token(token_file, scopes)
    if credentials and credentials.valid:
        return credentials

    if credentials and credentials.expired and credentials.refresh_token:
        try:
            credentials.refresh(Request())
        except RefreshError as e:
            logger.warning(f"Token refresh failed, re-authorizing: {e}")
        else:
            save_token(credentials, token_file)
            return credentials

    secrets_file = Path(settings.google_client_secrets_file)
    if not secrets_file.is_file():
        raise ConfigurationError(
            f"Unable to read client secret file: {secrets_file}. "
            "Download OAuth client credentials from Google Cloud Console."
        )

    flow = InstalledAppFlow.from_client_secrets_file(str(secrets_file), scopes)
    credentials = flow.run_local_server(port=0)
    save_token(credentials, token_file)
    return credentials
