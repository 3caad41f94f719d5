"""Authentication module.

Obtains and caches Google OAuth credentials for the Sheets and Calendar APIs.
"""

from sports_sync.auth.google import load_credentials, save_token

__all__ = [
    "load_credentials",
    "save_token",
]
