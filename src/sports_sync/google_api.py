"""Shared helpers for Google API clients.

## Rate Limits

The Sheets and Calendar APIs answer with 429 or 5xx when a quota is exceeded
or the backend is briefly unavailable. Reads are retried with exponential
backoff. Writes are never retried: a failed write is reported and the run
moves on.
"""

from __future__ import annotations

import logging
from typing import Any

from googleapiclient.errors import HttpError
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from sports_sync.errors import BackendError

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

RETRY_WAIT = wait_exponential(multiplier=1, min=2, max=10)


def is_transient_error(exc: BaseException) -> bool:
    """Check if an error is worth retrying."""
    if isinstance(exc, HttpError):
        return exc.resp.status in TRANSIENT_STATUS_CODES
    return isinstance(exc, (TimeoutError, ConnectionError))


def _log_retry(retry_state) -> None:
    logger.warning(
        f"Transient API error (attempt {retry_state.attempt_number}): "
        f"{retry_state.outcome.exception()}"
    )


def execute_read(request: Any, attempts: int = 3) -> dict[str, Any]:
    """Execute a read request, retrying transient failures.

    Args:
        request: A googleapiclient HttpRequest
        attempts: Maximum number of attempts

    Returns:
        Decoded JSON response
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=RETRY_WAIT,
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
    return retrying(request.execute)


def backend_error(exc: Exception, backend: str, action: str) -> BackendError:
    """Wrap a Google API exception in a BackendError."""
    status_code = exc.resp.status if isinstance(exc, HttpError) else None
    return BackendError(f"Failed to {action}: {exc}", backend=backend, status_code=status_code)
