"""Exception hierarchy for the Firecrawl job client.

Every error raised by the client derives from ``FirecrawlError`` so callers
can catch the whole family at once or branch on the specific kind::

    FirecrawlError
    +-- AuthenticationError   no API key could be resolved at construction
    +-- TransportError        the HTTP call itself failed
    +-- JobInitiationError    the crawl creation response carried no job id
    +-- RemoteJobError        the server reported a failed scrape or crawl
        +-- JobTimeoutError   the opt-in poll limit ran out first
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "FirecrawlError",
    "AuthenticationError",
    "TransportError",
    "JobInitiationError",
    "RemoteJobError",
    "JobTimeoutError",
]


class FirecrawlError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
        details: Extra context such as the URL, job id or HTTP status.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class AuthenticationError(FirecrawlError):
    """Raised when no API key is given and none is set in the environment."""


class TransportError(FirecrawlError):
    """Raised when an HTTP request fails before a usable body is received.

    Covers connection failures, timeouts, non-2xx responses and bodies that
    are not valid JSON. Never retried.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        combined = dict(details or {})
        if url is not None:
            combined["url"] = url
        if status_code is not None:
            combined["status_code"] = status_code
        super().__init__(message, combined)
        self.url = url
        self.status_code = status_code


class JobInitiationError(FirecrawlError):
    """Raised when the crawl endpoint answers without a job id."""

    def __init__(self, message: str, url: Optional[str] = None, response: Any = None) -> None:
        details: Dict[str, Any] = {}
        if url is not None:
            details["url"] = url
        super().__init__(message, details)
        self.url = url
        self.response = response


class RemoteJobError(FirecrawlError):
    """Raised when the server reports that a scrape or crawl job failed.

    ``error`` holds the server's message for scrapes, ``status`` the terminal
    status (``failed`` or ``stopped``) for crawls.
    """

    def __init__(
        self,
        message: str,
        job_id: Any = None,
        status: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if job_id is not None:
            details["job_id"] = job_id
        if status is not None:
            details["status"] = status
        super().__init__(message, details)
        self.job_id = job_id
        self.status = status
        self.error = error


class JobTimeoutError(RemoteJobError):
    """Raised when ``max_polls`` status checks pass without a terminal status."""

    def __init__(self, message: str, job_id: Any = None, polls: int = 0, last_status: Optional[str] = None) -> None:
        super().__init__(message, job_id=job_id, status=last_status)
        self.details["polls"] = polls
        self.polls = polls
