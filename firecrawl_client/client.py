"""Synchronous client for the Firecrawl scrape and crawl API.

``JobClient`` wraps one authenticated ``httpx.Client`` and exposes four
operations::

    from firecrawl_client import JobClient

    with JobClient(api_key="fc-...") as client:
        page = client.scrape("https://example.com", {"formats": ["markdown"]})
        pages = client.crawl("https://example.com", {"limit": 10})

``crawl`` starts a server-side job and blocks, sleeping ``poll_interval``
seconds before every status request, until the job reaches a terminal
status. There is no overall timeout unless ``max_polls`` is given.

Every call runs to completion on the calling thread. Sharing one client
between threads is as safe as sharing the underlying ``httpx.Client``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Union

import httpx

from .config import API_KEY_ENV, Config, load_config
from .exceptions import AuthenticationError, JobInitiationError, JobTimeoutError, RemoteJobError, TransportError

API_VERSION = "v1"
SCRAPE_PATH = f"/{API_VERSION}/scrape"
CRAWL_PATH = f"/{API_VERSION}/crawl/"

COMPLETED_STATUS = "completed"
FAILED_STATUSES = frozenset({"failed", "stopped"})

JobId = Union[str, int]


class JobLogger(Protocol):
    """Logging collaborator: two severities, one preformatted message each."""

    def info(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...


def _field(payload: Any, key: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(key)
    return None


class JobClient:
    """Authenticated client for scrape and crawl jobs.

    Args:
        api_key: API key. Falls back to ``FIRECRAWL_API_KEY``.
        api_url: Service base URL. Falls back to ``FIRECRAWL_API_URL`` and
            then to ``https://api.firecrawl.dev``.
        logger: Anything with ``info(msg)`` and ``error(msg)`` methods taking a
            single string. Defaults to this
            module's logger, which stays silent until the application
            configures logging.
        timeout: HTTP timeout in seconds. Falls back to ``FIRECRAWL_TIMEOUT``.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``.
        sleep: Blocking sleep used between status polls.

    Raises:
        AuthenticationError: If no API key can be resolved.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        logger: Optional[JobLogger] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        env = load_config(env_file=None)
        resolved_key = api_key or env.api_key
        if not resolved_key:
            self.logger.error("No API key provided.")
            raise AuthenticationError("No API key provided", {"env": API_KEY_ENV})

        self.config = Config(
            api_key=resolved_key,
            api_url=api_url or env.api_url,
            timeout=timeout if timeout is not None else env.timeout,
            poll_interval=env.poll_interval,
        )
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=self.config.api_url,
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "JobClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def api_url(self) -> str:
        return self.config.api_url

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def scrape(self, url: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Scrape a single URL and return the server's ``data`` payload.

        ``options`` is merged over ``{"url": url}``, so a ``url`` key inside
        ``options`` replaces the positional argument.

        Raises:
            TransportError: If the request fails.
            RemoteJobError: If the response has ``success`` false.
        """
        body = {"url": url, **(options or {})}
        self.logger.info(f"Starting scrape for URL: {url}")

        payload = self._request("POST", SCRAPE_PATH, f"scrape for URL: {url}", json_body=body)

        if not _field(payload, "success"):
            error = _field(payload, "error")
            self.logger.error(f"Scrape failed for URL: {url} with error: {error}")
            raise RemoteJobError(f"Failed to scrape URL: {error}", error=error)

        self.logger.info(f"Scrape successful for URL: {url}")
        return _field(payload, "data")

    def crawl(
        self,
        url: str,
        options: Optional[Dict[str, Any]] = None,
        poll_interval: Optional[float] = None,
        max_polls: Optional[int] = None,
    ) -> Any:
        """Start a crawl and block until it finishes.

        Args:
            url: Start URL, merged with ``options`` exactly as in ``scrape``.
            options: Crawl parameters forwarded unchanged as the JSON body.
            poll_interval: Seconds slept before each status request. Defaults
                to ``FIRECRAWL_POLL_INTERVAL``, or 2 seconds when that is unset.
            max_polls: Give up with ``JobTimeoutError`` after this many status
                requests. ``None`` polls until the server finishes the job.

        Returns:
            The ``data`` field of the completed job status.

        Raises:
            TransportError: If any request fails.
            JobInitiationError: If the crawl response has no ``id``.
            RemoteJobError: If the job ends as ``failed`` or ``stopped``.
            JobTimeoutError: If ``max_polls`` runs out.
        """
        if poll_interval is None:
            poll_interval = self.config.poll_interval
        if poll_interval < 0:
            raise ValueError("poll_interval must be >= 0")
        if max_polls is not None and max_polls < 1:
            raise ValueError("max_polls must be >= 1")

        body = {"url": url, **(options or {})}
        self.logger.info(f"Starting crawl for URL: {url}")

        payload = self._request("POST", CRAWL_PATH, f"crawl for URL: {url}", json_body=body)

        job_id = _field(payload, "id")
        if job_id is None or job_id == "":
            self.logger.error(f"Failed to initiate crawl for URL: {url}")
            raise JobInitiationError("Crawl job initiation failed", url=url, response=payload)

        self.logger.info(f"Crawl initiated successfully for URL: {url}, Job ID: {job_id}")
        return self._await_completion(job_id, poll_interval, max_polls)

    def check_crawl_status(self, job_id: JobId) -> Any:
        """Return the raw status body of a crawl job without interpreting it."""
        self.logger.info(f"Checking status for crawl job: {job_id}")
        return self._request("GET", self._job_path(job_id), f"status check for job: {job_id}")

    def cancel_crawl(self, job_id: JobId) -> Any:
        """Cancel a crawl job and return the server's acknowledgement as-is."""
        self.logger.info(f"Canceling crawl job: {job_id}")
        return self._request("DELETE", self._job_path(job_id), f"cancel of job: {job_id}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _await_completion(self, job_id: JobId, poll_interval: float, max_polls: Optional[int] = None) -> Any:
        self.logger.info(f"Monitoring crawl job: {job_id}")
        path = self._job_path(job_id)
        polls = 0

        while True:
            self._sleep(poll_interval)

            payload = self._request("GET", path, f"monitoring of job: {job_id}")
            polls += 1
            status = _field(payload, "status")

            if status == COMPLETED_STATUS:
                self.logger.info(f"Crawl job completed successfully: {job_id}")
                return _field(payload, "data")

            if status in FAILED_STATUSES:
                self.logger.error(f"Crawl job {job_id} failed with status: {status}")
                raise RemoteJobError(f"Crawl job failed with status: {status}", job_id=job_id, status=status)

            if max_polls is not None and polls >= max_polls:
                self.logger.error(f"Crawl job {job_id} still {status} after {polls} polls")
                raise JobTimeoutError(
                    f"Crawl job did not finish after {polls} status checks",
                    job_id=job_id,
                    polls=polls,
                    last_status=status,
                )

    def _request(
        self,
        method: str,
        path: str,
        context: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and decode its JSON body.

        Any failure is logged once at error level and re-raised as
        ``TransportError``.
        """
        url = f"{self.config.api_url.rstrip('/')}{path}"
        try:
            response = self._client.request(method, path, json=json_body)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            self.logger.error(f"HTTP error during {context} - {exc}")
            raise TransportError(
                f"HTTP Error: {exc}", url=url, status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error(f"HTTP error during {context} - {exc}")
            raise TransportError(f"HTTP Error: {exc}", url=url) from exc
        except ValueError as exc:
            self.logger.error(f"Invalid JSON response during {context} - {exc}")
            raise TransportError(f"Invalid JSON response: {exc}", url=url) from exc

    @staticmethod
    def _job_path(job_id: JobId) -> str:
        return f"{CRAWL_PATH}{job_id}"


__all__ = ["JobClient", "JobLogger","SCRAPE_PATH", "CRAWL_PATH", "COMPLETED_STATUS", "FAILED_STATUSES"]
