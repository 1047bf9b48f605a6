import json

import httpx
import pytest

from firecrawl_client import JobClient

ENV_NAMES = (
    "FIRECRAWL_API_KEY",
    "FIRECRAWL_API_URL",
    "FIRECRAWL_TIMEOUT",
    "FIRECRAWL_POLL_INTERVAL",
)

API_URL = "https://api.test"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown restores the original value even after load_dotenv writes it.
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class RecordingLogger:
    def __init__(self):
        self.records = []

    def info(self, msg):
        self.records.append(("info", msg))

    def error(self, msg):
        self.records.append(("error", msg))

    def messages(self, level):
        return [message for record_level, message in self.records if record_level == level]


class FakeServer:
    """Scripted stand-in for the remote API, recording requests and sleeps in order."""

    def __init__(self, statuses=(), crawl_response=None, scrape_response=None, data=None):
        self.statuses = list(statuses)
        self.crawl_response = crawl_response if crawl_response is not None else {"success": True, "id": "job-1"}
        self.scrape_response = scrape_response
        self.data = data
        self.events = []
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.events.append((request.method, request.url.path))
        if request.method == "POST" and request.url.path == "/v1/scrape":
            return httpx.Response(200, json=self.scrape_response)
        if request.method == "POST":
            return httpx.Response(200, json=self.crawl_response)
        if request.method == "DELETE":
            return httpx.Response(200, json={"success": True, "status": "cancelled"})
        status = self.statuses.pop(0)
        body = {"status": status}
        if status == "completed":
            body["data"] = self.data
        return httpx.Response(200, json=body)

    def sleep(self, seconds):
        self.events.append(("sleep", seconds))

    @property
    def status_requests(self):
        return [event for event in self.events if event[0] == "GET"]

    @property
    def sleeps(self):
        return [event for event in self.events if event[0] == "sleep"]

    def body(self, index=0):
        return json.loads(self.requests[index].content)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def make_client():
    clients = []

    def _make(handler, sleep=lambda _seconds: None, **kwargs):
        kwargs.setdefault("api_key", "fc-test")
        kwargs.setdefault("api_url", API_URL)
        client = JobClient(transport=httpx.MockTransport(handler), sleep=sleep, **kwargs)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
