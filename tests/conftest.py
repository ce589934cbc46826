"""Shared test fixtures for the tokbox_client test suite.

WHY: Most tests need a client wired to a fake TokBox endpoint and a way
to inspect the requests it sent. Centralizing that here keeps each test
focused on one behavior.

HOW: make_client() builds a TokboxClient whose httpx transport is an
httpx.MockTransport driven by a handler function. The RecordingHandler
fixture stores every request and replies with a canned response.

RULES:
- No test ever touches the real network
- Credentials are fixed, non-production values
- The TOKBOX_* environment is cleared so a local .env cannot leak in
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import httpx
import pytest

from tokbox_client.api.client import TokboxClient
from tokbox_client.config import ClientConfig

TEST_KEY = "45822722"
TEST_SECRET = "362f8bfbb5fff2f960c72ee4b798fa7029f9a601"
TEST_BASE_URL = "https://api.test.opentok.local"
TEST_SESSION_ID = "1_MX40NTgyMjcyMn5-MTQ4NjU2ODM0Mzg1MH5abc~fg"


SAMPLE_SESSION = {
    "session_id": TEST_SESSION_ID,
    "project_id": TEST_KEY,
    "partner_id": TEST_KEY,
    "create_dt": "Wed Feb 08 07:45:43 PST 2017",
    "created_dt": "Wed Feb 08 07:45:43 PST 2017",
    "media_server_url": "",
}


def sample_archive(archive_id: str = "b40ef09b-3811-4726-b508-e41a0f96c68f", **overrides: Any) -> dict:
    """A started archive as returned by the archive endpoints."""
    data = {
        "id": archive_id,
        "createdAt": 1384221730000,
        "duration": 0,
        "hasAudio": True,
        "hasVideo": True,
        "name": "Interview",
        "outputMode": "composed",
        "projectId": int(TEST_KEY),
        "reason": "",
        "sessionId": TEST_SESSION_ID,
        "size": 0,
        "status": "started",
        "url": None,
    }
    data.update(overrides)
    return data


class RecordingHandler:
    """MockTransport handler that records requests and returns one response."""

    def __init__(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(handler: Callable[[httpx.Request], httpx.Response], **config_overrides: Any) -> TokboxClient:
    """Build a TokboxClient that talks to handler instead of the network."""
    config = ClientConfig(base_url=TEST_BASE_URL, **config_overrides)
    return TokboxClient(
        TEST_KEY,
        TEST_SECRET,
        config=config,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture(autouse=True)
def _clear_tokbox_env(monkeypatch):
    """Remove TOKBOX_* variables loaded from a developer's .env."""
    for name in (
        "TOKBOX_API_KEY",
        "TOKBOX_API_SECRET",
        "TOKBOX_BASE_URL",
        "TOKBOX_API_VERSION",
        "TOKBOX_BEARER_TTL",
        "TOKBOX_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
