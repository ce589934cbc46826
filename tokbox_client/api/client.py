"""HTTP client for the TokBox (OpenTok) REST API.

WHY: Applications need to create sessions, hand out client tokens and
drive archive recording without knowing the REST details: which header
carries the JWT, how errors are encoded, or that session creation
answers with a one-element list. This module hides all of that behind
a single client class.

HOW: Uses a synchronous httpx.Client. TokboxClient is a context manager
— enter it to open the HTTP client, exit to close it. Every operation
goes through execute(), which signs a fresh bearer token, sends one
request and translates the response into a typed value or a typed
error. The facade methods only build URLs and bodies.

RULES:
- Always use the context manager (with TokboxClient(...) as client:)
- One operation = one HTTP request; no retries, no backoff
- A new bearer token is signed for every request, never reused
- Status >= 400 raises ApiError, or MalformedErrorBody if the body is not JSON
- Undecodable success bodies raise DecodeError
- Network failures raise TransportError chained to the httpx exception
- The token and secret are never logged
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

import httpx

from tokbox_client.api.models import (
    Archive,
    ArchiveList,
    ArchiveMode,
    OutputMode,
    Session,
)
from tokbox_client.auth.tokens import build_bearer_token, build_client_token
from tokbox_client.config import ClientConfig, Credentials
from tokbox_client.errors import (
    ApiError,
    DecodeError,
    MalformedErrorBody,
    TransportError,
    UnexpectedResponseShape,
)

logger = logging.getLogger(__name__)


class TokboxClient:
    """Client for sessions, tokens and archives of one TokBox project.

    WHY: Groups the project credentials, the platform settings and the
    HTTP connection so callers pass them once.

    HOW: Credentials and ClientConfig are frozen and never change after
    construction, so one instance can be shared across threads. The
    optional transport is handed to httpx.Client, which is how tests
    plug in httpx.MockTransport.

    RULES:
    - Use as: with TokboxClient(key, secret) as client: ...
    - config defaults to ClientConfig() (production endpoint)
    - timeout is None unless ClientConfig.timeout_seconds is set
    - generate_token()/bearer_token() need no open connection
    - Nested or concurrent "with client:" blocks share one httpx.Client;
      it is opened on the first enter and closed on the last exit
    """

    def __init__(
        self,
        key: str,
        secret: str,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._credentials = Credentials(key=key, secret=secret)
        self._config = config or ClientConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._depth = 0
        self._lock = threading.Lock()

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> TokboxClient:
        return cls(credentials.key, credentials.secret, config=config, transport=transport)

    @property
    def key(self) -> str:
        return self._credentials.key

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> TokboxClient:
        with self._lock:
            if self._depth == 0:
                self._client = httpx.Client(
                    transport=self._transport,
                    timeout=httpx.Timeout(self._config.timeout_seconds),
                )
            self._depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        with self._lock:
            self._depth -= 1
            if self._depth == 0 and self._client:
                self._client.close()
                self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "TokboxClient must be used as a context manager: "
                "with TokboxClient(key, secret) as client: ..."
            )
        return self._client

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def bearer_token(self) -> str:
        """Sign a fresh JWT for the REST API auth header."""
        return build_bearer_token(
            self._credentials.key,
            self._credentials.secret,
            ttl_seconds=self._config.bearer_ttl_seconds,
        )

    def generate_token(self, session_id: str) -> str:
        """Build a legacy client token that lets an end user join session_id."""
        return build_client_token(
            session_id,
            self._credentials.key,
            self._credentials.secret,
            sentinel=self._config.token_sentinel,
            ttl_seconds=self._config.client_token_ttl_seconds,
        )

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    def execute(
        self,
        method: str,
        url: str,
        body: Any = None,
        parse: Optional[Callable[[Any], Any]] = None,
        *,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one authenticated request and decode the JSON response.

        WHY: Every endpoint shares the same header set, auth scheme and
        error encoding. Centralizing them keeps the facade methods to a
        URL and a body each.

        HOW: Signs a bearer token, sends the request through the open
        httpx client, then either raises the decoded error (status >=
        400) or parses the JSON body. parse converts the decoded JSON
        into the caller's type.

        RULES:
        - Accept: application/json on every request
        - Content-Type: application/json only when body is not None
        - KeyError/TypeError/ValueError from parse become DecodeError
        - Exceptions raised by parse for other reasons propagate as-is

        Args:
            method: HTTP verb, e.g. "GET" or "POST".
            url: Fully-qualified request URL.
            body: Value to JSON-encode as the request body, or None.
            parse: Converts the decoded JSON into the result, or None
                to return the decoded JSON unchanged.
            params: Optional query parameters.

        Returns:
            The parsed response value.
        """
        client = self._ensure_client()

        headers = {
            "Accept": "application/json",
            self._config.auth_header: self.bearer_token(),
        }
        content: Optional[bytes] = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        logger.debug("%s %s", method, url)
        try:
            resp = client.request(method, url, params=params, content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError("{} {} failed: {}".format(method, url, exc)) from exc
        logger.debug("%s %s -> %d", method, url, resp.status_code)

        if resp.status_code >= 400:
            raise _error_from_response(resp)

        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(resp.text, str(exc)) from exc

        if parse is None:
            return data
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(resp.text, "{}: {}".format(type(exc).__name__, exc)) from exc

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(self) -> Session:
        """Create a new manually-archived session.

        The API answers with a list even for a single session; anything
        other than exactly one entry raises UnexpectedResponseShape.
        """
        url = "{}/session/create".format(self._config.base_url)
        session = self.execute(
            "POST",
            url,
            {"archiveMode": ArchiveMode.MANUAL.value},
            _parse_single_session,
        )
        logger.info("Created session %s", session.session_id)
        return session

    # ------------------------------------------------------------------
    # Archives
    # ------------------------------------------------------------------

    def archives(self, session_id: str) -> List[Archive]:
        """List the archives recorded for session_id, in API order."""
        url = "{}/archive".format(self._config.project_url(self._credentials.key))
        archive_list = self.execute(
            "GET",
            url,
            parse=ArchiveList.from_dict,
            params={"sessionId": session_id},
        )
        return archive_list.items

    def start_archive(self, session_id: str, name: str) -> Archive:
        """Start a composed recording of session_id."""
        url = "{}/archive/".format(self._config.project_url(self._credentials.key))
        archive = self.execute(
            "POST",
            url,
            {
                "sessionId": session_id,
                "name": name,
                "outputMode": OutputMode.COMPOSED.value,
            },
            Archive.from_dict,
        )
        logger.info("Started archive %s for session %s", archive.id, session_id)
        return archive

    def stop_archive(self, archive_id: str) -> Archive:
        """Stop a running archive and return its updated snapshot."""
        url = "{}/archive/{}/stop/".format(
            self._config.project_url(self._credentials.key), archive_id
        )
        archive = self.execute("POST", url, parse=Archive.from_dict)
        logger.info("Stopped archive %s (status: %s)", archive.id, archive.status)
        return archive


# ---------------------------------------------------------------------------
# Response helpers (module-private)
# ---------------------------------------------------------------------------


def _parse_single_session(data: Any) -> Session:
    if not isinstance(data, list):
        raise TypeError("expected a list of sessions, got {}".format(type(data).__name__))
    if len(data) != 1:
        raise UnexpectedResponseShape(
            "session create returned {} sessions, expected exactly 1".format(len(data)),
            payload=data,
        )
    return Session.from_dict(data[0])


def _error_from_response(resp: httpx.Response) -> Exception:
    """Decode an error response into ApiError or MalformedErrorBody.

    RULES:
    - A JSON object body becomes ApiError(message, code)
    - code falls back to the HTTP status when the body has none
    - Any other body becomes MalformedErrorBody with the raw text
    """
    text = resp.text
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("Malformed error body (status %d)", resp.status_code)
        return MalformedErrorBody(resp.status_code, text)

    if not isinstance(data, dict):
        logger.warning("Malformed error body (status %d)", resp.status_code)
        return MalformedErrorBody(resp.status_code, text)

    code = data.get("code")
    if not isinstance(code, int) or isinstance(code, bool):
        code = resp.status_code
    message = data.get("message")
    return ApiError(
        message="" if message is None else str(message),
        code=code,
        status_code=resp.status_code,
    )
