"""Configuration defaults, credentials, and .env loading.

WHY: The client needs an API key and secret for every call, plus a
handful of platform constants (base URL, API version, token sentinel,
auth header name). Keeping them as immutable fields on a config object,
rather than package-level globals, lets tests point a client at a mock
endpoint without patching module state.

HOW: python-dotenv loads the .env file on import. Module-level defaults
are read from the environment once. ClientConfig and Credentials are
frozen dataclasses built by load_config() / load_credentials().

RULES:
- API key and secret come from .env or the environment, never hardcoded
- Explicit constructor arguments always win over environment values
- Missing credentials raise ValueError with a clear message
- Credentials never show the secret in their repr
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Platform defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://api.opentok.com"
DEFAULT_API_VERSION = "v2"
DEFAULT_TOKEN_SENTINEL = "T1=="
DEFAULT_AUTH_HEADER = "X-OPENTOK-AUTH"

DEFAULT_BEARER_TTL_SECONDS = 2 * 24 * 60 * 60  # 48 hours
DEFAULT_CLIENT_TOKEN_TTL_SECONDS = 60 * 60  # 1 hour


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw)) from None


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}".format(name, raw)) from None


@dataclass(frozen=True)
class Credentials:
    """Project API key and shared secret.

    The secret is excluded from the repr so credentials can be logged
    or printed in tracebacks without leaking it.
    """

    key: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable platform settings injected into a TokboxClient.

    RULES:
    - base_url has no trailing slash (normalized in __post_init__)
    - timeout_seconds None means no library-imposed timeout
    - bearer_ttl_seconds defaults to 48h; older revisions used 180s
    """

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    token_sentinel: str = DEFAULT_TOKEN_SENTINEL
    auth_header: str = DEFAULT_AUTH_HEADER
    bearer_ttl_seconds: int = DEFAULT_BEARER_TTL_SECONDS
    client_token_ttl_seconds: int = DEFAULT_CLIENT_TOKEN_TTL_SECONDS
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.bearer_ttl_seconds <= 0:
            raise ValueError("bearer_ttl_seconds must be positive")
        if self.client_token_ttl_seconds <= 0:
            raise ValueError("client_token_ttl_seconds must be positive")

    def project_url(self, key: str) -> str:
        """Return the versioned project root, e.g. https://api.opentok.com/v2/project/123."""
        return "{}/{}/project/{}".format(self.base_url, self.api_version, key)


def load_config(base_url: str | None = None) -> ClientConfig:
    """Build a ClientConfig from environment variables.

    WHY: CLI users and deployments configure the endpoint and token
    lifetime through .env, while library callers may pass a ClientConfig
    directly.

    HOW: Reads TOKBOX_BASE_URL, TOKBOX_API_VERSION, TOKBOX_BEARER_TTL
    and TOKBOX_TIMEOUT. Unset values fall back to the defaults above.

    RULES:
    - An explicit base_url overrides TOKBOX_BASE_URL
    - Non-numeric TTL/timeout values raise ValueError
    """
    return ClientConfig(
        base_url=base_url or os.getenv("TOKBOX_BASE_URL", DEFAULT_BASE_URL),
        api_version=os.getenv("TOKBOX_API_VERSION", DEFAULT_API_VERSION),
        bearer_ttl_seconds=_env_int("TOKBOX_BEARER_TTL", DEFAULT_BEARER_TTL_SECONDS),
        timeout_seconds=_env_float("TOKBOX_TIMEOUT"),
    )


def load_credentials(key: str | None = None, secret: str | None = None) -> Credentials:
    """Load the TokBox API key and secret.

    WHY: Every REST call and every client token needs both values.
    Loading them from the environment (via .env) keeps them out of
    source code.

    HOW: Uses the explicit arguments when given, otherwise reads
    TOKBOX_API_KEY and TOKBOX_API_SECRET from os.environ.

    RULES:
    - Raises ValueError if either value is missing or empty
    - Never returns a default/placeholder value
    """
    key = (key or os.getenv("TOKBOX_API_KEY", "")).strip()
    secret = (secret or os.getenv("TOKBOX_API_SECRET", "")).strip()
    if not key:
        raise ValueError(
            "TokBox API key not configured. "
            "Add TOKBOX_API_KEY to the .env file or pass --key."
        )
    if not secret:
        raise ValueError(
            "TokBox API secret not configured. "
            "Add TOKBOX_API_SECRET to the .env file or pass --secret."
        )
    return Credentials(key=key, secret=secret)
