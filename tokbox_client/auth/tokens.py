"""Builders for the two TokBox authentication token schemes.

WHY: TokBox uses two unrelated credentials. End-user clients join a
session with a legacy "T1==" token carrying per-connection claims
(role, nonce, expiry). Server calls to the REST API carry a short-lived
JWT proving the project identity. Their payloads and lifetimes differ,
so they are sibling functions over the shared signer rather than one
configurable builder.

HOW: build_client_token() assembles the fixed-format payload, signs it
with hmac_sign() and base64-encodes the result behind the sentinel.
build_bearer_token() creates fresh ClaimsToken values and signs them
with sign_claims().

RULES:
- The legacy format is a compatibility contract and must stay byte-exact:
  sentinel + base64("partner_id=<key>&sig=<hex>:<payload>")
- Client tokens are valid for 1 hour by default
- Bearer tokens get a new jti (uuid4) and iat on every call; never cached
- Randomness comes from secrets/uuid4, both safe under concurrent use
"""

from __future__ import annotations

import base64
import enum
import secrets
import time
import uuid
from dataclasses import dataclass
from typing import Dict

from tokbox_client.auth.signer import hmac_sign, sign_claims
from tokbox_client.config import (
    DEFAULT_BEARER_TTL_SECONDS,
    DEFAULT_CLIENT_TOKEN_TTL_SECONDS,
    DEFAULT_TOKEN_SENTINEL,
)


class Role(str, enum.Enum):
    """Connection roles a client token can grant."""

    PUBLISHER = "publisher"
    SUBSCRIBER = "subscriber"
    MODERATOR = "moderator"


# Nonces are drawn from [0, NONCE_UPPER_BOUND)
NONCE_UPPER_BOUND = 999999


@dataclass(frozen=True)
class ClaimsToken:
    """Claims embedded in a bearer token.

    RULES:
    - issuer is the project API key
    - issued_at/expires_at are integer UTC epoch seconds
    - token_id is a uuid4 string, unique per request
    """

    issuer: str
    issued_at: int
    expires_at: int
    token_id: str

    def to_claims(self) -> Dict[str, object]:
        """Return the registered JWT claim names for signing."""
        return {
            "iss": self.issuer,
            "iat": self.issued_at,
            "exp": self.expires_at,
            "jti": self.token_id,
        }


def new_claims(
    key: str,
    *,
    ttl_seconds: int = DEFAULT_BEARER_TTL_SECONDS,
    now: int | None = None,
) -> ClaimsToken:
    """Create a fresh ClaimsToken for the given project key."""
    issued_at = int(time.time()) if now is None else now
    return ClaimsToken(
        issuer=key,
        issued_at=issued_at,
        expires_at=issued_at + ttl_seconds,
        token_id=str(uuid.uuid4()),
    )


def build_bearer_token(
    key: str,
    secret: str,
    *,
    ttl_seconds: int = DEFAULT_BEARER_TTL_SECONDS,
) -> str:
    """Build a signed JWT for the REST API auth header.

    WHY: Every management call must prove the project identity. A new
    token per request means a token never needs invalidation logic.

    HOW: new_claims() → ClaimsToken.to_claims() → sign_claims().

    RULES:
    - Two calls never return the same string, even within one second
    - Raises SigningError only if signing fails
    """
    return sign_claims(new_claims(key, ttl_seconds=ttl_seconds).to_claims(), secret)


def build_client_token(
    session_id: str,
    key: str,
    secret: str,
    *,
    sentinel: str = DEFAULT_TOKEN_SENTINEL,
    ttl_seconds: int = DEFAULT_CLIENT_TOKEN_TTL_SECONDS,
    now: int | None = None,
    nonce: int | None = None,
) -> str:
    """Build a legacy client token for joining session_id as a publisher.

    WHY: Browser and mobile SDKs authenticate a connection with this
    token. Its textual layout is fixed by the older client SDKs.

    HOW: Builds the payload string, signs it with HMAC-SHA1, prefixes
    the partner id and signature, base64-encodes the whole thing and
    prepends the sentinel.

    RULES:
    - expire_time = create_time + ttl_seconds (1 hour by default)
    - nonce is in [0, 999999)
    - connection_data is the literal "None", role is always publisher
    - now and nonce are injectable only so tests can pin the output

    Args:
        session_id: The session the client will connect to.
        key: Project API key (partner id).
        secret: Project API secret used for the HMAC.
        sentinel: Literal prefix, "T1==" for the platform's SDKs.
        ttl_seconds: Token validity window.
        now: Creation time in epoch seconds (defaults to the current time).
        nonce: Random nonce (defaults to a fresh secrets.randbelow value).

    Returns:
        The sentinel-prefixed base64 token string.
    """
    create_time = int(time.time()) if now is None else now
    expire_time = create_time + ttl_seconds
    if nonce is None:
        nonce = secrets.randbelow(NONCE_UPPER_BOUND)

    payload = (
        "create_time={}&session_id={}&nonce={}&expire_time={}"
        "&connection_data=None&role={}"
    ).format(create_time, session_id, nonce, expire_time, Role.PUBLISHER.value)

    signature = hmac_sign(payload, secret)
    raw = "partner_id={}&sig={}:{}".format(key, signature, payload)
    return sentinel + base64.b64encode(raw.encode("utf-8")).decode("ascii")
