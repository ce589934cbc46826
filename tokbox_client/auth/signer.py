"""Signing primitives shared by both token schemes.

WHY: The legacy client token is authenticated with an HMAC-SHA1 hex
digest, while the REST API expects an HS256 JWT. Both are keyed by the
project secret, so they live together behind one small module.

HOW: hmac_sign() uses the stdlib hmac/hashlib modules. sign_claims()
delegates to PyJWT and turns any encoding failure into SigningError.

RULES:
- hmac_sign output is lowercase hex and fully deterministic
- sign_claims always uses HS256
- No I/O, no shared state
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, Dict

import jwt

from tokbox_client.errors import SigningError

CLAIMS_ALGORITHM = "HS256"


def hmac_sign(payload: str, secret: str) -> str:
    """Return the HMAC-SHA1 hex digest of payload keyed by secret."""
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()


def sign_claims(claims: Dict[str, Any], secret: str) -> str:
    """Encode and sign a claims mapping as a compact HS256 JWT.

    Raises:
        SigningError: if PyJWT cannot encode the claims (for example a
            value that is not JSON serializable).
    """
    try:
        token = jwt.encode(claims, secret, algorithm=CLAIMS_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        raise SigningError("failed to sign claims: {}".format(exc)) from exc
    return token
