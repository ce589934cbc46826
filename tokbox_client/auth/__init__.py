"""Token signing for the TokBox REST API and client SDKs.

WHY: Two independent credentials are needed — a JWT for server calls
and a legacy HMAC token for end-user clients. This package keeps both
next to the signing primitives they share.

RULES:
- signer.py has no knowledge of token layouts
- tokens.py owns the payload formats and lifetimes
"""

from tokbox_client.auth.signer import hmac_sign, sign_claims
from tokbox_client.auth.tokens import (
    ClaimsToken,
    Role,
    build_bearer_token,
    build_client_token,
    new_claims,
)

__all__ = [
    "ClaimsToken",
    "Role",
    "build_bearer_token",
    "build_client_token",
    "hmac_sign",
    "new_claims",
    "sign_claims",
]
