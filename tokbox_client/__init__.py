"""TokBox client — sessions, tokens and archives for the OpenTok REST API.

WHY: Applications that mediate video connections need to create
sessions, hand end users a join token, and start/stop recordings. This
package does that with two signing schemes and one uniform request path.

HOW: Three layers — auth (HMAC client tokens and JWT bearer tokens),
api (TokboxClient request executor and facade), and a thin CLI.

RULES:
- Credentials and config are immutable once a client is built
- Every error is a TokboxError subclass (config problems are ValueError)
"""

from tokbox_client.api import Archive, Session, TokboxClient
from tokbox_client.config import ClientConfig, Credentials
from tokbox_client.errors import (
    ApiError,
    DecodeError,
    MalformedErrorBody,
    SigningError,
    TokboxError,
    TransportError,
    UnexpectedResponseShape,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "Archive",
    "ClientConfig",
    "Credentials",
    "DecodeError",
    "MalformedErrorBody",
    "Session",
    "SigningError",
    "TokboxClient",
    "TokboxError",
    "TransportError",
    "UnexpectedResponseShape",
]
