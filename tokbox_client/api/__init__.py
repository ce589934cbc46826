"""TokBox REST API package — HTTP interface to sessions and archives.

WHY: Session creation and archive recording are REST calls that all
share one auth scheme and one error format. This package keeps that
request path in one place.

HOW: TokboxClient wraps a synchronous httpx.Client and exposes one
method per operation. Response data is parsed into the dataclasses in
models.py.

RULES:
- All HTTP calls go through TokboxClient.execute (no direct httpx usage elsewhere)
- Authentication is a fresh JWT per request in the X-OPENTOK-AUTH header
"""

from tokbox_client.api.client import TokboxClient
from tokbox_client.api.models import Archive, ArchiveList, ArchiveMode, OutputMode, Session

__all__ = [
    "Archive",
    "ArchiveList",
    "ArchiveMode",
    "OutputMode",
    "Session",
    "TokboxClient",
]
