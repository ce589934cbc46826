"""TokBox REST API request options and response dataclasses.

WHY: The REST API returns flat JSON objects for sessions and archives.
Typed dataclasses make these structures explicit and catch field
mismatches at the decoding boundary instead of deep in caller code.

HOW: Each dataclass maps 1:1 to a TokBox JSON object. from_dict()
factories parse raw responses; to_dict() renders them back to plain
dicts for JSON output. The str enums hold the option values the
service accepts in request bodies.

RULES:
- Session.created_at is kept as the raw "created_dt" string the API sends
- Archive fields the service omits default to empty/zero values
- Archive.project_id reads "projectID", falling back to "projectId"
- Other Archive keys are accepted in both camelCase and snake_case
- from_dict raises KeyError on a missing required field
- from_dict raises TypeError when data is not a JSON object
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _require_object(data: Any, name: str) -> None:
    if not isinstance(data, dict):
        raise TypeError("expected a JSON object for {}, got {}".format(name, type(data).__name__))


class ArchiveMode(str, enum.Enum):
    """Whether a session is archived automatically or on request."""

    MANUAL = "manual"
    ALWAYS = "always"


class OutputMode(str, enum.Enum):
    """Archive output layout: one composed file or one stream per participant."""

    COMPOSED = "composed"
    INDIVIDUAL = "individual"


@dataclass
class Session:
    """A session returned by POST /session/create.

    RULES:
    - session_id is required; the other fields may be absent
    - Passed to archive operations only through session_id
    """

    session_id: str
    project_id: str = ""
    created_at: Optional[str] = None
    media_server_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Session:
        _require_object(data, "Session")
        project_id = data.get("project_id")
        return cls(
            session_id=data["session_id"],
            project_id="" if project_id is None else str(project_id),
            created_at=data.get("created_dt"),
            media_server_url=data.get("media_server_url") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Archive:
    """A snapshot of an archive (recording) as reported by the platform.

    WHY: Archive status changes remotely ("started" → "stopped" →
    "uploaded", or "failed"). The client never tracks that state; each
    start/stop/list call returns a fresh snapshot.

    HOW: Fields map to the archive JSON object. created_at is a unix
    timestamp in milliseconds, duration is in seconds, size in bytes.

    RULES:
    - id is always present
    - url is only set once the archive is available for download
    - reason explains why an archive stopped or failed
    """

    id: str
    status: str = ""
    name: str = ""
    session_id: str = ""
    project_id: int = 0
    created_at: int = 0
    duration: int = 0
    size: int = 0
    has_audio: bool = False
    has_video: bool = False
    reason: str = ""
    url: Optional[str] = None
    output_mode: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Archive:
        _require_object(data, "Archive")
        project_id = data.get("projectID", data.get("projectId"))
        return cls(
            id=data["id"],
            status=data.get("status") or "",
            name=data.get("name") or "",
            session_id=data.get("sessionId", data.get("session_id")) or "",
            project_id=int(project_id or 0),
            created_at=int(data.get("createdAt", data.get("created_at")) or 0),
            duration=int(data.get("duration") or 0),
            size=int(data.get("size") or 0),
            has_audio=bool(data.get("hasAudio", data.get("has_audio", False))),
            has_video=bool(data.get("hasVideo", data.get("has_video", False))),
            reason=data.get("reason") or "",
            url=data.get("url"),
            output_mode=data.get("outputMode"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ArchiveList:
    """The {count, items} envelope returned by GET .../archive."""

    count: int
    items: List[Archive] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ArchiveList:
        _require_object(data, "ArchiveList")
        items = [Archive.from_dict(item) for item in data["items"]]
        return cls(count=int(data.get("count", len(items))), items=items)
