"""Result records and enumerations shared across bucketfs."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import IO, Any, Optional, Union


class Visibility(str, Enum):
    """Binary access setting exposed to callers."""

    public = "public"
    private = "private"


class EntryType(str, Enum):
    file = "file"
    dir = "dir"


# Store-side records


@dataclass(frozen=True)
class ObjectSummary:
    """One object as returned by a delimiter listing."""

    key: str
    size: int
    last_modified: Union[datetime, str, None] = None


@dataclass(frozen=True)
class ListPage:
    """One page of a delimiter listing."""

    objects: list[ObjectSummary] = field(default_factory=list)
    common_prefixes: list[str] = field(default_factory=list)
    is_truncated: bool = False
    next_marker: Optional[str] = None


# Adapter-side records


@dataclass(frozen=True)
class Entry:
    """A file or directory produced by a listing."""

    type: EntryType
    path: str
    timestamp: int = 0
    size: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data = {"type": self.type.value, "path": self.path, "timestamp": self.timestamp}
        if self.type is EntryType.file:
            data["size"] = self.size
        return data


@dataclass(frozen=True)
class ObjectMetadata:
    """Normalized metadata of an existing object."""

    dirname: str
    path: str
    timestamp: int
    mimetype: Optional[str]
    size: int
    type: str = "file"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WriteResult:
    path: str
    contents: bytes
    mimetype: str
    size: int
    type: str = "file"


@dataclass(frozen=True)
class ReadResult:
    path: str
    contents: bytes


@dataclass(frozen=True)
class StreamResult:
    path: str
    stream: IO[bytes]


@dataclass(frozen=True)
class DirectoryResult:
    path: str
    type: str = "dir"


@dataclass(frozen=True)
class VisibilityResult:
    path: str
    visibility: Visibility
