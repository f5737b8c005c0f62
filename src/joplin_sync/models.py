"""Data types shared by the sync components."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any


@dataclass
class Note:
    """A Joplin note as returned by the notes listing."""

    id: str
    title: str
    body: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Note":
        return cls(
            id=data.get('id', ''),
            title=data.get('title', ''),
            body=data.get('body') or ''
        )


@dataclass
class Resource:
    """A Joplin resource (attachment)."""

    id: str
    title: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Resource":
        return cls(id=data.get('id', ''), title=data.get('title', ''))


@dataclass
class FileRecord:
    """A local file selected for syncing. Never persisted."""

    path: str
    name: str
    relative_path: str
    size: int
    created_at: datetime


class SyncResult(Enum):
    """Outcome of syncing a single file."""

    ADDED = "added"
    UPDATED = "updated"
    UPLOAD_FAILED = "upload_failed"
    NOTE_FAILED = "note_failed"


@dataclass
class SyncSummary:
    """Counters collected over one sync run."""

    counts: Dict[SyncResult, int] = field(default_factory=lambda: {result: 0 for result in SyncResult})
    cleaned_resources: int = 0

    def record(self, result: SyncResult, cleaned: int = 0):
        self.counts[result] += 1
        self.cleaned_resources += cleaned

    @property
    def added(self) -> int:
        return self.counts[SyncResult.ADDED]

    @property
    def updated(self) -> int:
        return self.counts[SyncResult.UPDATED]

    @property
    def failed(self) -> int:
        return self.counts[SyncResult.UPLOAD_FAILED] + self.counts[SyncResult.NOTE_FAILED]

    @property
    def total(self) -> int:
        return sum(self.counts.values())
