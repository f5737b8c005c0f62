"""Joplin Sync - mirror local files into a Joplin notebook."""

__version__ = "0.1.0"

from .config import Config
from .file_system import FileSystemClient, file_created_at
from .joplin_client import JoplinClient, JoplinAPIError
from .models import Note, Resource, FileRecord, SyncResult, SyncSummary
from .pipeline import SyncPipeline
from .sync_processor import SyncProcessor
from .utils import extract_resource_ids, build_note_body

__all__ = [
    "Config",
    "FileSystemClient",
    "file_created_at",
    "JoplinClient",
    "JoplinAPIError",
    "Note",
    "Resource",
    "FileRecord",
    "SyncResult",
    "SyncSummary",
    "SyncPipeline",
    "SyncProcessor",
    "extract_resource_ids",
    "build_note_body"
]
