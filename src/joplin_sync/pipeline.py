"""Per-file sync pipeline: upload, upsert, clean up."""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .joplin_client import JoplinAPIError
from .models import FileRecord, Note, Resource, SyncResult
from .utils import build_note_body, extract_resource_ids


logger = logging.getLogger(__name__)


class SyncPipeline:
    """Mirrors one local file into a Joplin note with the file attached."""

    def __init__(self, joplin_client, config):
        """
        Initialize the sync pipeline.

        Args:
            joplin_client: Client for Joplin API calls
            config: Configuration object
        """
        self.joplin = joplin_client
        self.config = config

    def sync_file(self, record: FileRecord, notes_by_title: Dict[str, Note]) -> Tuple[SyncResult, int]:
        """
        Sync a single file through all pipeline stages.

        The index is updated in place when a note is written.

        Args:
            record: File to sync
            notes_by_title: Existing notes of the target notebook keyed by title

        Returns:
            Tuple of (result, number of stale resources deleted)
        """
        title = record.name
        existing = notes_by_title.get(title)

        # Read the old references before the body gets replaced
        old_resource_ids = extract_resource_ids(existing.body) if existing else []

        resource = self._upload(record)
        if resource is None:
            return SyncResult.UPLOAD_FAILED, 0

        body = build_note_body(
            created_at=record.created_at,
            uploaded_at=datetime.now().astimezone(),
            file_path=record.path,
            title=title,
            resource_id=resource.id
        )

        if existing is None:
            note_id = self._create(record, body)
            if note_id is None:
                return SyncResult.NOTE_FAILED, 0
            # Keep the index current for later files with the same name
            notes_by_title[title] = Note(id=note_id, title=title, body=body)
            return SyncResult.ADDED, 0

        if not self._update(record, existing, body):
            return SyncResult.NOTE_FAILED, 0

        notes_by_title[title] = Note(id=existing.id, title=title, body=body)
        cleaned = self._cleanup(record, old_resource_ids, resource.id)
        return SyncResult.UPDATED, cleaned

    def _upload(self, record: FileRecord) -> Optional[Resource]:
        try:
            return self.joplin.upload_resource(record.path, record.name)
        except (JoplinAPIError, OSError) as e:
            logger.error(f"Error uploading resource for {record.path}: {e}")
            return None

    def _create(self, record: FileRecord, body: str) -> Optional[str]:
        try:
            note = self.joplin.create_note(self.config.notebook_id, record.name, body)
        except JoplinAPIError as e:
            logger.error(f"Error creating note for {record.path}: {e}")
            return None
        return note.id

    def _update(self, record: FileRecord, existing: Note, body: str) -> bool:
        try:
            self.joplin.update_note(existing.id, self.config.notebook_id, record.name, body)
        except JoplinAPIError as e:
            logger.error(f"Error updating note for {record.path}: {e}")
            return False
        return True

    def _cleanup(self, record: FileRecord, old_resource_ids: List[str], current_id: str) -> int:
        """Delete previously referenced resources other than the current one."""
        cleaned = 0
        for resource_id in old_resource_ids:
            if resource_id == current_id:
                continue
            try:
                self.joplin.delete_resource(resource_id)
            except JoplinAPIError as e:
                logger.warning(f"Failed to delete old resource {resource_id} for {record.path}: {e}")
                continue

            logger.info(f"Cleaned old resource {resource_id} for {record.path}")
            cleaned += 1
        return cleaned
