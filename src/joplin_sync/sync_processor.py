"""Sync processor for batch operations over a directory."""

import logging

from .joplin_client import JoplinAPIError
from .models import SyncResult, SyncSummary
from .utils import format_utc


logger = logging.getLogger(__name__)


class SyncProcessor:
    """Orchestrates syncing every matching file in the directory."""

    def __init__(self, pipeline, file_client, config):
        self.pipeline = pipeline
        self.file_client = file_client
        self.config = config

    def sync_directory(self) -> SyncSummary:
        """
        Sync all matching files into the configured notebook.

        Returns:
            SyncSummary with per-result counts

        Raises:
            JoplinAPIError: If the notebook's notes cannot be listed
        """
        joplin = self.pipeline.joplin
        notebook_id = self.config.notebook_id

        try:
            joplin.ping()
        except JoplinAPIError as e:
            logger.warning(f"Joplin /ping failed: {e} (continuing anyway)")

        notes_by_title = joplin.notes_by_title(notebook_id)
        logger.info(f"Existing notes in notebook {notebook_id}: {len(notes_by_title)}")

        files = self.file_client.list_files(
            file_extension=self.config.file_extension,
            exclude_folders=self.config.exclude_folders
        )

        summary = SyncSummary()
        if not files:
            logger.info("No files found to sync")
            return summary

        for record in files:
            logger.debug(f"Syncing {record.relative_path} ({record.size} bytes)")
            result, cleaned = self.pipeline.sync_file(record, notes_by_title)
            summary.record(result, cleaned)

            # Upload failures were already reported by the pipeline
            if result is not SyncResult.UPLOAD_FAILED:
                logger.info(f"{record.path} | created_at_utc={format_utc(record.created_at)} | status={result.value}")

        logger.info(
            f"Sync complete. {summary.total} files: {summary.added} added, "
            f"{summary.updated} updated, {summary.failed} failed, "
            f"{summary.cleaned_resources} old resources cleaned"
        )
        return summary
