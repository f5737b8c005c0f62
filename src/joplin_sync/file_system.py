"""Local file system operations for file syncing."""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List
import logging

from .models import FileRecord

NANOSECONDS_PER_SECOND = 1_000_000_000

# Only POSIX stat results carry access, modify and change times with the usual meaning
EARLIEST_TIME_PLATFORM = os.name == 'posix'


logger = logging.getLogger(__name__)


def file_created_at(stat_result: os.stat_result) -> datetime:
    """
    Approximate the creation time of a file.

    On POSIX this is the earliest of access, modification and change time.
    Elsewhere it falls back to the modification time.

    Args:
        stat_result: Result of os.stat for the file

    Returns:
        Timezone-aware datetime in local time
    """
    timestamp_ns = stat_result.st_mtime_ns

    if EARLIEST_TIME_PLATFORM:
        timestamp_ns = min(stat_result.st_atime_ns, stat_result.st_mtime_ns, stat_result.st_ctime_ns)

    seconds, nanos = divmod(timestamp_ns, NANOSECONDS_PER_SECOND)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=nanos // 1000)
    return moment.astimezone()


class FileSystemClient:
    """Client for walking the directory being synced."""

    def __init__(self, directory: str):
        """
        Initialize file system client.

        Args:
            directory: Path to the directory to scan
        """
        self.directory = Path(directory)
        if not self.directory.exists():
            raise ValueError(f"Directory does not exist: {directory}")
        if not self.directory.is_dir():
            raise ValueError(f"Path is not a directory: {directory}")

        logger.info(f"Initialized file system client for directory: {self.directory}")

    def list_files(self, file_extension: str, exclude_folders: List[str] = None) -> List[FileRecord]:
        """
        Recursively list files whose extension matches, ignoring case.

        Args:
            file_extension: Extension including the leading dot (e.g. ".smmx")
            exclude_folders: Folder names that are not descended into

        Returns:
            List of FileRecord in walk order
        """
        wanted = file_extension.lower()
        excluded = set(exclude_folders or [])
        files = []

        for root, dirs, names in os.walk(self.directory, onerror=self._walk_error):
            # Prune in place so os.walk skips excluded folders; sort for a stable order
            dirs[:] = sorted(d for d in dirs if d not in excluded)

            for name in sorted(names):
                if os.path.splitext(name)[1].lower() != wanted:
                    continue

                file_path = Path(root) / name
                try:
                    stat = file_path.stat()
                except OSError as e:
                    logger.warning(f"Cannot stat {file_path}: {e}")
                    continue

                if not file_path.is_file():
                    continue

                files.append(FileRecord(
                    path=str(file_path),
                    name=name,
                    relative_path=str(file_path.relative_to(self.directory)),
                    size=stat.st_size,
                    created_at=file_created_at(stat)
                ))

        logger.info(f"Found {len(files)} {wanted} files in {self.directory}")
        return files

    @staticmethod
    def _walk_error(error: OSError):
        logger.warning(f"Walk error on {error.filename}: {error}")
