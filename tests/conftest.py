"""Test configuration and fixtures for pytest."""

import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict
from unittest.mock import Mock, MagicMock
import pytest

# Add src to path so the package imports without installation
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from joplin_sync.models import FileRecord, Note, Resource


@pytest.fixture
def temp_sync_dir():
    """Create a temporary directory tree with a few nested folders."""
    with tempfile.TemporaryDirectory() as tmpdir:
        sync_path = Path(tmpdir)

        (sync_path / "maps").mkdir()
        (sync_path / "maps" / "archive").mkdir()
        (sync_path / ".trash").mkdir()

        yield sync_path


@pytest.fixture
def create_test_files(temp_sync_dir):
    """Helper fixture to create test files in the sync directory."""
    def _create_files(folder_path: str = "", files: Dict[str, str] = None):
        target_dir = temp_sync_dir / folder_path
        created_files = []

        for filename, content in (files or {}).items():
            file_path = target_dir / filename
            file_path.write_text(content, encoding='utf-8')
            created_files.append(file_path)

        return created_files

    return _create_files


@pytest.fixture
def mock_config():
    """Create a mock configuration object."""
    config = Mock()
    config.joplin_token = "test-token"
    config.api_base_url = "http://localhost:41184"
    config.request_timeout_seconds = 15
    config.notebook_id = "notebook-1"
    config.directory = "/sync"
    config.file_extension = ".smmx"
    config.exclude_folders = []
    config.log_level = "INFO"
    return config


@pytest.fixture
def mock_joplin_client():
    """Mock Joplin client whose uploads return a fresh resource."""
    client = Mock()
    client.upload_resource = MagicMock(return_value=Resource(id="new-res", title="map.smmx"))
    client.create_note = MagicMock(return_value=Note(id="new-note", title="map.smmx"))
    client.update_note = MagicMock(return_value=None)
    client.delete_resource = MagicMock(return_value=None)
    client.notes_by_title = MagicMock(return_value={})
    client.ping = MagicMock(return_value=None)
    return client


@pytest.fixture
def make_record():
    """Build FileRecord objects without touching the disk."""
    def _make(name: str = "map.smmx", path: str = None):
        return FileRecord(
            path=path or f"/sync/{name}",
            name=name,
            relative_path=name,
            size=42,
            created_at=datetime(2024, 3, 1, 12, 30, 0, 250000, tzinfo=timezone.utc)
        )
    return _make
