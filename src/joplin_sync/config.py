"""Configuration management for the Joplin file sync."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List
from dataclasses import dataclass, field

# Default configuration constants
DEFAULT_API_BASE_URL = "http://localhost:41184"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 15
DEFAULT_FILE_EXTENSION = ".smmx"
DEFAULT_LOG_LEVEL = "INFO"

CONFIG_PATH_ENV_VAR = "JOPLIN_SYNC_CONFIG"
TOKEN_ENV_VAR = "JOPLIN_TOKEN"


def normalize_extension(extension: str) -> str:
    """Return the extension lowercased and with a leading dot."""
    extension = extension.strip().lower()
    if extension and not extension.startswith('.'):
        extension = f".{extension}"
    return extension


@dataclass
class Config:
    """Application configuration."""

    # Environment variables (will be loaded in __post_init__)
    joplin_token: str = ""

    # Joplin API settings
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    # Sync settings (notebook and directory normally come from the command line)
    notebook_id: str = ""
    directory: str = ""
    file_extension: str = DEFAULT_FILE_EXTENSION
    exclude_folders: List[str] = field(default_factory=list)

    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Initialize configuration from environment and config files after dataclass init."""
        self.joplin_token = os.environ.get(TOKEN_ENV_VAR, '').strip()

        if not self.joplin_token:
            raise ValueError(f"{TOKEN_ENV_VAR} environment variable is required")

        config_path = self.settings_path()
        if config_path.exists():
            with open(config_path, 'r') as f:
                settings = yaml.safe_load(f)
                self._load_settings(settings or {})

        self.file_extension = normalize_extension(self.file_extension)

    @staticmethod
    def settings_path() -> Path:
        """Location of the YAML settings file, overridable from the environment."""
        override = os.environ.get(CONFIG_PATH_ENV_VAR, '')
        if override:
            return Path(override)
        return Path(__file__).parent.parent.parent / 'config' / 'settings.yaml'

    def _load_settings(self, settings: Dict[str, Any]):
        """Load settings from YAML configuration."""
        if 'joplin' in settings:
            joplin = settings['joplin'] or {}
            self.api_base_url = joplin.get('api_base_url', self.api_base_url)
            self.request_timeout_seconds = joplin.get('request_timeout_seconds', self.request_timeout_seconds)

        if 'sync' in settings:
            sync = settings['sync'] or {}
            self.file_extension = sync.get('file_extension', self.file_extension)
            self.exclude_folders = sync.get('exclude_folders', self.exclude_folders) or []

        if 'logging' in settings:
            self.log_level = (settings['logging'] or {}).get('level', self.log_level)

    def apply_arguments(self, notebook_id: str, directory: str, file_extension: str = None):
        """Override settings with values given on the command line."""
        self.notebook_id = notebook_id
        self.directory = directory
        if file_extension:
            self.file_extension = normalize_extension(file_extension)
