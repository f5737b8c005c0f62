#!/usr/bin/env python3
"""Main entry point for the Joplin file sync."""

import argparse
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from .config import Config, DEFAULT_FILE_EXTENSION
from .file_system import FileSystemClient
from .joplin_client import JoplinClient
from .pipeline import SyncPipeline
from .sync_processor import SyncProcessor


def setup_logging(level: str = "INFO"):
    """
    Configure logging for the application.

    Returns:
        Logger instance for the main module
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )
    return logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Mirror local files into a Joplin notebook as notes with attachments."
    )
    parser.add_argument("--notebook_id", required=True, help="Joplin notebook (folder) ID")
    parser.add_argument("--directory", required=True, help="Directory to scan for files")
    parser.add_argument(
        "--file_extension",
        default=None,
        help=f"File extension filter (default from settings, else {DEFAULT_FILE_EXTENSION})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for syncing a directory into Joplin."""
    args = parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    logger = setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        config = Config()
        config.apply_arguments(args.notebook_id, args.directory, args.file_extension)
        if not args.verbose:
            setup_logging(config.log_level)

        logger.info(f"Syncing *{config.file_extension} files from {config.directory} "
                    f"into notebook {config.notebook_id}")

        file_client = FileSystemClient(directory=config.directory)

        joplin_client = JoplinClient(
            token=config.joplin_token,
            base_url=config.api_base_url,
            timeout=config.request_timeout_seconds
        )

        pipeline = SyncPipeline(joplin_client=joplin_client, config=config)
        processor = SyncProcessor(pipeline=pipeline, file_client=file_client, config=config)
        summary = processor.sync_directory()

        logger.info(f"Successfully synced {summary.added + summary.updated} of {summary.total} files")

    except Exception as e:
        logger.error(f"Fatal error in main: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
