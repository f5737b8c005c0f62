"""Utility functions for building and reading note bodies."""

import json
from datetime import datetime, timezone
from typing import List

# Constants
RESOURCE_LINK_PREFIX = "](:/"  # Joplin markdown link target for resources
RESOURCE_LINK_SUFFIX = ")"


def extract_resource_ids(body: str) -> List[str]:
    """
    Collect resource IDs referenced by links like [name](:/RESOURCE_ID).

    Args:
        body: Note body text

    Returns:
        List of IDs in the order they appear
    """
    ids = []
    start = 0

    while True:
        index = body.find(RESOURCE_LINK_PREFIX, start)
        if index == -1:
            break

        id_start = index + len(RESOURCE_LINK_PREFIX)
        id_end = body.find(RESOURCE_LINK_SUFFIX, id_start)
        if id_end == -1:
            break

        resource_id = body[id_start:id_end]
        if resource_id:
            ids.append(resource_id)

        start = id_end

    return ids


def format_timestamp(moment: datetime) -> str:
    """
    Format a timestamp as "2006-01-02 15:04:05.000 -0700".

    Naive datetimes are taken as local time.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    millis = moment.microsecond // 1000
    return f"{moment.strftime('%Y-%m-%d %H:%M:%S')}.{millis:03d} {moment.strftime('%z')}"


def format_utc(moment: datetime) -> str:
    """Format a timestamp as RFC 3339 in UTC, e.g. "2024-03-01T12:30:00.25Z"."""
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime('%Y-%m-%dT%H:%M:%S')
    if moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip('0')
    return f"{text}Z"


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def build_note_body(created_at: datetime, uploaded_at: datetime, file_path: str,
                    title: str, resource_id: str) -> str:
    """
    Build the body of a synced note: metadata lines followed by the attachment link.

    Args:
        created_at: Derived creation time of the file
        uploaded_at: Time of this upload
        file_path: Path of the file as found while walking
        title: Note title, also used as link label
        resource_id: ID of the uploaded resource

    Returns:
        str: Note body
    """
    return (
        f"created_at: {_quote(format_timestamp(created_at))}\n"
        f"upload_at: {_quote(format_timestamp(uploaded_at))}\n"
        f"file_path: {_quote(file_path)}\n"
        f"\n"
        f"[{title}](:/{resource_id})\n"
    )
