"""Joplin Web Clipper API client implementation."""

import json
import logging
import os
from typing import Dict, Any, Optional

import requests

from .config import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS
from .models import Note, Resource

# Fields requested when listing notebook contents
NOTE_LIST_FIELDS = "id,title,body"


logger = logging.getLogger(__name__)


class JoplinAPIError(Exception):
    """Raised when a Joplin API call fails or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class JoplinClient:
    """Client for the Joplin data API exposed by the desktop app."""

    def __init__(self, token: str, base_url: str = DEFAULT_API_BASE_URL,
                 timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS):
        """
        Initialize Joplin client.

        Args:
            token: Web Clipper authorization token
            base_url: Base address of the Joplin API
            timeout: Timeout in seconds applied to every request
        """
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()

    def _url(self, path: str) -> str:
        if not path.startswith('/'):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def _params(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = {}
        if self.token:
            params['token'] = self.token
        if extra:
            params.update(extra)
        return params

    def _request(self, method: str, path: str, action: str,
                 params: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        """Send a request and wrap transport errors."""
        try:
            return self.session.request(
                method,
                self._url(path),
                params=self._params(params),
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            raise JoplinAPIError(f"{action}: {e}") from e

    @staticmethod
    def _check(response: requests.Response, action: str):
        if response.status_code >= 300:
            raise JoplinAPIError(
                f"{action} failed: status={response.status_code} body={response.text}",
                status_code=response.status_code,
                body=response.text
            )

    @staticmethod
    def _json(response: requests.Response, action: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise JoplinAPIError(f"decode {action}: {e}", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise JoplinAPIError(f"decode {action}: expected an object", status_code=response.status_code)
        return data

    def ping(self):
        """Check that the Joplin API answers."""
        response = self._request('GET', '/ping', 'ping')
        if response.status_code != 200:
            raise JoplinAPIError(
                f"ping failed: status={response.status_code} body={response.text}",
                status_code=response.status_code,
                body=response.text
            )

    def notes_by_title(self, notebook_id: str) -> Dict[str, Note]:
        """
        Fetch every note in a notebook, keyed by title.

        Later notes overwrite earlier ones when titles collide.

        Args:
            notebook_id: Joplin folder ID

        Returns:
            Mapping of note title to Note

        Raises:
            JoplinAPIError: If any page cannot be fetched or decoded
        """
        notes: Dict[str, Note] = {}
        page = 1

        while True:
            action = f"fetch notes page {page}"
            response = self._request(
                'GET',
                f"/folders/{notebook_id}/notes",
                action,
                params={'page': page, 'fields': NOTE_LIST_FIELDS}
            )
            self._check(response, action)
            payload = self._json(response, f"notes page {page}")

            for item in payload.get('items') or []:
                note = Note.from_api(item)
                notes[note.title] = note

            if not payload.get('has_more'):
                break
            page += 1

        logger.debug(f"Fetched {len(notes)} notes from notebook {notebook_id} in {page} page(s)")
        return notes

    def upload_resource(self, path: str, title: str) -> Resource:
        """
        Upload a file as a new resource.

        Args:
            path: Path of the file to upload
            title: Title given to the resource

        Returns:
            The created Resource
        """
        props = json.dumps({'title': title})
        with open(path, 'rb') as f:
            response = self._request(
                'POST',
                '/resources',
                'upload resource',
                files={'data': (os.path.basename(path), f)},
                data={'props': props}
            )

        self._check(response, 'upload resource')
        resource = Resource.from_api(self._json(response, 'resource'))
        if not resource.id:
            raise JoplinAPIError("upload resource returned no id", status_code=response.status_code)

        logger.debug(f"Uploaded {path} as resource {resource.id}")
        return resource

    def delete_resource(self, resource_id: str):
        """
        Delete a resource by ID.

        A resource that no longer exists counts as deleted. Notes are not touched.
        """
        response = self._request('DELETE', f"/resources/{resource_id}", 'delete resource')

        if response.status_code == 404:
            logger.debug(f"Resource {resource_id} already gone")
            return

        self._check(response, 'delete resource')

    def create_note(self, notebook_id: str, title: str, body: str) -> Note:
        """Create a new note in the given notebook."""
        payload = {
            'title': title,
            'parent_id': notebook_id,
            'body': body
        }
        response = self._request('POST', '/notes', 'post note', json=payload)
        self._check(response, 'create note')

        data = self._json(response, 'note')
        return Note(id=data.get('id', ''), title=data.get('title', title), body=body)

    def update_note(self, note_id: str, notebook_id: str, title: str, body: str):
        """Replace title, parent notebook and body of an existing note."""
        payload = {
            'title': title,
            'parent_id': notebook_id,
            'body': body
        }
        response = self._request('PUT', f"/notes/{note_id}", 'put note', json=payload)
        self._check(response, 'update note')
