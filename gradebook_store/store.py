"""
Document stores for the gradebook.

Every store loads and saves the *whole* document; there is no partial update.
The HTTP store speaks the GradeTracker server protocol: ``GET /api/data``
returns the document and ``POST /api/data`` replaces it, both authenticated
with an ``x-access-key`` header.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import typing as t
from pathlib import Path

import httpx

from gradebook_store.models import Snapshot

logger = logging.getLogger(__name__)

# Configuration - overridable via environment variables
DATA_FILE = os.getenv("GRADETRACKER_DATA_FILE", os.path.join("data", "database.json"))
SERVICE_URL = os.getenv("GRADETRACKER_SERVICE_URL", "")
ACCESS_KEY = os.getenv("GRADETRACKER_ACCESS_KEY", "")
HTTP_TIMEOUT = float(os.getenv("GRADETRACKER_HTTP_TIMEOUT", "30"))

EMPTY_DOCUMENT: dict[str, t.Any] = {"years": [], "classes": [], "assignments": []}


class StorageError(RuntimeError):
    """Raised when the gradebook document cannot be read or written."""


class DocumentStore(t.Protocol):
    def load(self) -> Snapshot:
        ...

    def save(self, snapshot: Snapshot) -> None:
        ...


class MemoryDocumentStore:
    """Keeps the document in memory. Used by tests and the stateless endpoints."""

    def __init__(self, document: t.Optional[dict[str, t.Any]] = None) -> None:
        self._document = copy.deepcopy(document) if document is not None else copy.deepcopy(EMPTY_DOCUMENT)
        self.save_count = 0

    @property
    def document(self) -> dict[str, t.Any]:
        return copy.deepcopy(self._document)

    def load(self) -> Snapshot:
        return Snapshot.from_dict(copy.deepcopy(self._document))

    def save(self, snapshot: Snapshot) -> None:
        self._document = snapshot.to_dict()
        self.save_count += 1


class JsonDocumentStore:
    """Stores the document as a pretty-printed JSON file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a concurrent reader sees either the old or the new
    document, never a partial one.
    """

    def __init__(self, path: t.Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Snapshot:
        if not self.path.exists():
            logger.debug("No document at %s, starting empty", self.path)
            return Snapshot.from_dict(copy.deepcopy(EMPTY_DOCUMENT))
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read database {self.path}: {e}") from e
        logger.debug("Loaded document from %s", self.path)
        return Snapshot.from_dict(data)

    def save(self, snapshot: Snapshot) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".database-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(snapshot.to_dict(), f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to save data to {self.path}: {e}") from e
        logger.debug("Saved document to %s", self.path)


class HttpDocumentStore:
    """Loads and saves the document through a GradeTracker server."""

    def __init__(
            self,
            base_url: str,
            access_key: str = "",
            timeout: float = HTTP_TIMEOUT,
            transport: t.Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.access_key = access_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"x-access-key": self.access_key},
            transport=self._transport,
        )

    def load(self) -> Snapshot:
        try:
            with self._client() as client:
                response = client.get("/api/data")
                response.raise_for_status()
            return Snapshot.from_dict(response.json())
        except httpx.TimeoutException:
            raise StorageError(f"Loading the gradebook timed out after {self.timeout} seconds")
        except httpx.HTTPStatusError as e:
            raise StorageError(f"HTTP error from gradebook server: {e.response.status_code} {e.response.text}")
        except (httpx.HTTPError, ValueError) as e:
            raise StorageError(f"Error loading gradebook from {self.base_url}: {e}") from e

    def save(self, snapshot: Snapshot) -> None:
        try:
            with self._client() as client:
                response = client.post("/api/data", json=snapshot.to_dict())
                response.raise_for_status()
        except httpx.TimeoutException:
            raise StorageError(f"Saving the gradebook timed out after {self.timeout} seconds")
        except httpx.HTTPStatusError as e:
            raise StorageError(f"HTTP error from gradebook server: {e.response.status_code} {e.response.text}")
        except httpx.HTTPError as e:
            raise StorageError(f"Error saving gradebook to {self.base_url}: {e}") from e


def get_store(data_file: t.Optional[str] = None) -> DocumentStore:
    """Returns the configured document store.

    An explicit ``data_file`` wins; otherwise ``GRADETRACKER_SERVICE_URL``
    selects the HTTP store and ``GRADETRACKER_DATA_FILE`` the JSON file store.
    """
    if data_file:
        return JsonDocumentStore(data_file)
    if SERVICE_URL:
        return HttpDocumentStore(SERVICE_URL, access_key=ACCESS_KEY)
    return JsonDocumentStore(DATA_FILE)
