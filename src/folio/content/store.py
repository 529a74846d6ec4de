"""Content backends: local filesystem and remote blob storage behind one interface"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import requests

from folio.config import Settings
from folio.core.models import EPOCH, ContentResource
from folio.errors import NotFound, TransientUpstreamFailure


logger = logging.getLogger(__name__)

BLOB_PAGE_LIMIT = 1000


class ContentStore(ABC):
    """Resolves named resources to raw bytes."""

    @abstractmethod
    def fetch_resource_entry(self, name: str) -> ContentResource:
        """Return the resource for name; raise NotFound when absent."""

    @abstractmethod
    def list_resources(self) -> list[str]:
        """Names of all resources in this store, relative to its root."""

    def fetch_resource(self, name: str) -> bytes:
        return self.fetch_resource_entry(name).data


class LocalContentStore(ContentStore):
    """Reads resources from a directory on disk."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        path = (self.root / name).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise NotFound(name)
        return path

    def fetch_resource_entry(self, name: str) -> ContentResource:
        path = self._path(name)
        try:
            data = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise NotFound(name) from e
        return ContentResource(name=name, path=str(path), data=data)

    def list_resources(self) -> list[str]:
        """Sorted file names directly under root; root is created if missing."""
        self.root.mkdir(parents=True, exist_ok=True)
        return sorted(p.name for p in self.root.iterdir() if p.is_file())


def _uploaded_at(blob: dict[str, Any]) -> datetime:
    try:
        dt = datetime.fromisoformat(str(blob.get("uploadedAt", "")).replace("Z", "+00:00"))
    except ValueError:
        return EPOCH
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class BlobContentStore(ContentStore):
    """Reads resources from a blob store that exposes a prefix-listing HTTP API.

    Lookup prefers an object whose pathname equals prefix + name. When uploads
    carried a random suffix there is no exact match, and the most recently
    uploaded object sharing the prefix is used instead.
    """

    def __init__(
        self,
        prefix: str,
        token: str,
        api_url: str = "https://blob.vercel-storage.com",
        session: requests.Session = None,
        ):
        self.prefix = prefix.lstrip("/")
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()

    def _list(self, prefix: str) -> list[dict[str, Any]]:
        """All blob records under prefix, following pagination cursors."""
        blobs: list[dict[str, Any]] = []
        params: dict[str, Any] = {"prefix": prefix, "limit": BLOB_PAGE_LIMIT}
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        while True:
            try:
                res = self.session.get(self.api_url, params=params, headers=headers)
                res.raise_for_status()
                page = res.json()
            except (requests.RequestException, ValueError) as e:
                raise TransientUpstreamFailure(f"Blob listing failed for {prefix}: {e}") from e
            blobs.extend(page.get("blobs") or [])
            if not page.get("hasMore") or not page.get("cursor"):
                return blobs
            params["cursor"] = page["cursor"]

    def _resolve(self, name: str) -> dict[str, Any]:
        blob_path = f"{self.prefix}{name}"
        blobs = self._list(blob_path)
        for blob in blobs:
            if blob.get("pathname") == blob_path:
                return blob
        if not blobs:
            raise NotFound(blob_path)
        newest = max(blobs, key=_uploaded_at)
        logger.warning("No exact blob for %s; using newest upload %s", blob_path, newest.get("pathname"))
        return newest

    def fetch_resource_entry(self, name: str) -> ContentResource:
        blob = self._resolve(name)
        try:
            res = self.session.get(blob["url"])
            res.raise_for_status()
        except (requests.RequestException, KeyError) as e:
            raise TransientUpstreamFailure(f"Failed to fetch {self.prefix}{name}: {e}") from e
        return ContentResource(name=name, path=blob["pathname"], data=res.content)

    def list_resources(self) -> list[str]:
        """Pathnames under the prefix with the prefix removed."""
        names = [b.get("pathname", "") for b in self._list(self.prefix)]
        return sorted(n[len(self.prefix):] for n in names if n.startswith(self.prefix) and n != self.prefix)


def make_store(settings: Settings, blob_prefix: str, local_subdir: str = "") -> ContentStore:
    """Select the backend for this process from settings.mode."""
    if settings.use_blob:
        return BlobContentStore(blob_prefix, settings.blob_token, settings.blob_api_url)
    return LocalContentStore(Path(settings.content_dir) / local_subdir)


def make_data_store(settings: Settings) -> ContentStore:
    return make_store(settings, settings.data_blob_prefix)


def make_posts_store(settings: Settings) -> ContentStore:
    return make_store(settings, settings.posts_blob_prefix, "blog")


def read_json(store: ContentStore, name: str) -> Any:
    """Fetch and decode a JSON resource."""
    raw = store.fetch_resource(name)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON in {name}: {e}") from e
