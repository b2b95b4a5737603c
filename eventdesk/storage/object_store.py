"""Durable object storage for ticket artifacts.

Stores must be swappable: the issuance workflow only depends on
ObjectStore.put.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object cannot be written to the store."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Failed to store '{key}': {reason}")
        self.key = key
        self.reason = reason


class ObjectStore(ABC):
    """Interface for durable object storage."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store data under key and return a public locator for it.

        Must be idempotent on key: storing identical bytes under an existing
        key returns the same locator and allocates nothing new.

        Raises:
            StorageError: If the object could not be stored.
        """
        ...

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Return the public locator of key without checking it exists."""
        ...


class LocalObjectStore(ObjectStore):
    """Filesystem-backed store served under a public base URL."""

    def __init__(self, root: str, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        root = self.root.resolve()
        if root not in path.parents:
            raise StorageError(key, "key escapes storage root")
        return path

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}/{key.lstrip('/')}"

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path_for(key)

        try:
            if path.exists() and path.read_bytes() == data:
                return self.url_for(key)

            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Object store write failed for {key}: {str(e)}")
            raise StorageError(key, str(e)) from e

        logger.debug(f"Stored {len(data)} bytes ({content_type}) at {key}")
        return self.url_for(key)
