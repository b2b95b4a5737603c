"""
Object store tests: locators, idempotent writes and failure reporting.
"""
import os
import pytest
from eventdesk.storage.object_store import LocalObjectStore, StorageError


class TestLocalObjectStore:
    """Test the filesystem-backed object store."""

    def test_put_returns_public_url(self, object_store):
        """put() returns <base url>/<key>."""
        url = object_store.put("qr/TKT-abc.png", b"png-bytes", "image/png")

        assert url == "http://testserver/storage/qr/TKT-abc.png"

    def test_put_writes_bytes(self, tmp_path):
        """Stored bytes land under the root directory."""
        store = LocalObjectStore(str(tmp_path), "https://cdn.example.com/tickets/")

        url = store.put("qr/a.png", b"abc", "image/png")

        assert url == "https://cdn.example.com/tickets/qr/a.png"
        assert (tmp_path / "qr" / "a.png").read_bytes() == b"abc"

    def test_put_same_bytes_is_idempotent(self, tmp_path):
        """Re-storing identical bytes returns the same URL and writes nothing."""
        store = LocalObjectStore(str(tmp_path), "http://testserver/storage")

        first = store.put("qr/a.png", b"abc", "image/png")
        path = tmp_path / "qr" / "a.png"
        stat_before = os.stat(path)

        second = store.put("qr/a.png", b"abc", "image/png")

        assert first == second
        assert os.stat(path).st_ino == stat_before.st_ino
        assert os.stat(path).st_mtime_ns == stat_before.st_mtime_ns
        assert sorted(p.name for p in (tmp_path / "qr").iterdir()) == ["a.png"]

    def test_put_different_bytes_overwrites(self, tmp_path):
        """New bytes under an existing key replace the old object."""
        store = LocalObjectStore(str(tmp_path), "http://testserver/storage")

        store.put("qr/a.png", b"old", "image/png")
        store.put("qr/a.png", b"new", "image/png")

        assert (tmp_path / "qr" / "a.png").read_bytes() == b"new"
        assert sorted(p.name for p in (tmp_path / "qr").iterdir()) == ["a.png"]

    def test_key_cannot_escape_root(self, tmp_path):
        """Keys that resolve outside the root are rejected."""
        store = LocalObjectStore(str(tmp_path / "root"), "http://testserver/storage")

        with pytest.raises(StorageError):
            store.put("../outside.png", b"abc", "image/png")

    def test_write_failure_raises_storage_error(self, tmp_path):
        """OS errors surface as StorageError."""
        blocker = tmp_path / "blocked"
        blocker.write_bytes(b"not a directory")
        store = LocalObjectStore(str(blocker), "http://testserver/storage")

        with pytest.raises(StorageError) as exc_info:
            store.put("qr/a.png", b"abc", "image/png")

        assert exc_info.value.key == "qr/a.png"
