from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


def get_storage_dir(root: str | Path = "./storage") -> Path:
    """Return the persistent storage directory, creating it if missing."""
    d = Path(root)
    d.mkdir(parents=True, exist_ok=True)
    return d


def format_bytes(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(n)
    for u in units:
        if size < 1024.0 or u == units[-1]:
            return f"{size:.1f} {u}"
        size /= 1024.0
    return f"{n} B"


class MemoryKeyValueStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStorage:
    """String key-value pairs kept in one JSON object on disk.

    Every write rewrites the whole file through a temp file + ``os.replace`` so a
    crash mid-write never leaves a half-written session behind. A missing or
    unreadable file reads as empty storage. Each browser session gets its own
    file; the lock only serialises read-modify-write within one instance.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write_all(self, data: Dict[str, str]) -> None:
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".kv-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except Exception:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


def create_storage(settings, session_key: Optional[str] = None) -> KeyValueStorage:
    """Pick the session storage backend named in settings.

    Storage always belongs to one browser session. The file backend writes
    ``<app_storage_dir>/sessions/<session_key>.json``; a fresh key is drawn when
    none is given, so two callers never share a token.
    """
    if settings.session_backend == "memory":
        return MemoryKeyValueStorage()
    session_key = session_key or uuid.uuid4().hex
    if not session_key.isalnum():
        raise ValueError(f"Session key must be alphanumeric: {session_key!r}")
    sessions_dir = get_storage_dir(Path(settings.app_storage_dir) / "sessions")
    return FileKeyValueStorage(sessions_dir / f"{session_key}.json")
