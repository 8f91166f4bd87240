"""
Cart storage: durable key/value protocol.

Storage is synchronous: a cart mutation persists inside the same call
that changes memory, before observers run.
All methods return Result for explicit error handling.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from kungfu import Result, Ok, Error

from storefront.config import settings


# ═══════════════════════════════════════════════════════════════════════════════
# Storage Error
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class StorageError:
    """Storage operation error."""

    message: str
    cause: Exception | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Storage Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class Storage(Protocol):
    """
    Durable string key/value storage, the browser local-storage contract.

    Example, a Redis implementation:

        class RedisStorage:
            def __init__(self, client: redis.Redis):
                self.client = client

            def get(self, key: str) -> Result[str | None, StorageError]:
                try:
                    raw = self.client.get(key)
                    return Ok(raw.decode() if raw is not None else None)
                except redis.RedisError as e:
                    return Error(StorageError("Failed to get", e))

            # ... set / delete
    """

    def get(self, key: str) -> Result[str | None, StorageError]:
        """Stored value, or Ok(None) if absent."""
        ...

    def set(self, key: str, value: str) -> Result[None, StorageError]:
        ...

    def delete(self, key: str) -> Result[bool, StorageError]:
        """Returns Ok(True) if the key existed."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Function-based Storage
# ═══════════════════════════════════════════════════════════════════════════════

type GetFn = Callable[[str], Result[str | None, StorageError]]
type SetFn = Callable[[str, str], Result[None, StorageError]]
type DeleteFn = Callable[[str], Result[bool, StorageError]]


@dataclass(frozen=True)
class FunctionalStorage:
    """Storage built from three functions, see `storage_from()`."""

    _get: GetFn
    _set: SetFn
    _delete: DeleteFn

    def get(self, key: str) -> Result[str | None, StorageError]:
        return self._get(key)

    def set(self, key: str, value: str) -> Result[None, StorageError]:
        return self._set(key, value)

    def delete(self, key: str) -> Result[bool, StorageError]:
        return self._delete(key)


def storage_from(get: GetFn, set: SetFn, delete: DeleteFn) -> FunctionalStorage:
    """
    Create Storage from functions.

    Example:
        storage = storage_from(
            get=lambda key: settings_repo.read(key),
            set=lambda key, value: settings_repo.write(key, value),
            delete=lambda key: settings_repo.remove(key),
        )
    """
    return FunctionalStorage(_get=get, _set=set, _delete=delete)


# ═══════════════════════════════════════════════════════════════════════════════
# Memory Storage: For Tests
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class MemoryStorage:
    """In-process storage. Data does not survive a restart."""

    data: dict[str, str] = field(default_factory=dict[str, str])

    def get(self, key: str) -> Result[str | None, StorageError]:
        return Ok(self.data.get(key))

    def set(self, key: str, value: str) -> Result[None, StorageError]:
        self.data[key] = value
        return Ok(None)

    def delete(self, key: str) -> Result[bool, StorageError]:
        return Ok(self.data.pop(key, None) is not None)


# ═══════════════════════════════════════════════════════════════════════════════
# File Storage: One JSON Object per File
# ═══════════════════════════════════════════════════════════════════════════════


class FileStorage:
    """
    All keys in one JSON object on disk.

    Writes go to a temp file in the same directory, then `os.replace`,
    so a crash mid-write leaves the previous file intact.
    A file that is not UTF-8 JSON reads as empty. Without a path, the file
    at `settings.storage_path` is used.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path if path is not None else settings.storage_path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (FileNotFoundError, UnicodeDecodeError):
            return {}
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Result[str | None, StorageError]:
        try:
            return Ok(self._read_all().get(key))
        except OSError as e:
            return Error(StorageError(f"Failed to read {self._path}: {e}", e))

    def set(self, key: str, value: str) -> Result[None, StorageError]:
        try:
            data = self._read_all()
            data[key] = value
            self._write_all(data)
            return Ok(None)
        except OSError as e:
            return Error(StorageError(f"Failed to write {self._path}: {e}", e))

    def delete(self, key: str) -> Result[bool, StorageError]:
        try:
            data = self._read_all()
            if key not in data:
                return Ok(False)
            del data[key]
            self._write_all(data)
            return Ok(True)
        except OSError as e:
            return Error(StorageError(f"Failed to write {self._path}: {e}", e))


__all__ = (
    "StorageError",
    "Storage",
    "FunctionalStorage",
    "storage_from",
    "MemoryStorage",
    "FileStorage",
)
