"""
Gutory Local Storage
Whole-value key/value persistence on the device
"""

import asyncio
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from gutory.utils.errors import StorageError
from gutory.utils.logger import get_logger

logger = get_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Byte storage addressed by key; values are read and written whole"""

    async def get(self, key: str) -> Optional[bytes]: ...

    async def set(self, key: str, value: bytes) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store"""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.values: Dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> Optional[bytes]:
        return self.values.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.values[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self.values.pop(key, None)


class FileKeyValueStore:
    """One file per key under a directory"""

    def __init__(self, directory: str):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    async def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

    async def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(self._write_atomic, path, value)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e
        logger.debug(f"Wrote {len(value)} bytes to {path.name}")

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e

    def _write_atomic(self, path: Path, value: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
