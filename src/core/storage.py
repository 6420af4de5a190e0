"""
Durable key-value storage for small user preferences.

The file-backed store keeps a single JSON object on disk so values survive
process restarts. All I/O goes through aiofiles so callers on an event loop
never block on the filesystem.
"""

import asyncio
import json
import logging
import threading
import weakref
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import aiofiles
import aiofiles.os
import aiofiles.tempfile

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the preference store cannot be read or written."""


class KeyValueStore(ABC):
    """Asynchronous string-to-string store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store a value, overwriting any previous one under the same key."""


class FileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a JSON document."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._locks_guard = threading.Lock()
        self._locks = weakref.WeakKeyDictionary()

    async def _read_all(self) -> Dict[str, str]:
        if not await aiofiles.os.path.exists(self.path):
            return {}
        try:
            async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt preference file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Preference file {self.path} does not hold an object")
        return data

    async def get(self, key: str) -> Optional[str]:
        data = await self._read_all()
        value = data.get(key)
        return value if isinstance(value, str) else None

    def _write_lock(self) -> asyncio.Lock:
        """One lock per event loop; Streamlit threads each run their own loop."""
        loop = asyncio.get_running_loop()
        with self._locks_guard:
            lock = self._locks.get(loop)
            if lock is None:
                lock = self._locks[loop] = asyncio.Lock()
        return lock

    async def set(self, key: str, value: str) -> bool:
        # Read-modify-replace must not interleave, or an older write can win
        async with self._write_lock():
            try:
                data = await self._read_all()
            except StorageError as e:
                # Unreadable documents are replaced rather than blocking every write
                logger.warning(f"Discarding unreadable preferences: {e}")
                data = {}
            data[key] = value

            tmp_name = None
            try:
                async with aiofiles.tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.path.parent,
                    prefix=f"{self.path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as f:
                    tmp_name = f.name
                    await f.write(json.dumps(data, ensure_ascii=False, indent=2))
                await aiofiles.os.replace(tmp_name, self.path)
            except OSError as e:
                if tmp_name and await aiofiles.os.path.exists(tmp_name):
                    await aiofiles.os.remove(tmp_name)
                raise StorageError(f"Failed to write {self.path}: {e}") from e

        logger.debug(f"Saved {key}={value!r} to {self.path}")
        return True


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and ephemeral sessions."""

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        fail_reads: bool = False,
        fail_writes: bool = False,
    ):
        self.data: Dict[str, str] = dict(initial or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_count = 0

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("Simulated read failure")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        if self.fail_writes:
            raise StorageError("Simulated write failure")
        self.data[key] = value
        self.write_count += 1
        return True
