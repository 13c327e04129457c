"""Key-value store adapters: process memory and a JSON file on disk."""

import json
import logging
import os
import tempfile
from pathlib import Path

from recordhub.application.interfaces import KeyValueStore
from recordhub.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """Volatile store; everything is lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """Durable store keeping every key in one JSON object on disk.

    Writes go to a temporary file in the same directory which then
    replaces the original, so a crash mid-write leaves the previous
    contents intact.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(str(self._path), f"unreadable store file: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(str(self._path), "store file does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str], key: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(key, str(exc)) from exc

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError as exc:
            logger.warning("Replacing unreadable store file %s: %s", self._path, exc.reason)
            data = {}
        data[key] = value
        self._write_all(data, key)
        logger.debug("Stored key '%s' in %s (%d bytes)", key, self._path, len(value))
