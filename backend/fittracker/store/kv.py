import json
import os
import tempfile
from typing import Any

from fittracker.core.logging import get_logger
from fittracker.store.errors import StorageError

logger = get_logger(__name__)


class JsonKeyValueStore:
    """String keys -> JSON values, persisted in a single file.

    Every read goes back to disk, every write rewrites the whole file
    through a temp file + rename so a crash never leaves half a document.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Key-value store unreadable", path=self.path, error=str(e))
            raise StorageError(f"cannot read {self.path}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set_many(self, values: dict[str, Any]) -> None:
        data = self._load()
        data.update(values)
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as out:
                json.dump(data, out)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Key-value store write failed", path=self.path, error=str(e))
            raise StorageError(f"cannot write {self.path}") from e
