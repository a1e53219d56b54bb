"""
Small persistent key-value store backed by a JSON file.

Holds the employee roster, the API key and the hourly wage between CLI
invocations. The file is rewritten atomically on every change.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class JsonKeyValueStore:
    """
    Key-value store persisted as a single JSON object.

    - A missing file behaves like an empty store
    - Corrupted JSON is logged and treated as empty
    - Writes go to a temp file that replaces the store file

    Example:
        >>> store = JsonKeyValueStore(tmp_path / "store.json")
        >>> store.set("hourly-wage", 15.0)
        >>> store.get("hourly-wage")
        15.0
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is a no-op."""
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.debug(f"Store file not found: {self.path}")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse store file (corrupted JSON): {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Store file {self.path} does not contain a JSON object")
            return {}

        return data

    def _save(self, data: Dict[str, Any]) -> None:
        """Write the store atomically (temp file + rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except Exception as e:
            logger.error(f"Failed to save store file {self.path}: {e}")
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.debug(f"Saved {len(data)} keys to {self.path}")


def open_store(path: Optional[Union[str, Path]] = None) -> JsonKeyValueStore:
    """Open the store at ``path`` or at the configured store file."""
    if path is None:
        from timesheet_extractor.config.settings import get_config

        path = get_config().store_file
    return JsonKeyValueStore(path)
