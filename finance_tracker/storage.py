"""Collection storage backed by JSON files.

Each named collection (``transactions``, ``goals``) is stored as a JSON
array in ``<data dir>/<key>.json``. Reads never raise: a missing file, an
unreadable file or a document that is not a list all read as an empty
collection. Writes report success as a boolean and leave the previous file
untouched when serialization fails.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DATA_DIR
from .exceptions import StorageError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _safe_key(key: str) -> str:
    cleaned = ''.join(c for c in key if c.isalnum() or c in {'_', '-'})
    if not cleaned:
        raise StorageError(f"Invalid collection key: {key!r}")
    return cleaned


class JsonStorage:
    """Handles collection storage operations."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize storage.

        Args:
            data_dir: Optional custom directory for collection files.
                      Defaults to DATA_DIR from config.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    def get_path(self, key: str) -> Path:
        return self.data_dir / f"{_safe_key(key)}.json"

    def get(self, key: str) -> List[Record]:
        """Load a collection.

        Returns:
            The stored records in order, or an empty list when the collection
            is missing or cannot be read.
        """
        try:
            target = self.get_path(key)
            if not target.exists():
                return []
            with target.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (StorageError, json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.error("Error reading %s from storage: %s", key, e)
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s is not a list; treating as empty", key)
            return []
        return [item for item in data if isinstance(item, dict)]

    def set(self, key: str, records: List[Record]) -> bool:
        """Replace a collection.

        Returns:
            True when the collection was written, False otherwise.
        """
        try:
            self._write(key, records)
        except StorageError as e:
            logger.error("Error saving %s to storage: %s", key, e)
            return False
        logger.debug("Saved %d records to %s", len(records), key)
        return True

    def _write(self, key: str, records: List[Record]) -> None:
        target = self.get_path(key)
        try:
            payload = json.dumps(list(records), indent=2, sort_keys=True, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize {key}: {e}") from e
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open('w', encoding='utf-8') as handle:
                handle.write(payload)
        except OSError as e:
            raise StorageError(f"Failed to save {key} to {target}: {e}") from e
