"""
Local Store

JSON file holding the persisted application state, in the same shape the
web app keeps in localStorage:

    {"state": {"products": [...], ...}, "version": 0}

Writes go to a temporary file that replaces the store in one step.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_settings
from ..common.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class LocalStore:
    """
    File-backed persisted state.

    Usage:
        store = LocalStore("data/pos-store.json")
        products = store.get_products()
        store.save_products(products)
    """

    def __init__(self, path: str | Path, store_key: str = "pos-store", max_bytes: int = DEFAULT_MAX_BYTES):
        self.path = Path(path)
        self.store_key = store_key
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]] = None) -> "LocalStore":
        """Build a store from the 'storage' section of the settings."""
        if settings is None:
            settings = load_settings()
        section = settings.get('storage') or {}
        return cls(
            path=section.get('path', 'data/pos-store.json'),
            store_key=section.get('store_key', 'pos-store'),
            max_bytes=int(section.get('max_bytes', DEFAULT_MAX_BYTES)),
        )

    def load(self) -> Dict[str, Any]:
        """
        Read the whole document.

        Returns:
            Parsed document; an empty state when the file does not exist

        Raises:
            PersistenceError: If the file cannot be read, is not valid JSON
                or its state is not an object
        """
        if not self.path.exists():
            return {"state": {}, "version": 0}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read store {self.path}: {e}")

        if not isinstance(data, dict):
            raise PersistenceError(f"Store {self.path} does not contain a JSON object")
        if data.get("state") is None:
            data["state"] = {}
        elif not isinstance(data["state"], dict):
            raise PersistenceError(f"Store {self.path} has a state that is not a JSON object")
        return data

    def write(self, data: Dict[str, Any]) -> None:
        """
        Replace the whole document.

        Raises:
            PersistenceError: If the payload exceeds the quota or the write fails
        """
        payload = json.dumps(data, ensure_ascii=False)
        size = len(payload.encode('utf-8'))
        if size > self.max_bytes:
            raise PersistenceError(
                f"storage quota exceeded ({size} bytes, max {self.max_bytes})"
            )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(tmp_path, self.path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write store {self.path}: {e}")

        logger.debug("Wrote %d bytes to %s", size, self.path)

    def get_products(self) -> List[Dict[str, Any]]:
        products = self.load()["state"].get("products")
        return products if isinstance(products, list) else []

    def save_products(self, products: List[Dict[str, Any]]) -> None:
        data = self.load()
        data["state"]["products"] = products
        self.write(data)
