"""Local durable key-value store for the storefront's state.

Each key is one JSON document in ``<directory>/<key>.json`` and is always
rewritten in full. Writes go through a temporary file and an atomic rename,
so a crash never leaves half a document behind.
"""

import json
import os
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

CART = "cart"
USER = "user"
PRODUCTS = "products"
ORDERS = "orders"

STATE_KEYS = (CART, USER, PRODUCTS, ORDERS)


class JsonStateStore:
    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Any | None:
        """Return the decoded value, or None when the key is missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None

        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Discarding unreadable state", key=key, path=str(path), error=str(exc))
            return None

    def save(self, key: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")

        tmp_path.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
        logger.debug("State saved", key=key)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        return [key for key in STATE_KEYS if self._path(key).exists()]

    def clear(self) -> None:
        for key in STATE_KEYS:
            self.remove(key)
