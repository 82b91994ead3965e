"""
Setup flag store persisted as a JSON file.

Strapi keeps its own setup flags in the core store, addressed by
(environment, type, name, key). That store has no REST surface, so the seeder
keeps the same addressing in a local file, namespaced by the target URL.
"""
import json
import os
import tempfile
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)


class SetupStore:
    """Key-value store for one (target, environment, type, name) namespace"""

    def __init__(
        self,
        path: str,
        target: str,
        environment: str = "development",
        type: str = "type",
        name: str = "setup",
    ):
        self.path = path
        self.namespace = f"{target}|{environment}|{type}|{name}"

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data: Dict[str, Any]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        # Written beside the target, then swapped in whole
        fd, tmp_path = tempfile.mkstemp(dir=directory or ".", prefix=".strapi-seed-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(self.namespace, {}).get(key)

    def set(self, key: str, value: Any):
        data = self._load()
        data.setdefault(self.namespace, {})[key] = value
        self._save(data)
        logger.debug("store_value_set", namespace=self.namespace, key=key)

    def delete(self, key: str) -> bool:
        """Remove a key; returns True if it was present"""
        data = self._load()
        values = data.get(self.namespace, {})
        if key not in values:
            return False
        del values[key]
        if not values:
            del data[self.namespace]
        self._save(data)
        return True
