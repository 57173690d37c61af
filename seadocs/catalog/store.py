"""Local JSON persistence for the reference catalogs.

Each catalog (products, clients, transports) is stored in its own file under
``<data_dir>/catalog/``. There is no schema versioning: a missing or unreadable
file means "use the built-in seed".
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
CLIENTS_KEY = "clients"
TRANSPORTS_KEY = "transports"
CATALOG_KEYS = (PRODUCTS_KEY, CLIENTS_KEY, TRANSPORTS_KEY)


class CatalogStore:
    """Key-value store of catalog records backed by JSON files."""

    def __init__(self, data_dir: Path):
        """Initialize store.

        Args:
            data_dir: Application data directory; files go to ``data_dir/catalog``
        """
        self.directory = Path(data_dir) / "catalog"

    def path_for(self, key: str) -> Path:
        if key not in CATALOG_KEYS:
            raise ValueError(f"Unknown catalog key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[List[Any]]:
        """Load stored records for ``key``.

        Returns:
            List of records, or None when nothing usable is stored
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load catalog {key} from {path}: {e}")
            return None
        if not isinstance(data, list):
            logger.warning(f"Catalog {key} in {path} is not a list, ignoring")
            return None
        return data

    def save(self, key: str, records: List[Any]) -> Path:
        """Write records for ``key``; the last write wins.

        Raises:
            OSError: If the file cannot be written
        """
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path
