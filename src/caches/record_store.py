"""JSON-file persistence for per-category caches, listings and outputs.

Layout under the cache root::

    <cache_dir>/<category>/<category>.html   listing page
    <cache_dir>/<category>/<category>.json   extracted listing
    <cache_dir>/<category>/items.json        item cache
    <cache_dir>/<category>/spells.json       spell cache
    <cache_dir>/<category>/output.json       item -> auras mapping
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from exceptions import StoreError
from models import CategoryListing, Record, RecordKind, RECORD_MODELS

logger = logging.getLogger(__name__)

CACHE_FILES = {
    RecordKind.ITEM: "items.json",
    RecordKind.SPELL: "spells.json",
}
OUTPUT_FILE = "output.json"


class RecordStore:
    """
    Load-or-empty / write-whole store for cached records.

    Usage:
        store = RecordStore(Path("cache"))
        items = store.load("potions", RecordKind.ITEM)   # [] if nothing cached
        store.save("potions", RecordKind.ITEM, items)    # raises StoreError
    """

    def __init__(self, cache_dir: Path):
        """
        Initialize store.

        Args:
            cache_dir: Cache root; category directories are created on write
        """
        self.cache_dir = Path(cache_dir)
        # (category, kind) pairs whose file held entries load() had to drop
        self._dirty = set()

    def category_dir(self, category: str) -> Path:
        return self.cache_dir / category

    def load(self, category: str, kind: RecordKind) -> List[Record]:
        """
        Load cached records for a category.

        Never raises: a missing, unreadable or corrupt file is treated as an
        empty cache. Individual records that fail validation are skipped, so
        they get re-fetched. Either case marks the file for rewriting, see
        needs_rewrite().

        Args:
            category: Category name
            kind: Record kind

        Returns:
            Records in file order, or an empty list
        """
        path = self.category_dir(category) / CACHE_FILES[kind]
        self._dirty.discard((category, kind))
        if not path.exists():
            return []
        raw = self._read_json(path)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning(f"Ignoring cache {path}: expected a list, got {type(raw).__name__}")
            self._dirty.add((category, kind))
            return []

        model = RECORD_MODELS[kind]
        records = []
        for entry in raw:
            try:
                records.append(model.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Dropping invalid {kind.value} record from {path}: {e}")
                self._dirty.add((category, kind))

        logger.info(f"Reusing cache {path} ({len(records)} {kind.value}s)")
        return records

    def save(self, category: str, kind: RecordKind, records: Sequence[Record]) -> None:
        """
        Replace the cached records for a category.

        Raises:
            StoreError: If the file cannot be written
        """
        path = self.category_dir(category) / CACHE_FILES[kind]
        data = [record.model_dump(mode="json", by_alias=True) for record in records]
        self._write_json(path, data)
        self._dirty.discard((category, kind))
        logger.debug(f"Wrote {len(data)} {kind.value}s to {path}")

    def needs_rewrite(self, category: str, kind: RecordKind) -> bool:
        """True if the last load() of this cache dropped anything from the file."""
        return (category, kind) in self._dirty

    def save_output(self, category: str, auras: Mapping[int, Mapping[int, str]]) -> Path:
        """
        Write the category output artifact.

        Integer ids become string keys here and nowhere else.

        Returns:
            Path of the written file

        Raises:
            StoreError: If the file cannot be written
        """
        path = self.category_dir(category) / OUTPUT_FILE
        data = {
            str(item_id): {str(spell_id): name for spell_id, name in item_auras.items()}
            for item_id, item_auras in auras.items()
        }
        self._write_json(path, data)
        return path

    def save_page(self, category: str, html: str) -> Path:
        """Store the raw listing page. Raises StoreError."""
        path = self.category_dir(category) / f"{category}.html"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(html, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreError(f"Failed to write {path}: {e}") from e
        return path

    def load_page(self, category: str) -> Optional[str]:
        """Read the stored listing page, None if it was never downloaded."""
        path = self.category_dir(category) / f"{category}.html"
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def save_listing(self, category: str, listing: CategoryListing) -> Path:
        """Store an extracted listing. Raises StoreError."""
        path = self.category_dir(category) / f"{category}.json"
        self._write_json(path, listing.model_dump(mode="json", by_alias=True))
        return path

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache {path}: {e}")
            return None

    def _write_json(self, path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreError(f"Failed to write {path}: {e}") from e
