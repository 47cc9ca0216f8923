"""Shared bookkeeping for the per-category item and spell caches."""

import logging
from typing import Dict, FrozenSet, List, Optional

from exceptions import FetchError
from models import Record, RecordKind

logger = logging.getLogger(__name__)


class RecordCache:
    """
    Ordered collection of cached records plus the set of their ids.

    The id-set always equals the ids in the collection. The collection is
    sorted by id before every write. It is written when it grew, or when the
    loaded file needs normalizing (duplicates, invalid entries, wrong order).

    Subclasses set ``kind`` and add the update step.
    """

    kind: RecordKind

    def __init__(self, category: str, store, fetcher):
        """
        Args:
            category: Category name (caches are category-scoped)
            store: RecordStore-like object with load()/save()/needs_rewrite()
            fetcher: Object with fetch(kind, record_id) raising FetchError
        """
        self.category = category
        self.store = store
        self.fetcher = fetcher
        self._records: List[Record] = []
        self._by_id: Dict[int, Record] = {}
        self._loaded_count = 0
        self._needs_rewrite = False
        self._loaded = False
        self.new_ids: List[int] = []
        self.failed_ids: List[int] = []

    def load(self) -> None:
        """Load existing records from the store (empty if nothing cached)."""
        self._records = []
        self._by_id = {}
        needs_rewrite = self.store.needs_rewrite(self.category, self.kind)

        for record in self.store.load(self.category, self.kind):
            if record.id in self._by_id:
                logger.warning(
                    f"Duplicate {self.kind.value} {record.id} in {self.category} cache, keeping first"
                )
                needs_rewrite = True
                continue
            if self._records and record.id < self._records[-1].id:
                needs_rewrite = True
            self._add(record)

        self._loaded_count = len(self._by_id)
        self._needs_rewrite = needs_rewrite
        self.new_ids = []
        self.failed_ids = []
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _add(self, record: Record) -> None:
        self._records.append(record)
        self._by_id[record.id] = record

    def _fetch(self, record_id: int) -> Optional[Record]:
        """Fetch one record; failures are logged and yield None."""
        try:
            record = self.fetcher.fetch(self.kind, record_id)
        except FetchError as e:
            logger.warning(str(e))
            self.failed_ids.append(record_id)
            return None

        if record.id != record_id:
            logger.warning(
                f"Failed fetching {self.kind.value} {record_id}: response carries id {record.id}"
            )
            self.failed_ids.append(record_id)
            return None

        self._add(record)
        self.new_ids.append(record_id)
        return record

    def persist_if_grown(self) -> bool:
        """
        Sort and write the collection back if records were added or the
        loaded file needs normalizing.

        Returns:
            True if the cache was written

        Raises:
            StoreError: If the write fails
        """
        grown = len(self._by_id) - self._loaded_count
        if grown == 0 and not self._needs_rewrite:
            return False

        if grown:
            logger.info(f"{grown} new {self.kind.value}s found for {self.category}.")
        else:
            logger.info(f"Rewriting normalized {self.kind.value} cache for {self.category}.")
        self._records.sort(key=lambda r: r.id)
        self.store.save(self.category, self.kind, self._records)
        self._loaded_count = len(self._by_id)
        self._needs_rewrite = False
        return True

    def get(self, record_id: int) -> Optional[Record]:
        return self._by_id.get(record_id)

    def index(self) -> Dict[int, Record]:
        """Id-indexed view of the collection."""
        return dict(self._by_id)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._by_id

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def ids(self) -> FrozenSet[int]:
        return frozenset(self._by_id)

    @property
    def loaded(self) -> bool:
        """Check if cache has been loaded."""
        return self._loaded
