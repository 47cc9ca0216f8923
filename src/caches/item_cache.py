"""Item cache: reconciles a category's listed item ids with cached items."""

import logging
from typing import Iterable, List

from caches.base import RecordCache
from models import ItemRecord, RecordKind

logger = logging.getLogger(__name__)


class ItemCache(RecordCache):
    """
    Caches item records for one category.

    Usage:
        cache = ItemCache("potions", store, client)
        cache.load()
        cache.update(listing.item_ids)   # fetches uncached ids, writes if grown
        items = cache.items
    """

    kind = RecordKind.ITEM

    def update(self, known_ids: Iterable[int]) -> List[int]:
        """
        Fetch every listed item that isn't cached yet.

        A failed fetch is logged and skipped; the id stays uncached and is
        retried on the next run.

        Args:
            known_ids: Item ids currently listed for the category

        Returns:
            Ids fetched during this call

        Raises:
            StoreError: If the grown cache cannot be written
        """
        self._ensure_loaded()
        fetched = []
        for item_id in known_ids:
            if item_id in self:
                continue
            if self._fetch(item_id) is not None:
                fetched.append(item_id)

        self.persist_if_grown()
        return fetched

    @property
    def items(self) -> List[ItemRecord]:
        return self.records

    @property
    def item_count(self) -> int:
        return len(self)
