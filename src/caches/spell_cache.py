"""Spell cache: discovers every spell reachable from a category's items."""

import logging
from typing import Iterable, List, Optional, Set

from caches.base import RecordCache
from models import ItemRecord, RecordKind, SpellRecord

logger = logging.getLogger(__name__)


class SpellCache(RecordCache):
    """
    Caches spell records for one category, following effect chains.

    Usage:
        cache = SpellCache("potions", store, client)
        cache.load()
        cache.expand(item_cache.items)
        spell = cache.get(2825)
    """

    kind = RecordKind.SPELL

    def expand(self, items: Iterable[ItemRecord]) -> List[int]:
        """
        Ensure every spell granted by ``items`` and every spell reachable
        from those through "affected spell" references is cached.

        Args:
            items: Item records of the category

        Returns:
            Ids fetched during this call, in discovery order

        Raises:
            StoreError: If the grown cache cannot be written
        """
        self._ensure_loaded()
        start = len(self.new_ids)
        followed: Set[int] = set()
        for item in items:
            for spell_id in item.granted_spell_ids:
                self.ensure_spell(spell_id, followed)

        self.persist_if_grown()
        return self.new_ids[start:]

    def ensure_spell(self, spell_id: int, followed: Optional[Set[int]] = None) -> None:
        """
        Cache ``spell_id`` and everything it chains into, depth first.

        Only uncached ids are fetched, but cached spells are still followed,
        so a chained spell whose fetch failed on an earlier run is retried.
        ``followed`` holds the spells whose effects were already walked in
        this expansion; an id enters it before its effects are walked, so
        reference cycles terminate. A failed fetch drops that branch.
        """
        self._ensure_loaded()
        if followed is None:
            followed = set()

        stack = [spell_id]
        while stack:
            current = stack.pop()
            if current in followed:
                continue
            followed.add(current)

            spell = self.get(current)
            if spell is None:
                spell = self._fetch(current)
            if spell is None:
                continue
            # reversed so the first effect is visited first
            stack.extend(reversed(spell.chained_spell_ids))

    @property
    def spells(self) -> List[SpellRecord]:
        return self.records

    @property
    def spell_count(self) -> int:
        return len(self)
