"""Per-category aura mapping.

Runs the category pipeline:
1. Update the item cache from the listed item ids
2. Expand the spell cache from the cached items
3. Resolve auras for every spell each item grants
4. Report items without auras
5. Write the category output
"""

import logging
from typing import Dict, Iterable, Optional

from auras.context import RunContext
from auras.resolver import AuraMap, AuraResolver
from caches import ItemCache, SpellCache
from exceptions import NoAurasWarning
from models import CategoryResult

logger = logging.getLogger(__name__)


class CategoryAggregator:
    """Builds the item -> auras mapping for categories, one at a time."""

    def __init__(self, store, fetcher, context: Optional[RunContext] = None):
        """
        Args:
            store: RecordStore for caches and outputs
            fetcher: Record fetcher (see WowdbClient)
            context: Run context; a fresh one is created if omitted
        """
        self.store = store
        self.fetcher = fetcher
        self.context = context if context is not None else RunContext()

    def process(self, category: str, known_ids: Iterable[int]) -> CategoryResult:
        """
        Update caches for a category and write its output.

        Args:
            category: Category name
            known_ids: Item ids currently listed for the category

        Returns:
            CategoryResult with the mapping and what happened on the way

        Raises:
            StoreError: If a cache or the output cannot be written
        """
        logger.info(f"Processing category {category} ...")

        item_cache = ItemCache(category, self.store, self.fetcher)
        item_cache.load()
        new_item_ids = item_cache.update(known_ids)

        spell_cache = SpellCache(category, self.store, self.fetcher)
        spell_cache.load()
        new_spell_ids = spell_cache.expand(item_cache.items)
        logger.info(
            f"{category}: {item_cache.item_count} items and {spell_cache.spell_count} spells cached"
        )

        resolver = AuraResolver(spell_cache.index(), self.context, category)

        # ids are dropped from here as soon as an item yields an aura
        without_auras = set(item_cache.ids)
        category_auras: Dict[int, AuraMap] = {}

        for item in item_cache.items:
            self.context.remember_item(item)
            item_auras: AuraMap = {}
            for spell_id in item.granted_spell_ids:
                resolver.resolve(spell_id, item_auras)

            if item_auras:
                without_auras.discard(item.id)
                category_auras[item.id] = item_auras

        if without_auras:
            warning = NoAurasWarning(category, sorted(without_auras))
            logger.warning(str(warning))
            labels = ", ".join(self.context.item_label(i) for i in warning.item_ids)
            logger.debug(f"Items without auras in {category}: {labels}")

        path = self.store.save_output(category, category_auras)
        logger.info(f"{category}: {len(category_auras)} items with auras written to {path}")

        return CategoryResult(
            category=category,
            auras=category_auras,
            new_item_ids=new_item_ids,
            new_spell_ids=new_spell_ids,
            failed_item_ids=item_cache.failed_ids,
            failed_spell_ids=spell_cache.failed_ids,
            items_without_auras=sorted(without_auras),
            missing_spell_ids=resolver.missing_spell_ids,
        )
