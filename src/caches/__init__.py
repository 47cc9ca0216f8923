"""Per-category on-disk caches for remote records.

This module provides:
- RecordStore: JSON persistence (load-or-empty, write-whole)
- ItemCache: listed item ids -> cached item records
- SpellCache: item spells -> every transitively referenced spell
"""

from .record_store import RecordStore
from .item_cache import ItemCache
from .spell_cache import SpellCache

__all__ = ["RecordStore", "ItemCache", "SpellCache"]
