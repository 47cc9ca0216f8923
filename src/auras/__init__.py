"""Aura resolution and per-category aggregation."""

from .aggregator import CategoryAggregator
from .constants import CATEGORIES, EXCLUDED_SPELL_NAMES
from .context import RunContext
from .resolver import AuraResolver, resolve_auras

__all__ = [
    "CategoryAggregator",
    "CATEGORIES",
    "EXCLUDED_SPELL_NAMES",
    "RunContext",
    "AuraResolver",
    "resolve_auras",
]
