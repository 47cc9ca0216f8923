"""Models for cached records, category listings and run results."""

from models.records import (
    Effect,
    ItemRecord,
    Record,
    RecordKind,
    RECORD_MODELS,
    SpellRecord,
    SpellRef,
)

from models.listing import (
    CategoryListing,
    CategoryResult,
)

__all__ = [
    # Record models
    "Effect",
    "ItemRecord",
    "Record",
    "RecordKind",
    "RECORD_MODELS",
    "SpellRecord",
    "SpellRef",
    # Listing / result models
    "CategoryListing",
    "CategoryResult",
]
