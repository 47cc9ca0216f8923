"""Category listing pages and item id extraction."""

from .listing import ListingSource, extract_item_ids

__all__ = ["ListingSource", "extract_item_ids"]
