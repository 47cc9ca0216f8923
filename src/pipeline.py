"""Aura map pipeline.

Runs the full build for every configured category:
1. Download each category's listing page and extract its item ids
2. Update the item and spell caches and resolve auras per category
3. Write one output.json per category

Usage:
    python src/pipeline.py
    python src/pipeline.py --category potions --category flasks --skip-download
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from auras import CATEGORIES, CategoryAggregator, RunContext
from caches import RecordStore
from config import get_cache_dir
from exceptions import ListingError, StoreError
from logging_config import get_run_logger
from models import CategoryListing, CategoryResult
from wowdb import WowdbClient
from wowhead import ListingSource

logger = logging.getLogger(__name__)


def prepare_listings(
    categories: Mapping[str, str],
    listing_source: ListingSource,
    patch: Optional[str] = None,
    skip_download: bool = False
) -> Dict[str, CategoryListing]:
    """
    Prepare the listing of every category.

    Categories whose listing fails are logged and left out of the result.
    """
    listings = {}
    for category, path in categories.items():
        try:
            listings[category] = listing_source.prepare_listing(
                category, path, patch=patch, skip_download=skip_download
            )
        except (ListingError, StoreError) as e:
            logger.error(f"Skipping category {category}: {e}")
    return listings


def run_pipeline(
    categories: Mapping[str, str],
    store: RecordStore,
    fetcher,
    listing_source: ListingSource,
    patch: Optional[str] = None,
    skip_download: bool = False
) -> Dict[str, CategoryResult]:
    """
    Build the aura mapping for each category.

    A failing category (listing unavailable, cache or output not writable) is
    logged and skipped; the remaining categories still run.

    Args:
        categories: Category name -> listing path
        store: RecordStore for caches and outputs
        fetcher: Record fetcher (WowdbClient)
        listing_source: ListingSource for item ids
        patch: Provenance stamp for listings
        skip_download: Reuse stored listing pages

    Returns:
        Results of the categories that completed, in category order
    """
    context = RunContext()
    aggregator = CategoryAggregator(store, fetcher, context)

    listings = prepare_listings(categories, listing_source, patch=patch, skip_download=skip_download)

    results = {}
    for category in categories:
        listing = listings.get(category)
        if listing is None:
            continue
        try:
            results[category] = aggregator.process(category, listing.item_ids)
        except StoreError as e:
            logger.error(f"Aborting category {category}: {e}")

    logger.info(
        f"Done: {len(results)}/{len(categories)} categories, "
        f"{len(context.item_names)} items, {len(context.spell_names)} spells"
    )
    return results


def select_categories(names: Optional[List[str]]) -> Dict[str, str]:
    """
    Pick categories by name (all when ``names`` is empty).

    Raises:
        ValueError: On an unknown category name
    """
    if not names:
        return dict(CATEGORIES)
    unknown = [name for name in names if name not in CATEGORIES]
    if unknown:
        raise ValueError(f"Unknown categories: {', '.join(unknown)}")
    return {name: CATEGORIES[name] for name in names}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Map item auras per category.")
    parser.add_argument(
        "--category",
        action="append",
        choices=sorted(CATEGORIES),
        help="Category to process (repeatable, default: all)"
    )
    parser.add_argument("--skip-download", action="store_true", help="Reuse stored listing pages")
    parser.add_argument("--cache-dir", type=Path, default=None, help="Cache root (default: AURA_CACHE_DIR)")
    parser.add_argument("--patch", type=str, default=None, help="Patch stamp for listings (default: GAME_PATCH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log individual fetches")
    args = parser.parse_args(argv)

    cache_dir = args.cache_dir or get_cache_dir()
    get_run_logger(cache_dir, level=logging.DEBUG if args.verbose else logging.INFO)

    categories = select_categories(args.category)
    store = RecordStore(cache_dir)
    results = run_pipeline(
        categories,
        store,
        WowdbClient(),
        ListingSource(store),
        patch=args.patch,
        skip_download=args.skip_download,
    )
    return 0 if len(results) == len(categories) else 1


if __name__ == "__main__":
    sys.exit(main())
