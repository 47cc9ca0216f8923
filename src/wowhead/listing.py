"""
Category listings scraped from the listing site.

There is no search API, so each category page is downloaded as HTML and the
item ids are pulled out of its embedded ``var listviewitems = [...]`` line.
"""

import logging
import re
import time
from typing import List, Optional

import requests

from config import get_patch, get_request_timeout, get_wowhead_url
from exceptions import ListingError
from models import CategoryListing

logger = logging.getLogger(__name__)

LISTVIEW_LINE = re.compile(r"^var\slistviewitems.+$", re.MULTILINE)
ITEM_ID = re.compile(r'"id":(\d+)')


def extract_item_ids(html: str) -> List[int]:
    """
    Extract item ids from a listing page.

    Args:
        html: Listing page source

    Returns:
        Distinct item ids in ascending order

    Raises:
        ListingError: If the page has no listview line

    Example:
        >>> extract_item_ids('var listviewitems = [{"id":5},{"id":3}];')
        [3, 5]
    """
    match = LISTVIEW_LINE.search(html)
    if not match:
        raise ListingError("No 'var listviewitems' line in listing page")
    return sorted({int(found) for found in ITEM_ID.findall(match.group(0))})


class ListingSource:
    """Downloads category pages and keeps their extracted item ids in the store."""

    def __init__(self, store, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Args:
            store: RecordStore used for the page and listing files
            base_url: Listing site base URL (defaults to WOWHEAD_URL env var)
            timeout: Request timeout in seconds (defaults to REQUEST_TIMEOUT env var)
        """
        self.store = store
        self.base_url = (base_url or get_wowhead_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_request_timeout()

    def download_category_page(self, category: str, path: str) -> str:
        """
        Download a category page and store it.

        Raises:
            ListingError: If the request fails
            StoreError: If the page cannot be stored
        """
        url = f"{self.base_url}{path}"
        logger.info(f"Preparing category {category} ...")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ListingError(f"Failed to download {url}: {e}") from e

        self.store.save_page(category, response.text)
        return response.text

    def prepare_listing(
        self,
        category: str,
        path: str,
        patch: Optional[str] = None,
        skip_download: bool = False
    ) -> CategoryListing:
        """
        Build and store the listing for a category.

        Args:
            category: Category name
            path: Listing page path on the site, e.g. "/potions"
            patch: Provenance stamp (defaults to GAME_PATCH env var)
            skip_download: Reuse the stored page instead of downloading

        Returns:
            The stored CategoryListing

        Raises:
            ListingError: If no page is available or it can't be parsed
            StoreError: If the listing cannot be stored
        """
        if skip_download:
            html = self.store.load_page(category)
            if html is None:
                raise ListingError(f"No stored listing page for {category}")
        else:
            html = self.download_category_page(category, path)

        listing = CategoryListing(
            patch=patch or get_patch(),
            date=int(time.time() * 1000),
            item_ids=extract_item_ids(html),
        )
        self.store.save_listing(category, listing)
        logger.info(f"{category}: {len(listing.item_ids)} items listed")
        return listing
