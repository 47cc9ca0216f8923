"""Centralized exception hierarchy for the aura map builder.

Usage:
    from exceptions import FetchError, StoreError

    raise FetchError("spell", 1234, "404 Not Found")
    raise StoreError("Failed to write cache/potions/items.json")
"""


class AuraMapError(Exception):
    """Base exception for all aura map errors."""
    pass


class FetchError(AuraMapError):
    """Raised when a single item or spell record cannot be fetched.

    Recoverable: the id is skipped for this run and retried on the next one,
    since it never makes it into the cache.

    Examples:
        - Connection refused / timeout
        - Non-2xx response
        - Payload that is not JSON or does not match the record schema
    """

    def __init__(self, kind: str, record_id: int, message: str):
        self.kind = kind
        self.record_id = record_id
        self.message = message
        super().__init__(f"Failed fetching {kind} {record_id}: {message}")


class StoreError(AuraMapError):
    """Raised when a cache or output file cannot be written.

    Aborts processing of the current category.
    """
    pass


class ListingError(AuraMapError):
    """Raised when a category listing cannot be downloaded or parsed.

    Examples:
        - Listing page request failed
        - Page has no `var listviewitems` line
        - No stored listing for the category
    """
    pass


class ConfigurationError(AuraMapError):
    """Raised when configuration is invalid.

    Examples:
        - Non-numeric REQUEST_TIMEOUT
    """
    pass


class MissingReferenceWarning(AuraMapError, UserWarning):
    """A spell is referenced by an effect but was never cached.

    Logged, never raised by the pipeline.
    """

    def __init__(self, spell_id: int, category: str = ""):
        self.spell_id = spell_id
        self.category = category
        where = f" in {category}" if category else ""
        super().__init__(f"No spell data for {spell_id}{where}")


class NoAurasWarning(AuraMapError, UserWarning):
    """One or more items produced no auras after full resolution.

    Logged, never raised by the pipeline.
    """

    def __init__(self, category: str, item_ids):
        self.category = category
        self.item_ids = list(item_ids)
        ids = ",".join(str(i) for i in self.item_ids)
        super().__init__(f"No auras found for {category}: {ids}")
