"""Remote item/spell record fetching."""

from .client import WowdbClient, strip_parens

__all__ = ["WowdbClient", "strip_parens"]
