"""Object storage listing operations."""

from .key_selection import KeySelection, ListingPage, S3KeySelector

__all__ = ["KeySelection", "ListingPage", "S3KeySelector"]
