"""Paginated key enumeration with regular expression filtering."""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from s3_tools.core import get_logger
from s3_tools.core.exceptions import EnumerationError
from s3_tools.objectstorage.clients import S3ClientManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListingPage:
    """Object keys returned by one list call."""

    keys: tuple[str, ...]
    continuation_token: Optional[str] = None


@dataclass(frozen=True)
class KeySelection:
    """Keys under a prefix that matched a filter, in listing order."""

    bucket: str
    prefix: str
    keys: tuple[str, ...]
    scanned: int
    pages: int

    @property
    def bucket_empty(self) -> bool:
        """True when the listing returned no objects at all."""
        return self.scanned == 0


class S3KeySelector:
    """Enumerates object keys under a prefix and selects those matching a filter."""

    def __init__(self, client_manager: S3ClientManager):
        """Initialize S3 key selector.

        Args:
            client_manager: Client manager shared with the other operations
                of the same command
        """
        self.client_manager = client_manager

    def iter_pages(
        self, bucket: str, prefix: str = "", page_size: Optional[int] = None
    ) -> Iterator[ListingPage]:
        """Yield listing pages until the backend reports no continuation token.

        Args:
            bucket: Bucket name
            prefix: Key prefix, empty for the whole bucket
            page_size: Keys per list call, backend default when None

        Yields:
            One ListingPage per list_objects_v2 response
        """
        client = self.client_manager.client
        paginator = client.get_paginator("list_objects_v2")

        pagination_config = {}
        if page_size:
            pagination_config["PageSize"] = page_size

        page_iterator = paginator.paginate(
            Bucket=bucket, Prefix=prefix, PaginationConfig=pagination_config
        )

        for page in page_iterator:
            keys = tuple(obj["Key"] for obj in page.get("Contents", []))
            yield ListingPage(
                keys=keys, continuation_token=page.get("NextContinuationToken")
            )

    def select_keys(
        self,
        bucket: str,
        prefix: str = "",
        key_filter: Optional[re.Pattern[str]] = None,
        page_size: Optional[int] = None,
    ) -> KeySelection:
        """Collect every key under the prefix that the filter matches.

        The whole listing is read before anything is returned. A failure on
        any page discards the keys gathered so far.

        Args:
            bucket: Bucket name
            prefix: Key prefix, empty for the whole bucket
            key_filter: Compiled pattern searched in each key, None selects all
            page_size: Keys per list call, backend default when None

        Returns:
            KeySelection with the matched keys in listing order

        Raises:
            EnumerationError: If any list call fails
        """
        logger.info(
            "Selecting S3 keys",
            bucket=bucket,
            prefix=prefix,
            pattern=key_filter.pattern if key_filter else None,
        )

        matched: list[str] = []
        scanned = 0
        pages = 0

        try:
            for page in self.iter_pages(bucket, prefix, page_size=page_size):
                pages += 1
                scanned += len(page.keys)
                for key in page.keys:
                    if key_filter is None or key_filter.search(key):
                        matched.append(key)
        except Exception as e:
            error_msg = (
                f"Failed to list objects in s3://{bucket}/{prefix} "
                f"(after {pages} page(s)): {e}"
            )
            logger.error(error_msg, error=str(e))
            raise EnumerationError(error_msg) from e

        selection = KeySelection(
            bucket=bucket,
            prefix=prefix,
            keys=tuple(matched),
            scanned=scanned,
            pages=pages,
        )

        logger.info(
            "S3 keys selected",
            bucket=bucket,
            prefix=prefix,
            pages=pages,
            scanned=scanned,
            matched=len(selection.keys),
        )
        return selection
