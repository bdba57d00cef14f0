"""Batch deletion of selected object keys."""

from dataclasses import dataclass
from typing import Sequence

from s3_tools.core import get_logger
from s3_tools.core.exceptions import DeletionError
from s3_tools.objectstorage.clients import S3ClientManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeletionFailure:
    """A key the backend refused to delete."""

    key: str
    code: str
    message: str


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of one batch delete, as confirmed by the backend."""

    bucket: str
    requested: tuple[str, ...]
    deleted: tuple[str, ...] = ()
    errors: tuple[DeletionFailure, ...] = ()
    unconfirmed: tuple[str, ...] = ()

    @property
    def attempted(self) -> bool:
        """False when there was nothing to delete and no request was sent."""
        return bool(self.requested)

    @property
    def complete(self) -> bool:
        """True only when the backend confirmed every requested key."""
        return not self.errors and not self.unconfirmed


class S3BatchDeleter:
    """Deletes a set of keys with a single DeleteObjects request."""

    def __init__(self, client_manager: S3ClientManager):
        self.client_manager = client_manager

    def delete_keys(self, bucket: str, keys: Sequence[str]) -> DeletionResult:
        """Delete the given keys in one request.

        An empty key set sends nothing. The deleted keys in the result come
        from the backend's confirmation, not from the request, so a partial
        failure shows up as a shorter ``deleted`` plus entries in ``errors``.

        Args:
            bucket: Bucket name
            keys: Keys to delete

        Returns:
            DeletionResult with confirmed deletions and per-key errors

        Raises:
            DeletionError: If the delete request itself fails
        """
        requested = tuple(keys)

        if not requested:
            logger.info("No keys to delete", bucket=bucket)
            return DeletionResult(bucket=bucket, requested=requested)

        logger.info("Deleting S3 objects", bucket=bucket, key_count=len(requested))

        try:
            response = self.client_manager.client.delete_objects(
                Bucket=bucket,
                Delete={
                    "Objects": [{"Key": key} for key in requested],
                    "Quiet": False,
                },
            )
        except Exception as e:
            error_msg = f"Failed to delete {len(requested)} object(s) from '{bucket}': {e}"
            logger.error(error_msg, error=str(e))
            raise DeletionError(error_msg) from e

        deleted = tuple(item["Key"] for item in response.get("Deleted", []))
        errors = tuple(
            DeletionFailure(
                key=item.get("Key", ""),
                code=item.get("Code", "Unknown"),
                message=item.get("Message", ""),
            )
            for item in response.get("Errors", [])
        )

        # Keys the backend neither confirmed nor rejected
        answered = set(deleted) | {failure.key for failure in errors}
        unconfirmed = tuple(key for key in requested if key not in answered)

        if errors or unconfirmed:
            logger.warning(
                "S3 batch delete partially failed",
                bucket=bucket,
                deleted=len(deleted),
                failed=len(errors),
                unconfirmed=len(unconfirmed),
            )
        else:
            logger.info("S3 objects deleted", bucket=bucket, deleted=len(deleted))

        return DeletionResult(
            bucket=bucket,
            requested=requested,
            deleted=deleted,
            errors=errors,
            unconfirmed=unconfirmed,
        )
