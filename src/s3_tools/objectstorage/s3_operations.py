"""S3 operations for listing, uploading, and deleting objects.

Each function validates its inputs before touching the network, builds a
single S3ClientManager from the explicit client configuration, and runs the
operation inside a tracing span.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from s3_tools.core import get_logger, get_tracer
from s3_tools.core.exceptions import ValidationError
from s3_tools.objectstorage.clients import S3ClientConfig, S3ClientManager
from s3_tools.objectstorage.deletion import DeletionResult, S3BatchDeleter
from s3_tools.objectstorage.listing import KeySelection, S3KeySelector
from s3_tools.objectstorage.upload import S3ObjectUploader, UploadResult
from s3_tools.schemas import ObjectSelection, UploadRequest

logger = get_logger(__name__)
tracer = get_tracer(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class DeleteSummary:
    """Keys selected for deletion and what the backend did with them."""

    selection: KeySelection
    result: DeletionResult


def _validate(model: Type[ModelT], **values) -> ModelT:
    """Build a request schema, raising ValidationError on bad input."""
    try:
        return model(**values)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(details) from e


# Listing operations
def select_objects(
    bucket: Optional[str],
    config: S3ClientConfig,
    prefix: Optional[str] = "",
    pattern: Optional[str] = None,
    page_size: Optional[int] = None,
    client_manager: Optional[S3ClientManager] = None,
) -> KeySelection:
    """List every key under a prefix and keep those matching a pattern.

    Args:
        bucket: Bucket name
        config: S3 client configuration
        prefix: Key prefix, empty for the whole bucket
        pattern: Regular expression searched in each key, None keeps all keys
        page_size: Keys per list call, backend default when None
        client_manager: Existing client manager to reuse

    Returns:
        KeySelection with the matched keys in listing order

    Raises:
        ValidationError: If the bucket is missing or the pattern is invalid
        EnumerationError: If listing fails
    """
    request = _validate(ObjectSelection, bucket=bucket, prefix=prefix, pattern=pattern)

    with tracer.start_as_current_span("s3.select_objects") as span:
        span.set_attribute("s3.bucket", request.bucket)
        span.set_attribute("s3.prefix", request.prefix)

        manager = client_manager or S3ClientManager(config)
        selection = S3KeySelector(manager).select_keys(
            request.bucket,
            request.prefix,
            key_filter=request.key_filter(),
            page_size=page_size,
        )

        span.set_attribute("s3.matched", len(selection.keys))
        return selection


# Deletion operations
def delete_matching_objects(
    bucket: Optional[str],
    pattern: Optional[str],
    config: S3ClientConfig,
    prefix: Optional[str] = "",
    page_size: Optional[int] = None,
) -> DeleteSummary:
    """Delete every key under a prefix that matches a pattern.

    The full listing is collected before the single delete request is sent.
    Nothing is deleted when listing fails or when no key matches.

    Args:
        bucket: Bucket name
        pattern: Regular expression searched in each key
        config: S3 client configuration
        prefix: Key prefix, empty for the whole bucket
        page_size: Keys per list call, backend default when None

    Returns:
        DeleteSummary with the selection and the backend-confirmed result

    Raises:
        ValidationError: If the bucket or pattern is missing or invalid
        EnumerationError: If listing fails
        DeletionError: If the delete request fails
    """
    if pattern is None:
        raise ValidationError("a filter pattern is required to delete objects")
    request = _validate(ObjectSelection, bucket=bucket, prefix=prefix, pattern=pattern)

    with tracer.start_as_current_span("s3.delete_matching_objects") as span:
        span.set_attribute("s3.bucket", request.bucket)
        span.set_attribute("s3.prefix", request.prefix)

        manager = S3ClientManager(config)
        selection = select_objects(
            request.bucket,
            config,
            prefix=request.prefix,
            pattern=request.pattern,
            page_size=page_size,
            client_manager=manager,
        )
        result = S3BatchDeleter(manager).delete_keys(request.bucket, selection.keys)

        span.set_attribute("s3.deleted", len(result.deleted))
        span.set_attribute("s3.failed", len(result.errors))
        return DeleteSummary(selection=selection, result=result)


# Upload operations
def upload_object(
    bucket: Optional[str],
    file_path: Union[str, Path],
    config: S3ClientConfig,
    key: Optional[str] = None,
    prefix: Optional[str] = "",
) -> UploadResult:
    """Upload a local file to the bucket.

    Args:
        bucket: Bucket name
        file_path: Local file to upload
        config: S3 client configuration
        key: Object key, defaults to the file name
        prefix: Key prefix joined to the key with a single "/"

    Returns:
        UploadResult naming the destination object

    Raises:
        ValidationError: If the bucket, file or key is missing or invalid
        UploadError: If the upload fails
    """
    request = _validate(
        UploadRequest, bucket=bucket, file_path=file_path, key=key, prefix=prefix
    )

    with tracer.start_as_current_span("s3.upload_object") as span:
        destination = request.destination_key
        span.set_attribute("s3.bucket", request.bucket)
        span.set_attribute("s3.key", destination)

        uploader = S3ObjectUploader(S3ClientManager(config))
        return uploader.upload_file(request.bucket, request.file_path, destination)
