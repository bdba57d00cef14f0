"""Object storage operations for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager
from .deletion import DeletionFailure, DeletionResult, S3BatchDeleter
from .listing import KeySelection, ListingPage, S3KeySelector
from .s3_operations import (
    DeleteSummary,
    delete_matching_objects,
    select_objects,
    upload_object,
)
from .upload import S3ObjectUploader, UploadResult

__all__ = [
    "DeleteSummary",
    "DeletionFailure",
    "DeletionResult",
    "KeySelection",
    "ListingPage",
    "S3BatchDeleter",
    "S3ClientConfig",
    "S3ClientManager",
    "S3KeySelector",
    "S3ObjectUploader",
    "UploadResult",
    "delete_matching_objects",
    "select_objects",
    "upload_object",
]
