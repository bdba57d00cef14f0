"""A command-line tool for listing, uploading and deleting S3 objects.

This package lists object keys under a prefix, uploads single files, and
bulk-deletes every object whose key matches a regular expression. It works
with AWS S3 and S3-compatible services.

Key Features:
    - Paginated listing with regular expression filtering
    - Single-request batch deletion with per-key error reporting
    - Single-file upload with explicit destination key validation
    - Profile, explicit-credential and custom-endpoint client setup
    - CLI interface

Recommended Usage:

    >>> from s3_tools import S3ClientConfig, select_objects
    >>> config = S3ClientConfig(aws_profile="my-profile")
    >>> selection = select_objects("my-bucket", config, prefix="logs/", pattern=r"\\.gz$")
    >>> selection.keys
"""

__version__ = "1.0.0"

from .objectstorage import (
    DeleteSummary,
    DeletionFailure,
    DeletionResult,
    KeySelection,
    S3ClientConfig,
    S3ClientManager,
    UploadResult,
    delete_matching_objects,
    select_objects,
    upload_object,
)
from .schemas import ObjectSelection, UploadRequest

__all__ = [
    # Configuration
    "S3ClientConfig",
    "S3ClientManager",
    # Request schemas
    "ObjectSelection",
    "UploadRequest",
    # Operations
    "delete_matching_objects",
    "select_objects",
    "upload_object",
    # Results
    "DeleteSummary",
    "DeletionFailure",
    "DeletionResult",
    "KeySelection",
    "UploadResult",
]
