"""Object storage deletion operations."""

from .batch_delete import DeletionFailure, DeletionResult, S3BatchDeleter

__all__ = ["DeletionFailure", "DeletionResult", "S3BatchDeleter"]
