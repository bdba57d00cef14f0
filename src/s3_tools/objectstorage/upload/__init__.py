"""Object storage upload operations."""

from .object_upload import S3ObjectUploader, UploadResult

__all__ = ["S3ObjectUploader", "UploadResult"]
