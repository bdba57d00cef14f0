"""Exception hierarchy for s3-tools."""


class S3ToolsError(Exception):
    """Base exception for all s3-tools errors."""

    pass


class ValidationError(S3ToolsError):
    """Raised when input validation fails, before any backend call."""

    pass


class EnumerationError(S3ToolsError):
    """Raised when listing objects fails part way through pagination."""

    pass


class DeletionError(S3ToolsError):
    """Raised when a batch delete request fails as a whole."""

    pass


class UploadError(S3ToolsError):
    """Raised when an object upload fails."""

    pass
