"""Single-object upload."""

from dataclasses import dataclass
from pathlib import Path

from s3_tools.core import get_logger
from s3_tools.core.exceptions import UploadError
from s3_tools.objectstorage.clients import S3ClientManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Where an uploaded file ended up."""

    bucket: str
    key: str
    size: int

    @property
    def s3_path(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class S3ObjectUploader:
    """Uploads local files as single objects."""

    def __init__(self, client_manager: S3ClientManager):
        self.client_manager = client_manager

    def upload_file(self, bucket: str, file_path: Path, key: str) -> UploadResult:
        """Upload the full content of a file with one PutObject call.

        Args:
            bucket: Bucket name
            file_path: Local file to read
            key: Destination object key

        Returns:
            UploadResult describing the stored object

        Raises:
            UploadError: If the file cannot be read or the put fails
        """
        logger.info("Uploading file", bucket=bucket, key=key, file=str(file_path))

        try:
            body = file_path.read_bytes()
            self.client_manager.client.put_object(Bucket=bucket, Key=key, Body=body)
        except Exception as e:
            error_msg = f"Failed to upload '{file_path}' to s3://{bucket}/{key}: {e}"
            logger.error(error_msg, error=str(e))
            raise UploadError(error_msg) from e

        logger.info("File uploaded", bucket=bucket, key=key, size=len(body))
        return UploadResult(bucket=bucket, key=key, size=len(body))
