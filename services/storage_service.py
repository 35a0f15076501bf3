"""
Storage service for Appwrite bucket operations.
"""
from typing import Dict, Any, Optional

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.input_file import InputFile
from appwrite.services.storage import Storage

from logger_config import get_logger
from services.appwrite_client import get_client

logger = get_logger(__name__)


class StorageService:
    """Service for Appwrite storage operations on a single bucket."""

    def __init__(
        self,
        bucket_id: str,
        endpoint: str,
        project_id: str,
        client: Optional[Client] = None
    ):
        """
        Initialize storage service.

        Args:
            bucket_id: ID of the Appwrite storage bucket
            endpoint: Appwrite API endpoint, used to build file URLs
            project_id: Appwrite project ID, used to build file URLs
            client: Appwrite client (defaults to the shared client)
        """
        self.bucket_id = bucket_id
        self.endpoint = endpoint.rstrip('/')
        self.project_id = project_id
        self._client = client
        self._storage: Optional[Storage] = None

    @property
    def storage(self) -> Storage:
        """Lazy initialization of the Storage SDK service."""
        if self._storage is None:
            self._storage = Storage(self._client or get_client())
        return self._storage

    def create_file(
        self,
        content: bytes,
        filename: str,
        mime_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Upload bytes as a new file with a generated ID.

        Args:
            content: File body
            filename: Name stored with the file
            mime_type: Content type of the body

        Returns:
            The created file metadata

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        input_file = InputFile.from_bytes(content, filename=filename, mime_type=mime_type)
        try:
            created = self.storage.create_file(self.bucket_id, ID.unique(), input_file)
        except AppwriteException as e:
            logger.error(f'create_file failed for {filename} in bucket {self.bucket_id}: {e.message}')
            raise
        logger.info(f'Created file {created["$id"]} ({filename}) in bucket {self.bucket_id}')
        return created

    def list_files(self) -> Dict[str, Any]:
        """
        List files in the bucket.

        Returns:
            Appwrite list payload with 'total' and 'files'

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        try:
            return self.storage.list_files(self.bucket_id)
        except AppwriteException as e:
            logger.error(f'list_files failed for bucket {self.bucket_id}: {e.message}')
            raise

    def delete_file(self, file_id: str) -> None:
        """
        Delete a file from the bucket.

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        try:
            self.storage.delete_file(self.bucket_id, file_id)
        except AppwriteException as e:
            logger.error(f'delete_file failed for {self.bucket_id}/{file_id}: {e.message}')
            raise

    def get_file_view_url(self, file_id: str) -> str:
        """Build the public view URL of a file."""
        return (
            f'{self.endpoint}/storage/buckets/{self.bucket_id}'
            f'/files/{file_id}/view?project={self.project_id}'
        )
