"""
Database service for Appwrite document operations.
"""
from typing import Dict, Any, List, Optional

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.services.databases import Databases

from logger_config import get_logger
from services.appwrite_client import get_client

logger = get_logger(__name__)


class DatabaseService:
    """Service for document operations within one Appwrite database."""

    def __init__(self, database_id: str, client: Optional[Client] = None) -> None:
        """
        Initialize database service.

        Args:
            database_id: ID of the Appwrite database
            client: Appwrite client (defaults to the shared client)
        """
        self.database_id = database_id
        self._client = client
        self._databases: Optional[Databases] = None

    @property
    def databases(self) -> Databases:
        """Lazy initialization of the Databases SDK service."""
        if self._databases is None:
            self._databases = Databases(self._client or get_client())
        return self._databases

    def create_document(
        self,
        collection_id: str,
        data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Create a document with a generated ID.

        Args:
            collection_id: Target collection
            data: Document attributes

        Returns:
            The created document

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        try:
            document = self.databases.create_document(
                self.database_id,
                collection_id,
                ID.unique(),
                data
            )
            logger.debug(f'Created document {document["$id"]} in {collection_id}')
            return document
        except AppwriteException as e:
            logger.error(f'create_document failed for collection {collection_id}: {e.message}')
            raise

    def list_documents(
        self,
        collection_id: str,
        queries: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        List documents in a collection.

        Args:
            collection_id: Collection to list
            queries: Optional Appwrite query strings (see appwrite.query.Query)

        Returns:
            Appwrite list payload with 'total' and 'documents'

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        try:
            return self.databases.list_documents(
                self.database_id,
                collection_id,
                queries or []
            )
        except AppwriteException as e:
            logger.error(f'list_documents failed for collection {collection_id}: {e.message}')
            raise

    def delete_document(self, collection_id: str, document_id: str) -> None:
        """
        Delete a document.

        Raises:
            AppwriteException: If Appwrite operation fails
        """
        try:
            self.databases.delete_document(
                self.database_id,
                collection_id,
                document_id
            )
        except AppwriteException as e:
            logger.error(f'delete_document failed for {collection_id}/{document_id}: {e.message}')
            raise
