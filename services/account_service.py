"""
Account service for Appwrite authentication operations.
"""
from typing import Dict, Any, Optional

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.services.account import Account

from logger_config import get_logger
from services.appwrite_client import get_client, get_session_client, open_session

logger = get_logger(__name__)


class AccountService:
    """
    Service for Appwrite account operations.

    Signup and signin go through the shared client. A signin that returns a
    session secret opens a separate session client (see
    ``services.appwrite_client.open_session``); ``get`` reads the current
    account through that session client. The shared client, which may carry
    the API key, never takes on a user session.
    """

    def __init__(self, client: Optional[Client] = None) -> None:
        """
        Initialize account service.

        Args:
            client: Appwrite client for every call (defaults to the shared
                client for signup/signin and the session client for get)
        """
        self._client = client
        self._client_injected = client is not None
        self._account: Optional[Account] = None

    @property
    def client(self) -> Client:
        """Lazy lookup of the Appwrite client."""
        if self._client is None:
            self._client = get_client()
        return self._client

    @property
    def account(self) -> Account:
        """Lazy initialization of the Account SDK service."""
        if self._account is None:
            self._account = Account(self.client)
        return self._account

    def create(self, email: str, password: str, name: str) -> Dict[str, Any]:
        """
        Create a new account with a generated ID.

        Raises:
            AppwriteException: If Appwrite rejects the request
        """
        try:
            new_account = self.account.create(ID.unique(), email, password, name)
            logger.info(f'Created account {new_account.get("$id")} for {email}')
            return new_account
        except AppwriteException as e:
            logger.error(f'Account create failed for {email}: {e.message}')
            raise

    def create_email_password_session(
        self,
        email: str,
        password: str
    ) -> Dict[str, Any]:
        """
        Open an email/password session.

        When Appwrite returns the session secret (API key clients), a
        session client is opened for follow-up account calls.

        Raises:
            AppwriteException: If the credentials are rejected
        """
        try:
            session = self.account.create_email_password_session(email, password)
        except AppwriteException as e:
            logger.error(f'Session create failed for {email}: {e.message}')
            raise

        secret = session.get('secret') if session else None
        if secret:
            open_session(secret)
        logger.info(f'Signed in {email}')
        return session

    def get(self) -> Dict[str, Any]:
        """
        Get the account of the current session.

        Raises:
            AppwriteException: If there is no active session
        """
        if self._client_injected:
            session_account = self.account
        else:
            session_account = Account(get_session_client())
        try:
            return session_account.get()
        except AppwriteException as e:
            logger.error(f'Account get failed: {e.message}')
            raise
