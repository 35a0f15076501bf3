"""
Shared Appwrite SDK client and API key resolution.
"""
import json
from typing import Optional

import boto3
from appwrite.client import Client

from config import get_config
from logger_config import get_logger

logger = get_logger(__name__)

_client: Optional[Client] = None
_session_client: Optional[Client] = None


def get_api_key() -> Optional[str]:
    """
    Retrieve the Appwrite API key from Secrets Manager with fallback
    to the environment.

    Returns:
        The API key, or None when neither source provides one. Session-only
        usage (signup/signin from the app) does not need a key.
    """
    config = get_config()

    if config.api_key_secret_name:
        try:
            secrets_client = boto3.client(
                'secretsmanager', region_name=config.aws_region
            )
            response = secrets_client.get_secret_value(
                SecretId=config.api_key_secret_name
            )
            secret_data = json.loads(response['SecretString'])
            api_key = secret_data.get('api_key')

            if api_key:
                logger.info(
                    f'Retrieved Appwrite API key from '
                    f'Secrets Manager: {config.api_key_secret_name}'
                )
                return api_key
            logger.warning(
                f'Secrets Manager secret {config.api_key_secret_name} '
                f'has no api_key, falling back to env vars'
            )
        except Exception as e:
            logger.warning(
                f'Failed to retrieve API key from Secrets Manager '
                f'({config.api_key_secret_name}): {str(e)}. '
                f'Falling back to environment variables.'
            )

    if config.api_key:
        logger.info('Using Appwrite API key from environment variables')
        return config.api_key

    logger.debug('No Appwrite API key configured')
    return None


def _new_client() -> Client:
    config = get_config()
    client = Client()
    client.set_endpoint(config.endpoint)
    client.set_project(config.project_id)
    return client


def get_client() -> Client:
    """Lazily build the process-wide Appwrite client (API key, no session)."""
    global _client
    if _client is None:
        config = get_config()
        client = _new_client()

        api_key = get_api_key()
        if api_key:
            client.set_key(api_key)

        logger.info(f'Appwrite endpoint: {config.endpoint}')
        logger.info(f'Project ID: {config.project_id}')
        _client = client
    return _client


def open_session(secret: str) -> Client:
    """
    Build a key-less client acting as the signed-in user.

    The shared API-key client is left untouched; the new client becomes
    the one returned by get_session_client().
    """
    global _session_client
    client = _new_client()
    client.set_session(secret)
    _session_client = client
    return client


def get_session_client() -> Client:
    """Client for user-scoped calls: the signed-in session, else the shared client."""
    if _session_client is not None:
        return _session_client
    return get_client()


def reset_client() -> None:
    """Forget the shared and session clients (tests, or after a config change)."""
    global _client, _session_client
    _client = None
    _session_client = None
