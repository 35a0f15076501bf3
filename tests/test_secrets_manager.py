"""
Tests for Appwrite API key retrieval from Secrets Manager.
"""
import pytest
from moto import mock_aws
import boto3
import json

from services.appwrite_client import get_api_key


def _create_secret(name, value):
    secrets_client = boto3.client('secretsmanager', region_name='us-east-1')
    secrets_client.create_secret(Name=name, SecretString=json.dumps(value))


@pytest.mark.secrets_manager
@mock_aws()
def test_get_api_key_from_secrets_manager(monkeypatch):
    """Test retrieving the API key from Secrets Manager."""
    monkeypatch.setenv('APPWRITE_API_KEY_SECRET_NAME', 'test-appwrite-key')
    monkeypatch.setenv('AWS_REGION', 'us-east-1')
    _create_secret('test-appwrite-key', {'api_key': 'secret-key'})

    assert get_api_key() == 'secret-key'


@pytest.mark.secrets_manager
@mock_aws()
def test_get_api_key_fallback_to_env_var(monkeypatch):
    """Test fallback to the environment when no secret name is configured."""
    monkeypatch.setenv('APPWRITE_API_KEY', 'env-key')

    assert get_api_key() == 'env-key'


@pytest.mark.secrets_manager
@mock_aws()
def test_get_api_key_secret_missing_field(monkeypatch):
    """Test fallback when the secret exists but has no api_key."""
    monkeypatch.setenv('APPWRITE_API_KEY_SECRET_NAME', 'test-appwrite-key')
    monkeypatch.setenv('APPWRITE_API_KEY', 'env-key')
    _create_secret('test-appwrite-key', {})

    assert get_api_key() == 'env-key'


@pytest.mark.secrets_manager
@mock_aws()
def test_get_api_key_secrets_manager_error(monkeypatch):
    """Test fallback when the secret does not exist."""
    monkeypatch.setenv('APPWRITE_API_KEY_SECRET_NAME', 'non-existent-secret')
    monkeypatch.setenv('APPWRITE_API_KEY', 'env-key')

    assert get_api_key() == 'env-key'


@pytest.mark.secrets_manager
def test_get_api_key_none_configured():
    """Test that no key is a valid outcome for session-only clients."""
    assert get_api_key() is None


@pytest.mark.secrets_manager
@mock_aws()
def test_get_api_key_priority_secrets_manager_first(monkeypatch):
    """Test that Secrets Manager takes priority over the env var when both exist."""
    monkeypatch.setenv('APPWRITE_API_KEY_SECRET_NAME', 'test-appwrite-key')
    monkeypatch.setenv('APPWRITE_API_KEY', 'env-key')
    _create_secret('test-appwrite-key', {'api_key': 'secret-key'})

    assert get_api_key() == 'secret-key'
