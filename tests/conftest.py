"""
Shared fixtures: a clean Appwrite environment and fresh singletons per test.
"""
import pytest

import config
from services import appwrite_client


@pytest.fixture(autouse=True)
def appwrite_env(monkeypatch):
    """Minimal valid environment; tests override individual variables."""
    for key in (
        'APPWRITE_API_KEY',
        'APPWRITE_API_KEY_SECRET_NAME',
        'SEED_MAX_RETRIES',
        'IMAGE_FETCH_TIMEOUT',
        'LOG_LEVEL',
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv('APPWRITE_ENDPOINT', 'https://cloud.appwrite.io/v1')
    monkeypatch.setenv('APPWRITE_PROJECT_ID', 'test-project')
    # moto needs credentials to be present
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')

    config.reset_config()
    appwrite_client.reset_client()
    yield
    config.reset_config()
    appwrite_client.reset_client()
