"""
Configuration module for environment variable validation and type-safe config.

This module validates the Appwrite connection settings and collection
identifiers, and provides a type-safe configuration object.
"""
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_DATABASE_ID = "6868e85f0030b31ffa38"
DEFAULT_BUCKET_ID = "686a1633002e683006d3"
DEFAULT_USER_COLLECTION_ID = "6868e87d0039185334e4"
DEFAULT_CATEGORIES_COLLECTION_ID = "686a10e20035d5aaf174"
DEFAULT_MENU_COLLECTION_ID = "686a12540004feab05d4"
DEFAULT_CUSTOMIZATIONS_COLLECTION_ID = "686a13a900317465b08c"
DEFAULT_MENU_CUSTOMIZATIONS_COLLECTION_ID = "686a14d30035392df3aa"


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    endpoint: str
    project_id: str
    api_key: Optional[str] = None
    api_key_secret_name: Optional[str] = None
    database_id: str = DEFAULT_DATABASE_ID
    bucket_id: str = DEFAULT_BUCKET_ID
    user_collection_id: str = DEFAULT_USER_COLLECTION_ID
    categories_collection_id: str = DEFAULT_CATEGORIES_COLLECTION_ID
    menu_collection_id: str = DEFAULT_MENU_COLLECTION_ID
    customizations_collection_id: str = DEFAULT_CUSTOMIZATIONS_COLLECTION_ID
    menu_customizations_collection_id: str = DEFAULT_MENU_CUSTOMIZATIONS_COLLECTION_ID
    aws_region: str = "us-east-1"
    log_level: str = "INFO"
    seed_max_retries: int = 3
    image_fetch_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If required environment variables are missing or invalid.
        """
        endpoint = os.environ.get("APPWRITE_ENDPOINT")
        if not endpoint:
            raise ValueError(
                "APPWRITE_ENDPOINT environment variable is required"
            )

        project_id = os.environ.get("APPWRITE_PROJECT_ID")
        if not project_id:
            raise ValueError(
                "APPWRITE_PROJECT_ID environment variable is required"
            )

        api_key = os.environ.get("APPWRITE_API_KEY") or None
        api_key_secret_name = os.environ.get("APPWRITE_API_KEY_SECRET_NAME") or None

        aws_region = os.environ.get("AWS_REGION", "us-east-1")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_log_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}"
            )

        raw_retries = os.environ.get("SEED_MAX_RETRIES", "3")
        try:
            seed_max_retries = int(raw_retries)
        except ValueError:
            seed_max_retries = 0
        if seed_max_retries < 1:
            raise ValueError(
                f"SEED_MAX_RETRIES must be a positive integer, got: {raw_retries}"
            )

        raw_timeout = os.environ.get("IMAGE_FETCH_TIMEOUT", "30")
        try:
            image_fetch_timeout = float(raw_timeout)
        except ValueError:
            image_fetch_timeout = 0.0
        if image_fetch_timeout <= 0:
            raise ValueError(
                f"IMAGE_FETCH_TIMEOUT must be a positive number, got: {raw_timeout}"
            )

        return cls(
            endpoint=endpoint.rstrip("/"),
            project_id=project_id,
            api_key=api_key,
            api_key_secret_name=api_key_secret_name,
            database_id=os.environ.get("APPWRITE_DATABASE_ID", DEFAULT_DATABASE_ID),
            bucket_id=os.environ.get("APPWRITE_BUCKET_ID", DEFAULT_BUCKET_ID),
            user_collection_id=os.environ.get(
                "APPWRITE_USER_COLLECTION_ID", DEFAULT_USER_COLLECTION_ID
            ),
            categories_collection_id=os.environ.get(
                "APPWRITE_CATEGORIES_COLLECTION_ID", DEFAULT_CATEGORIES_COLLECTION_ID
            ),
            menu_collection_id=os.environ.get(
                "APPWRITE_MENU_COLLECTION_ID", DEFAULT_MENU_COLLECTION_ID
            ),
            customizations_collection_id=os.environ.get(
                "APPWRITE_CUSTOMIZATIONS_COLLECTION_ID",
                DEFAULT_CUSTOMIZATIONS_COLLECTION_ID,
            ),
            menu_customizations_collection_id=os.environ.get(
                "APPWRITE_MENU_CUSTOMIZATIONS_COLLECTION_ID",
                DEFAULT_MENU_CUSTOMIZATIONS_COLLECTION_ID,
            ),
            aws_region=aws_region,
            log_level=log_level,
            seed_max_retries=seed_max_retries,
            image_fetch_timeout=image_fetch_timeout,
        )


# Global config instance - created on first use
# This will raise ValueError if required env vars are missing
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If required environment variables are missing or invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config
    _config = None
