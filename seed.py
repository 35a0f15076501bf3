"""
Database seeder: clears the food ordering collections and storage bucket,
then repopulates them from the static dummy dataset.

Run with ``food-seed`` or ``python seed.py``.
"""
import argparse
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional

from appwrite.exception import AppwriteException
from tenacity import RetryCallState, Retrying, stop_after_attempt, wait_exponential

from config import get_config
from dummy_data import DUMMY_DATA
from logger_config import get_logger, set_log_level
from models import DummyData, SeedSummary
from services.database_service import DatabaseService
from services.image_fetch_service import ImageFetchService
from services.storage_service import StorageService
from utils.exceptions import SeedingError

logger = get_logger(__name__)

PLACEHOLDER_IMAGE_URL = 'https://ui-avatars.com/api/?name=Food&size=200&background=random'
MAX_DELETE_WORKERS = 8
MAX_BACKOFF_SECONDS = 10


def _database_service() -> DatabaseService:
    return DatabaseService(get_config().database_id)


def _storage_service() -> StorageService:
    config = get_config()
    return StorageService(config.bucket_id, config.endpoint, config.project_id)


def _image_fetch_service() -> ImageFetchService:
    return ImageFetchService(timeout=get_config().image_fetch_timeout)


def _delete_concurrently(
    delete: Callable[[str], Any],
    item_ids: List[str],
    label: str
) -> int:
    """Fan out deletions and wait for all of them. Failures are logged and skipped."""
    deleted = 0
    workers = max(1, min(MAX_DELETE_WORKERS, len(item_ids)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(delete, item_id): item_id for item_id in item_ids}
        for future in as_completed(futures):
            try:
                future.result()
                deleted += 1
            except Exception as e:
                logger.warning(f'Failed to delete {label} {futures[future]}: {str(e)}')
    return deleted


def clear_all(
    collection_id: str,
    database_service: Optional[DatabaseService] = None
) -> int:
    """
    Delete every document in a collection (best effort).

    Lists page by page until the collection is empty or a page makes no
    progress. Listing failures are logged and swallowed.

    Returns:
        Number of documents deleted
    """
    database_service = database_service or _database_service()
    logger.info(f'Clearing collection: {collection_id}')

    deleted = 0
    try:
        while True:
            page = database_service.list_documents(collection_id)
            document_ids = [doc['$id'] for doc in page['documents']]
            if not document_ids:
                if not deleted:
                    logger.info(f'No documents found in collection {collection_id}')
                break

            removed = _delete_concurrently(
                lambda doc_id: database_service.delete_document(collection_id, doc_id),
                document_ids,
                'document'
            )
            deleted += removed
            if removed == 0:
                logger.warning(f'Could not delete remaining documents in {collection_id}')
                break
    except AppwriteException as e:
        logger.warning(f'Error clearing collection {collection_id}: {e.message}')

    return deleted


def clear_storage(storage_service: Optional[StorageService] = None) -> int:
    """
    Delete every file in the bucket (best effort).

    Returns:
        Number of files deleted
    """
    storage_service = storage_service or _storage_service()
    logger.info(f'Clearing storage bucket: {storage_service.bucket_id}')

    deleted = 0
    try:
        while True:
            page = storage_service.list_files()
            file_ids = [f['$id'] for f in page['files']]
            if not file_ids:
                if not deleted:
                    logger.info('No files found in storage bucket')
                break

            removed = _delete_concurrently(storage_service.delete_file, file_ids, 'file')
            deleted += removed
            if removed == 0:
                logger.warning(f'Could not delete remaining files in {storage_service.bucket_id}')
                break
    except AppwriteException as e:
        logger.warning(f'Error clearing storage: {e.message}')

    return deleted


def upload_image_to_storage(
    image_url: str,
    storage_service: Optional[StorageService] = None,
    image_fetch_service: Optional[ImageFetchService] = None
) -> str:
    """
    Copy a remote image into the bucket and return its view URL.

    Falls back to a generated placeholder image when the source cannot be
    fetched or uploaded.
    """
    storage_service = storage_service or _storage_service()
    image_fetch_service = image_fetch_service or _image_fetch_service()
    logger.info(f'Uploading image from: {image_url}')

    try:
        image = image_fetch_service.fetch(image_url)
        logger.info(f'Creating file in Appwrite storage: {image.filename}')
        created = storage_service.create_file(image.content, image.filename, image.mime_type)
        logger.info(f'File uploaded successfully: {created["$id"]}')
        return storage_service.get_file_view_url(created['$id'])
    except Exception as e:
        logger.warning(f'Failed to fetch image from {image_url}: {str(e)}')
        logger.info('Using placeholder image instead')

    try:
        placeholder = image_fetch_service.fetch(PLACEHOLDER_IMAGE_URL)
        created = storage_service.create_file(
            placeholder.content,
            f'placeholder-{int(time.time() * 1000)}.jpg',
            'image/jpeg'
        )
        return storage_service.get_file_view_url(created['$id'])
    except Exception as e:
        logger.error(f'Error in upload_image_to_storage: {str(e)}')
        raise


def seed(
    data: Optional[DummyData] = None,
    database_service: Optional[DatabaseService] = None,
    storage_service: Optional[StorageService] = None,
    image_fetch_service: Optional[ImageFetchService] = None
) -> SeedSummary:
    """
    Clear and repopulate categories, customizations, menu items and their links.

    Raises:
        SeedingError: If Appwrite is unreachable or the data references
            unknown categories/customizations
        AppwriteException: If any create call fails
    """
    config = get_config()
    data = data or DummyData.from_dict(DUMMY_DATA)
    database_service = database_service or _database_service()
    storage_service = storage_service or _storage_service()
    image_fetch_service = image_fetch_service or _image_fetch_service()

    logger.info('Starting database seeding...')

    try:
        database_service.list_documents(config.categories_collection_id)
        logger.info('Connection to Appwrite successful')
    except AppwriteException as e:
        logger.error(f'Failed to connect to Appwrite: {e.message}')
        raise SeedingError(f'Connection test failed: {e.message}', stage='connection') from e

    # 1. Clear all
    for collection_id in (
        config.categories_collection_id,
        config.customizations_collection_id,
        config.menu_collection_id,
        config.menu_customizations_collection_id,
    ):
        clear_all(collection_id, database_service)
    clear_storage(storage_service)

    summary = SeedSummary()

    # 2. Categories
    category_map: Dict[str, str] = {}
    for category in data.categories:
        doc = database_service.create_document(
            config.categories_collection_id,
            {'name': category.name, 'description': category.description}
        )
        category_map[category.name] = doc['$id']
        summary.categories += 1

    # 3. Customizations
    customization_map: Dict[str, str] = {}
    for customization in data.customizations:
        doc = database_service.create_document(
            config.customizations_collection_id,
            {
                'name': customization.name,
                'price': customization.price,
                'type': customization.type,
            }
        )
        customization_map[customization.name] = doc['$id']
        summary.customizations += 1

    # 4. Menu items and their customization links
    for item in data.menu:
        if item.category_name not in category_map:
            raise SeedingError(
                f'Menu item {item.name!r} references unknown category {item.category_name!r}',
                stage='menu'
            )
        unknown = [name for name in item.customizations if name not in customization_map]
        if unknown:
            raise SeedingError(
                f'Menu item {item.name!r} references unknown customizations {unknown}',
                stage='menu'
            )

        uploaded_image = upload_image_to_storage(
            item.image_url, storage_service, image_fetch_service
        )

        doc = database_service.create_document(
            config.menu_collection_id,
            {
                'name': item.name,
                'description': item.description,
                'image_url': uploaded_image,
                'price': item.price,
                'rating': item.rating,
                'calories': item.calories,
                'protein': item.protein,
                'categories': category_map[item.category_name],
            }
        )
        summary.menu_items += 1

        for customization_name in item.customizations:
            database_service.create_document(
                config.menu_customizations_collection_id,
                {
                    'menu': doc['$id'],
                    'customizations': customization_map[customization_name],
                }
            )
            summary.menu_customizations += 1

    logger.info(
        f'Seeding complete: {summary.categories} categories, '
        f'{summary.customizations} customizations, {summary.menu_items} menu items, '
        f'{summary.menu_customizations} menu customizations'
    )
    return summary


def _attempt_logger(max_retries: int) -> Callable[[RetryCallState], None]:
    def log_attempt(retry_state: RetryCallState) -> None:
        logger.info(f'Seeding attempt {retry_state.attempt_number}/{max_retries}')
    return log_attempt


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.error(f'Attempt {retry_state.attempt_number} failed: {error}')
    logger.info(f'Retrying in {delay:g} seconds...')


def seed_with_retry(
    max_retries: int = 3,
    data: Optional[DummyData] = None,
    sleep: Callable[[float], None] = time.sleep,
    **service_overrides: Any
) -> SeedSummary:
    """
    Run the whole seed with retries and exponential backoff (1s, 2s, 4s ... max 10s).

    Args:
        max_retries: Total attempts before giving up
        data: Dataset to write (defaults to the bundled dummy data)
        sleep: Sleep function used between attempts
        **service_overrides: database_service / storage_service /
            image_fetch_service passed through to seed()

    Raises:
        The last attempt's exception once all attempts fail.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=1, min=1, max=MAX_BACKOFF_SECONDS),
        before=_attempt_logger(max_retries),
        before_sleep=_log_retry,
        sleep=sleep,
        reraise=True,
    )
    try:
        summary = retrying(seed, data=data, **service_overrides)
    except Exception as e:
        logger.error(f'All {max_retries} attempts failed. Giving up: {str(e)}')
        raise

    logger.info('Database seeded successfully!')
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description='Clear and reseed the food ordering Appwrite collections.'
    )
    parser.add_argument(
        '--max-retries',
        type=int,
        default=None,
        help='Seeding attempts before giving up (default: SEED_MAX_RETRIES or 3)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        default=None,
        help='Log level for this run (default: LOG_LEVEL or INFO)'
    )
    args = parser.parse_args(argv)
    if args.max_retries is not None and args.max_retries < 1:
        parser.error(f'--max-retries must be a positive integer, got: {args.max_retries}')

    try:
        config = get_config()
        set_log_level(args.log_level or config.log_level)
        max_retries = args.max_retries or config.seed_max_retries
        seed_with_retry(max_retries=max_retries)
    except Exception as e:
        logger.error(f'Seeding failed: {str(e)}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
