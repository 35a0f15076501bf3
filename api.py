"""
App-facing operations for the food ordering backend.

Each operation is a thin wrapper over the Appwrite services; failures are
surfaced uniformly as AppwriteOperationError by the platform_operation
decorator.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from appwrite.query import Query

from config import get_config
from logger_config import get_logger
from models import CreateUserParams, GetMenuParams, SignInParams
from services.account_service import AccountService
from services.database_service import DatabaseService
from utils.decorators import platform_operation
from utils.exceptions import AppwriteOperationError

logger = get_logger(__name__)

AVATAR_URL_TEMPLATE = 'https://ui-avatars.com/api/?name={name}&size=200&background=random'


def build_avatar_url(name: str) -> str:
    """Generated-initials avatar URL for a user name."""
    return AVATAR_URL_TEMPLATE.format(name=quote(name, safe="!*'()"))


def _database_service() -> DatabaseService:
    return DatabaseService(get_config().database_id)


@platform_operation('create_user')
def create_user(
    params: CreateUserParams,
    account_service: Optional[AccountService] = None,
    database_service: Optional[DatabaseService] = None
) -> Dict[str, Any]:
    """Sign up: create the account, sign in, then store the user profile document."""
    config = get_config()
    account_service = account_service or AccountService()
    database_service = database_service or _database_service()

    new_account = account_service.create(params.email, params.password, params.name)
    if not new_account:
        raise AppwriteOperationError('Failed to create user', operation='create_user')

    sign_in(SignInParams(params.email, params.password), account_service=account_service)

    return database_service.create_document(
        config.user_collection_id,
        {
            'accountId': new_account['$id'],
            'email': params.email,
            'name': params.name,
            'avatar': build_avatar_url(params.name),
        }
    )


@platform_operation('sign_in')
def sign_in(
    params: SignInParams,
    account_service: Optional[AccountService] = None
) -> Dict[str, Any]:
    """Open an email/password session."""
    account_service = account_service or AccountService()
    return account_service.create_email_password_session(params.email, params.password)


@platform_operation('get_current_user')
def get_current_user(
    account_service: Optional[AccountService] = None,
    database_service: Optional[DatabaseService] = None
) -> Dict[str, Any]:
    """Return the user document linked to the signed-in account."""
    config = get_config()
    account_service = account_service or AccountService()
    database_service = database_service or _database_service()

    current_account = account_service.get()
    if not current_account:
        raise AppwriteOperationError('No active account', operation='get_current_user')

    result = database_service.list_documents(
        config.user_collection_id,
        [Query.equal('accountId', current_account['$id'])]
    )
    documents = result.get('documents') if result else None
    if not documents:
        raise AppwriteOperationError(
            f'No user document for account {current_account["$id"]}',
            operation='get_current_user'
        )
    return documents[0]


def build_menu_queries(params: GetMenuParams) -> List[str]:
    """Query filters for a menu lookup; empty values add no filter."""
    queries = []
    if params.category:
        queries.append(Query.equal('categories', params.category))
    if params.query:
        queries.append(Query.search('name', params.query))
    return queries


@platform_operation('get_menu')
def get_menu(
    params: Optional[GetMenuParams] = None,
    database_service: Optional[DatabaseService] = None
) -> List[Dict[str, Any]]:
    """List menu items, optionally by category ID and name search."""
    config = get_config()
    database_service = database_service or _database_service()

    queries = build_menu_queries(params or GetMenuParams())
    menus = database_service.list_documents(config.menu_collection_id, queries)
    logger.debug(f'get_menu returned {len(menus["documents"])} items')
    return menus['documents']


@platform_operation('get_categories')
def get_categories(
    database_service: Optional[DatabaseService] = None
) -> List[Dict[str, Any]]:
    """List all menu categories."""
    config = get_config()
    database_service = database_service or _database_service()

    categories = database_service.list_documents(config.categories_collection_id)
    return categories['documents']
