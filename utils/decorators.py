"""
Operation decorators for error handling and logging around Appwrite calls.
"""
import functools
import uuid
from typing import Callable, Any, TypeVar

from appwrite.exception import AppwriteException

from logger_config import get_logger
from utils.exceptions import (
    AppwriteOperationError,
    ImageFetchError,
    SeedingError,
    ValidationError,
)

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Raised by our own code; these already carry meaningful context.
PASSTHROUGH_ERRORS = (
    AppwriteOperationError,
    ImageFetchError,
    SeedingError,
    ValidationError,
)


def platform_operation(name: str) -> Callable[[F], F]:
    """
    Decorator for application operations backed by Appwrite.

    Provides:
    - Correlation IDs for logging
    - Conversion of SDK and unexpected errors into AppwriteOperationError,
      keeping the HTTP code and error type and chaining the original

    Args:
        name: Operation name used in logs and on raised errors

    Returns:
        Decorator for the operation function
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            correlation_id = str(uuid.uuid4())

            logger.debug(
                f"Operation {name} invoked",
                extra={"correlation_id": correlation_id, "operation": name}
            )

            try:
                return func(*args, **kwargs)

            except PASSTHROUGH_ERRORS:
                raise

            except AppwriteException as e:
                logger.error(
                    f"Operation {name} failed: {e.message} "
                    f"(code={e.code}, type={e.type})",
                    extra={"correlation_id": correlation_id, "operation": name}
                )
                raise AppwriteOperationError(
                    str(e.message),
                    operation=name,
                    code=e.code,
                    error_type=e.type
                ) from e

            except Exception as e:
                logger.error(
                    f"Operation {name} failed: {str(e)}",
                    extra={"correlation_id": correlation_id, "operation": name},
                    exc_info=True
                )
                raise AppwriteOperationError(str(e), operation=name) from e

        return wrapper  # type: ignore[return-value]

    return decorator
