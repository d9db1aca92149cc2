"""
Central error handling for the Chopo API.
Provides consistent error handling patterns and error responses for all routers.
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from fastapi import HTTPException, status
from mysql.connector.errors import Error as MySQLError, OperationalError, InterfaceError, PoolError


logger = logging.getLogger("uvicorn.error")

CONNECTION_ERRORS = (OperationalError, InterfaceError, PoolError)


def _translate(exc: Exception, operation_name: str) -> HTTPException:
    if isinstance(exc, CONNECTION_ERRORS):
        logger.exception("Database connection error in %s: %s", operation_name, exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error during {operation_name}. Please try again."
        )
    if isinstance(exc, MySQLError):
        logger.exception("MySQL error in %s: %s", operation_name, exc)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error during {operation_name}"
        )
    logger.exception("Unexpected error in %s: %s", operation_name, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Internal server error during {operation_name}"
    )


def handle_db_errors(operation_name: str = "database operation"):
    """
    Decorator for consistent error handling in API endpoints.

    HTTPExceptions pass through unchanged, database connection problems
    become 503 and everything else becomes 500.

    Args:
        operation_name: Name of the operation for error messages

    Usage:
        @router.get("/endpoint")
        @handle_db_errors("fetch data")
        def my_endpoint(users = Depends(get_user_repository)):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(exc, operation_name) from exc

        @wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(exc, operation_name) from exc

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


# Error response shortcuts used by the routers

def bad_request(message: str) -> HTTPException:
    """400 Bad Request"""
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def invalid_session() -> HTTPException:
    """401 Unauthorized: missing, unknown or ended session"""
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")


def unauthorized(message: str) -> HTTPException:
    """401 Unauthorized"""
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def forbidden_roles(*roles: str) -> HTTPException:
    """403 Forbidden: the user lacks one of the given roles"""
    detail = "Missing required role(s)"
    if roles:
        detail = f"{detail}: {', '.join(roles)}"
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def not_found(message: str) -> HTTPException:
    """404 Not Found"""
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def not_found_item(item_name: str, item_id: Optional[Any]) -> HTTPException:
    """404 Not Found: item with the given ID does not exist"""
    return not_found(f"{item_name} with ID '{item_id}' was not found")


def too_many_requests(retry_after: int) -> HTTPException:
    """429 Too Many Requests with Retry-After header"""
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many login attempts. Please wait {retry_after} seconds.",
        headers={"Retry-After": str(retry_after)},
    )
