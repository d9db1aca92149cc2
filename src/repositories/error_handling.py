#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Central error handling for the repository layer.
#
"""
Central error handling for the repository layer.

Repositories log database failures with the failing operation and re-raise
them unchanged; mapping to HTTP status codes happens in the API layer.
Constraint violations (e.g. a username that is already taken) are expected
outcomes and are logged without a traceback.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, Any
import logging

from mysql.connector.errors import Error as MySQLError, IntegrityError, OperationalError, InterfaceError

logger = logging.getLogger("uvicorn.error")


def _describe(operation_name: str, kind: str, exc: Exception, error_message: str | None = None) -> str:
    return f"{error_message or kind} ({operation_name}): {exc}"


def handle_repository_errors(
    operation_name: str = "database operation",
    error_message: str | None = None,
):
    """
    Decorator for consistent error logging in repositories.

    Args:
        operation_name: Name of the repository operation for log messages
        error_message: Optional text replacing the generic error kind
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except IntegrityError as exc:
                logger.info(_describe(operation_name, "Constraint violation", exc, error_message))
                raise
            except (OperationalError, InterfaceError) as exc:
                logger.exception(_describe(operation_name, "Database connection error", exc, error_message))
                raise
            except MySQLError as exc:
                logger.exception(_describe(operation_name, "Database error", exc, error_message))
                raise
        return wrapper
    return decorator
