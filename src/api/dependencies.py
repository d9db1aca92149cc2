"""
FastAPI dependencies for database access
"""

import logging
from typing import Generator

from fastapi import Depends, HTTPException, Request, status
from mysql.connector.errors import Error as MySQLError

from Database import Database
from infrastructure.unit_of_work import UnitOfWork
from repositories.image_repository import ImageRepository
from repositories.notification_repository import NotificationRepository
from repositories.user_repository import UserRepository


logger = logging.getLogger("uvicorn.error")


def get_database(request: Request) -> Database:
    """
    Get the database attached to the app at startup.

    Raises:
        HTTPException: If database not initialized
    """
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_connected():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized"
        )
    return database


def get_unit_of_work(database: Database = Depends(get_database)) -> Generator[UnitOfWork, None, None]:
    """
    Request-scoped unit of work on a pooled connection.

    Work that was not committed explicitly is committed when the request
    finishes without error and rolled back otherwise.
    """
    try:
        connection = database.create_connection()
    except (MySQLError, RuntimeError) as e:
        logger.error("Database connection unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection unavailable"
        )

    with UnitOfWork(connection, owns_connection=True) as uow:
        yield uow


def get_user_repository(uow: UnitOfWork = Depends(get_unit_of_work)) -> UserRepository:
    return UserRepository(uow)


def get_image_repository(uow: UnitOfWork = Depends(get_unit_of_work)) -> ImageRepository:
    return ImageRepository(uow)


def get_notification_repository(uow: UnitOfWork = Depends(get_unit_of_work)) -> NotificationRepository:
    return NotificationRepository(uow)
