"""
Authentication dependencies.

The client presents its session ID in the ``SessionID`` header. A missing,
malformed or unknown ID is always answered with 401.
"""

import logging
from typing import Optional

from fastapi import Depends, Header

from api.auth_context import AuthContext, get_auth_context
from api.dependencies import get_user_repository
from api.error_handling import handle_db_errors, invalid_session
from auth.session_store import Session, short_id
from domain.user import User
from repositories.user_repository import UserRepository


logger = logging.getLogger("uvicorn.error")

SESSION_HEADER = "SessionID"


def get_session_id(session_id: Optional[str] = Header(None, alias=SESSION_HEADER)) -> Optional[str]:
    """Dependency: raw session ID from the request header, if any."""
    if session_id is None:
        return None
    return session_id.strip() or None


def get_current_session(
    session_id: Optional[str] = Depends(get_session_id),
    context: AuthContext = Depends(get_auth_context),
) -> Session:
    """
    Dependency: resolves the presented session.

    Returns:
        Active Session

    Raises:
        HTTPException: 401 if no active session matches
    """
    session = context.session_manager.find_session(session_id)
    if session is None:
        raise invalid_session()
    return session


@handle_db_errors("resolve current user")
def get_current_user(
    session: Session = Depends(get_current_session),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Dependency: user behind the presented session.

    Raises:
        HTTPException: 401 if the session is invalid or its user no longer exists
    """
    user = users.get_by_username(session.account_id)
    if user is None:
        logger.warning("Session %s refers to missing user '%s'", short_id(session.id), session.account_id)
        raise invalid_session()
    return user
