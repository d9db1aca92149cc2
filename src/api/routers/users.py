#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Users API Router - login, logout and account management.
#
"""
Users API Router - login, logout and account management.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from mysql.connector.errors import IntegrityError

from api.auth_context import AuthContext, get_auth_context
from api.auth_middleware import get_current_session, get_current_user, get_session_id
from api.dependencies import get_user_repository
from api.error_handling import (
    bad_request,
    forbidden_roles,
    handle_db_errors,
    invalid_session,
    not_found,
    not_found_item,
    too_many_requests,
    unauthorized,
)
from api.models import (
    ChangePasswordRequest,
    ImageUrlRequest,
    LoginResponse,
    SessionResponse,
    UserRequest,
    UserResponse,
)
from auth.session_manager import LoginRejected
from auth.session_store import Session
from domain.user import User
from repositories.user_repository import UserRepository


logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/users", tags=["users"])


# --- Gets -----------------------------------------------------------------

@router.get("/dir", response_model=list[UserResponse])
@handle_db_errors("user directory")
def get_directory(
    query: Optional[str] = Query(None),
    take: int = Query(20, ge=0, le=100),
    skip: int = Query(0, ge=0),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Directory of all users.

    Args:
        query: Optional substring to search for in usernames
        take: Page size (default 20)
        skip: Number of users to skip (default 0)
    """
    return users.list_directory(query=query, take=take, skip=skip)


@router.get("", response_model=UserResponse)
def get_current_logged_in(user: User = Depends(get_current_user)):
    """User of the currently logged in session."""
    return user


@router.get("/sessions", response_model=list[SessionResponse])
def get_sessions(
    session: Session = Depends(get_current_session),
    context: AuthContext = Depends(get_auth_context),
):
    """Active sessions of the current account, oldest first."""
    return [
        SessionResponse(id=s.id, created_at=s.created_at, current=s.id == session.id)
        for s in context.session_manager.list_sessions(session.account_id)
    ]


@router.get("/{username}", response_model=UserResponse)
@handle_db_errors("fetch user")
def get_user(username: str, users: UserRepository = Depends(get_user_repository)):
    """A given user."""
    user = users.get_by_username(username)
    if user is None:
        raise not_found("User was not found")
    return user


# --- Puts -----------------------------------------------------------------

@router.put("", response_model=UserResponse)
@handle_db_errors("password change")
def update_password(
    request: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    context: AuthContext = Depends(get_auth_context),
):
    """
    Changes the password of the current user.

    Other sessions of the user stay logged in.
    """
    if not request.new or not request.current:
        raise bad_request("Cannot have empty passwords")

    manager = context.session_manager
    if not manager.check_credential(user.username, request.current):
        raise bad_request("Incorrect current password")

    if not manager.update_credential(user.username, request.new):
        raise invalid_session()
    return user


@router.put("/image", response_model=UserResponse)
@handle_db_errors("update user image")
def update_image(
    request: ImageUrlRequest,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Updates the profile image URL of the current user."""
    users.update_image(user.username, request.image_url)
    users.commit()
    user.image_url = request.image_url
    return user


@router.put("/{username}/reset", response_model=UserResponse)
@handle_db_errors("password reset")
def reset_password(
    username: str,
    request: ChangePasswordRequest,
    executor: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    context: AuthContext = Depends(get_auth_context),
):
    """Administrator resets the password of another user."""
    if not request.new:
        raise bad_request("Cannot have empty password")
    if not executor.is_admin:
        raise forbidden_roles("Admin")

    target = users.get_by_username(username)
    if target is None:
        raise not_found_item("User", username)

    if not context.session_manager.update_credential(target.username, request.new):
        raise not_found_item("User", username)
    logger.info("Password of '%s' reset by '%s'", target.username, executor.username)
    return target


# --- Posts ----------------------------------------------------------------

@router.post("", response_model=LoginResponse)
@handle_db_errors("user login")
def log_in(request: UserRequest, context: AuthContext = Depends(get_auth_context)):
    """
    Logs a user in and returns a new session ID.

    An unknown user and a wrong password give the same answer.
    """
    if not request.username or not request.password:
        raise bad_request("User or Password was empty")

    username = request.username.strip()
    limiter = context.rate_limiter

    if not limiter.try_begin_attempt(username):
        raise too_many_requests(limiter.get_retry_after(username))

    # The attempt stays recorded as failed unless the login succeeds
    result = context.session_manager.log_in(username, request.password)
    if isinstance(result, LoginRejected):
        raise unauthorized("User or password was incorrect")

    limiter.reset(username)
    return LoginResponse(session_id=result)


@router.post("/register", response_model=UserResponse)
@handle_db_errors("user registration")
def register(
    request: UserRequest,
    users: UserRepository = Depends(get_user_repository),
    context: AuthContext = Depends(get_auth_context),
):
    """
    Registers a new user.

    The very first user becomes an administrator.
    """
    if not request.username or not request.password:
        raise bad_request("User or Password was empty")

    username = request.username.strip()
    if not username:
        raise bad_request("User or Password was empty")

    new_user = User(username=username, password_hash=context.session_manager.verifier.hash(request.password))

    if not users.any_users():
        new_user.is_admin = True
    elif users.exists(username):
        raise bad_request("Username already in use")

    try:
        users.insert(new_user)
        users.commit()
    except IntegrityError:
        raise bad_request("Username already in use")

    logger.info("User '%s' registered%s", username, " as administrator" if new_user.is_admin else "")
    return new_user


@router.post("/out")
def log_out(
    session_id: Optional[str] = Depends(get_session_id),
    context: AuthContext = Depends(get_auth_context),
) -> bool:
    """Logs out the presented session. Returns whether a session was ended."""
    return context.session_manager.log_out(session_id)


@router.post("/outall")
def log_out_all(
    session: Session = Depends(get_current_session),
    context: AuthContext = Depends(get_auth_context),
) -> int:
    """Logs out every session of the presenting account. Returns the number ended."""
    return context.session_manager.log_out_all(session.account_id)
