"""
Notifications API Router
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from api.auth_middleware import get_current_session
from api.dependencies import get_notification_repository
from api.error_handling import handle_db_errors
from api.models import DeleteResponse, NotificationResponse
from auth.session_store import Session
from repositories.notification_repository import NotificationRepository

router = APIRouter(prefix="/notif", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
@handle_db_errors("fetch notifications")
def get_all(
    session: Session = Depends(get_current_session),
    notifications: NotificationRepository = Depends(get_notification_repository),
):
    """All notifications of the logged in user, newest first."""
    return notifications.list_for_owner(session.account_id)


@router.delete("/{notification_id}", response_model=DeleteResponse)
@handle_db_errors("delete notification")
def delete_one(
    notification_id: UUID,
    session: Session = Depends(get_current_session),
    notifications: NotificationRepository = Depends(get_notification_repository),
):
    """Deletes one notification of the logged in user. Other users' notifications are left alone."""
    deleted = notifications.delete_one(session.account_id, notification_id)
    notifications.commit()
    return DeleteResponse(deleted=deleted)


@router.delete("", response_model=DeleteResponse)
@handle_db_errors("delete notifications")
def delete_all(
    session: Session = Depends(get_current_session),
    notifications: NotificationRepository = Depends(get_notification_repository),
):
    """Deletes all notifications of the logged in user."""
    deleted = notifications.delete_all(session.account_id)
    notifications.commit()
    return DeleteResponse(deleted=deleted)
