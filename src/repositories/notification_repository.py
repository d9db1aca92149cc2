from uuid import UUID

from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors
from domain.notification import Notification


class NotificationRepository(BaseRepository):
   @handle_repository_errors("fetch notifications")
   def list_for_owner(self, owner: str) -> list[Notification]:
      rows = self._fetch_all(
         "SELECT id, owner, text, dateCreated FROM tbl_notification WHERE owner = %s ORDER BY dateCreated DESC",
         (owner,),
      )
      return [
         Notification(id=UUID(row[0]), owner=row[1], text=row[2], created_at=row[3])
         for row in rows
      ]

   @handle_repository_errors("delete notification")
   def delete_one(self, owner: str, notification_id: UUID) -> int:
      self.cursor.execute(
         "DELETE FROM tbl_notification WHERE owner = %s AND id = %s",
         (owner, str(notification_id)),
      )
      return self.cursor.rowcount

   @handle_repository_errors("delete notifications")
   def delete_all(self, owner: str) -> int:
      self.cursor.execute("DELETE FROM tbl_notification WHERE owner = %s", (owner,))
      return self.cursor.rowcount
