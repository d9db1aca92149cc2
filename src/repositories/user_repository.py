from typing import Optional

from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors
from domain.user import User


USER_COLUMNS = "username, passwordHash, isAdmin, imageUrl"


def _row_to_user(row) -> User:
   return User(
      username=row[0],
      password_hash=row[1] or "",
      is_admin=bool(row[2]),
      image_url=row[3],
   )


class UserRepository(BaseRepository):
   @handle_repository_errors("fetch user")
   def get_by_username(self, username: str) -> Optional[User]:
      row = self._fetch_one(f"SELECT {USER_COLUMNS} FROM tbl_user WHERE username = %s", (username,))
      return _row_to_user(row) if row else None

   @handle_repository_errors("list users")
   def list_directory(self, query: Optional[str] = None, take: int = 20, skip: int = 0) -> list[User]:
      """Users ordered by name, optionally filtered by a substring of the username."""
      if query:
         rows = self._fetch_all(
            f"SELECT {USER_COLUMNS} FROM tbl_user WHERE username LIKE %s "
            "ORDER BY username LIMIT %s OFFSET %s",
            (f"%{_escape_like(query)}%", take, skip),
         )
      else:
         rows = self._fetch_all(
            f"SELECT {USER_COLUMNS} FROM tbl_user ORDER BY username LIMIT %s OFFSET %s",
            (take, skip),
         )
      return [_row_to_user(row) for row in rows]

   @handle_repository_errors("check users")
   def any_users(self) -> bool:
      return self._fetch_one("SELECT 1 FROM tbl_user LIMIT 1") is not None

   @handle_repository_errors("check username")
   def exists(self, username: str) -> bool:
      return self._fetch_one("SELECT 1 FROM tbl_user WHERE username = %s", (username,)) is not None

   @handle_repository_errors("insert user")
   def insert(self, user: User) -> None:
      self.cursor.execute(
         "INSERT INTO tbl_user (username, passwordHash, isAdmin, imageUrl) VALUES (%s, %s, %s, %s)",
         (user.username, user.password_hash, int(user.is_admin), user.image_url),
      )

   @handle_repository_errors("update user image")
   def update_image(self, username: str, image_url: Optional[str]) -> bool:
      self.cursor.execute("UPDATE tbl_user SET imageUrl = %s WHERE username = %s", (image_url, username))
      return self.cursor.rowcount > 0

   @handle_repository_errors("fetch credential")
   def get_credential(self, username: str) -> Optional[str]:
      row = self._fetch_one("SELECT passwordHash FROM tbl_user WHERE username = %s", (username,))
      return row[0] if row else None

   @handle_repository_errors("update credential")
   def set_credential(self, username: str, record: str) -> bool:
      if not self.exists(username):
         return False
      self.cursor.execute("UPDATE tbl_user SET passwordHash = %s WHERE username = %s", (record, username))
      return True


def _escape_like(value: str) -> str:
   return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
