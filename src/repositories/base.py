class BaseRepository:
   def __init__(self, uow_or_cursor):
      """Initialize repository with either UnitOfWork or raw DB cursor.

      Args:
         uow_or_cursor: UnitOfWork instance (with .cursor attribute) or a raw DB cursor
      """
      if hasattr(uow_or_cursor, "cursor") and not callable(uow_or_cursor.cursor):
         # UnitOfWork
         self.uow = uow_or_cursor
         self.cursor = uow_or_cursor.cursor
      else:
         # Raw cursor passed directly
         self.uow = None
         self.cursor = uow_or_cursor

   def commit(self) -> None:
      """Commit pending changes when the repository runs inside a UnitOfWork."""
      if self.uow is not None:
         self.uow.commit()

   def _fetch_one(self, sql: str, params: tuple = ()):
      self.cursor.execute(sql, params)
      return self.cursor.fetchone()

   def _fetch_all(self, sql: str, params: tuple = ()) -> list:
      self.cursor.execute(sql, params)
      return self.cursor.fetchall()
