from contextlib import AbstractContextManager


class UnitOfWork(AbstractContextManager):
   """Cursor plus commit/rollback around one piece of work.

   With ``owns_connection`` the connection is closed on exit, which hands a
   pooled connection back to its pool.
   """

   def __init__(self, connection, owns_connection: bool = False):
      self.connection = connection
      self.owns_connection = owns_connection
      self._cursor = None

   def __enter__(self):
      try:
         self._cursor = self.connection.cursor(buffered=True)
      except Exception:
         if self.owns_connection:
            self.connection.close()
         raise
      return self

   @property
   def cursor(self):
      return self._cursor

   def commit(self):
      self.connection.commit()

   def rollback(self):
      self.connection.rollback()

   def __exit__(self, exc_type, exc, tb):
      try:
         if exc:
            self.rollback()
         else:
            self.commit()
      finally:
         if self._cursor:
            self._cursor.close()
            self._cursor = None
         if self.owns_connection:
            self.connection.close()
