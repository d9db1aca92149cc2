import logging

import mysql.connector.pooling
from mysql.connector import Error


logger = logging.getLogger("uvicorn.error")


class Database:
   """MySQL access through a connection pool shared by all request threads."""

   def __init__(self, host: str, user: str, password: str, database_name: str, port: int = 3306, pool_size: int = 5):
      """
      Initialize database connection parameters.

      Args:
         host: MySQL server host address
         user: Database user
         password: Database password
         database_name: Name of the database
         port: MySQL server port (default: 3306)
         pool_size: Connections kept in the pool (default: 5)
      """
      self.host = host
      self.user = user
      self.password = password
      self.database_name = database_name
      self.port = port
      self.pool_size = pool_size
      self.pool = None

   def connect(self) -> bool:
      """
      Create the connection pool.

      Returns:
         True if the pool was created, False otherwise.
      """
      try:
         self.pool = mysql.connector.pooling.MySQLConnectionPool(
            pool_name="chopo_pool",
            pool_size=self.pool_size,
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database_name,
            autocommit=False,
         )
         logger.info("Connection pool for '%s' ready (%s connections)", self.database_name, self.pool_size)
         return True
      except Error as e:
         logger.error("Error connecting to MySQL: %s", e)
         self.pool = None
         return False

   def is_connected(self) -> bool:
      """Check if the connection pool exists."""
      return self.pool is not None

   def create_connection(self):
      """
      Borrow a connection from the pool. Closing it returns it to the pool.

      Raises:
         RuntimeError: If the pool was never created
         mysql.connector.Error: If the pool is exhausted or the server is unreachable
      """
      if self.pool is None:
         raise RuntimeError("Database not connected")
      return self.pool.get_connection()

   def connect_server(self):
      """Open a plain connection to the server without selecting a database."""
      return mysql.connector.connect(
         host=self.host,
         port=self.port,
         user=self.user,
         password=self.password,
      )

   def close(self) -> None:
      """Drop the pool; pooled connections are closed as they are released."""
      self.pool = None
      logger.info("Database connection pool released")
