#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Module for DatabaseCreator.
#
import logging
from mysql.connector import Error

from Database import Database


logger = logging.getLogger(__name__)


def split_sql_statements(sql_content: str) -> list[str]:
   """Split an SQL script into statements, skipping comments and blank lines."""
   statements = []
   current_statement = []

   for line in sql_content.split('\n'):
      stripped = line.strip()
      if not stripped or stripped.startswith('--') or stripped.startswith('/*!'):
         continue

      current_statement.append(line)

      if stripped.endswith(';'):
         statement = '\n'.join(current_statement).strip()
         if statement:
            statements.append(statement)
         current_statement = []

   return statements


class DatabaseCreator:
   """Create the database schema from an SQL file using a provided Database instance."""

   def __init__(self, db: Database):
      self.db = db

   def create_database(self, connection) -> bool:
      """Create the database if it doesn't exist."""
      try:
         cursor = connection.cursor()
         cursor.execute(
            f"CREATE DATABASE IF NOT EXISTS `{self.db.database_name}` "
            f"DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
         )
         logger.info("Database '%s' created or already exists", self.db.database_name)
         cursor.close()
         return True
      except Error as e:
         logger.error("Error creating database: %s", e)
         return False

   def execute_sql_file(self, connection, sql_file_path: str) -> bool:
      """
      Execute SQL commands from file.

      Args:
         connection: Server connection with the target database selected.
         sql_file_path: Path to the SQL schema file.

      Returns:
         True if every statement executed, False otherwise.
      """
      try:
         with open(sql_file_path, 'r', encoding='utf-8') as file:
            statements = split_sql_statements(file.read())
      except FileNotFoundError:
         logger.error("SQL file not found: %s", sql_file_path)
         return False

      cursor = connection.cursor()
      logger.info("Executing %s SQL statements...", len(statements))

      try:
         for i, statement in enumerate(statements, 1):
            cursor.execute(statement)
            logger.debug("Statement %s/%s executed", i, len(statements))
         connection.commit()
      except Error as e:
         logger.error("Error executing SQL file: %s", e)
         connection.rollback()
         return False
      finally:
         cursor.close()

      logger.info("Successfully executed %s SQL statements", len(statements))
      return True

   def create_from_file(self, sql_file_path: str) -> bool:
      """
      Complete workflow: connect, create database, execute SQL file.

      Args:
         sql_file_path: Path to the SQL schema file.

      Returns:
         True on success, False on failure.
      """
      try:
         connection = self.db.connect_server()
      except Error as e:
         raise RuntimeError(f"Failed to connect to MySQL server: {e}")

      try:
         if not self.create_database(connection):
            raise RuntimeError("Failed to create database")
         connection.database = self.db.database_name
         success = self.execute_sql_file(connection, sql_file_path)
      finally:
         connection.close()

      if success:
         logger.info("Database '%s' created successfully", self.db.database_name)
      else:
         logger.error("Database creation failed")
      return success
