#!/usr/bin/env python3
"""
Chopo API entry point.
Creates the database schema and/or serves the web API.
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from Database import Database
from DatabaseCreator import DatabaseCreator
from auth.credentials import CredentialVerifier
from auth.rate_limiter import LoginRateLimiter
from auth.session_manager import SessionManager
from auth.session_store import SessionStore
from config import default_config_path, get_config
from repositories.account_store import MySQLAccountStore


logger = logging.getLogger("uvicorn.error")


def build_database(db_config: dict) -> Database:
   return Database(
      host=db_config.get('host', 'localhost'),
      user=db_config.get('user', ''),
      password=db_config.get('password', ''),
      database_name=db_config.get('name', 'chopo'),
      port=db_config.get('port', 3306),
      pool_size=db_config.get('pool_size', 5),
   )


def build_session_manager(config: dict, database: Database) -> SessionManager:
   """Assemble the one session manager shared by the whole process."""
   auth_config = config.get('auth', {})
   verifier = CredentialVerifier(work_factor=auth_config.get('scrypt_work_factor', 2 ** 14))
   return SessionManager(SessionStore(), verifier, MySQLAccountStore(database))


def build_rate_limiter(config: dict) -> LoginRateLimiter:
   rate_config = config.get('auth', {}).get('rate_limit', {})
   return LoginRateLimiter(
      max_attempts=rate_config.get('max_attempts', 5),
      window_minutes=rate_config.get('window_minutes', 15),
   )


if __name__ == "__main__":
   load_dotenv()
   logging.basicConfig(
      level=logging.INFO,
      format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
   )

   parser = argparse.ArgumentParser(
      description='Chopo API - users, images and notifications (uses config.yaml for defaults)',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
   Examples:
     python src/main.py --setup
     python src/main.py --api --config cfg/config.yaml --port 8080

   Note: Parameters are read from config.yaml by default.
      Use command-line arguments to override config values.
      """
   )
   parser.add_argument('--config',
                       default=default_config_path(),
                       help='Path to config file (default: $CHOPO_CONFIG or cfg/config.yaml)')
   parser.add_argument('--setup',
                       action="store_true",
                       help='Create the database and its tables')
   parser.add_argument('--api',
                       action="store_true",
                       help='Launch the web API server (FastAPI)')
   parser.add_argument('--host',
                       default=None,
                       help='API server host (default: api.host from config or 127.0.0.1)')
   parser.add_argument('--port',
                       type=int,
                       default=None,
                       help='API server port (default: api.port from config or 8000)')

   args = parser.parse_args()

   if not args.setup and not args.api:
      parser.error("nothing to do, use --setup and/or --api")

   config = get_config(args.config)
   db_config = config.get('database', {})
   database = build_database(db_config)

   if args.setup:
      sql_file = Path(db_config.get('sql_file', './db/chopo_schema.sql'))
      if not sql_file.exists():
         raise FileNotFoundError(f"SQL file not found at: {sql_file}")
      logger.info("Using SQL file: %s", sql_file)
      if not DatabaseCreator(database).create_from_file(str(sql_file)):
         sys.exit(1)

   if args.api:
      import uvicorn
      from api.main import create_app

      if not database.connect():
         raise RuntimeError("Failed to connect to database")

      api_config = config.get('api', {})
      host = args.host or api_config.get('host', '127.0.0.1')
      port = args.port or api_config.get('port', 8000)

      app = create_app(
         session_manager=build_session_manager(config, database),
         rate_limiter=build_rate_limiter(config),
         config=config,
         database=database,
      )

      logger.info("Starting Chopo API server on http://%s:%s", host, port)
      logger.info("API Documentation: http://%s:%s/api/docs", host, port)
      uvicorn.run(app, host=host, port=port, log_level="info")
