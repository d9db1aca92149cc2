#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Credential storage backing the session manager.
#
"""
Credential storage backing the session manager.
"""

from typing import Optional

from Database import Database
from infrastructure.unit_of_work import UnitOfWork
from repositories.user_repository import UserRepository


class MySQLAccountStore:
    """
    Account store on top of tbl_user.

    Lives as long as the session manager, so every call borrows its own
    pooled connection instead of using a request-scoped one. Database errors
    propagate to the caller.
    """

    def __init__(self, database: Database):
        self.database = database

    def get_credential(self, account_id: str) -> Optional[str]:
        with UnitOfWork(self.database.create_connection(), owns_connection=True) as uow:
            return UserRepository(uow).get_credential(account_id)

    def set_credential(self, account_id: str, record: str) -> bool:
        with UnitOfWork(self.database.create_connection(), owns_connection=True) as uow:
            return UserRepository(uow).set_credential(account_id, record)
