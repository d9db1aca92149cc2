#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: In-memory stand-ins for the MySQL repositories used in tests
#
"""
In-memory repositories with the same interface as the MySQL ones.

One InMemoryDataStore holds all tables; the fake repositories are thin views
over it so that HTTP handlers, the account store and test assertions all see
the same data.
"""

import threading
from dataclasses import replace
from typing import Dict, List, Optional
from uuid import UUID

from mysql.connector.errors import IntegrityError

from domain.image import Image
from domain.notification import Notification
from domain.user import User


class InMemoryDataStore:
    def __init__(self):
        self.users: Dict[str, User] = {}
        self.images: Dict[UUID, Image] = {}
        self.notifications: List[Notification] = []
        self.lock = threading.RLock()
        self.commits = 0


class _FakeRepository:
    def __init__(self, data: InMemoryDataStore):
        self.data = data

    def commit(self) -> None:
        self.data.commits += 1


class FakeUserRepository(_FakeRepository):
    def get_by_username(self, username: str) -> Optional[User]:
        with self.data.lock:
            user = self.data.users.get(username)
            return replace(user) if user else None

    def list_directory(self, query: Optional[str] = None, take: int = 20, skip: int = 0) -> List[User]:
        with self.data.lock:
            users = sorted(self.data.users.values(), key=lambda u: u.username)
        if query:
            users = [u for u in users if query in u.username]
        return [replace(u) for u in users[skip:skip + take]]

    def any_users(self) -> bool:
        return bool(self.data.users)

    def exists(self, username: str) -> bool:
        return username in self.data.users

    def insert(self, user: User) -> None:
        with self.data.lock:
            if user.username in self.data.users:
                raise IntegrityError(msg=f"Duplicate entry '{user.username}' for key 'PRIMARY'")
            self.data.users[user.username] = replace(user)

    def update_image(self, username: str, image_url: Optional[str]) -> bool:
        with self.data.lock:
            user = self.data.users.get(username)
            if user is None:
                return False
            user.image_url = image_url
            return True

    def get_credential(self, username: str) -> Optional[str]:
        with self.data.lock:
            user = self.data.users.get(username)
            return user.password_hash if user else None

    def set_credential(self, username: str, record: str) -> bool:
        with self.data.lock:
            user = self.data.users.get(username)
            if user is None:
                return False
            user.password_hash = record
            return True


class FakeAccountStore:
    """Account store over the in-memory user table, recording every call."""

    def __init__(self, data: InMemoryDataStore):
        self.users = FakeUserRepository(data)
        self.calls: List[tuple] = []

    def get_credential(self, account_id: str) -> Optional[str]:
        self.calls.append(("get_credential", account_id))
        return self.users.get_credential(account_id)

    def set_credential(self, account_id: str, record: str) -> bool:
        self.calls.append(("set_credential", account_id))
        return self.users.set_credential(account_id, record)


class FakeImageRepository(_FakeRepository):
    def get(self, image_id: UUID) -> Optional[Image]:
        return self.data.images.get(image_id)

    def insert(self, image: Image) -> None:
        with self.data.lock:
            self.data.images[image.id] = image


class FakeNotificationRepository(_FakeRepository):
    def list_for_owner(self, owner: str) -> List[Notification]:
        with self.data.lock:
            owned = [n for n in self.data.notifications if n.owner == owner]
        return sorted(owned, key=lambda n: n.created_at, reverse=True)

    def delete_one(self, owner: str, notification_id: UUID) -> int:
        with self.data.lock:
            before = len(self.data.notifications)
            self.data.notifications = [
                n for n in self.data.notifications
                if not (n.owner == owner and n.id == notification_id)
            ]
            return before - len(self.data.notifications)

    def delete_all(self, owner: str) -> int:
        with self.data.lock:
            before = len(self.data.notifications)
            self.data.notifications = [n for n in self.data.notifications if n.owner != owner]
            return before - len(self.data.notifications)


class RecordingCursor:
    """DB-API cursor double that records statements and replays queued rows."""

    def __init__(self, rows: Optional[List[list]] = None, rowcount: int = 1):
        self.executed: List[tuple] = []
        self._results = list(rows or [])
        self._current: list = []
        self.rowcount = rowcount
        self.closed = False

    def execute(self, sql: str, params: tuple = ()) -> None:
        self.executed.append((" ".join(sql.split()), params))
        self._current = self._results.pop(0) if self._results else []

    def fetchone(self):
        return self._current[0] if self._current else None

    def fetchall(self) -> list:
        return list(self._current)

    def close(self) -> None:
        self.closed = True
