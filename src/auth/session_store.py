"""
In-Memory Session Store with a secondary index per account.
"""

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set


logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 32


@dataclass(frozen=True)
class Session:
    """An active login session. Never mutated after creation."""
    id: str
    account_id: str
    created_at: datetime


def short_id(session_id: str) -> str:
    """Abbreviated session ID for log output."""
    return f"{session_id[:8]}..."


class SessionStore:
    """
    In-Memory Session Store.

    Keeps two indexes over the active sessions: by session ID (hot path of
    every authenticated request) and by account ID (bulk revocation).
    All mutations run under one lock. ``find`` reads the ID index without
    taking the lock; to keep that safe, ``create`` inserts into the account
    index before the ID index and removals delete in the reverse order.
    A session that is findable by ID is therefore always reachable by
    ``remove_all_for_account``.
    """

    def __init__(self):
        self._by_id: Dict[str, Session] = {}
        self._by_account: Dict[str, Set[str]] = {}
        self._lock = threading.RLock()

    def create(self, account_id: str) -> Session:
        """
        Creates a new session for an account.

        Args:
            account_id: Authenticated account (username)

        Returns:
            The created Session
        """
        with self._lock:
            session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
            while session_id in self._by_id:
                session_id = secrets.token_urlsafe(SESSION_ID_BYTES)

            session = Session(
                id=session_id,
                account_id=account_id,
                created_at=datetime.now(timezone.utc),
            )
            self._by_account.setdefault(account_id, set()).add(session_id)
            self._by_id[session_id] = session

        logger.debug("Session %s created for '%s'", short_id(session_id), account_id)
        return session

    def find(self, session_id: Optional[str]) -> Optional[Session]:
        """
        Looks up a session.

        Args:
            session_id: Session ID (may be None or empty)

        Returns:
            Session or None if no active session has this ID
        """
        if not session_id:
            return None
        return self._by_id.get(session_id)

    def remove(self, session_id: Optional[str]) -> bool:
        """
        Ends a session.

        Args:
            session_id: Session ID

        Returns:
            True if a session was removed, False if none existed
        """
        if not session_id:
            return False

        with self._lock:
            session = self._by_id.pop(session_id, None)
            if session is None:
                return False
            self._discard_from_account(session.account_id, session_id)

        logger.debug("Session %s removed", short_id(session_id))
        return True

    def remove_all_for_account(self, account_id: str) -> int:
        """
        Ends every session of an account.

        Args:
            account_id: Account (username)

        Returns:
            Number of sessions removed
        """
        with self._lock:
            session_ids = self._by_account.get(account_id)
            if not session_ids:
                return 0

            for session_id in session_ids:
                del self._by_id[session_id]
            del self._by_account[account_id]
            removed = len(session_ids)

        logger.debug("%s session(s) removed for '%s'", removed, account_id)
        return removed

    def list_for_account(self, account_id: str) -> List[Session]:
        """
        Returns the active sessions of an account, oldest first.

        Args:
            account_id: Account (username)

        Returns:
            Snapshot list of Sessions
        """
        with self._lock:
            sessions = [self._by_id[session_id] for session_id in self._by_account.get(account_id, ())]
        return sorted(sessions, key=lambda session: session.created_at)

    def count(self) -> int:
        """Returns the number of active sessions."""
        return len(self._by_id)

    def _discard_from_account(self, account_id: str, session_id: str) -> None:
        session_ids = self._by_account.get(account_id)
        if session_ids is None:
            return
        session_ids.discard(session_id)
        if not session_ids:
            del self._by_account[account_id]
