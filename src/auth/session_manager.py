#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Session manager facade used by all request handlers.
#
"""
Session manager facade used by all request handlers.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Union

from .credentials import CredentialVerifier
from .session_store import Session, SessionStore, short_id


logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    """Credential access required by the session manager."""

    def get_credential(self, account_id: str) -> Optional[str]: ...

    def set_credential(self, account_id: str, record: str) -> bool: ...


@dataclass(frozen=True)
class LoginRejected:
    """
    Result of a failed login.

    Carries no reason: an unknown account and a wrong secret must look the
    same to the caller.
    """


REJECTED = LoginRejected()


class SessionManager:
    """
    Issues, resolves and revokes login sessions.

    One instance is assembled at startup and handed to every component that
    needs it.
    """

    def __init__(self, store: SessionStore, verifier: CredentialVerifier, accounts: AccountStore):
        """
        Initializes the session manager.

        Args:
            store: Session registry
            verifier: Password hashing/verification
            accounts: Credential lookup and persistence
        """
        self.store = store
        self.verifier = verifier
        self.accounts = accounts

    def log_in(self, account_id: str, secret: str) -> Union[str, LoginRejected]:
        """
        Authenticates an account and opens a session.

        Errors of the account store (e.g. database unavailable) propagate.

        Args:
            account_id: Username
            secret: Plaintext password

        Returns:
            New session ID, or REJECTED if the account is unknown or the
            password does not match
        """
        record = self.accounts.get_credential(account_id)
        if record is None:
            logger.debug("Login rejected for '%s': unknown account", account_id)
            return REJECTED

        if not self.verifier.verify(secret, record):
            logger.debug("Login rejected for '%s': credential mismatch", account_id)
            return REJECTED

        session = self.store.create(account_id)
        logger.info("User '%s' logged in (session %s)", account_id, short_id(session.id))
        return session.id

    def find_session(self, session_id: Optional[str]) -> Optional[Session]:
        """Resolves a session ID. Unknown, empty or missing IDs give None."""
        return self.store.find(session_id)

    def log_out(self, session_id: Optional[str]) -> bool:
        """Ends one session. Returns False if it did not exist."""
        ended = self.store.remove(session_id)
        if ended:
            logger.info("Session %s logged out", short_id(session_id))
        return ended

    def log_out_all(self, account_id: str) -> int:
        """Ends every session of an account and returns how many were ended."""
        count = self.store.remove_all_for_account(account_id)
        logger.info("Logged out %s session(s) of '%s'", count, account_id)
        return count

    def check_credential(self, account_id: str, secret: str) -> bool:
        """
        Verifies a password without opening a session.

        Args:
            account_id: Username
            secret: Plaintext password

        Returns:
            True if the account exists and the password matches
        """
        record = self.accounts.get_credential(account_id)
        return record is not None and self.verifier.verify(secret, record)

    def update_credential(self, account_id: str, new_secret: str) -> bool:
        """
        Stores a new password for an account.

        Existing sessions of the account stay active; a password change does
        not force a re-login elsewhere.

        Args:
            account_id: Username
            new_secret: New plaintext password

        Returns:
            True if the account store persisted the new credential
        """
        record = self.verifier.hash(new_secret)
        updated = self.accounts.set_credential(account_id, record)
        if updated:
            logger.info("Credential updated for '%s'", account_id)
        return updated

    def list_sessions(self, account_id: str) -> List[Session]:
        """Returns the active sessions of an account, oldest first."""
        return self.store.list_for_account(account_id)

    def active_session_count(self) -> int:
        """Returns the number of active sessions."""
        return self.store.count()
