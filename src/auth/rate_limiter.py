#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Rate limiting for login attempts.
#
"""
Rate limiting for login attempts.
"""

import threading
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List


class LoginRateLimiter:
    """
    Brute-force protection for login.

    Limits failed login attempts per username within a sliding time window.
    Unknown usernames are tracked the same way as existing ones.
    """

    def __init__(self, max_attempts: int = 5, window_minutes: int = 15):
        """
        Initializes the rate limiter.

        Args:
            max_attempts: Maximum failed attempts within the time window
            window_minutes: Time window in minutes
        """
        self.attempts: Dict[str, List[datetime]] = defaultdict(list)
        self.max_attempts = max_attempts
        self.window = timedelta(minutes=window_minutes)
        self._lock = threading.Lock()
        self._last_sweep = datetime.now()

    def _recent(self, username: str, now: datetime) -> List[datetime]:
        # Caller holds the lock
        recent = [ts for ts in self.attempts.get(username, []) if now - ts < self.window]
        if recent:
            self.attempts[username] = recent
        else:
            self.attempts.pop(username, None)
        return recent

    def _sweep(self, now: datetime) -> None:
        # Caller holds the lock; drops expired usernames at most once per window
        if now - self._last_sweep < self.window:
            return
        for username in [name for name, stamps in self.attempts.items() if now - max(stamps) >= self.window]:
            del self.attempts[username]
        self._last_sweep = now

    def try_begin_attempt(self, username: str) -> bool:
        """
        Checks the limit and records an attempt in one step.

        The attempt counts as failed until ``reset`` is called after a
        successful login, so parallel requests cannot all pass the check
        before any of them is recorded.

        Args:
            username: Username

        Returns:
            True if the attempt may proceed, False if the limit is reached
        """
        with self._lock:
            now = datetime.now()
            self._sweep(now)
            if len(self._recent(username, now)) >= self.max_attempts:
                return False
            self.attempts[username].append(now)
            return True

    def is_allowed(self, username: str) -> bool:
        """
        Checks whether a login attempt is allowed.

        Args:
            username: Username

        Returns:
            True if login is allowed
        """
        with self._lock:
            return len(self._recent(username, datetime.now())) < self.max_attempts

    def record_attempt(self, username: str) -> None:
        """
        Records a failed login attempt.

        Args:
            username: Username
        """
        with self._lock:
            now = datetime.now()
            self._sweep(now)
            self.attempts[username].append(now)

    def reset(self, username: str) -> None:
        """
        Resets login attempts for a username.

        Args:
            username: Username
        """
        with self._lock:
            self.attempts.pop(username, None)

    def get_remaining_attempts(self, username: str) -> int:
        """
        Returns remaining login attempts.

        Args:
            username: Username

        Returns:
            Number of remaining attempts
        """
        with self._lock:
            return max(0, self.max_attempts - len(self._recent(username, datetime.now())))

    def get_retry_after(self, username: str) -> int:
        """
        Returns seconds until the next allowed attempt.

        Args:
            username: Username

        Returns:
            Seconds until unlock (0 if allowed)
        """
        with self._lock:
            now = datetime.now()
            recent = self._recent(username, now)
            if len(recent) < self.max_attempts:
                return 0

            # The attempt that drops out of the window first frees a slot
            unlock_time = sorted(recent)[len(recent) - self.max_attempts] + self.window
            return max(1, int((unlock_time - now).total_seconds()))
