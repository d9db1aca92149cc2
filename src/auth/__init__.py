#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Authentication and session management module.
#
"""
Authentication and session management module.
"""

from .credentials import CredentialVerifier
from .session_store import Session, SessionStore
from .session_manager import AccountStore, LoginRejected, REJECTED, SessionManager
from .rate_limiter import LoginRateLimiter

__all__ = [
    'AccountStore',
    'CredentialVerifier',
    'LoginRateLimiter',
    'LoginRejected',
    'REJECTED',
    'Session',
    'SessionManager',
    'SessionStore',
]
