#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Password hashing and verification.
#
"""
Password hashing and verification.

Stored credential records have the form::

    scrypt$<n>$<r>$<p>$<salt-b64>$<key-b64>

Each record carries its own scrypt parameters, so records created with an
older work factor stay verifiable after the configured factor changes.
"""

import base64
import binascii
import os
from typing import Optional

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt


ALGORITHM_TAG = "scrypt"
SALT_BYTES = 16
KEY_LENGTH = 32
MAX_WORK_FACTOR = 2 ** 16
MAX_BLOCK_SIZE = 16
MAX_PARALLELIZATION = 4


class CredentialVerifier:
    """
    Salted scrypt hashing of user secrets.

    Stateless apart from the scrypt parameters used for new records.
    """

    def __init__(self, work_factor: int = 2 ** 14, block_size: int = 8, parallelization: int = 1):
        """
        Initializes the verifier.

        Args:
            work_factor: scrypt CPU/memory cost ``n`` (power of two, > 1)
            block_size: scrypt block size ``r``
            parallelization: scrypt parallelization ``p``

        Raises:
            ValueError: On invalid or oversized scrypt parameters
        """
        if work_factor < 2 or work_factor & (work_factor - 1):
            raise ValueError("work_factor must be a power of two greater than 1")
        if work_factor > MAX_WORK_FACTOR or block_size > MAX_BLOCK_SIZE or parallelization > MAX_PARALLELIZATION:
            raise ValueError("scrypt parameters exceed the supported maximum")
        self.work_factor = work_factor
        self.block_size = block_size
        self.parallelization = parallelization

    def hash(self, secret: str) -> str:
        """
        Produces a new credential record for a secret.

        A fresh salt is drawn for every call, so hashing the same secret twice
        yields different records. Failures of the randomness source propagate.

        Args:
            secret: Plaintext secret

        Returns:
            Credential record string
        """
        salt = os.urandom(SALT_BYTES)
        key = self._kdf(salt, self.work_factor, self.block_size, self.parallelization).derive(
            secret.encode("utf-8")
        )
        return "$".join([
            ALGORITHM_TAG,
            str(self.work_factor),
            str(self.block_size),
            str(self.parallelization),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(key).decode("ascii"),
        ])

    def verify(self, secret: Optional[str], record: Optional[str]) -> bool:
        """
        Checks a secret against a stored credential record.

        Never raises for caller-supplied input: an empty secret, a malformed
        record or a mismatch all return False.

        Args:
            secret: Submitted plaintext secret
            record: Stored credential record

        Returns:
            True if the secret matches the record
        """
        if not secret or not record:
            return False

        parsed = self._parse(record)
        if parsed is None:
            return False
        n, r, p, salt, expected = parsed

        try:
            # Scrypt.verify compares in constant time
            self._kdf(salt, n, r, p, length=len(expected)).verify(secret.encode("utf-8"), expected)
        except (InvalidKey, ValueError, MemoryError):
            return False
        return True

    @staticmethod
    def _kdf(salt: bytes, n: int, r: int, p: int, length: int = KEY_LENGTH) -> Scrypt:
        return Scrypt(salt=salt, length=length, n=n, r=r, p=p)

    def _parse(self, record: str):
        parts = record.split("$")
        if len(parts) != 6 or parts[0] != ALGORITHM_TAG:
            return None

        try:
            n, r, p = int(parts[1]), int(parts[2]), int(parts[3])
            salt = base64.b64decode(parts[4], validate=True)
            key = base64.b64decode(parts[5], validate=True)
        except (ValueError, binascii.Error):
            return None

        if n < 2 or n & (n - 1) or r < 1 or p < 1 or not salt or not key:
            return None
        # Refuse parameters far beyond what this service would ever issue
        if n > MAX_WORK_FACTOR or r > MAX_BLOCK_SIZE or p > MAX_PARALLELIZATION:
            return None

        return n, r, p, salt, key
