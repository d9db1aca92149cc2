#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Unit tests for login rate limiting
#
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest

from auth import rate_limiter as rate_limiter_module
from auth.rate_limiter import LoginRateLimiter

pytestmark = pytest.mark.unit


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock(monkeypatch) -> FrozenClock:
    frozen = FrozenClock(datetime(2026, 10, 17, 12, 0, 0))

    class _DateTime(datetime):
        @classmethod
        def now(cls, tz=None):
            return frozen.now

    monkeypatch.setattr(rate_limiter_module, "datetime", _DateTime)
    return frozen


def test_allows_until_max_attempts(clock):
    limiter = LoginRateLimiter(max_attempts=3, window_minutes=15)

    for expected_remaining in (2, 1, 0):
        assert limiter.is_allowed("alice")
        limiter.record_attempt("alice")
        assert limiter.get_remaining_attempts("alice") == expected_remaining

    assert limiter.is_allowed("alice") is False


def test_other_usernames_unaffected(clock):
    limiter = LoginRateLimiter(max_attempts=1)
    limiter.record_attempt("alice")

    assert limiter.is_allowed("alice") is False
    assert limiter.is_allowed("bob") is True


def test_reset_clears_attempts(clock):
    limiter = LoginRateLimiter(max_attempts=1)
    limiter.record_attempt("alice")

    limiter.reset("alice")

    assert limiter.is_allowed("alice") is True
    assert limiter.get_remaining_attempts("alice") == 1


def test_window_expiry(clock):
    limiter = LoginRateLimiter(max_attempts=2, window_minutes=15)
    limiter.record_attempt("alice")
    clock.advance(minutes=5)
    limiter.record_attempt("alice")

    assert limiter.get_retry_after("alice") == 10 * 60

    clock.advance(minutes=10)
    assert limiter.is_allowed("alice") is True
    assert limiter.get_remaining_attempts("alice") == 1


def test_retry_after_zero_when_allowed(clock):
    limiter = LoginRateLimiter(max_attempts=2)
    limiter.record_attempt("alice")

    assert limiter.get_retry_after("alice") == 0


def test_try_begin_attempt_records_and_blocks(clock):
    limiter = LoginRateLimiter(max_attempts=2)

    assert limiter.try_begin_attempt("alice") is True
    assert limiter.try_begin_attempt("alice") is True
    assert limiter.try_begin_attempt("alice") is False
    assert limiter.get_remaining_attempts("alice") == 0
    assert limiter.get_retry_after("alice") > 0


def test_try_begin_attempt_then_reset_on_success(clock):
    limiter = LoginRateLimiter(max_attempts=1)

    assert limiter.try_begin_attempt("alice")
    limiter.reset("alice")

    assert limiter.try_begin_attempt("alice")


@pytest.mark.concurrency
def test_parallel_attempts_never_exceed_limit():
    limiter = LoginRateLimiter(max_attempts=5)
    threads = 20
    start = threading.Barrier(threads)

    def attempt(_):
        start.wait()
        return limiter.try_begin_attempt("alice")

    with ThreadPoolExecutor(max_workers=threads) as pool:
        results = list(pool.map(attempt, range(threads)))

    assert results.count(True) == 5
    assert limiter.get_remaining_attempts("alice") == 0


def test_expired_usernames_are_swept(clock):
    limiter = LoginRateLimiter(max_attempts=5, window_minutes=15)
    for i in range(1000):
        limiter.record_attempt(f"guess{i}")
    assert len(limiter.attempts) == 1000

    clock.advance(minutes=15)
    limiter.record_attempt("mallory")

    assert set(limiter.attempts) == {"mallory"}


def test_sweep_keeps_usernames_still_in_window(clock):
    limiter = LoginRateLimiter(max_attempts=5, window_minutes=15)
    limiter.record_attempt("old")
    clock.advance(minutes=10)
    limiter.record_attempt("recent")

    clock.advance(minutes=6)
    assert limiter.try_begin_attempt("other")

    assert set(limiter.attempts) == {"recent", "other"}
