"""Tests for SubmissionThrottle."""

from datetime import datetime, timedelta, timezone

import pytest

from bizdir.exceptions.custom import RateLimitError
from bizdir.throttle import SubmissionThrottle


def test_first_submission_passes():
    SubmissionThrottle(cooldown_seconds=30).check("10.0.0.1")


def test_recorded_client_waits_out_cooldown():
    throttle = SubmissionThrottle(cooldown_seconds=30)
    throttle.record("10.0.0.1")

    with pytest.raises(RateLimitError) as exc_info:
        throttle.check("10.0.0.1")

    assert exc_info.value.retry_after in (29, 30)


def test_cooldown_expires():
    throttle = SubmissionThrottle(cooldown_seconds=30)
    throttle.record("10.0.0.1")
    # Backdate the last accepted submission past the window
    throttle._last_accepted["10.0.0.1"] = datetime.now(timezone.utc) - timedelta(seconds=31)

    throttle.check("10.0.0.1")


def test_unknown_client_is_never_throttled():
    throttle = SubmissionThrottle(cooldown_seconds=30)
    throttle.record(None)

    throttle.check(None)


def test_zero_cooldown_disables_throttle():
    throttle = SubmissionThrottle(cooldown_seconds=0)
    throttle.record("10.0.0.1")

    throttle.check("10.0.0.1")


def test_expired_clients_are_evicted_past_capacity():
    throttle = SubmissionThrottle(cooldown_seconds=30, max_clients=2)
    old = datetime.now(timezone.utc) - timedelta(minutes=5)
    throttle._last_accepted = {"a": old, "b": old}

    throttle.record("c")

    assert list(throttle._last_accepted) == ["c"]
