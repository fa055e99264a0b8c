from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

from bizdir.exceptions.custom import RateLimitError


class SubmissionThrottle:
    """One accepted submission per client within the cooldown window."""

    def __init__(self, cooldown_seconds: int = 30, max_clients: int = 10000) -> None:
        self._cooldown = timedelta(seconds=cooldown_seconds)
        self._max_clients = max_clients
        self._last_accepted: dict[str, datetime] = {}

    def _evict(self, now: datetime) -> None:
        if len(self._last_accepted) <= self._max_clients:
            return
        expired = [c for c, at in self._last_accepted.items() if now - at >= self._cooldown]
        for client in expired:
            del self._last_accepted[client]

    def check(self, client: str | None) -> None:
        if not client or self._cooldown.total_seconds() <= 0:
            return
        last = self._last_accepted.get(client)
        if last is None:
            return
        remaining = self._cooldown - (datetime.now(timezone.utc) - last)
        if remaining.total_seconds() > 0:
            raise RateLimitError(math.ceil(remaining.total_seconds()))

    def record(self, client: str | None) -> None:
        if not client:
            return
        now = datetime.now(timezone.utc)
        self._last_accepted[client] = now
        self._evict(now)
