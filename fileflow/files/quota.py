"""Per-user upload quota over a sliding time window."""
import threading
import time
from collections import deque

from fastapi import Depends, Request

from fileflow.auth.deps import get_current_user
from fileflow.errors import TooManyRequests
from fileflow.schemas.records import UserRecord


class UploadQuota:
    """At most ``max_uploads`` uploads per user in any ``window_seconds`` span."""

    def __init__(self, max_uploads: int, window_seconds: int, clock=time.monotonic):
        self.max_uploads = max_uploads
        self.window = window_seconds
        self._clock = clock
        self._history: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def _prune(self, user_id: str, now: float) -> deque[float] | None:
        stamps = self._history.get(user_id)
        if stamps is None:
            return None
        cutoff = now - self.window
        while stamps and stamps[0] <= cutoff:
            stamps.popleft()
        if not stamps:
            del self._history[user_id]
            return None
        return stamps

    def consume(self, user_id: str) -> None:
        """Record one upload for ``user_id`` or raise TooManyRequests."""
        now = self._clock()
        with self._lock:
            stamps = self._prune(user_id, now)
            if stamps is not None and len(stamps) >= self.max_uploads:
                retry_after = max(1, int(stamps[0] + self.window - now))
                raise TooManyRequests("Too many uploads, try again later", retry_after=retry_after)
            self._history.setdefault(user_id, deque()).append(now)

    def tracked_users(self) -> int:
        with self._lock:
            now = self._clock()
            for user_id in list(self._history):
                self._prune(user_id, now)
            return len(self._history)


def enforce_upload_quota(request: Request, user: UserRecord = Depends(get_current_user)) -> UserRecord:
    request.app.state.upload_quota.consume(user.id)
    return user
