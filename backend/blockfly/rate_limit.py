"""Per-client HTTP rate limiting.

Sliding window of request timestamps per client address, kept in memory
for the life of the process.
"""

import time
from collections import deque
from typing import Callable, Deque, Dict

from flask import jsonify, request


class SlidingWindowLimiter:

    def __init__(self, max_requests: int = 100, window_sec: float = 900,
                 clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> bool:
        """Record a request for key. Returns False when over the limit."""
        now = self._clock()
        if now - self._last_sweep >= self.window_sec:
            self._sweep(now)
        hits = self._hits.setdefault(key, deque())
        self._prune(hits, now)
        if len(hits) >= self.max_requests:
            return False
        hits.append(now)
        return True

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= self.window_sec:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        # Drop addresses with no hits left in the window
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, now)
            if not hits:
                del self._hits[key]
        self._last_sweep = now

    def __len__(self):
        return len(self._hits)


def init_rate_limiting(flask_app) -> SlidingWindowLimiter:
    limiter = SlidingWindowLimiter(
        max_requests=int(flask_app.config.get('RATE_LIMIT_MAX_REQUESTS', 100)),
        window_sec=int(flask_app.config.get('RATE_LIMIT_WINDOW_SEC', 900)),
    )
    flask_app.extensions['rate_limiter'] = limiter

    @flask_app.before_request
    def _enforce_rate_limit():
        if not flask_app.config.get('RATE_LIMIT_ENABLED', True):
            return None
        key = request.remote_addr or 'unknown'
        if limiter.hit(key):
            return None
        flask_app.logger.info(f"[rate-limit] addr={key} limit={limiter.max_requests}/{limiter.window_sec}s")
        return jsonify({'error': 'Too many requests'}), 429

    return limiter
