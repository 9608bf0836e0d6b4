"""
Plan-aware quota enforcement.

Two independent fixed windows per caller identifier:
- Standard window (15 min): every admitted request counts, ceiling is the
  plan's rate limit.
- Bulk window (1 hour): only requests asking for more than 100 records
  count, ceiling is 10 for every plan.

The bulk window is evaluated first. A request rejected by either window is
not counted in any window.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import redis.asyncio as redis

from luhnlab.errors import LuhnLabError
from luhnlab.security.plans import PlanContext

logger = logging.getLogger(__name__)


@dataclass
class WindowState:
    """Outcome of one hit against a window."""

    allowed: bool
    count: int  # hits counted in the current window after this one
    limit: int
    reset_in: int  # seconds until the window resets

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class QuotaExceededError(LuhnLabError):
    """Base for quota rejections (HTTP 429)."""

    status_code = 429

    def __init__(self, message: str, state: WindowState):
        self.state = state
        super().__init__(
            message,
            headers={
                "Retry-After": str(state.reset_in),
                "X-RateLimit-Limit": str(state.limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(state.reset_in),
            },
        )


class BulkQuotaExceededError(QuotaExceededError):
    """Too many large-payload requests in the bulk window."""

    def __init__(self, state: WindowState, threshold: int):
        super().__init__(
            f"Fair Usage Policy: Du har gjort för många Bulk-exporter (>{threshold} rader) "
            f"den senaste timmen. Max {state.limit} st per timme.",
            state,
        )


class StandardQuotaExceededError(QuotaExceededError):
    """Plan request ceiling reached in the standard window."""

    def __init__(self, state: WindowState, plan: PlanContext, window_seconds: int):
        self.plan = plan
        super().__init__(
            f"Rate limit uppnådd. Din plan ({plan.plan_name}) tillåter "
            f"{plan.rate_limit} anrop per {window_seconds // 60} min.",
            state,
        )


class QuotaStore(ABC):
    """Keyed counter store shared by all requests."""

    @abstractmethod
    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowState:
        """
        Count one hit unless the window is already full.

        Must be atomic with respect to concurrent hits on the same key.
        """

    @abstractmethod
    async def release(self, key: str, window_seconds: int) -> None:
        """Undo one previously counted hit."""

    @abstractmethod
    async def reset(self, identifier: str) -> int:
        """Drop every window belonging to an identifier. Returns windows removed."""


@dataclass
class _Window:
    started_at: float
    length: int
    count: int = 0

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.length


class InMemoryQuotaStore(QuotaStore):
    """
    Process-local fixed-window counters.

    A threading lock guards the counters so hits from the event loop and from
    worker threads never lose updates. Expired windows are swept out at most
    once every ``sweep_interval`` seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 1.0):
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval
        self._next_sweep = float("-inf")

    @property
    def window_count(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval
        stale = [key for key, window in self._windows.items() if window.expired(now)]
        for key in stale:
            del self._windows[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} expired quota windows")

    def _current(self, key: str, window_seconds: int, now: float) -> _Window:
        window = self._windows.get(key)
        if window is None or window.expired(now):
            window = _Window(started_at=now, length=window_seconds)
            self._windows[key] = window
        return window

    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowState:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            window = self._current(key, window_seconds, now)
            allowed = window.count < limit
            if allowed:
                window.count += 1
            reset_in = max(0, int(window.started_at + window_seconds - now))
            return WindowState(
                allowed=allowed, count=window.count, limit=limit, reset_in=reset_in
            )

    async def release(self, key: str, window_seconds: int) -> None:
        with self._lock:
            window = self._windows.get(key)
            if window is not None and window.count > 0:
                window.count -= 1

    async def reset(self, identifier: str) -> int:
        suffix = f":{identifier}"
        with self._lock:
            keys = [key for key in self._windows if key.endswith(suffix)]
            for key in keys:
                del self._windows[key]
            return len(keys)


class RedisQuotaStore(QuotaStore):
    """
    Redis-backed fixed-window counters using INCR + EXPIRE.

    Shared between worker processes. An over-limit INCR is immediately
    undone with DECR so rejected requests never consume quota.
    """

    def __init__(self, redis_client: redis.Redis, prefix: str = "quota"):
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowState:
        redis_key = self._key(key)
        current = await self._redis.incr(redis_key)

        # Set expiry on first request in window
        if current == 1:
            await self._redis.expire(redis_key, window_seconds)

        ttl = await self._redis.ttl(redis_key)
        if ttl is None or ttl < 0:
            await self._redis.expire(redis_key, window_seconds)
            ttl = window_seconds

        if current > limit:
            await self._redis.decr(redis_key)
            return WindowState(allowed=False, count=limit, limit=limit, reset_in=ttl)

        return WindowState(allowed=True, count=current, limit=limit, reset_in=ttl)

    async def release(self, key: str, window_seconds: int) -> None:
        redis_key = self._key(key)
        current = await self._redis.decr(redis_key)
        if current < 0:
            await self._redis.set(redis_key, 0, ex=window_seconds)

    async def reset(self, identifier: str) -> int:
        cursor = 0
        deleted = 0
        while True:
            cursor, keys = await self._redis.scan(
                cursor, match=f"{self._prefix}:*:{identifier}", count=100
            )
            if keys:
                deleted += await self._redis.delete(*keys)
            if cursor == 0:
                break
        return deleted

    async def close(self) -> None:
        await self._redis.aclose()


@dataclass
class QuotaDecision:
    """An admitted request and the quota it consumed."""

    amount: int  # records the request may produce
    standard: WindowState
    bulk: Optional[WindowState] = None

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.standard.limit),
            "X-RateLimit-Remaining": str(self.standard.remaining),
            "X-RateLimit-Reset": str(self.standard.reset_in),
        }


class QuotaGate:
    """
    Admission control for API requests.

    Usage:
        gate = QuotaGate(InMemoryQuotaStore())
        decision = await gate.admit(plan, amount=150)
    """

    def __init__(
        self,
        store: QuotaStore,
        standard_window_seconds: int = 15 * 60,
        bulk_window_seconds: int = 60 * 60,
        bulk_limit: int = 10,
        bulk_threshold: int = 100,
    ):
        self.store = store
        self.standard_window_seconds = standard_window_seconds
        self.bulk_window_seconds = bulk_window_seconds
        self.bulk_limit = bulk_limit
        self.bulk_threshold = bulk_threshold

    def is_bulk(self, amount: int) -> bool:
        return amount > self.bulk_threshold

    async def admit(self, plan: PlanContext, amount: int = 1) -> QuotaDecision:
        """
        Admit or reject a request.

        Args:
            plan: Resolved plan context
            amount: Number of records requested

        Returns:
            QuotaDecision with the admitted record count

        Raises:
            BulkQuotaExceededError: Bulk window full (checked first)
            StandardQuotaExceededError: Plan rate ceiling reached
        """
        bulk_key = f"bulk:{plan.identifier}"
        bulk_state = None

        if self.is_bulk(amount):
            bulk_state = await self.store.hit(
                bulk_key, self.bulk_limit, self.bulk_window_seconds
            )
            if not bulk_state.allowed:
                logger.warning(
                    f"Bulk quota exceeded: {plan.identifier} "
                    f"({bulk_state.count}/{bulk_state.limit})"
                )
                raise BulkQuotaExceededError(bulk_state, self.bulk_threshold)

        standard_state = await self.store.hit(
            f"standard:{plan.identifier}", plan.rate_limit, self.standard_window_seconds
        )
        if not standard_state.allowed:
            if bulk_state is not None:
                await self.store.release(bulk_key, self.bulk_window_seconds)
            logger.warning(
                f"Rate limit exceeded: {plan.identifier} "
                f"({standard_state.count}/{standard_state.limit}, plan={plan.plan_type})"
            )
            raise StandardQuotaExceededError(
                standard_state, plan, self.standard_window_seconds
            )

        return QuotaDecision(
            amount=max(1, min(amount, plan.bulk_limit)),
            standard=standard_state,
            bulk=bulk_state,
        )
