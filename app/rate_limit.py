# =============================================================================
# app/rate_limit.py - Per-Client Request Rate Limiting
# =============================================================================
# A sliding-window counter keyed by (policy, client address).
#
# One SlidingWindowRateLimiter is built per application in create_app() and
# stored on `app.state.rate_limiter`; route dependencies look it up from the
# request, so there are no module-level counters. State lives in process
# memory and resets on restart.
#
# Usage:
#   @router.post("", dependencies=[Depends(enforce_rate_limit("create"))])
# =============================================================================

import logging
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from fastapi import Request, Response

from app.config import Settings
from app.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitPolicy:
    """At most `limit` requests per `window_seconds` per client."""

    name: str
    limit: int
    window_seconds: int
    message: str


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one hit against a policy."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the oldest counted hit leaves the window


def default_policies(settings: Settings) -> dict[str, RateLimitPolicy]:
    """The three configured policies: general API, uploads, creation."""
    return {
        "api": RateLimitPolicy(
            name="api",
            limit=settings.API_RATE_LIMIT,
            window_seconds=settings.API_RATE_WINDOW_SECONDS,
            message="Too many requests from this IP, please try again later.",
        ),
        "upload": RateLimitPolicy(
            name="upload",
            limit=settings.UPLOAD_RATE_LIMIT,
            window_seconds=settings.UPLOAD_RATE_WINDOW_SECONDS,
            message="Too many upload requests from this IP, please try again later.",
        ),
        "create": RateLimitPolicy(
            name="create",
            limit=settings.CREATE_RATE_LIMIT,
            window_seconds=settings.CREATE_RATE_WINDOW_SECONDS,
            message="Too many creation requests from this IP, please try again later.",
        ),
    }


class SlidingWindowRateLimiter:
    """
    Sliding-log rate limiter.

    Each (policy, client) pair keeps the timestamps of its accepted hits
    within the window. Rejected hits are not recorded, so a client that
    keeps hammering is admitted again as soon as old hits age out.

    Clients whose hits have all aged out are swept at most once per
    shortest window, so memory tracks the clients seen recently.
    """

    def __init__(
        self,
        policies: dict[str, RateLimitPolicy],
        clock: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ):
        self.policies = policies
        self.clock = clock
        self.enabled = enabled
        self._hits: dict[tuple[str, str], deque[float]] = {}
        self._windows = {p.name: p.window_seconds for p in policies.values()}
        self._sweep_interval = min(self._windows.values(), default=0)
        self._next_sweep: float | None = None

    def policy(self, name: str) -> RateLimitPolicy:
        return self.policies[name]

    def hit(self, policy_name: str, client_key: str) -> RateLimitDecision:
        """Record a request for `client_key` under a policy, if admissible."""
        policy = self.policies[policy_name]
        now = self.clock()

        if not self.enabled:
            return RateLimitDecision(True, policy.limit, policy.limit, 0)

        self._maybe_sweep(now)

        window = self._hits.setdefault((policy.name, client_key), deque())
        cutoff = now - policy.window_seconds
        while window and window[0] <= cutoff:
            window.popleft()

        if len(window) >= policy.limit:
            reset_after = math.ceil(window[0] + policy.window_seconds - now)
            return RateLimitDecision(False, policy.limit, 0, max(reset_after, 1))

        window.append(now)
        reset_after = math.ceil(window[0] + policy.window_seconds - now)
        return RateLimitDecision(
            True,
            policy.limit,
            policy.limit - len(window),
            max(reset_after, 0),
        )

    def reset(self) -> None:
        """Forget every counter."""
        self._hits.clear()
        self._next_sweep = None

    def _maybe_sweep(self, now: float) -> None:
        if self._next_sweep is None:
            self._next_sweep = now + self._sweep_interval
            return
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval

        expired = [
            key for key, window in self._hits.items()
            if not window or window[-1] <= now - self._windows[key[0]]
        ]
        for key in expired:
            del self._hits[key]
        if expired:
            logger.debug(f"Rate limiter forgot {len(expired)} idle client(s)")


def client_key(request: Request, trust_proxy_headers: bool = False) -> str:
    """Network address a request is counted against."""
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_rate_limit(policy_name: str):
    """
    Build a FastAPI dependency that counts the request against a policy.

    Allowed requests get RateLimit-* headers; exhausted clients get 429.
    """

    async def dependency(request: Request, response: Response) -> None:
        limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter
        trust_proxy = request.app.state.settings.TRUST_PROXY_HEADERS
        key = client_key(request, trust_proxy)

        decision = limiter.hit(policy_name, key)
        if not decision.allowed:
            policy = limiter.policy(policy_name)
            logger.warning(f"Rate limit '{policy_name}' exceeded by {key}")
            raise RateLimitExceededError(policy_name, policy.message, decision.reset_after)

        # Innermost policy wins when several apply to the same route
        response.headers["RateLimit-Limit"] = str(decision.limit)
        response.headers["RateLimit-Remaining"] = str(decision.remaining)
        response.headers["RateLimit-Reset"] = str(decision.reset_after)

    return dependency
