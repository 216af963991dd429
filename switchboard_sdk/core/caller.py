# switchboard_sdk/core/caller.py
# SPDX-License-Identifier: Apache-2.0
"""
Shared retrying / cancellable call wrapper used by every adapter.

`AsyncCaller` owns the cross-cutting policy around one outbound call:

- Retries with exponential backoff for retryable failures only
  (transport errors, 408/409/425/429 and 5xx responses).
- Optional concurrency bound (asyncio.Semaphore) per caller instance, held
  for each attempt but not across backoff sleeps.
- Cooperative cancellation through a `CancellationSignal`: when the signal
  fires the in-flight attempt (or backoff sleep) is cancelled and
  `RequestCancelled` is raised promptly.
- Optional whole-call timeout, surfaced as `DeadlineExceeded`.

Adapters stay thin: they hand the caller a zero-side-effect coroutine
factory that performs exactly one request and raises taxonomy errors.

Usage
-----
    caller = AsyncCaller(retry_policy=RetryPolicy(max_attempts=3))
    signal = CancellationSignal()

    data = await caller.call_with_options(
        CallerOptions(signal=signal, timeout_s=30),
        post_once, url, body,
    )
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from switchboard_sdk.core.config import SDKSettings, get_settings
from switchboard_sdk.core.errors import (
    DeadlineExceeded,
    HttpStatusError,
    RequestCancelled,
    TransportError,
)

LOG = logging.getLogger(__name__)

# Statuses worth another attempt; everything else in 4xx is a caller bug.
_RETRYABLE_STATUS = frozenset({408, 409, 425, 429})


# =============================================================================
# Cancellation
# =============================================================================

class CancellationSignal:
    """
    One-shot cancellation token shared between a caller and an in-flight call.

    Firing the signal is idempotent; the first reason wins.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    async def wait(self) -> None:
        await self._event.wait()


@dataclass(frozen=True)
class CallerOptions:
    """
    Per-call options understood by `AsyncCaller.call_with_options`.

    Attributes:
        signal:    cancellation token for this call.
        timeout_s: budget for the whole call, retries and backoff included.
    """

    signal: Optional[CancellationSignal] = None
    timeout_s: Optional[float] = None


# =============================================================================
# Retry policy
# =============================================================================

@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration with exponential backoff.

    Attributes:
        max_attempts: Total tries including the first attempt.
        base_ms:      Initial backoff in milliseconds.
        max_ms:       Maximum backoff cap in milliseconds.
        multiplier:   Exponential growth factor per attempt.
        use_jitter:   Randomize sleep in [0, backoff].
    """

    max_attempts: int = 7
    base_ms: int = 1_000
    max_ms: int = 60_000
    multiplier: float = 2.0
    use_jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_ms <= 0 or self.max_ms <= 0:
            raise ValueError("Backoff times must be positive")
        if self.multiplier < 1.0:
            raise ValueError("Multiplier must be >= 1.0")
        if self.base_ms > self.max_ms:
            raise ValueError("base_ms cannot exceed max_ms")

    def backoff_ms(self, attempt_index: int) -> int:
        """Compute exponential backoff for a given retry index (0-based)."""
        raw = int(self.base_ms * (self.multiplier ** attempt_index))
        return min(raw, self.max_ms)

    @classmethod
    def from_settings(cls, settings: Optional[SDKSettings] = None) -> "RetryPolicy":
        s = settings or get_settings()
        return cls(max_attempts=s.max_retries + 1, use_jitter=s.retry_jitter)


def is_retryable(exc: BaseException) -> bool:
    """
    Decide whether a failed attempt should be retried.

    Only transport failures and throttling/server-side statuses qualify.
    Configuration errors, conflicts, empty results and cancellations never do.
    """
    if isinstance(exc, TransportError):
        return True
    if isinstance(exc, HttpStatusError):
        return exc.status_code in _RETRYABLE_STATUS or exc.status_code >= 500
    return False


# =============================================================================
# Caller
# =============================================================================

class AsyncCaller:
    """
    Retrying, concurrency-bounded, cancellable invoker for outbound calls.

    Parameters
    ----------
    max_concurrency:
        Maximum in-flight calls through this caller; None or 0 = unbounded.
    retry_policy:
        Backoff configuration; defaults to `RetryPolicy.from_settings()`.
    retryable:
        Predicate deciding whether an exception is worth another attempt.
    on_backoff:
        Optional hook `(attempt_no, sleep_seconds, exc)` called before each
        backoff sleep. Hook failures are logged and ignored.
    """

    def __init__(
        self,
        *,
        max_concurrency: Optional[int] = None,
        retry_policy: Optional[RetryPolicy] = None,
        retryable: Callable[[BaseException], bool] = is_retryable,
        on_backoff: Optional[Callable[[int, float, BaseException], None]] = None,
    ) -> None:
        self._policy = retry_policy or RetryPolicy.from_settings()
        self._retryable = retryable
        self._on_backoff = on_backoff
        self._max_concurrency = int(max_concurrency) if max_concurrency else None
        self._semaphore = (
            asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None
        )

    @classmethod
    def from_settings(cls, settings: Optional[SDKSettings] = None) -> "AsyncCaller":
        s = settings or get_settings()
        return cls(
            max_concurrency=s.max_concurrency or None,
            retry_policy=RetryPolicy.from_settings(s),
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    @property
    def max_concurrency(self) -> Optional[int]:
        return self._max_concurrency

    async def call(self, fn: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """Invoke `fn(*args, **kwargs)` with retries and the concurrency bound."""
        return await self.call_with_options(None, fn, *args, **kwargs)

    async def call_with_options(
        self,
        options: Optional[CallerOptions],
        fn: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """
        Invoke `fn(*args, **kwargs)` honoring `options.signal` and `options.timeout_s`.

        Raises:
            RequestCancelled: signal fired before or during the call.
            DeadlineExceeded: timeout elapsed before the call finished.
            The last attempt's error when retries are exhausted or the error
            is not retryable.
        """
        options = options or CallerOptions()
        signal = options.signal
        if signal is not None and signal.cancelled:
            raise RequestCancelled(signal.reason)

        work = self._attempt_loop(fn, args, kwargs)
        if signal is None and options.timeout_s is None:
            return await work
        return await self._race(work, signal, options.timeout_s)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _attempt(
        self,
        fn: Callable[..., Awaitable[Any]],
        args: tuple,
        kwargs: dict,
    ) -> Any:
        """One attempt; the concurrency slot is released before any backoff sleep."""
        if self._semaphore is None:
            return await fn(*args, **kwargs)
        async with self._semaphore:
            return await fn(*args, **kwargs)

    async def _attempt_loop(
        self,
        fn: Callable[..., Awaitable[Any]],
        args: tuple,
        kwargs: dict,
    ) -> Any:
        attempts = self._policy.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                return await self._attempt(fn, args, kwargs)
            except Exception as exc:
                if attempt >= attempts or not self._retryable(exc):
                    raise

                backoff = self._policy.backoff_ms(attempt - 1) / 1000.0
                sleep_for = random.random() * backoff if self._policy.use_jitter else backoff
                LOG.warning(
                    "Attempt %d/%d failed (%s); retrying in %.2fs",
                    attempt,
                    attempts,
                    exc,
                    sleep_for,
                )
                if self._on_backoff is not None:
                    try:
                        self._on_backoff(attempt, sleep_for, exc)
                    except Exception:
                        LOG.debug("on_backoff hook failed", exc_info=True)
                await asyncio.sleep(sleep_for)
        raise AssertionError("unreachable")  # pragma: no cover

    @staticmethod
    async def _race(
        work: Awaitable[Any],
        signal: Optional[CancellationSignal],
        timeout_s: Optional[float],
    ) -> Any:
        """Run `work` until it finishes, the signal fires, or the timeout elapses."""
        task = asyncio.ensure_future(work)
        waiters = {task}
        signal_task: Optional[asyncio.Future] = None
        if signal is not None:
            signal_task = asyncio.ensure_future(signal.wait())
            waiters.add(signal_task)

        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=timeout_s,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            if signal_task is not None:
                signal_task.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        if signal is not None and signal.cancelled:
            LOG.debug("Call aborted by cancellation signal: %s", signal.reason)
            raise RequestCancelled(signal.reason)
        raise DeadlineExceeded(timeout_s)


__all__ = [
    "AsyncCaller",
    "CallerOptions",
    "CancellationSignal",
    "RetryPolicy",
    "is_retryable",
]
