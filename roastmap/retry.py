"""
Retry helper: run an async operation until it succeeds or attempts run out.

Kept independent of HTTP so it can be exercised with a fake operation and
a fake ``sleep``.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol, Tuple, Type, TypeVar, Union

T = TypeVar("T")

_ExcT = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


class Backoff(Protocol):
    def delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        ...


class ConstantBackoff:
    """Same pause between every pair of attempts."""

    def __init__(self, delay_ms: int) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms

    def delay(self, attempt: int) -> float:
        return self.delay_ms / 1000

    def __repr__(self) -> str:
        return f"<ConstantBackoff {self.delay_ms}ms>"


async def attempt(
    op: Callable[[], Awaitable[T]],
    max_attempts: int,
    backoff: Backoff,
    *,
    retry_on: _ExcT = Exception,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Await ``op()`` up to ``max_attempts`` times.

    Errors matching ``retry_on`` are retried after ``backoff.delay(n)``
    seconds; the last one is re-raised once the attempts are used up.
    Anything else propagates immediately.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    attempts = 0
    while True:
        attempts += 1
        try:
            return await op()
        except retry_on:
            if attempts >= max_attempts:
                raise
            await sleep(backoff.delay(attempts))


__all__ = ["Backoff", "ConstantBackoff", "attempt"]
