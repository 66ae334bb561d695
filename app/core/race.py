"""
Race helpers: run awaitables concurrently and keep whichever settles first.

Used by credential acquisition (token request vs. fixed timer). The losing
tasks are cancelled and awaited so nothing keeps running after the race.
"""

import asyncio
import logging
from typing import Any, Awaitable

logger = logging.getLogger(__name__)


class RaceTimeoutError(TimeoutError):
    """Raised by with_deadline when the timer settles before the operation."""


async def first_completed(*aws: Awaitable[Any]) -> Any:
    """
    Run all awaitables concurrently; return the result of the first to settle.
    If the first to settle raised, that exception propagates. The rest are cancelled.
    When several settle in the same loop iteration, argument order decides.
    """
    if not aws:
        raise ValueError("first_completed() needs at least one awaitable")
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        losers = [t for t in tasks if not t.done()]
        for t in losers:
            t.cancel()
        if losers:
            await asyncio.gather(*losers, return_exceptions=True)
            logger.debug("[race:first_completed] cancelled %d pending task(s)", len(losers))

    winner = next(t for t in tasks if t in done)
    for t in done:
        # Retrieve exceptions of simultaneous finishers so asyncio does not warn.
        if t is not winner and not t.cancelled():
            t.exception()
    return winner.result()


async def _timer(seconds: float, message: str) -> None:
    await asyncio.sleep(seconds)
    raise RaceTimeoutError(message)


async def with_deadline(aw: Awaitable[Any], seconds: float, message: str = "Operation timed out") -> Any:
    """Race aw against a timer; RaceTimeoutError(message) if the timer wins."""
    return await first_completed(aw, _timer(seconds, message))
