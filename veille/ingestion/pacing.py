"""Rate-limited sequential iteration."""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Iterable, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Sleep = Callable[[float], Awaitable[None]]


async def paced(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    interval: float,
    on_error: Callable[[T, Exception], R],
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[Tuple[T, R]]:
    """
    Apply ``operation`` to each item in order, one at a time.

    A full ``interval`` pause separates the end of one operation from the
    start of the next. An exception from ``operation`` is handed to
    ``on_error`` and its return value is yielded in place of a result; the
    sequence always continues.
    """
    first = True
    for item in items:
        if not first and interval > 0:
            await sleep(interval)
        first = False

        try:
            result = await operation(item)
        except Exception as e:
            result = on_error(item, e)
        yield item, result
