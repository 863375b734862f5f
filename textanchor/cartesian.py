"""
Incremental cartesian product of asynchronous streams.

Each input stream is read independently. Whenever one of them produces a
value, every combination of that value with the values seen so far on the
other streams is emitted, so each combination appears exactly once, as soon
as all of its parts are known.

Combinations come out in discovery order, not sorted in any way.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Any

from textanchor.logging_config import logger
from textanchor.streams import MatchStream, match_stream


@match_stream
async def cartesian(
    *iterables: AsyncIterable[Any] | Iterable[Any],
) -> AsyncIterator[tuple[Any, ...]]:
    """
    Combine streams into the stream of their cartesian product.

    Tuples hold one value per input stream, in the order of the arguments.
    When one stream fails, or the result is closed before it is exhausted,
    every input stream is closed before the error (or the close) returns.

    Example:
        async for start, end in cartesian(starts, ends):
            ...
    """
    streams = [MatchStream.of(iterable) for iterable in iterables]
    logs: list[list[Any]] = [[] for _ in streams]
    pending: dict[asyncio.Task, int] = {}

    def read_next(index: int) -> None:
        pending[asyncio.ensure_future(streams[index].__anext__())] = index

    try:
        for index in range(len(streams)):
            read_next(index)

        while pending:
            done, _ = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)

            # Values that arrive together are taken in argument order
            for task in sorted(done, key=pending.__getitem__):
                index = pending.pop(task)
                try:
                    value = task.result()
                except StopAsyncIteration:
                    logger.debug(f"Stream {index} exhausted after {len(logs[index])} values")
                    continue

                parts = [[value] if i == index else log for i, log in enumerate(logs)]
                logs[index].append(value)
                for combination in itertools.product(*parts):
                    yield combination

                read_next(index)
    finally:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for stream in streams:
            await stream.aclose()
