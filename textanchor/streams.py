"""
Pull-based asynchronous match streams.

Every matcher returns a MatchStream: an async iterator that the consumer pulls
matches from, and that can be closed explicitly. Closing a stream closes
whatever it reads from, so abandoning a stream of nested matchers releases
every underlying chunker at once instead of waiting for garbage collection.

    async with matcher(scope) as matches:
        async for match in matches:
            ...
"""

from __future__ import annotations

import functools
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable
from typing import Generic, ParamSpec, TypeVar

T = TypeVar("T")
P = ParamSpec("P")


class MatchStream(AsyncIterator[T], Generic[T]):
    """An async iterator with deterministic cleanup."""

    def __init__(self, source: AsyncIterator[T]) -> None:
        self._source = source
        self._closed = False

    @classmethod
    def of(cls, iterable: AsyncIterable[T] | Iterable[T]) -> MatchStream[T]:
        """Wrap any (async) iterable, reusing it if it already is a MatchStream."""
        if isinstance(iterable, MatchStream):
            return iterable
        if isinstance(iterable, AsyncIterable):
            return cls(aiter(iterable))
        return cls(_from_sync(iterable))

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> MatchStream[T]:
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration
        try:
            return await self._source.__anext__()
        except BaseException:
            # Exhausted, failed or cancelled: either way nothing more will come
            await self.aclose()
            raise

    async def aclose(self) -> None:
        """Stop the stream and release its source. Closing twice is harmless."""
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> MatchStream[T]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def to_list(self) -> list[T]:
        """Consume the whole stream."""
        async with self:
            return [item async for item in self]


def match_stream(
    func: Callable[P, AsyncIterator[T]],
) -> Callable[P, MatchStream[T]]:
    """Decorate an async generator function so that it returns a MatchStream."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> MatchStream[T]:
        return MatchStream(func(*args, **kwargs))

    return wrapper


async def _from_sync(iterable: Iterable[T]) -> AsyncIterator[T]:
    for item in iterable:
        yield item
