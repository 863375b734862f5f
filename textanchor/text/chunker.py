"""Protocols and data structures for chunked text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Chunk(Protocol):
    """A fragment of some document.

    Implementations add attributes that map the chunk back to where it came
    from (e.g. a segment index and offsets). Two chunks are the same chunk
    when they compare equal.
    """

    @property
    def data(self) -> str:
        """The chunk's text, as a code-unit string."""
        ...


TChunk = TypeVar("TChunk", bound=Chunk)


@dataclass(frozen=True)
class ChunkRange(Generic[TChunk]):
    """A span of text, addressed by (chunk, code-unit index) at both ends."""

    start_chunk: TChunk
    start_index: int
    end_chunk: TChunk
    end_index: int


class Chunker(Protocol[TChunk]):
    """Walks through the chunks of a scope, one at a time, in both directions.

    Unlike an iterator it has no notion of being before or after a chunk: it
    always points *at* a chunk.
    """

    @property
    def current_chunk(self) -> TChunk | None:
        """The chunk pointed at; None only if the scope has no chunks at all."""
        ...

    def read_next(self) -> TChunk | None:
        """Move to the following chunk and return it.

        Returns None (and stays put) at the end of the scope.
        """
        ...

    def read_prev(self) -> TChunk | None:
        """Move to the preceding chunk and return it.

        Returns None (and stays put) at the start of the scope.
        """
        ...

    def precedes_current_chunk(self, chunk: TChunk) -> bool:
        """Check whether the given chunk comes before the current chunk."""
        ...


def chunk_range_equals(range1: ChunkRange, range2: ChunkRange) -> bool:
    """Compare two chunk ranges boundary by boundary."""
    return (
        range1.start_chunk == range2.start_chunk
        and range1.start_index == range2.start_index
        and range1.end_chunk == range2.end_chunk
        and range1.end_index == range2.end_index
    )
