"""
Pytest configuration and fixtures for textanchor tests
"""

from dataclasses import dataclass

import pytest

from textanchor.segmented.document import SegmentedText
from textanchor.text.chunker import ChunkRange


@dataclass(frozen=True)
class ListChunk:
    """Chunk of a ListChunker"""

    index: int
    data: str


class ListChunker:
    """Chunker over a list of code-unit strings, counting the chunks it reads"""

    def __init__(self, texts: list[str]) -> None:
        self.chunks = [ListChunk(i, text) for i, text in enumerate(texts)]
        self.reads = 0
        self._current = 0

    @property
    def current_chunk(self) -> ListChunk | None:
        return self.chunks[self._current] if self.chunks else None

    def read_next(self) -> ListChunk | None:
        if self._current >= len(self.chunks) - 1:
            return None
        self._current += 1
        self.reads += 1
        return self.chunks[self._current]

    def read_prev(self) -> ListChunk | None:
        if self._current <= 0:
            return None
        self._current -= 1
        self.reads += 1
        return self.chunks[self._current]

    def precedes_current_chunk(self, chunk: ListChunk) -> bool:
        return chunk.index < self._current


def flatten(chunker: ListChunker, chunk_range: ChunkRange) -> tuple[int, int]:
    """Absolute (start, end) code-unit offsets of a chunk range"""
    starts = [0]
    for chunk in chunker.chunks:
        starts.append(starts[-1] + len(chunk.data))
    return (
        starts[chunk_range.start_chunk.index] + chunk_range.start_index,
        starts[chunk_range.end_chunk.index] + chunk_range.end_index,
    )


@pytest.fixture
def make_chunker():
    """Factory fixture to create list-based chunkers.

    Usage:
        def test_example(make_chunker):
            chunker = make_chunker(["lorem ", "ipsum"])
    """
    return ListChunker


@pytest.fixture
def lorem_text() -> str:
    return "lorem ipsum dolor amet yada yada"


@pytest.fixture
def lorem_doc() -> SegmentedText:
    """The lorem text over three segments (starting at 0, 12 and 23)"""
    return SegmentedText(
        id="lorem",
        segments=["lorem ipsum ", "dolor amet ", "yada yada"],
    )
