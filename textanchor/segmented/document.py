"""
Segmented documents.

A SegmentedText is a document made of an ordered list of text segments, such
as the text nodes of a web page or the paragraphs of an article. Its text is
walked as chunks by a SegmentChunker, bounded by a TextRange.

Offsets inside segments are UTF-16 code units.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from itertools import accumulate
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, PrivateAttr

from textanchor.selectors import MatchResult
from textanchor.text.chunker import ChunkRange
from textanchor.text.codeunits import code_units, from_code_units


class SegmentedText(BaseModel):
    """
    Document made of ordered text segments.

    Attributes:
        id: Optional identifier of the document
        segments: The document's text, segment by segment (segments may be empty)
    """

    id: str | None = None
    segments: list[str] = []

    _units: list[str] = PrivateAttr(default_factory=list)
    _starts: list[int] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        self._units = [code_units(segment) for segment in self.segments]
        self._starts = [0, *accumulate(len(units) for units in self._units)]

    @classmethod
    def from_text(cls, text: str, split_lines: bool = False) -> Self:
        """Create a document from plain text, as one segment or one per line."""
        segments = text.splitlines(keepends=True) if split_lines else [text]
        return cls(segments=segments)

    @classmethod
    def from_yaml(cls, yaml_text: str) -> Self:
        """
        Load a document from YAML text.

        Example:
            doc = SegmentedText.from_yaml('''
                $id: lorem
                segments:
                  - "lorem ipsum "
                  - "dolor amet"
            ''')
        """
        data = yaml.safe_load(yaml_text)
        return cls._from_dict(data)

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> Self:
        """Load a document from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> Self:
        """Create a document from a parsed YAML dict."""
        return cls(
            id=data.get("$id", data.get("id")),
            segments=[str(s) for s in data.get("segments", [])],
        )

    @property
    def length(self) -> int:
        """Total length in code units"""
        return self._starts[-1]

    def segment_units(self, segment: int) -> str:
        """The code units of one segment"""
        return self._units[segment]

    def offset_of(self, segment: int, offset: int) -> int:
        """Convert a (segment, offset) boundary to an absolute code-unit offset."""
        return self._starts[segment] + offset

    def boundary(self, offset: int) -> tuple[int, int]:
        """
        Convert an absolute code-unit offset to a (segment, offset) boundary.

        An offset between two segments is placed at the start of the latter,
        except at the end of the document.

        Raises:
            ValueError: If the offset lies outside the document
        """
        if not self.segments or not 0 <= offset <= self.length:
            raise ValueError(
                f"Offset {offset} outside document of length {self.length}"
            )
        if offset == self.length:
            return len(self.segments) - 1, len(self._units[-1])
        segment = bisect_right(self._starts, offset) - 1
        return segment, offset - self._starts[segment]

    def range(self, start: int = 0, end: int | None = None) -> TextRange:
        """Create a TextRange from absolute code-unit offsets."""
        if end is None:
            end = self.length
        if end < start:
            raise ValueError(f"Range end {end} precedes its start {start}")
        if not self.segments:
            if start or end:
                raise ValueError("Document has no segments")
            return TextRange(self, 0, 0, 0, 0)
        start_segment, start_offset = self.boundary(start)
        end_segment, end_offset = self.boundary(end)
        return TextRange(self, start_segment, start_offset, end_segment, end_offset)

    def whole(self) -> TextRange:
        """A TextRange spanning the whole document"""
        if not self.segments:
            return TextRange(self, 0, 0, 0, 0)
        return TextRange(self, 0, 0, len(self.segments) - 1, len(self._units[-1]))


@dataclass(frozen=True, eq=False)
class TextRange:
    """
    A span of a SegmentedText.

    Used both as the scope to search in and as the type of matches.
    Two ranges of the same document are equal when they cover the same
    absolute span, whichever side of a segment boundary they begin or end on.
    """

    document: SegmentedText = field(repr=False)
    start_segment: int
    start_offset: int
    end_segment: int
    end_offset: int

    @property
    def start(self) -> int:
        """Absolute code-unit offset of the start"""
        if not self.document.segments:
            return 0
        return self.document.offset_of(self.start_segment, self.start_offset)

    @property
    def end(self) -> int:
        """Absolute code-unit offset of the end"""
        if not self.document.segments:
            return 0
        return self.document.offset_of(self.end_segment, self.end_offset)

    @property
    def collapsed(self) -> bool:
        return self.start >= self.end

    @property
    def text(self) -> str:
        """The text covered by the range"""
        parts = []
        for segment in range(self.start_segment, self.end_segment + 1):
            if segment >= len(self.document.segments):
                break
            units = self.document.segment_units(segment)
            start = self.start_offset if segment == self.start_segment else 0
            end = self.end_offset if segment == self.end_segment else len(units)
            parts.append(units[start:end])
        return from_code_units("".join(parts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextRange):
            return NotImplemented
        return self.document is other.document and (self.start, self.end) == (
            other.start,
            other.end,
        )

    def __hash__(self) -> int:
        return hash((id(self.document), self.start, self.end))

    def contains(self, other: TextRange) -> bool:
        return self.start <= other.start and other.end <= self.end

    def chunker(self) -> SegmentChunker:
        """A fresh chunker over the text of this range"""
        return SegmentChunker(self)


@dataclass(frozen=True)
class PartialSegment:
    """
    The part of a segment that lies within a scope.

    Attributes:
        segment: Index of the segment in the document
        start_offset: Where the chunk starts inside the segment
        end_offset: Where the chunk ends inside the segment
        data: The chunk's code units
    """

    segment: int
    start_offset: int
    end_offset: int
    data: str


class SegmentChunker:
    """Chunker over the segments that a TextRange touches."""

    def __init__(self, scope: TextRange) -> None:
        self._scope = scope
        self._first = scope.start_segment
        self._last = min(scope.end_segment, len(scope.document.segments) - 1)
        self._current = self._first

    @property
    def scope(self) -> TextRange:
        return self._scope

    @property
    def current_chunk(self) -> PartialSegment | None:
        if self._last < self._first:
            return None
        return self.segment_to_chunk(self._current)

    def read_next(self) -> PartialSegment | None:
        if self._current >= self._last:
            return None
        self._current += 1
        return self.current_chunk

    def read_prev(self) -> PartialSegment | None:
        if self._current <= self._first:
            return None
        self._current -= 1
        return self.current_chunk

    def precedes_current_chunk(self, chunk: PartialSegment) -> bool:
        return chunk.segment < self._current

    def segment_to_chunk(self, segment: int) -> PartialSegment:
        """
        Convert a segment to a chunk, cut to the scope.

        Raises:
            ValueError: If the segment lies outside the scope
        """
        if not self._first <= segment <= self._last:
            raise ValueError(
                f"Segment {segment} falls outside of the chunker's scope"
            )
        units = self._scope.document.segment_units(segment)
        start = self._scope.start_offset if segment == self._first else 0
        end = self._scope.end_offset if segment == self._scope.end_segment else len(units)
        return PartialSegment(segment, start, end, units[start:end])

    def range_to_chunk_range(self, text_range: TextRange) -> ChunkRange[PartialSegment]:
        """
        Express a range inside the scope in terms of this chunker's chunks.

        Raises:
            ValueError: If the range does not lie within the scope
        """
        if text_range.document is not self._scope.document or not self._scope.contains(
            text_range
        ):
            raise ValueError("Range does not lie within the chunker's scope")

        start_chunk = self.segment_to_chunk(text_range.start_segment)
        end_chunk = self.segment_to_chunk(text_range.end_segment)
        return ChunkRange(
            start_chunk,
            text_range.start_offset - start_chunk.start_offset,
            end_chunk,
            text_range.end_offset - end_chunk.start_offset,
        )

    def chunk_range_to_range(self, chunk_range: ChunkRange[PartialSegment]) -> TextRange:
        """Convert a range of this chunker's chunks back to a TextRange."""
        return TextRange(
            self._scope.document,
            chunk_range.start_chunk.segment,
            chunk_range.start_index + chunk_range.start_chunk.start_offset,
            chunk_range.end_chunk.segment,
            chunk_range.end_index + chunk_range.end_chunk.start_offset,
        )


# MatchResult holds TextRanges
MatchResult.model_rebuild()
