"""
Chunk-level text anchoring.

Everything in this package works on any Chunker, i.e. any text that is
fragmented into an ordered sequence of chunks. Offsets in ChunkRanges are
UTF-16 code units; TextPositionSelector offsets are code points.
"""

from textanchor.text.chunker import Chunk, Chunker, ChunkRange, chunk_range_equals
from textanchor.text.code_point_seeker import CodePointSeeker
from textanchor.text.position import (
    describe_text_position,
    text_position_selector_matcher,
)
from textanchor.text.quote import describe_text_quote, text_quote_selector_matcher
from textanchor.text.seeker import TextSeeker

__all__ = [
    "Chunk",
    "Chunker",
    "ChunkRange",
    "chunk_range_equals",
    "TextSeeker",
    "CodePointSeeker",
    "text_quote_selector_matcher",
    "describe_text_quote",
    "text_position_selector_matcher",
    "describe_text_position",
]
