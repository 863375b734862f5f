"""
Selector matching on segmented documents.

Binds the chunk-level core to SegmentedText: scopes and matches are TextRanges.
"""

from textanchor.segmented.document import (
    PartialSegment,
    SegmentChunker,
    SegmentedText,
    TextRange,
)
from textanchor.segmented.matcher import (
    MatcherCache,
    create_any_selector_matcher,
    create_matcher,
    locate,
    match_selector,
    refine,
)
from textanchor.segmented.range import make_create_range_selector_matcher
from textanchor.segmented.text_position import (
    create_text_position_selector_matcher,
    describe_text_position,
)
from textanchor.segmented.text_quote import (
    create_text_quote_selector_matcher,
    describe_text_quote,
)

__all__ = [
    "SegmentedText",
    "TextRange",
    "SegmentChunker",
    "PartialSegment",
    "create_matcher",
    "create_any_selector_matcher",
    "match_selector",
    "locate",
    "refine",
    "MatcherCache",
    "make_create_range_selector_matcher",
    "create_text_quote_selector_matcher",
    "create_text_position_selector_matcher",
    "describe_text_quote",
    "describe_text_position",
]
