"""
textanchor - Anchor W3C Web Annotation selectors to text.

This library provides:
- Selector models (TextQuoteSelector, TextPositionSelector, RangeSelector)
- Lazy matching of selectors in text that is split into chunks
- Minimal-context quote descriptions that select exactly one span

Import patterns:

    # Primary API (recommended)
    from textanchor import SegmentedText, TextQuoteSelector, create_matcher

    # Chunk-level core (for your own Chunker implementations)
    from textanchor.text import TextSeeker, text_quote_selector_matcher

Example usage:

    from textanchor import SegmentedText, TextQuoteSelector, describe_text_quote

    doc = SegmentedText(segments=["lorem ipsum dolor amet ", "yada yada"])

    # Locate a selector
    result = await TextQuoteSelector(exact="yada").locate(doc.whole())
    if result.ambiguous:
        # Describe the first match so that it becomes unique
        selector = await describe_text_quote(result.matches[0])
"""

from textanchor.cartesian import cartesian
from textanchor.errors import DisambiguationError, SeekError, UnsupportedSelectorError
from textanchor.segmented import (
    MatcherCache,
    SegmentedText,
    TextRange,
    create_any_selector_matcher,
    create_matcher,
    describe_text_position,
    describe_text_quote,
    locate,
    match_selector,
)
from textanchor.selectors import (
    MatchResult,
    MatchStatus,
    RangeSelector,
    Selector,
    TextPositionSelector,
    TextQuoteSelector,
    parse_selector,
)
from textanchor.streams import MatchStream

__version__ = "0.1.0"

# Primary public API
__all__ = [
    "SegmentedText",
    "TextRange",
    "Selector",
    "TextQuoteSelector",
    "TextPositionSelector",
    "RangeSelector",
    "parse_selector",
    "create_matcher",
    "create_any_selector_matcher",
    "match_selector",
    "locate",
    "describe_text_quote",
    "describe_text_position",
    "MatcherCache",
    "MatchResult",
    "MatchStatus",
    "MatchStream",
    "cartesian",
    "SeekError",
    "UnsupportedSelectorError",
    "DisambiguationError",
]
