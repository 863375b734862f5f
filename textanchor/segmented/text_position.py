"""TextPositionSelector matching and description on segmented documents."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from textanchor.segmented.document import TextRange
from textanchor.selectors import TextPositionSelector
from textanchor.streams import MatchStream, match_stream
from textanchor.text.position import describe_text_position as describe_chunk_position
from textanchor.text.position import text_position_selector_matcher


def create_text_position_selector_matcher(
    selector: TextPositionSelector,
) -> Callable[[TextRange], MatchStream[TextRange]]:
    """Create a matcher for a code-point span, counted from the start of the scope."""
    match_chunks = text_position_selector_matcher(selector)

    @match_stream
    async def match_all(scope: TextRange) -> AsyncIterator[TextRange]:
        chunker = scope.chunker()
        async with match_chunks(chunker) as matches:
            async for chunk_range in matches:
                yield chunker.chunk_range_to_range(chunk_range)

    return match_all


def describe_text_position(
    text_range: TextRange, scope: TextRange | None = None
) -> TextPositionSelector:
    """
    Create a TextPositionSelector for text_range, relative to scope.

    Args:
        text_range: The text to describe
        scope: The text that offsets are counted in (default: the whole document)

    Raises:
        ValueError: If text_range does not lie within scope
    """
    if scope is None:
        scope = text_range.document.whole()
    chunker = scope.chunker()
    target = chunker.range_to_chunk_range(text_range)
    return describe_chunk_position(target, scope.chunker())
