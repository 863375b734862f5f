"""TextQuoteSelector matching and description on segmented documents."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from textanchor.segmented.document import TextRange
from textanchor.selectors import TextQuoteSelector
from textanchor.streams import MatchStream, match_stream
from textanchor.text.quote import describe_text_quote as describe_chunk_quote
from textanchor.text.quote import text_quote_selector_matcher


def create_text_quote_selector_matcher(
    selector: TextQuoteSelector,
) -> Callable[[TextRange], MatchStream[TextRange]]:
    """
    Create a matcher that finds every occurrence of a quote within a scope.

    Example:
        matcher = create_text_quote_selector_matcher(TextQuoteSelector(exact="ana"))
        matches = await matcher(document.whole()).to_list()
    """
    match_chunks = text_quote_selector_matcher(selector)

    @match_stream
    async def match_all(scope: TextRange) -> AsyncIterator[TextRange]:
        chunker = scope.chunker()
        async with match_chunks(chunker) as matches:
            async for chunk_range in matches:
                yield chunker.chunk_range_to_range(chunk_range)

    return match_all


async def describe_text_quote(
    text_range: TextRange, scope: TextRange | None = None
) -> TextQuoteSelector:
    """
    Create a TextQuoteSelector that selects text_range, and nothing else in scope.

    Args:
        text_range: The text to describe
        scope: Where the selector will be matched (default: the whole document)

    Raises:
        ValueError: If text_range does not lie within scope
    """
    if scope is None:
        scope = text_range.document.whole()
    target = scope.chunker().range_to_chunk_range(text_range)
    return await describe_chunk_quote(target, scope.chunker)
