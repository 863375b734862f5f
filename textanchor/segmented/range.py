"""RangeSelector matching on segmented documents."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from textanchor.cartesian import cartesian
from textanchor.logging_config import logger
from textanchor.segmented.document import TextRange
from textanchor.selectors import RangeSelector, Selector
from textanchor.streams import MatchStream, match_stream

Matcher = Callable[[TextRange], MatchStream[TextRange]]


def make_create_range_selector_matcher(
    create_matcher: Callable[[Selector], Matcher],
) -> Callable[[RangeSelector], Matcher]:
    """
    Build a RangeSelector matcher factory on top of a general one.

    The start and end selectors may be of any type create_matcher supports,
    including RangeSelector itself.
    """

    def create_range_selector_matcher(selector: RangeSelector) -> Matcher:
        """
        Create a matcher for the text between two other selectors' matches.

        Each match runs from the end of a start match up to the start of an
        end match. Pairs where that span would be empty or reversed are
        skipped. Matches come in the order the pairs are discovered, which
        is not necessarily their order in the text.
        """
        start_matcher = create_matcher(selector.start_selector)
        end_matcher = create_matcher(selector.end_selector)

        @match_stream
        async def match_all(scope: TextRange) -> AsyncIterator[TextRange]:
            pairs = cartesian(start_matcher(scope), end_matcher(scope))
            async with pairs:
                async for start, end in pairs:
                    if start.end >= end.start:
                        logger.debug(
                            f"Skipping range [{start.end}, {end.start}): "
                            "start does not precede end"
                        )
                        continue
                    yield TextRange(
                        scope.document,
                        start.end_segment,
                        start.end_offset,
                        end.start_segment,
                        end.start_offset,
                    )

        return match_all

    return create_range_selector_matcher
