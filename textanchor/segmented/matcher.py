"""
Selector dispatch for segmented documents.

create_matcher turns any selector into a matcher: a function taking a scope
(a TextRange) and returning a MatchStream of the TextRanges it selects.
Selector construction and scope application are separate steps, so a matcher
can be created once and applied to many scopes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Hashable, Mapping, Sequence
from typing import Any

from textanchor.errors import UnsupportedSelectorError
from textanchor.logging_config import logger
from textanchor.segmented.document import TextRange
from textanchor.segmented.range import Matcher, make_create_range_selector_matcher
from textanchor.segmented.text_position import create_text_position_selector_matcher
from textanchor.segmented.text_quote import create_text_quote_selector_matcher
from textanchor.selectors import (
    BaseSelector,
    MatchResult,
    RangeSelector,
    Selector,
    TextPositionSelector,
    TextQuoteSelector,
    parse_selector,
)
from textanchor.streams import match_stream

SelectorData = BaseSelector | Mapping[str, Any]


def refine(matcher: Matcher, refining_matcher: Matcher) -> Matcher:
    """
    Narrow a matcher down: apply refining_matcher within each of its matches.

    Example:
        # Every "b" inside every "abc"
        matcher = refine(
            create_matcher(TextQuoteSelector(exact="abc")),
            create_matcher(TextQuoteSelector(exact="b")),
        )
    """

    @match_stream
    async def match_all(scope: TextRange) -> AsyncIterator[TextRange]:
        async with matcher(scope) as matches:
            async for match in matches:
                async with refining_matcher(match) as refined:
                    async for refined_match in refined:
                        yield refined_match

    return match_all


def create_matcher(selector: SelectorData) -> Matcher:
    """
    Create a matcher for any supported selector, including its refinements.

    Args:
        selector: A selector, or its JSON-compatible data

    Raises:
        UnsupportedSelectorError: If the selector (or one nested in it) has an
            unsupported type
    """
    selector = parse_selector(selector)

    if isinstance(selector, TextQuoteSelector):
        matcher = create_text_quote_selector_matcher(selector)
    elif isinstance(selector, TextPositionSelector):
        matcher = create_text_position_selector_matcher(selector)
    elif isinstance(selector, RangeSelector):
        matcher = create_range_selector_matcher(selector)
    else:
        raise UnsupportedSelectorError(f"Unsupported selector: {selector!r}")

    if selector.refined_by is not None:
        matcher = refine(matcher, create_matcher(selector.refined_by))
    return matcher


create_range_selector_matcher = make_create_range_selector_matcher(create_matcher)


def create_any_selector_matcher(
    selectors: SelectorData | Sequence[SelectorData],
) -> Matcher:
    """
    Create a matcher from the first supported selector of several.

    Annotations may list several selectors that select the same content;
    selectors of unsupported types are passed over.

    Raises:
        UnsupportedSelectorError: If none of the selectors is supported
    """
    if isinstance(selectors, (BaseSelector, Mapping)):
        selectors = [selectors]

    for selector in selectors:
        try:
            return create_matcher(selector)
        except UnsupportedSelectorError as e:
            logger.debug(f"Passing over selector: {e}")
    raise UnsupportedSelectorError("None of the selectors is supported")


async def match_selector(
    selectors: SelectorData | Sequence[SelectorData], scope: TextRange
) -> list[TextRange]:
    """Collect every match of (the first supported of) selectors in scope."""
    return await create_any_selector_matcher(selectors)(scope).to_list()


async def locate(selector: SelectorData, scope: TextRange) -> MatchResult:
    """
    Resolve a selector in a scope and summarise the outcome.

    Returns:
        MatchResult that is found (one match), ambiguous (several) or
        orphaned (none)
    """
    with logger.indent_block(f"Locating {parse_selector(selector).type}"):
        matches = await create_matcher(selector)(scope).to_list()
        result = MatchResult.from_matches(matches)
        logger.debug(f"{result.status.value}: {len(matches)} match(es)")
    return result


class MatcherCache:
    """
    Cache of matchers, keyed by selector value.

    Selectors are immutable values, so equal selectors share one matcher.
    Pass `key` to choose another equality, e.g. to also tell apart
    documents. Entries are never invalidated; clear() drops them all.

    Example:
        cache = MatcherCache()
        matcher = cache(TextQuoteSelector(exact="yada"))
        assert cache(TextQuoteSelector(exact="yada")) is matcher
    """

    def __init__(
        self,
        create: Callable[[Selector], Matcher] = create_matcher,
        key: Callable[[Selector], Hashable] | None = None,
    ) -> None:
        self._create = create
        self._key = key or (lambda selector: selector)
        self._matchers: dict[Hashable, Matcher] = {}

    def __call__(self, selector: SelectorData) -> Matcher:
        selector = parse_selector(selector)
        key = self._key(selector)
        if key not in self._matchers:
            self._matchers[key] = self._create(selector)
        return self._matchers[key]

    def __len__(self) -> int:
        return len(self._matchers)

    def clear(self) -> None:
        self._matchers.clear()
