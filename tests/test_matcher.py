"""Tests for selector dispatch, refinement, range selectors and caching."""

import pytest

from textanchor.errors import UnsupportedSelectorError
from textanchor.segmented.document import SegmentedText
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
from textanchor.segmented.text_quote import describe_text_quote
from textanchor.selectors import RangeSelector, TextPositionSelector, TextQuoteSelector
from textanchor.streams import match_stream


def spans(matches) -> list[tuple[int, int]]:
    return [(m.start, m.end) for m in matches]


class TestCreateMatcher:
    """Tests for dispatching on the selector type."""

    @pytest.mark.asyncio
    async def test_quote(self, lorem_doc) -> None:
        matcher = create_matcher(TextQuoteSelector(exact="yada"))
        assert spans(await matcher(lorem_doc.whole()).to_list()) == [(23, 27), (28, 32)]

    @pytest.mark.asyncio
    async def test_quote_across_segments(self, lorem_doc) -> None:
        matcher = create_matcher({"type": "TextQuoteSelector", "exact": "ipsum dolor"})
        [match] = await matcher(lorem_doc.whole()).to_list()
        assert match.text == "ipsum dolor"
        assert (match.start_segment, match.end_segment) == (0, 1)

    @pytest.mark.asyncio
    async def test_position(self, lorem_doc) -> None:
        matcher = create_matcher({"type": "TextPositionSelector", "start": 6, "end": 17})
        [match] = await matcher(lorem_doc.whole()).to_list()
        assert match.text == "ipsum dolor"

    @pytest.mark.asyncio
    async def test_position_counts_code_points(self) -> None:
        doc = SegmentedText(segments=["a\U0001F600", "b"])
        matcher = create_text_position_selector_matcher(TextPositionSelector(start=1, end=2))
        [match] = await matcher(doc.whole()).to_list()
        assert match.text == "\U0001F600"
        assert (match.start, match.end) == (1, 3)

    @pytest.mark.asyncio
    async def test_scope_limits_matches(self, lorem_doc) -> None:
        matcher = create_matcher(TextQuoteSelector(exact="yada"))
        assert spans(await matcher(lorem_doc.range(25, 32)).to_list()) == [(28, 32)]

    def test_unknown_type_fails_on_creation(self) -> None:
        with pytest.raises(UnsupportedSelectorError):
            create_matcher({"type": "CssSelector", "value": "p"})

    @pytest.mark.asyncio
    async def test_empty_document(self) -> None:
        matcher = create_matcher(TextQuoteSelector(exact=""))
        assert await matcher(SegmentedText().whole()).to_list() == []


class TestRefinement:
    """Tests for refinedBy."""

    @pytest.mark.asyncio
    async def test_refined_by_quote(self, lorem_doc) -> None:
        selector = TextQuoteSelector(
            exact="yada yada",
            refined_by=TextQuoteSelector(exact="a"),
        )
        matches = await create_matcher(selector)(lorem_doc.whole()).to_list()
        assert spans(matches) == [(24, 25), (26, 27), (29, 30), (31, 32)]

    @pytest.mark.asyncio
    async def test_refined_by_position_is_relative(self, lorem_doc) -> None:
        selector = TextQuoteSelector(
            exact="yada yada",
            refined_by=TextPositionSelector(start=5, end=9),
        )
        assert spans(await create_matcher(selector)(lorem_doc.whole()).to_list()) == [
            (28, 32)
        ]

    @pytest.mark.asyncio
    async def test_refine(self, lorem_doc) -> None:
        matcher = refine(
            create_matcher(TextQuoteSelector(exact="dolor amet")),
            create_matcher(TextQuoteSelector(exact="o")),
        )
        assert spans(await matcher(lorem_doc.whole()).to_list()) == [(13, 14), (15, 16)]


class TestRangeSelector:
    """Tests for matching the text between two selectors."""

    @pytest.mark.asyncio
    async def test_all_valid_pairs(self, lorem_doc) -> None:
        selector = RangeSelector(
            start_selector=TextQuoteSelector(exact="ipsum"),
            end_selector=TextQuoteSelector(exact="yada"),
        )
        matches = await create_matcher(selector)(lorem_doc.whole()).to_list()
        assert sorted(spans(matches)) == [(11, 23), (11, 28)]

    @pytest.mark.asyncio
    async def test_reversed_and_empty_pairs_are_skipped(self, lorem_doc) -> None:
        selector = RangeSelector(
            start_selector=TextQuoteSelector(exact="yada"),
            end_selector=TextQuoteSelector(exact="yada"),
        )
        matches = await create_matcher(selector)(lorem_doc.whole()).to_list()
        assert spans(matches) == [(27, 28)]
        assert all(not m.collapsed for m in matches)

    @pytest.mark.asyncio
    async def test_nested_range(self, lorem_doc) -> None:
        selector = RangeSelector(
            start_selector=TextQuoteSelector(exact="lorem"),
            end_selector=RangeSelector(
                start_selector=TextQuoteSelector(exact="amet"),
                end_selector=TextQuoteSelector(exact="yada", prefix="yada "),
            ),
        )
        # The inner range is [22, 28); the outer range ends where it starts
        matches = await create_matcher(selector)(lorem_doc.whole()).to_list()
        assert spans(matches) == [(5, 22)]

    @pytest.mark.asyncio
    async def test_closing_closes_both_sides(self, lorem_doc) -> None:
        closed = []

        def create_endless_matcher(selector):
            @match_stream
            async def match_all(scope):
                offset = 0 if selector.exact == "start" else 10
                try:
                    while True:
                        yield lorem_doc.range(offset, offset + 1)
                finally:
                    closed.append(selector.exact)

            return match_all

        create_range_selector_matcher = make_create_range_selector_matcher(
            create_endless_matcher
        )
        matcher = create_range_selector_matcher(
            RangeSelector(
                start_selector=TextQuoteSelector(exact="start"),
                end_selector=TextQuoteSelector(exact="end"),
            )
        )
        matches = matcher(lorem_doc.whole())
        first = await matches.__anext__()
        await matches.aclose()
        assert (first.start, first.end) == (1, 10)
        assert sorted(closed) == ["end", "start"]


class TestAnySelector:
    """Tests for picking the first supported of several selectors."""

    @pytest.mark.asyncio
    async def test_skips_unsupported(self, lorem_doc) -> None:
        selectors = [
            {"type": "FragmentSelector", "value": "t=1"},
            {"type": "TextQuoteSelector", "exact": "amet"},
        ]
        assert spans(await match_selector(selectors, lorem_doc.whole())) == [(18, 22)]

    @pytest.mark.asyncio
    async def test_single_selector(self, lorem_doc) -> None:
        matches = await match_selector(TextQuoteSelector(exact="amet"), lorem_doc.whole())
        assert spans(matches) == [(18, 22)]

    def test_none_supported(self) -> None:
        with pytest.raises(UnsupportedSelectorError):
            create_any_selector_matcher([{"type": "CssSelector", "value": "p"}])


class TestLocate:
    """Tests for resolving selectors into a MatchResult."""

    @pytest.mark.asyncio
    async def test_found(self, lorem_doc) -> None:
        result = await locate(TextQuoteSelector(exact="yada", suffix=" "), lorem_doc.whole())
        assert result.found
        assert result.match.text == "yada"

    @pytest.mark.asyncio
    async def test_ambiguous(self, lorem_doc) -> None:
        result = await TextQuoteSelector(exact="yada").locate(lorem_doc.whole())
        assert result.ambiguous
        assert len(result.matches) == 2

    @pytest.mark.asyncio
    async def test_orphaned(self, lorem_doc) -> None:
        result = await TextQuoteSelector(exact="sit").locate(lorem_doc.whole())
        assert result.orphaned


class TestDescribe:
    """Tests for describing ranges of a document."""

    @pytest.mark.asyncio
    async def test_describe_quote_defaults_to_whole_document(self, lorem_doc) -> None:
        selector = await describe_text_quote(lorem_doc.range(23, 27))
        assert selector == TextQuoteSelector(exact="yada", suffix=" ")

    @pytest.mark.asyncio
    async def test_describe_quote_in_scope(self, lorem_doc) -> None:
        scope = lorem_doc.range(25, 32)
        selector = await describe_text_quote(lorem_doc.range(28, 32), scope)
        assert selector == TextQuoteSelector(exact="yada")

    @pytest.mark.asyncio
    async def test_describe_quote_round_trip(self, lorem_doc) -> None:
        scope = lorem_doc.whole()
        for start, end in [(0, 5), (11, 13), (22, 24), (23, 27), (28, 32), (27, 28)]:
            target = lorem_doc.range(start, end)
            selector = await describe_text_quote(target, scope)
            matches = await create_matcher(selector)(scope).to_list()
            assert spans(matches) == [(start, end)], selector

    def test_describe_position(self) -> None:
        doc = SegmentedText(segments=["a\U0001F600", "b"])
        assert describe_text_position(doc.range(3, 4)) == TextPositionSelector(
            start=2, end=3
        )

    def test_describe_position_in_scope(self, lorem_doc) -> None:
        selector = describe_text_position(lorem_doc.range(23, 27), lorem_doc.range(12, 32))
        assert selector == TextPositionSelector(start=11, end=15)

    def test_describe_outside_scope(self, lorem_doc) -> None:
        with pytest.raises(ValueError):
            describe_text_position(lorem_doc.range(0, 5), lorem_doc.range(12, 32))


class TestMatcherCache:
    """Tests for reusing matchers."""

    def test_equal_selectors_share_matcher(self) -> None:
        cache = MatcherCache()
        matcher = cache(TextQuoteSelector(exact="yada"))
        assert cache({"type": "TextQuoteSelector", "exact": "yada"}) is matcher
        assert cache(TextQuoteSelector(exact="yada", suffix=" ")) is not matcher
        assert len(cache) == 2

    def test_custom_key(self) -> None:
        cache = MatcherCache(key=lambda selector: selector.type)
        matcher = cache(TextQuoteSelector(exact="yada"))
        assert cache(TextQuoteSelector(exact="amet")) is matcher

    def test_clear(self) -> None:
        cache = MatcherCache()
        cache(TextQuoteSelector(exact="yada"))
        cache.clear()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_cached_matcher_is_reusable(self, lorem_doc) -> None:
        matcher = MatcherCache()(TextQuoteSelector(exact="yada"))
        first = await matcher(lorem_doc.whole()).to_list()
        second = await matcher(lorem_doc.range(25, 32)).to_list()
        assert spans(first) == [(23, 27), (28, 32)]
        assert spans(second) == [(28, 32)]
