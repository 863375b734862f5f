"""
Step definitions for annotation anchoring tests.

Matching and describing are asynchronous; each step runs its coroutine to
completion with asyncio.run.
"""

import asyncio

from behave import given, then, when  # type: ignore[import-untyped]

from textanchor.segmented.document import SegmentedText
from textanchor.segmented.matcher import create_any_selector_matcher
from textanchor.segmented.text_quote import describe_text_quote
from textanchor.selectors import MatchResult, TextQuoteSelector, selectors_from_annotation


# === Document Setup ===


@given("document:")  # type: ignore[misc]
def step_given_document(context):
    """Parse document from YAML format."""
    context.document = SegmentedText.from_yaml(context.text)


# === Annotation Setup ===


@given("annotation:")  # type: ignore[misc]
def step_given_annotation(context):
    """Parse the annotation's selectors from YAML format."""
    context.selectors = selectors_from_annotation(context.text)


# === Actions ===


@when("I resolve the annotation")  # type: ignore[misc]
def step_when_resolve(context):
    """Resolve the annotation against the whole document."""
    matcher = create_any_selector_matcher(context.selectors)
    matches = asyncio.run(matcher(context.document.whole()).to_list())
    context.result = MatchResult.from_matches(matches)


@when("I describe the text from {start:d} to {end:d}")  # type: ignore[misc]
def step_when_describe(context, start, end):
    """Describe a span of the document as a quote."""
    context.target = context.document.range(start, end)
    context.description = asyncio.run(describe_text_quote(context.target))


# === Assertions ===


@then("the result is FOUND")  # type: ignore[misc]
def step_then_found(context):
    """Assert exactly one match was found."""
    assert context.result.found, f"Expected found but got {context.result.status}"


@then("the result is AMBIGUOUS")  # type: ignore[misc]
def step_then_ambiguous(context):
    """Assert annotation has multiple matches."""
    assert context.result.ambiguous, (
        f"Expected ambiguous but got {context.result.status}"
    )


@then("the result is ORPHANED")  # type: ignore[misc]
def step_then_orphaned(context):
    """Assert annotation could not be resolved."""
    assert context.result.orphaned, f"Expected orphaned but got {context.result.status}"


@then("exactly {count:d} matches are found")  # type: ignore[misc]
def step_then_exact_matches(context, count):
    """Assert exact number of matches."""
    assert len(context.result.matches) == count, (
        f"Expected {count} matches but got {len(context.result.matches)}"
    )


@then('the matched text is "{expected_text}"')  # type: ignore[misc]
def step_then_matched_text(context, expected_text):
    """Assert the text of the first match."""
    assert context.result.match is not None, "No matches found"
    actual = context.result.match.text
    assert actual == expected_text, f"Expected '{expected_text}' but got '{actual}'"


@then('the matches are at "{spans}"')  # type: ignore[misc]
def step_then_matches_at(context, spans):
    """Assert the code-unit spans of all matches, e.g. "23-27, 28-32"."""
    expected = [tuple(int(n) for n in span.split("-")) for span in spans.split(", ")]
    actual = [(m.start, m.end) for m in context.result.matches]
    assert actual == expected, f"Expected matches at {expected} but got {actual}"


@then('the description is a quote of "{exact}" with prefix "{prefix}"')  # type: ignore[misc]
def step_then_description_prefix(context, exact, prefix):
    """Assert the described quote selector needed only a prefix."""
    expected = TextQuoteSelector(exact=exact, prefix=prefix)
    assert context.description == expected, (
        f"Expected {expected!r} but got {context.description!r}"
    )


@then('the description is a quote of "{exact}" with suffix "{suffix}"')  # type: ignore[misc]
def step_then_description_suffix(context, exact, suffix):
    """Assert the described quote selector needed only a suffix."""
    expected = TextQuoteSelector(exact=exact, suffix=suffix)
    assert context.description == expected, (
        f"Expected {expected!r} but got {context.description!r}"
    )


@then("the description resolves to exactly that text")  # type: ignore[misc]
def step_then_description_resolves(context):
    """Assert the described selector matches the target and nothing else."""
    result = asyncio.run(context.description.locate(context.document.whole()))
    assert result.found, f"Expected found but got {result.status}"
    actual = (result.match.start, result.match.end)
    expected = (context.target.start, context.target.end)
    assert actual == expected, f"Expected match at {expected} but got {actual}"
