"""
Text quote matching and disambiguation over chunked text.

The matcher essentially performs a repeated ``str.find(prefix + exact + suffix)``
on the scope's text, but reads that text lazily, one chunk at a time, keeping
only as much of it as a match in progress could still need.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Any

from textanchor.errors import DisambiguationError, SeekError
from textanchor.logging_config import logger
from textanchor.selectors import TextQuoteSelector
from textanchor.streams import MatchStream, match_stream
from textanchor.text.chunker import Chunker, ChunkRange, TChunk, chunk_range_equals
from textanchor.text.codeunits import (
    code_units,
    ends_within_character,
    from_code_units,
    starts_within_character,
)
from textanchor.text.seeker import TextSeeker


@dataclass
class _Piece:
    """A stretch of buffered text that was read from a single chunk."""

    position: int
    chunk: Any
    offset_in_chunk: int
    length: int


def text_quote_selector_matcher(
    selector: TextQuoteSelector,
) -> Callable[[Chunker[TChunk]], MatchStream[ChunkRange[TChunk]]]:
    """
    Create a matcher that finds every occurrence of a quote in a scope.

    Matches cover `exact` only, never the prefix or suffix around it, and are
    produced from left to right. Occurrences may overlap: the search resumes
    one code unit after the start of the previous match.

    An empty `exact` matches at every position whose surroundings fit the
    prefix and suffix, so on a scope that never ends the stream never ends
    either.

    Args:
        selector: The TextQuoteSelector to search for

    Returns:
        Function taking a Chunker, returning a MatchStream of ChunkRanges
    """
    exact = code_units(selector.exact)
    prefix = code_units(selector.prefix)
    pattern = prefix + code_units(selector.exact) + code_units(selector.suffix)

    @match_stream
    async def match_all(chunker: Chunker[TChunk]) -> AsyncIterator[ChunkRange[TChunk]]:
        if chunker.current_chunk is None:
            return

        seeker = TextSeeker(chunker)

        # The text read so far, minus what can no longer be part of a match
        buffer = ""
        buffer_start = 0
        pieces: list[_Piece] = []
        # Where the next occurrence of the pattern may start
        search_from = 0

        def locate(position: int) -> tuple[TChunk, int]:
            """Find the chunk and index of a position inside the buffer."""
            for piece in pieces:
                if piece.position <= position < piece.position + piece.length:
                    return piece.chunk, piece.offset_in_chunk + position - piece.position
            # The end of the buffer is exactly where the seeker now stands
            return seeker.current_chunk, seeker.offset_in_chunk

        while True:
            index = buffer.find(pattern, max(search_from - buffer_start, 0))
            if index != -1:
                match_start = buffer_start + index + len(prefix)
                match_end = match_start + len(exact)
                start_chunk, start_index = locate(match_start)
                end_chunk, end_index = locate(match_end)
                yield ChunkRange(start_chunk, start_index, end_chunk, end_index)
                search_from = buffer_start + index + 1
                continue

            # Any further match must run past the end of the buffer. Keep just
            # the tail that such a match could start in.
            buffer_end = buffer_start + len(buffer)
            keep_from = min(
                max(search_from, buffer_end - len(pattern) + 1), buffer_end
            )
            buffer = buffer[keep_from - buffer_start :]
            buffer_start = keep_from
            pieces = [p for p in pieces if p.position + p.length > keep_from]

            # Read the rest of the current chunk
            chunk = seeker.current_chunk
            offset_in_chunk = seeker.offset_in_chunk
            try:
                text = seeker.read(1, round_up=True)
            except SeekError:
                return
            pieces.append(_Piece(buffer_end, chunk, offset_in_chunk, len(text)))
            buffer += text

            # Let other streams make progress while this one fetched a chunk
            await asyncio.sleep(0)

    return match_all


async def describe_text_quote(
    target: ChunkRange[TChunk],
    scope: Callable[[], Chunker[TChunk]],
) -> TextQuoteSelector:
    """
    Create a TextQuoteSelector that selects the target, and only the target.

    Starting with an empty prefix and suffix, the scope is searched for
    matches. At each unintended match, the prefix or suffix is extended just
    enough to rule it out, choosing whichever extension is shorter.

    Args:
        target: The span to describe
        scope: Function returning a fresh Chunker over the scope on each call

    Returns:
        A selector that matches the target and nothing else in the scope

    Raises:
        DisambiguationError: If no context can separate the target from
            another match
    """
    seeker = TextSeeker(scope())

    # Read the target's exact text, and note where it sits
    seeker.seek_to_chunk(target.start_chunk, target.start_index)
    start = seeker.position
    start_chunk, start_index = seeker.current_chunk, seeker.offset_in_chunk
    exact = seeker.read_to_chunk(target.end_chunk, target.end_index)
    end = seeker.position
    # The target as the matcher would report it
    intended = ChunkRange(
        start_chunk, start_index, seeker.current_chunk, seeker.offset_in_chunk
    )

    prefix = ""
    suffix = ""

    with logger.indent_block(f"Describing quote at [{start}, {end})"):
        while True:
            tentative = TextQuoteSelector(
                exact=from_code_units(exact),
                prefix=from_code_units(prefix),
                suffix=from_code_units(suffix),
            )

            unintended = None
            async with text_quote_selector_matcher(tentative)(scope()) as matches:
                async for match in matches:
                    if not chunk_range_equals(match, intended):
                        unintended = match
                        break

            # No unintended matches left: the selector is unambiguous
            if unintended is None:
                logger.debug(
                    f"Unambiguous with prefix {tentative.prefix!r}, "
                    f"suffix {tentative.suffix!r}"
                )
                return tentative

            # Read backwards (for the prefix) and forwards (for the suffix) near
            # both the target and the unintended match, until they differ
            target_seeker = TextSeeker(scope())
            other_seeker = TextSeeker(scope())

            target_seeker.seek_to(start - len(prefix))
            other_seeker.seek_to_chunk(unintended.start_chunk, unintended.start_index)
            other_seeker.seek_by(-len(prefix))
            extra_prefix = _read_until_different(target_seeker, other_seeker, True)

            target_seeker.seek_to(end + len(suffix))
            other_seeker.seek_to_chunk(unintended.end_chunk, unintended.end_index)
            other_seeker.seek_by(len(suffix))
            extra_suffix = _read_until_different(target_seeker, other_seeker, False)

            if extra_prefix is not None and (
                extra_suffix is None or len(extra_prefix) <= len(extra_suffix)
            ):
                prefix = extra_prefix + prefix
                logger.debug(f"Extended prefix to {from_code_units(prefix)!r}")
            elif extra_suffix is not None:
                suffix = suffix + extra_suffix
                logger.debug(f"Extended suffix to {from_code_units(suffix)!r}")
            else:
                raise DisambiguationError(
                    f"Quote {tentative.exact!r} at [{start}, {end}) cannot be "
                    "told apart from another match"
                )


def _read_until_different(
    seeker: TextSeeker, other: TextSeeker, reverse: bool
) -> str | None:
    """
    Read from `seeker` until it yields a code unit that `other` does not.

    Returns the code units read, widened so as not to split a surrogate pair,
    or None if `seeker` reaches the edge of the scope first.
    """
    step = -1 if reverse else 1
    result = ""
    while True:
        try:
            unit = seeker.read(step)
        except SeekError:
            return None
        result = unit + result if reverse else result + unit

        try:
            comparison = other.read(step)
        except SeekError:
            # The other side ran out of text, which is a difference too
            comparison = None

        if unit != comparison:
            break

    try:
        if reverse and starts_within_character(result):
            result = seeker.read(-1) + result
        elif not reverse and ends_within_character(result):
            result = result + seeker.read(1)
    except SeekError:
        # The pair is cut off by the edge of the scope; keep the lone half
        logger.debug("Context ends in an unpaired surrogate")
    return result
