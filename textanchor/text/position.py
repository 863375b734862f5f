"""Text position matching and description over chunked text."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

from textanchor.errors import SeekError
from textanchor.logging_config import logger
from textanchor.selectors import TextPositionSelector
from textanchor.streams import MatchStream, match_stream
from textanchor.text.chunker import Chunker, ChunkRange, TChunk
from textanchor.text.code_point_seeker import CodePointSeeker
from textanchor.text.seeker import TextSeeker


def text_position_selector_matcher(
    selector: TextPositionSelector,
) -> Callable[[Chunker[TChunk]], MatchStream[ChunkRange[TChunk]]]:
    """
    Create a matcher for the span between two code-point offsets.

    The stream holds exactly one match, or none if the scope is shorter
    than `end` (or has no chunks at all).
    """
    start, end = selector.start, selector.end

    @match_stream
    async def match_all(chunker: Chunker[TChunk]) -> AsyncIterator[ChunkRange[TChunk]]:
        if chunker.current_chunk is None:
            return

        code_unit_seeker = TextSeeker(chunker)
        code_point_seeker = CodePointSeeker(code_unit_seeker)

        try:
            code_point_seeker.seek_to(start)
            start_chunk = code_unit_seeker.current_chunk
            start_index = code_unit_seeker.offset_in_chunk
            code_point_seeker.seek_to(end)
        except SeekError:
            logger.debug(f"Scope is shorter than position [{start}, {end})")
            return

        yield ChunkRange(
            start_chunk,
            start_index,
            code_unit_seeker.current_chunk,
            code_unit_seeker.offset_in_chunk,
        )

    return match_all


def describe_text_position(
    target: ChunkRange[TChunk],
    scope: Chunker[TChunk],
) -> TextPositionSelector:
    """
    Create a TextPositionSelector for the target.

    Offsets count code points from the start of the scope. A boundary inside
    a surrogate pair is rounded down to the start of the pair.

    Raises:
        SeekError: If the target does not lie within the scope
    """
    code_unit_seeker = TextSeeker(scope)
    code_point_seeker = CodePointSeeker(code_unit_seeker)

    code_point_seeker.seek_to_chunk(target.start_chunk, target.start_index)
    start = code_point_seeker.position
    code_point_seeker.seek_to_chunk(target.end_chunk, target.end_index)
    end = code_point_seeker.position
    return TextPositionSelector(start=start, end=end)
