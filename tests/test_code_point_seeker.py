"""Tests for CodePointSeeker, with a surrogate pair at every possible chunk split."""

import pytest

from textanchor.errors import SeekError
from textanchor.text.code_point_seeker import CodePointSeeker
from textanchor.text.seeker import TextSeeker

SMILE = "\U0001F600"

# "a😀b" in code units, cut into chunks in various ways
SPLITS = [
    ["a\ud83d\ude00b"],
    ["a", "\ud83d\ude00", "b"],
    ["a\ud83d", "\ude00b"],
    ["a", "\ud83d", "", "\ude00", "b"],
]


def make_seeker(chunker) -> CodePointSeeker:
    return CodePointSeeker(TextSeeker(chunker))


@pytest.mark.parametrize("texts", SPLITS)
class TestCodePointSeeker:
    """Tests for positions counted in code points."""

    def test_seek_past_pair(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        seeker.seek_to(2)
        assert seeker.position == 2
        assert seeker.raw.position == 3

    def test_seek_before_pair(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        seeker.seek_to(1)
        assert seeker.position == 1
        assert seeker.raw.position == 1

    def test_read_all(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        assert seeker.read_to(3) == ["a", SMILE, "b"]
        assert seeker.raw.position == 4

    def test_read_pair(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        seeker.seek_to(1)
        assert seeker.read(1) == [SMILE]

    def test_seek_backward(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        seeker.seek_to(3)
        seeker.seek_to(1)
        assert seeker.position == 1
        assert seeker.raw.position == 1

    def test_read_backward(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        seeker.seek_to(3)
        assert seeker.read(-2) == [SMILE, "b"]
        assert seeker.raw.position == 1

    def test_seek_past_end_fails(self, make_chunker, texts) -> None:
        seeker = make_seeker(make_chunker(texts))
        with pytest.raises(SeekError):
            seeker.seek_to(4)


class TestSeekToChunk:
    """Tests for chunk-addressed seeking in code points."""

    def test_seek_to_chunk_after_pair(self, make_chunker) -> None:
        chunker = make_chunker(["a\ud83d\ude00", "b"])
        seeker = make_seeker(chunker)
        seeker.seek_to_chunk(chunker.chunks[1], 1)
        assert seeker.position == 3

    def test_chunk_boundary_inside_pair_rounds_down(self, make_chunker) -> None:
        chunker = make_chunker(["a\ud83d", "\ude00b"])
        seeker = make_seeker(chunker)
        seeker.seek_to_chunk(chunker.chunks[1])
        assert seeker.position == 1
        assert seeker.raw.position == 1

    def test_backward_boundary_inside_pair_rounds_up(self, make_chunker) -> None:
        chunker = make_chunker(["a\ud83d", "\ude00b"])
        seeker = make_seeker(chunker)
        seeker.seek_to(3)
        seeker.seek_to_chunk(chunker.chunks[1])
        assert seeker.position == 2
        assert seeker.raw.position == 3

    def test_read_to_chunk(self, make_chunker) -> None:
        chunker = make_chunker(["a\ud83d\ude00", "b"])
        seeker = make_seeker(chunker)
        assert seeker.read_to_chunk(chunker.chunks[1]) == ["a", SMILE]
