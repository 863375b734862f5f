"""
Code-unit cursor over chunked text.

A TextSeeker walks a Chunker and keeps track of its position, counted in
UTF-16 code units from the start of the scope. Only the current chunk is
held, so seeking never materialises the scope's full text.

Positions are kept normalised: a position at the boundary between two chunks
is expressed as offset 0 of the following non-empty chunk, except at the very
end of the scope, where it is the end of the last non-empty chunk.
"""

from __future__ import annotations

from typing import Generic

from textanchor.errors import SeekError
from textanchor.text.chunker import Chunker, TChunk

E_END = "Iterator exhausted before seek ended."


class TextSeeker(Generic[TChunk]):
    """Cursor over the text of a Chunker, positioned in code units.

    The seeker takes ownership of the chunker: nothing else may move it
    while the seeker is in use.
    """

    def __init__(self, chunker: Chunker[TChunk]) -> None:
        self._chunker = chunker
        # Position of the first code unit of the current chunk in the scope
        self._chunk_position = 0
        # Position inside the current chunk
        self._offset_in_chunk = 0
        # Walk to the start of the first non-empty chunk
        self.seek_to(0)

    @property
    def position(self) -> int:
        """Current position, in code units from the start of the scope"""
        return self._chunk_position + self._offset_in_chunk

    @property
    def current_chunk(self) -> TChunk | None:
        """The chunk containing the current position"""
        return self._chunker.current_chunk

    @property
    def offset_in_chunk(self) -> int:
        """The current position relative to the start of current_chunk"""
        return self._offset_in_chunk

    def read(self, length: int, round_up: bool = False) -> str:
        """Read `length` code units (backwards if negative) and return them."""
        return self.read_to(self.position + length, round_up)

    def read_to(self, target: int, round_up: bool = False) -> str:
        """Move to `target`, returning the code units passed over.

        With round_up, the seek continues to the end of the chunk containing
        the target (or, moving backwards, to its start).

        Raises:
            SeekError: If the target lies outside the scope
        """
        return self._read_or_seek_to(True, target, round_up)

    def seek_by(self, length: int) -> None:
        self.seek_to(self.position + length)

    def seek_to(self, target: int) -> None:
        """Move to `target` without reading.

        Raises:
            SeekError: If the target lies outside the scope
        """
        self._read_or_seek_to(False, target)

    def seek_to_chunk(self, target: TChunk, offset: int = 0) -> None:
        """Move to `offset` code units from the start of the given chunk.

        The offset may fall outside the chunk; the seek then continues into
        neighbouring chunks like seek_to does.
        """
        self._seek_to_chunk_start(target)
        self.seek_to(self._chunk_position + offset)

    def read_to_chunk(self, target: TChunk, offset: int = 0) -> str:
        """Like seek_to_chunk, but return the code units passed over."""
        origin = self.position
        self.seek_to_chunk(target, offset)
        destination = self.position
        self.seek_to(origin)
        return self.read_to(destination)

    def _read_or_seek_to(self, read: bool, target: int, round_up: bool = False) -> str:
        if self._chunker.current_chunk is None:
            # A scope without chunks only has position 0
            if target != 0:
                raise SeekError(E_END)
            return ""

        if target >= self.position:
            return self._forward(read, target, round_up)
        return self._backward(read, target, round_up)

    def _forward(self, read: bool, target: int, round_up: bool) -> str:
        result: list[str] = []
        while True:
            data = self._chunker.current_chunk.data
            chunk_end = self._chunk_position + len(data)

            if not round_up and target < chunk_end:
                # The target lies inside the current chunk. (At its very end we
                # prefer to move on to the next chunk instead.)
                new_offset = target - self._chunk_position
                if read:
                    result.append(data[self._offset_in_chunk : new_offset])
                self._offset_in_chunk = new_offset
                break

            # Move to the start of the next chunk, consuming the current one
            if read:
                result.append(data[self._offset_in_chunk :])
            if not self._advance():
                # No next chunk: finish at the end of the last chunk
                self._offset_in_chunk = len(data)
                if chunk_end >= target:
                    break
                raise SeekError(E_END)
            self._chunk_position = chunk_end
            self._offset_in_chunk = 0
            if self._chunk_position >= target:
                break

        return "".join(result)

    def _backward(self, read: bool, target: int, round_up: bool) -> str:
        result: list[str] = []
        while True:
            data = self._chunker.current_chunk.data

            if self._chunk_position <= target:
                # The target lies inside the current chunk
                new_offset = 0 if round_up else target - self._chunk_position
                if read:
                    result.append(data[new_offset : self._offset_in_chunk])
                self._offset_in_chunk = new_offset
                break

            # Move to the end of the previous chunk, consuming the current one
            if read:
                result.append(data[: self._offset_in_chunk])
            previous = self._chunker.read_prev()
            if previous is None:
                self._offset_in_chunk = 0
                raise SeekError(E_END)
            self._chunk_position -= len(previous.data)
            self._offset_in_chunk = len(previous.data)

        return "".join(reversed(result))

    def _advance(self) -> bool:
        """Move the chunker to the next non-empty chunk.

        If there is none, the chunker is put back where it was and False is
        returned.
        """
        steps = 0
        while True:
            chunk = self._chunker.read_next()
            if chunk is None:
                for _ in range(steps):
                    self._chunker.read_prev()
                return False
            steps += 1
            if chunk.data:
                return True

    def _seek_to_chunk_start(self, target: TChunk) -> None:
        current = self._chunker.current_chunk
        if current is None:
            raise SeekError(E_END)

        backward = current != target and self._chunker.precedes_current_chunk(target)
        while self._chunker.current_chunk != target:
            if backward:
                previous = self._chunker.read_prev()
                if previous is None:
                    self._offset_in_chunk = 0
                    raise SeekError(E_END)
                self._chunk_position -= len(previous.data)
            else:
                length = len(self._chunker.current_chunk.data)
                if self._chunker.read_next() is None:
                    self._offset_in_chunk = length
                    raise SeekError(E_END)
                self._chunk_position += length
        self._offset_in_chunk = 0
