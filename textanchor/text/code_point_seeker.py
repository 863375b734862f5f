"""
Code-point cursor over chunked text.

Wraps a code-unit TextSeeker and counts its position in Unicode code points.
A position never splits a surrogate pair, even when the pair itself is split
over two chunks.
"""

from __future__ import annotations

from typing import Generic

from textanchor.text.chunker import TChunk
from textanchor.text.codeunits import (
    code_points,
    code_units,
    ends_within_character,
    starts_within_character,
)
from textanchor.text.seeker import TextSeeker


class CodePointSeeker(Generic[TChunk]):
    """Seeker whose position and reads are measured in code points."""

    def __init__(self, raw: TextSeeker[TChunk]) -> None:
        self.raw = raw
        self.position = 0

    @property
    def current_chunk(self) -> TChunk | None:
        return self.raw.current_chunk

    @property
    def offset_in_chunk(self) -> int:
        return self.raw.offset_in_chunk

    def seek_by(self, length: int) -> None:
        self.seek_to(self.position + length)

    def seek_to(self, target: int) -> None:
        self._read_or_seek_to(False, target)

    def read(self, length: int, round_up: bool = False) -> list[str]:
        return self.read_to(self.position + length, round_up)

    def read_to(self, target: int, round_up: bool = False) -> list[str]:
        """Move to `target` (in code points), returning the characters passed over.

        Raises:
            SeekError: If the target lies outside the scope
        """
        return self._read_or_seek_to(True, target, round_up)

    def seek_to_chunk(self, target: TChunk, offset: int = 0) -> None:
        self._read_or_seek_to_chunk(False, target, offset)

    def read_to_chunk(self, target: TChunk, offset: int = 0) -> list[str]:
        return self._read_or_seek_to_chunk(True, target, offset)

    def _read_or_seek_to_chunk(
        self, read: bool, target: TChunk, offset: int = 0
    ) -> list[str]:
        old_raw_position = self.raw.position

        units = self.raw.read_to_chunk(target, offset)

        moved_forward = self.raw.position >= old_raw_position

        # Never stop halfway a surrogate pair
        if moved_forward and ends_within_character(units):
            self.raw.seek_by(-1)
            units = units[:-1]
        elif not moved_forward and starts_within_character(units):
            self.raw.seek_by(1)
            units = units[1:]

        characters = code_points(units)
        if moved_forward:
            self.position += len(characters)
        else:
            self.position -= len(characters)

        return characters if read else []

    def _read_or_seek_to(
        self, read: bool, target: int, round_up: bool = False
    ) -> list[str]:
        result: list[str] = []

        if self.position < target:
            unpaired_surrogate = ""
            characters: list[str] = []
            while self.position < target:
                units = unpaired_surrogate + self.raw.read(1, round_up=True)
                if ends_within_character(units):
                    # Consider this half-character part of the next read
                    unpaired_surrogate = units[-1]
                    units = units[:-1]
                else:
                    unpaired_surrogate = ""
                characters = code_points(units)
                self.position += len(characters)
                if read:
                    result.extend(characters)
            if unpaired_surrogate:
                # Align with the last complete character
                self.raw.seek_by(-1)
            if not round_up and self.position > target:
                overshoot = self.position - target
                overshoot_units = len(code_units("".join(characters[-overshoot:])))
                self.position -= overshoot
                self.raw.seek_by(-overshoot_units)
                if read:
                    del result[-overshoot:]

        else:  # Nearly equal to the if-block, but moving backward in the text
            unpaired_surrogate = ""
            characters = []
            while self.position > target:
                units = self.raw.read(-1, round_up=True) + unpaired_surrogate
                if starts_within_character(units):
                    unpaired_surrogate = units[0]
                    units = units[1:]
                else:
                    unpaired_surrogate = ""
                characters = code_points(units)
                self.position -= len(characters)
                if read:
                    result[:0] = characters
            if unpaired_surrogate:
                self.raw.seek_by(1)
            if not round_up and self.position < target:
                overshoot = target - self.position
                overshoot_units = len(code_units("".join(characters[:overshoot])))
                self.position += overshoot
                self.raw.seek_by(overshoot_units)
                if read:
                    del result[:overshoot]

        return result if read else []
