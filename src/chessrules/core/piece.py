"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType

_LETTERS = "pnbrqk"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable ``{color, piece_type}`` pair."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Board-row letter, uppercase for white."""
        letter = _LETTERS[self.piece_type - 1]
        return letter.upper() if self.color == Color.WHITE else letter

    @property
    def name(self) -> str:
        """Readable form used in messages, e.g. ``white knight``."""
        return f"{self.color} {self.piece_type.name.lower()}"

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a board-row letter, e.g. 'N' is a white knight."""
        index = _LETTERS.find(char.lower()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index + 1))
