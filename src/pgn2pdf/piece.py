from __future__ import annotations
from enum import StrEnum, auto


class ReplayError(Exception):
    pass


class Color(StrEnum):
    WHITE = auto()
    BLACK = auto()

    def opponent(self) -> Color:
        match self:
            case Color.WHITE:
                return Color.BLACK
            case Color.BLACK:
                return Color.WHITE

    def forward(self) -> int:
        """Row delta of a pawn step; row 0 is rank 8."""
        match self:
            case Color.WHITE:
                return -1
            case Color.BLACK:
                return 1

    def back_rank(self) -> int:
        match self:
            case Color.WHITE:
                return 7
            case Color.BLACK:
                return 0


class Piece(StrEnum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


Occupant = tuple[Color, Piece] | None
