"""
Board diagram as AsciiDoc text for the chess font of the PDF theme. Every
glyph is a decimal character reference and every row ends with a hard line
break.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Final
from pgn2pdf.piece import Color, Occupant, Piece
from pgn2pdf.square import Coord

if TYPE_CHECKING:
    from pgn2pdf.game import ChessGame


TOP_BORDER: Final = "&#58120;&#58152;&#58153;&#58154;&#58155;&#58156;&#58157;&#58158;&#58159;&#58121;"
BOTTOM_BORDER: Final = "&#58122;&#58136;&#58137;&#58138;&#58139;&#58140;&#58141;&#58142;&#58143;&#58123;"
BLACK_TO_MOVE: Final = "icon:circle[size=70%]"
WHITE_TO_MOVE: Final = "icon:circle-thin[size=70%]"
LINE_BREAK: Final = " +"

_LEFT_BORDER: Final = 0xE310
_RIGHT_BORDER: Final = _LEFT_BORDER + 0x10
_LIGHT_EMPTY: Final = 0xA0
_DARK_EMPTY: Final = 0xE100
_DARK_OFFSET: Final = 0xE154 - 0x2654

_LIGHT_GLYPHS: Final = {
    (Color.WHITE, Piece.KING): 0x2654,
    (Color.WHITE, Piece.QUEEN): 0x2655,
    (Color.WHITE, Piece.ROOK): 0x2656,
    (Color.WHITE, Piece.BISHOP): 0x2657,
    (Color.WHITE, Piece.KNIGHT): 0x2658,
    (Color.WHITE, Piece.PAWN): 0x2659,
    (Color.BLACK, Piece.KING): 0x265A,
    (Color.BLACK, Piece.QUEEN): 0x265B,
    (Color.BLACK, Piece.ROOK): 0x265C,
    (Color.BLACK, Piece.BISHOP): 0x265D,
    (Color.BLACK, Piece.KNIGHT): 0x265E,
    (Color.BLACK, Piece.PAWN): 0x265F,
}


def glyph(occupant: Occupant, light_square: bool) -> int:
    match occupant:
        case None:
            return _LIGHT_EMPTY if light_square else _DARK_EMPTY
        case _:
            code = _LIGHT_GLYPHS[occupant]
            return code if light_square else code + _DARK_OFFSET


def render(game: ChessGame) -> str:
    lines = [TOP_BORDER + LINE_BREAK]
    for y in range(8):
        codes = [_LEFT_BORDER + 7 - y]
        codes.extend(glyph(game.at(Coord(x, y)), (x + y) % 2 == 0) for x in range(8))
        codes.append(_RIGHT_BORDER + 7 - y)
        line = "".join(f"&#{code};" for code in codes)
        if y == 0 and game.turn == Color.BLACK:
            line += BLACK_TO_MOVE
        elif y == 7 and game.turn == Color.WHITE:
            line += WHITE_TO_MOVE
        lines.append(line + LINE_BREAK)
    lines.append(BOTTOM_BORDER + LINE_BREAK)
    return "\n".join(lines)
