from enum import StrEnum, auto
import re
from typing import Any, Final, NamedTuple, assert_never
from pgn2pdf.piece import Piece, ReplayError


class Square(NamedTuple):
    file: str
    rank: str

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


class PartialSquare(NamedTuple):
    file: str | None
    rank: str | None

    def __str__(self) -> str:
        return f"{self.file or ''}{self.rank or ''}"


class BasicMove(NamedTuple):
    piece: Piece
    origin: PartialSquare
    is_capture: bool
    destination: Square
    promoted_to: Piece | None = None


class CastleKingside:
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, CastleKingside)

    def __repr__(self) -> str:
        return "CastleKingside()"


class CastleQueenside:
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, CastleQueenside)

    def __repr__(self) -> str:
        return "CastleQueenside()"


NotationMove = BasicMove | CastleKingside | CastleQueenside


class UnsupportedMoveError(ReplayError):
    move_text: str

    def __init__(self, move_text: str) -> None:
        super().__init__(f"Unsupported move {move_text!r}")
        self.move_text = move_text


class Language(StrEnum):
    ENGLISH = auto()
    FRENCH = auto()


_PIECE_LETTERS: Final = {
    Language.ENGLISH: {
        Piece.PAWN: "",
        Piece.KNIGHT: "N",
        Piece.BISHOP: "B",
        Piece.ROOK: "R",
        Piece.QUEEN: "Q",
        Piece.KING: "K",
    },
    Language.FRENCH: {
        Piece.PAWN: "",
        Piece.KNIGHT: "C",
        Piece.BISHOP: "F",
        Piece.ROOK: "T",
        Piece.QUEEN: "D",
        Piece.KING: "R",
    },
}

_SAN_PIECES: Final = {
    letter: piece
    for piece, letter in _PIECE_LETTERS[Language.ENGLISH].items()
    if letter
}

_SAN_PATTERN: Final = re.compile(
    r"^(?:(O-O-O|0-0-0)|(O-O|0-0)|([KQRBN])?([a-h])?([1-8])?(x)?([a-h][1-8])(?:=?([QRBN]))?)[+#]?[!?]{0,2}$"
)


def parse_san(san: str) -> NotationMove:
    m = _SAN_PATTERN.match(san.strip())
    match m:
        case None:
            raise UnsupportedMoveError(san)
        case re.Match():
            match m.groups():
                case (str(), None, None, None, None, None, None, None):
                    return CastleQueenside()
                case (None, str(), None, None, None, None, None, None):
                    return CastleKingside()
                case (
                    None,
                    None,
                    (str() | None) as piece,
                    (str() | None) as file,
                    (str() | None) as rank,
                    (str() | None) as capture,
                    str() as destination,
                    (str() | None) as promotion,
                ):
                    return BasicMove(
                        Piece.PAWN if piece is None else _SAN_PIECES[piece],
                        PartialSquare(file, rank),
                        capture is not None,
                        Square(destination[0], destination[1]),
                        None if promotion is None else _SAN_PIECES[promotion],
                    )
                case _:
                    raise Exception("Unexpected regex match groups")
        case _:
            assert_never(m)


def format_move(move: NotationMove, language: Language = Language.ENGLISH) -> str:
    match move:
        case CastleKingside():
            return "O-O"
        case CastleQueenside():
            return "O-O-O"
        case BasicMove(piece, origin, is_capture, destination, promoted_to):
            letters = _PIECE_LETTERS[language]
            capture = "x" if is_capture else ""
            promotion = "" if promoted_to is None else f"={letters[promoted_to]}"
            return f"{letters[piece]}{origin}{capture}{destination}{promotion}"
        case _:
            assert_never(move)
