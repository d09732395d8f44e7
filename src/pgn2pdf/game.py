from __future__ import annotations
from collections.abc import Iterator
from contextlib import contextmanager
import logging
from typing import Final, assert_never
from pgn2pdf import diagram
from pgn2pdf.notation import CastleKingside, CastleQueenside, NotationMove
from pgn2pdf.piece import Color, Occupant, Piece, ReplayError
from pgn2pdf.search import ResolvedBasic, ResolvedMove, resolve
from pgn2pdf.square import Coord, square_name


class InvalidPositionError(ReplayError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid position: {reason}")


_BACK_RANK: Final = (
    Piece.ROOK,
    Piece.KNIGHT,
    Piece.BISHOP,
    Piece.QUEEN,
    Piece.KING,
    Piece.BISHOP,
    Piece.KNIGHT,
    Piece.ROOK,
)

_FEN_PIECES: Final = {
    "p": Piece.PAWN,
    "n": Piece.KNIGHT,
    "b": Piece.BISHOP,
    "r": Piece.ROOK,
    "q": Piece.QUEEN,
    "k": Piece.KING,
}

_KING_FILE: Final = 4


class ChessGame:
    """
    Board occupants, the cached king squares and the side to move. Rows run
    from rank 8 (row 0) down to rank 1 (row 7).
    """

    turn: Color
    _board: list[list[Occupant]]
    _kings: dict[Color, Coord]

    def __init__(self, turn: Color = Color.WHITE) -> None:
        self.turn = turn
        self._board = [[None] * 8 for _ in range(8)]
        self._kings = {}

    @staticmethod
    def initial() -> ChessGame:
        game = ChessGame()
        for x, piece in enumerate(_BACK_RANK):
            game.put(Coord(x, 0), (Color.BLACK, piece))
            game.put(Coord(x, 1), (Color.BLACK, Piece.PAWN))
            game.put(Coord(x, 6), (Color.WHITE, Piece.PAWN))
            game.put(Coord(x, 7), (Color.WHITE, piece))
        return game

    @staticmethod
    def from_fen(fen: str) -> ChessGame:
        """Builds a game from the placement and side to move fields of a FEN."""
        fields = fen.split()
        if not fields:
            raise InvalidPositionError("empty FEN")
        match fields[1:2]:
            case [] | ["w"]:
                game = ChessGame(Color.WHITE)
            case ["b"]:
                game = ChessGame(Color.BLACK)
            case [other]:
                raise InvalidPositionError(f"side to move {other!r}")

        rows = fields[0].split("/")
        if len(rows) != 8:
            raise InvalidPositionError(f"{len(rows)} ranks in {fields[0]!r}")
        for y, row in enumerate(rows):
            x = 0
            for char in row:
                if char.isdigit():
                    x += int(char)
                    continue
                piece = _FEN_PIECES.get(char.lower())
                if piece is None or x >= 8:
                    raise InvalidPositionError(f"rank {row!r}")
                color = Color.WHITE if char.isupper() else Color.BLACK
                game.put(Coord(x, y), (color, piece))
                x += 1
            if x != 8:
                raise InvalidPositionError(f"rank {row!r}")
        return game

    def at(self, square: Coord) -> Occupant:
        return self._board[square.y][square.x]

    def put(self, square: Coord, occupant: Occupant) -> None:
        previous = self._board[square.y][square.x]
        self._board[square.y][square.x] = occupant
        match previous:
            case (color, Piece.KING) if self._kings.get(color) == square:
                del self._kings[color]
        match occupant:
            case (color, Piece.KING):
                self._kings[color] = square

    def king(self, color: Color) -> Coord:
        try:
            return self._kings[color]
        except KeyError:
            raise InvalidPositionError(f"no {color} king on the board") from None

    @contextmanager
    def lifted(self, square: Coord) -> Iterator[Occupant]:
        """Empties square for the duration of the block, then restores it."""
        occupant = self._board[square.y][square.x]
        self._board[square.y][square.x] = None
        try:
            yield occupant
        finally:
            self._board[square.y][square.x] = occupant

    def play(self, move: NotationMove) -> None:
        self.apply(resolve(self, move))

    def apply(self, move: ResolvedMove) -> None:
        color = self.turn
        match move:
            case ResolvedBasic(origin, destination, piece, is_capture, promoted_to):
                en_passant = (
                    piece == Piece.PAWN and is_capture and self.at(destination) is None
                )
                self.put(destination, (color, piece if promoted_to is None else promoted_to))
                self.put(origin, None)
                if en_passant:
                    captured = Coord(destination.x, destination.y - color.forward())
                    logging.debug(f"En passant capture on {square_name(captured)}")
                    self.put(captured, None)
            case CastleKingside():
                self._castle(color, king_to=6, rook_from=7, rook_to=5)
            case CastleQueenside():
                self._castle(color, king_to=2, rook_from=0, rook_to=3)
            case _:
                assert_never(move)
        self.turn = color.opponent()

    def _castle(self, color: Color, king_to: int, rook_from: int, rook_to: int) -> None:
        row = color.back_rank()
        self.put(Coord(king_to, row), (color, Piece.KING))
        self.put(Coord(rook_to, row), (color, Piece.ROOK))
        self.put(Coord(_KING_FILE, row), None)
        self.put(Coord(rook_from, row), None)

    def show(self) -> str:
        return diagram.render(self)
