from typing import NamedTuple
from pgn2pdf.piece import ReplayError


class InvalidSquareError(ReplayError):
    def __init__(self, file: str | None, rank: str | None) -> None:
        super().__init__(f"Invalid square {file or '-'}{rank or '-'}")


class Coord(NamedTuple):
    x: int
    y: int


class PartialOrigin(NamedTuple):
    x: int | None
    y: int | None

    def matches(self, candidate: Coord) -> bool:
        return (self.x is None or self.x == candidate.x) and (
            self.y is None or self.y == candidate.y
        )


_FILES = "abcdefgh"
_RANKS = "12345678"


def on_board(x: int, y: int) -> bool:
    return 0 <= x < 8 and 0 <= y < 8


def coord(file: str, rank: str) -> Coord:
    match partial_coord(file, rank):
        case PartialOrigin(int() as x, int() as y):
            return Coord(x, y)
        case _:
            raise InvalidSquareError(file, rank)


def partial_coord(file: str | None, rank: str | None) -> PartialOrigin:
    if file is not None and (len(file) != 1 or file not in _FILES):
        raise InvalidSquareError(file, rank)
    if rank is not None and (len(rank) != 1 or rank not in _RANKS):
        raise InvalidSquareError(file, rank)
    return PartialOrigin(
        None if file is None else ord(file) - ord("a"),
        None if rank is None else 8 - int(rank),
    )


def square_name(square: Coord) -> str:
    return f"{_FILES[square.x]}{8 - square.y}"
