from __future__ import annotations
from collections.abc import Iterator
import logging
from typing import TYPE_CHECKING, Final, NamedTuple, assert_never
from pgn2pdf.notation import (
    BasicMove,
    CastleKingside,
    CastleQueenside,
    NotationMove,
    format_move,
)
from pgn2pdf.piece import Color, Piece, ReplayError
from pgn2pdf.square import (
    Coord,
    PartialOrigin,
    coord,
    on_board,
    partial_coord,
    square_name,
)

if TYPE_CHECKING:
    from pgn2pdf.game import ChessGame


Direction = tuple[int, int]

KNIGHT_OFFSETS: Final[tuple[Direction, ...]] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: Final[tuple[Direction, ...]] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRECTIONS: Final[tuple[Direction, ...]] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRECTIONS: Final[tuple[Direction, ...]] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRECTIONS: Final[tuple[Direction, ...]] = BISHOP_DIRECTIONS + ROOK_DIRECTIONS

_SLIDERS: Final = (
    (Piece.BISHOP, BISHOP_DIRECTIONS),
    (Piece.ROOK, ROOK_DIRECTIONS),
    (Piece.QUEEN, QUEEN_DIRECTIONS),
)

_NO_HINT: Final = PartialOrigin(None, None)


class ResolvedBasic(NamedTuple):
    origin: Coord
    destination: Coord
    piece: Piece
    is_capture: bool
    promoted_to: Piece | None = None


ResolvedMove = ResolvedBasic | CastleKingside | CastleQueenside


class UnresolvedMoveError(ReplayError):
    def __init__(self, move: BasicMove, color: Color) -> None:
        super().__init__(f"No {color} {move.piece} can play {format_move(move)}")


def resolve(game: ChessGame, move: NotationMove) -> ResolvedMove:
    match move:
        case CastleKingside() | CastleQueenside():
            return move
        case BasicMove(piece, origin, is_capture, destination, promoted_to):
            target = coord(destination.file, destination.rank)
            hint = partial_coord(origin.file, origin.rank)
            found = find_origin(game, target, piece, game.turn, hint, is_capture)
            if found is None:
                raise UnresolvedMoveError(move, game.turn)
            logging.debug(
                f"Resolved {format_move(move)} to {square_name(found)}{square_name(target)}"
            )
            return ResolvedBasic(found, target, piece, is_capture, promoted_to)
        case _:
            assert_never(move)


def find_origin(
    game: ChessGame,
    target: Coord,
    piece: Piece,
    color: Color,
    hint: PartialOrigin = _NO_HINT,
    is_capture: bool = False,
) -> Coord | None:
    """
    Finds the square a piece of the given type and color came from to reach
    target. Pinned pieces are dropped when several candidates remain, and
    scan order decides between the rest.
    """
    if hint.x is not None and hint.y is not None:
        return Coord(hint.x, hint.y)

    match piece:
        case Piece.PAWN:
            return _pawn_origin(game, target, color, hint, is_capture)
        case Piece.KNIGHT:
            return _leaping_origin(game, target, piece, color, KNIGHT_OFFSETS, hint)
        case Piece.KING:
            return _leaping_origin(game, target, piece, color, KING_OFFSETS, None)
        case Piece.BISHOP:
            return _sliding_origin(game, target, piece, color, BISHOP_DIRECTIONS, hint)
        case Piece.ROOK:
            return _sliding_origin(game, target, piece, color, ROOK_DIRECTIONS, hint)
        case Piece.QUEEN:
            return _sliding_origin(game, target, piece, color, QUEEN_DIRECTIONS, hint)


def is_pinned(game: ChessGame, square: Coord, color: Color) -> bool:
    """
    Whether vacating square would expose the king of color to an opposing
    bishop, rook or queen. Knight and pawn attacks are not considered.
    """
    king = game.king(color)
    with game.lifted(square):
        return any(
            any(_slides(game, king, slider, color.opponent(), directions, _NO_HINT))
            for slider, directions in _SLIDERS
        )


def _ray(start: Coord, direction: Direction) -> Iterator[Coord]:
    dx, dy = direction
    x, y = start.x + dx, start.y + dy
    while on_board(x, y):
        yield Coord(x, y)
        x, y = x + dx, y + dy


def _unpinned(game: ChessGame, candidates: list[Coord], color: Color) -> Coord | None:
    """
    A lone candidate is trusted as is. The pin filter only decides between
    several, keeping scan order.
    """
    if len(candidates) <= 1:
        return next(iter(candidates), None)
    return next(
        (square for square in candidates if not is_pinned(game, square, color)),
        None,
    )


def _slides(
    game: ChessGame,
    target: Coord,
    piece: Piece,
    color: Color,
    directions: tuple[Direction, ...],
    hint: PartialOrigin,
) -> Iterator[Coord]:
    for direction in directions:
        for square in _ray(target, direction):
            occupant = game.at(square)
            if occupant is None:
                continue
            if occupant == (color, piece) and hint.matches(square):
                yield square
            # Blocked
            break


def _sliding_origin(
    game: ChessGame,
    target: Coord,
    piece: Piece,
    color: Color,
    directions: tuple[Direction, ...],
    hint: PartialOrigin,
) -> Coord | None:
    candidates = list(_slides(game, target, piece, color, directions, hint))
    return _unpinned(game, candidates, color)


def _leaping_origin(
    game: ChessGame,
    target: Coord,
    piece: Piece,
    color: Color,
    offsets: tuple[Direction, ...],
    hint: PartialOrigin | None,
) -> Coord | None:
    candidates: list[Coord] = []
    for dx, dy in offsets:
        x, y = target.x + dx, target.y + dy
        if not on_board(x, y):
            continue
        square = Coord(x, y)
        if game.at(square) != (color, piece):
            continue
        # The king takes no hint and cannot be pinned
        if hint is None:
            return square
        if hint.matches(square):
            candidates.append(square)
    return _unpinned(game, candidates, color)


def _pawn_origin(
    game: ChessGame,
    target: Coord,
    color: Color,
    hint: PartialOrigin,
    is_capture: bool,
) -> Coord | None:
    behind = target.y - color.forward()
    if not on_board(target.x, behind):
        return None
    pawn = (color, Piece.PAWN)

    if is_capture:
        if hint.x is not None:
            return Coord(hint.x, behind)
        for x in (target.x - 1, target.x + 1):
            if on_board(x, behind) and game.at(Coord(x, behind)) == pawn:
                return Coord(x, behind)
        return None

    single = Coord(target.x, behind)
    if game.at(single) == pawn:
        return single
    double = Coord(target.x, behind - color.forward())
    if (
        game.at(single) is None
        and on_board(double.x, double.y)
        and game.at(double) == pawn
    ):
        return double
    return None
