import logging
from typing import NamedTuple
import chess.pgn
from chess.pgn import ChildNode, Game, GameNode
from pgn2pdf.game import ChessGame
from pgn2pdf.notation import NotationMove, parse_san
from pgn2pdf.piece import Color


class ParseError(Exception):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")


class AnnotatedMove(NamedTuple):
    number: int
    color: Color
    move: NotationMove
    nags: frozenset[int]
    is_check: bool
    is_checkmate: bool
    comment: str


def read_games(path: str) -> list[Game]:
    games: list[Game] = []
    try:
        with open(path, encoding="utf-8-sig") as file:
            while (game := chess.pgn.read_game(file)) is not None:
                for error in game.errors:
                    logging.warning(f"Game {len(games) + 1} of {path}: {error}")
                games.append(game)
    except OSError as error:
        raise ParseError(path, str(error)) from error
    except UnicodeDecodeError as error:
        raise ParseError(path, "not a text file") from error

    if not games:
        raise ParseError(path, "no games found")
    logging.info(f"Read {len(games)} games from {path}")
    return games


def get_title(game: Game) -> str:
    match (_player(game, "White"), _player(game, "Black")):
        case (str() as white, str() as black):
            return f"{white} - {black}"
        case (str() as name, None) | (None, str() as name):
            return name
        case _:
            return ""


def _player(game: Game, tag: str) -> str | None:
    name = game.headers.get(tag, "").strip()
    return None if name in ("", "?") else name


def start_position(game: Game) -> ChessGame:
    match game.headers.get("FEN"):
        case None:
            return ChessGame.initial()
        case str() as fen:
            return ChessGame.from_fen(fen)


def initial_nodes(game: Game) -> list[ChildNode]:
    """
    Main line nodes up to, but not including, the first move that has
    alternative variations.
    """
    nodes: list[ChildNode] = []
    node: GameNode = game
    while len(node.variations) == 1:
        node = node.variations[0]
        nodes.append(node)
    return nodes


def variation_lines(branch: GameNode) -> list[list[ChildNode]]:
    """Every line starting at branch, the main line first."""
    if len(branch.variations) < 2:
        return []
    return [[start, *start.mainline()] for start in branch.variations]


def annotate(node: ChildNode) -> AnnotatedMove:
    san = node.san()
    # Ply counts the move itself, so white moves land on odd plies.
    ply = node.ply()
    return AnnotatedMove(
        (ply + 1) // 2,
        Color.WHITE if ply % 2 == 1 else Color.BLACK,
        parse_san(san),
        frozenset(node.nags),
        san.endswith("+"),
        san.endswith("#"),
        node.comment.strip(),
    )


def notation_moves(nodes: list[ChildNode]) -> list[NotationMove]:
    return [parse_san(node.san()) for node in nodes]


def get_diagram(game: Game, nodes: list[ChildNode]) -> str:
    position = start_position(game)
    for move in notation_moves(nodes):
        position.play(move)
    return position.show()
