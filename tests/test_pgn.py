import io
import os
import tempfile
import unittest
import chess.pgn
from chess.pgn import Game
from pgn2pdf.game import ChessGame
from pgn2pdf.notation import BasicMove, CastleKingside
from pgn2pdf.piece import Color, Piece
from pgn2pdf.pgn import (
    ParseError,
    annotate,
    get_diagram,
    get_title,
    initial_nodes,
    notation_moves,
    read_games,
    start_position,
    variation_lines,
)
from pgn2pdf.square import coord

PHILIDOR = """\
[Event "Test"]
[White "Morphy"]
[Black "Duke"]

1. e4 e5 2. Nf3 d6 {Philidor} 3. d4 Bg4 (3... exd4 4. Qxd4) 4. dxe5 Bxf3 5. Qxf3 dxe5 *
"""

SCHOLAR = """\
[Event "Scholar"]
[White "?"]
[Black "?"]

1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0
"""

SETUP = """\
[Event "Setup"]
[SetUp "1"]
[FEN "4k3/8/8/8/8/8/8/4K2R w K - 0 1"]

1. O-O Kd7 *
"""


def read(pgn: str) -> Game:
    game = chess.pgn.read_game(io.StringIO(pgn))
    assert game is not None
    return game


class TestReadGames(unittest.TestCase):
    def test_reads_every_game(self) -> None:
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, "games.pgn")
            with open(path, "w", encoding="utf-8") as file:
                file.write(PHILIDOR + "\n" + SCHOLAR)
            games = read_games(path)
        self.assertEqual(2, len(games))
        self.assertEqual("Morphy", games[0].headers["White"])
        self.assertEqual("Scholar", games[1].headers["Event"])

    def test_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tempdir:
            path = os.path.join(tempdir, "empty.pgn")
            with open(path, "w", encoding="utf-8"):
                pass
            with self.assertRaises(ParseError):
                read_games(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(ParseError):
            read_games("/nonexistent/games.pgn")


class TestGame(unittest.TestCase):
    def test_title(self) -> None:
        self.assertEqual("Morphy - Duke", get_title(read(PHILIDOR)))
        self.assertEqual("", get_title(read(SCHOLAR)))
        game = read(SCHOLAR)
        game.headers["Black"] = "Anonymous"
        self.assertEqual("Anonymous", get_title(game))

    def test_initial_nodes_stop_at_variation(self) -> None:
        nodes = initial_nodes(read(PHILIDOR))
        self.assertEqual(
            ["e4", "e5", "Nf3", "d6", "d4"], [node.san() for node in nodes]
        )

    def test_initial_nodes_without_variations(self) -> None:
        self.assertEqual(7, len(initial_nodes(read(SCHOLAR))))

    def test_variation_lines(self) -> None:
        nodes = initial_nodes(read(PHILIDOR))
        lines = variation_lines(nodes[-1])
        self.assertEqual(
            [["Bg4", "dxe5", "Bxf3", "Qxf3", "dxe5"], ["exd4", "Qxd4"]],
            [[node.san() for node in line] for line in lines],
        )
        self.assertEqual([], variation_lines(nodes[0]))

    def test_annotate(self) -> None:
        nodes = initial_nodes(read(PHILIDOR))
        first = annotate(nodes[0])
        self.assertEqual(1, first.number)
        self.assertEqual(Color.WHITE, first.color)
        self.assertEqual("", first.comment)

        d6 = annotate(nodes[3])
        self.assertEqual(2, d6.number)
        self.assertEqual(Color.BLACK, d6.color)
        self.assertEqual("Philidor", d6.comment)
        self.assertIsInstance(d6.move, BasicMove)

        mate = annotate(initial_nodes(read(SCHOLAR))[-1])
        self.assertTrue(mate.is_checkmate)
        self.assertFalse(mate.is_check)

    def test_diagram_matches_replay(self) -> None:
        game = read(PHILIDOR)
        nodes = initial_nodes(game)
        position = ChessGame.initial()
        for move in notation_moves(nodes):
            position.play(move)
        self.assertEqual(position.show(), get_diagram(game, nodes))
        self.assertEqual(Color.BLACK, position.turn)
        self.assertEqual((Color.WHITE, Piece.PAWN), position.at(coord("d", "4")))

    def test_fen_start(self) -> None:
        game = read(SETUP)
        nodes = initial_nodes(game)
        moves = notation_moves(nodes)
        self.assertEqual(CastleKingside(), moves[0])

        position = start_position(game)
        for move in moves:
            position.play(move)
        self.assertEqual((Color.WHITE, Piece.KING), position.at(coord("g", "1")))
        self.assertEqual((Color.WHITE, Piece.ROOK), position.at(coord("f", "1")))
        self.assertEqual((Color.BLACK, Piece.KING), position.at(coord("d", "7")))

    def test_default_start(self) -> None:
        self.assertEqual(
            ChessGame.initial().show(), start_position(read(PHILIDOR)).show()
        )


if __name__ == "__main__":
    unittest.main()
