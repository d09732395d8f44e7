import unittest
from pgn2pdf.notation import (
    BasicMove,
    CastleKingside,
    CastleQueenside,
    Language,
    PartialSquare,
    Square,
    UnsupportedMoveError,
    format_move,
    parse_san,
)
from pgn2pdf.piece import Piece
from pgn2pdf.square import (
    Coord,
    InvalidSquareError,
    PartialOrigin,
    coord,
    partial_coord,
    square_name,
)

_NO_ORIGIN = PartialSquare(None, None)


class TestParseSan(unittest.TestCase):
    def test_pawn_moves(self) -> None:
        self.assertEqual(
            BasicMove(Piece.PAWN, _NO_ORIGIN, False, Square("e", "4")),
            parse_san("e4"),
        )
        self.assertEqual(
            BasicMove(Piece.PAWN, PartialSquare("e", None), True, Square("d", "5")),
            parse_san("exd5"),
        )

    def test_piece_moves(self) -> None:
        self.assertEqual(
            BasicMove(Piece.KNIGHT, PartialSquare("b", None), False, Square("d", "7")),
            parse_san("Nbd7"),
        )
        self.assertEqual(
            BasicMove(Piece.ROOK, PartialSquare(None, "1"), True, Square("e", "2")),
            parse_san("R1xe2+"),
        )
        self.assertEqual(
            BasicMove(Piece.QUEEN, PartialSquare("h", "4"), True, Square("e", "1")),
            parse_san("Qh4xe1!?"),
        )

    def test_promotions(self) -> None:
        self.assertEqual(
            BasicMove(
                Piece.PAWN,
                PartialSquare("e", None),
                True,
                Square("d", "8"),
                Piece.QUEEN,
            ),
            parse_san("exd8=Q#"),
        )
        self.assertEqual(Piece.KNIGHT, parse_san("e8N").promoted_to)

    def test_castling(self) -> None:
        self.assertEqual(CastleKingside(), parse_san("O-O"))
        self.assertEqual(CastleKingside(), parse_san("0-0+"))
        self.assertEqual(CastleQueenside(), parse_san("O-O-O"))
        self.assertEqual(CastleQueenside(), parse_san("0-0-0#"))
        self.assertNotEqual(CastleKingside(), CastleQueenside())

    def test_unsupported(self) -> None:
        for san in ("", "--", "N@f3", "Z0", "e9", "resign"):
            with self.assertRaises(UnsupportedMoveError):
                parse_san(san)


class TestFormatMove(unittest.TestCase):
    def test_english(self) -> None:
        for san in ("Nf3", "exd5", "Rae1", "Q1a3", "exd8=Q", "O-O", "O-O-O"):
            self.assertEqual(san, format_move(parse_san(san)))

    def test_french(self) -> None:
        self.assertEqual("Cf3", format_move(parse_san("Nf3"), Language.FRENCH))
        self.assertEqual("Rxe2", format_move(parse_san("Kxe2"), Language.FRENCH))
        self.assertEqual("exd8=D", format_move(parse_san("exd8=Q"), Language.FRENCH))


class TestSquare(unittest.TestCase):
    def test_coord(self) -> None:
        self.assertEqual(Coord(0, 0), coord("a", "8"))
        self.assertEqual(Coord(7, 7), coord("h", "1"))
        self.assertEqual(Coord(4, 4), coord("e", "4"))

    def test_invalid(self) -> None:
        for file, rank in (("i", "1"), ("a", "9"), ("a", "0"), ("", "1"), ("A", "1")):
            with self.assertRaises(InvalidSquareError):
                coord(file, rank)

    def test_partial(self) -> None:
        self.assertEqual(PartialOrigin(None, 5), partial_coord(None, "3"))
        self.assertEqual(PartialOrigin(2, None), partial_coord("c", None))
        self.assertEqual(PartialOrigin(None, None), partial_coord(None, None))
        with self.assertRaises(InvalidSquareError):
            partial_coord("z", None)

    def test_matches(self) -> None:
        self.assertTrue(PartialOrigin(None, None).matches(Coord(3, 3)))
        self.assertTrue(PartialOrigin(3, None).matches(Coord(3, 6)))
        self.assertFalse(PartialOrigin(3, 1).matches(Coord(3, 6)))

    def test_square_name(self) -> None:
        self.assertEqual("e4", square_name(Coord(4, 4)))
        self.assertEqual("a8", square_name(Coord(0, 0)))


if __name__ == "__main__":
    unittest.main()
