from typing import Final
import chess.pgn
from pgn2pdf.notation import Language, format_move
from pgn2pdf.pgn import AnnotatedMove
from pgn2pdf.piece import Color

MOVES_TO_SHOW: Final = 9

_ANNOTATIONS: Final = {
    chess.pgn.NAG_GOOD_MOVE: "!",
    chess.pgn.NAG_MISTAKE: "?",
    chess.pgn.NAG_BRILLIANT_MOVE: "!!",
    chess.pgn.NAG_BLUNDER: "??",
    chess.pgn.NAG_SPECULATIVE_MOVE: "!?",
    chess.pgn.NAG_DUBIOUS_MOVE: "?!",
}

_TEMPLATE: Final = """\
{header}:pdf-themesdir: {theme_dir}
:pdf-theme: chess
:icons: font

____
{diagram}
____

{moves}

{variations}

{comments}
"""


def move_to_string(
    move: AnnotatedMove, language: Language, with_number: bool = True
) -> str:
    text = format_move(move.move, language)
    if with_number and move.color == Color.WHITE:
        text = f"{move.number}.{text}"
    for nag, symbol in _ANNOTATIONS.items():
        if nag in move.nags:
            text += symbol
            break
    if move.is_checkmate:
        text += "#"
    elif move.is_check:
        text += "+"
    return text


def move_list(moves: list[AnnotatedMove], language: Language) -> str:
    texts = [move_to_string(move, language) for move in moves]
    if moves and moves[0].color == Color.BLACK:
        texts[0] = f"{moves[0].number}...{texts[0]}"
    return " ".join(texts)


def variations_table(lines: list[list[AnnotatedMove]], language: Language) -> str:
    """
    One pair of table rows per line, white moves above black moves, with the
    first column holding the line number.
    """
    if not lines or not lines[0]:
        return ""

    first = lines[0][0].number
    numbers = " ".join(f"|{number}" for number in range(first, first + MOVES_TO_SHOW))
    rows = [f'[cols="1, {MOVES_TO_SHOW}*3"]', "|===", f"| {numbers}", ""]
    separator = "|" * (MOVES_TO_SHOW + 1)
    for index, line in enumerate(lines, start=1):
        if index > 1:
            rows.append(separator)
        rows.extend(_line_rows(index, line, language))
    rows.append("|===")
    return "\n".join(rows)


def _line_rows(index: int, line: list[AnnotatedMove], language: Language) -> list[str]:
    white = [
        move_to_string(move, language, with_number=False)
        for move in line
        if move.color == Color.WHITE
    ]
    black = [
        move_to_string(move, language, with_number=False)
        for move in line
        if move.color == Color.BLACK
    ]
    # Keep each black move under the white move with the same number.
    if line and line[0].color == Color.BLACK:
        white.insert(0, "")
    return [
        f"| *{index}*",
        *_cells(white),
        "|",
        *_cells(black),
    ]


def _cells(texts: list[str]) -> list[str]:
    shown = texts[:MOVES_TO_SHOW]
    padding = [""] * (MOVES_TO_SHOW - len(shown))
    return [f"| {text}".rstrip() for text in shown + padding]


def comments(moves: list[AnnotatedMove], language: Language) -> str:
    return "\n".join(
        f"* *{move_to_string(move, language)}* {move.comment}"
        for move in moves
        if move.comment
    )


def render(
    title: str,
    theme_dir: str,
    diagram: str,
    moves: str,
    variations: str,
    notes: str,
) -> str:
    return _TEMPLATE.format(
        header=f"= {title}\n" if title else "",
        theme_dir=theme_dir,
        diagram=diagram,
        moves=moves,
        variations=variations,
        comments=notes,
    )
