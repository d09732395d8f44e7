from pgn2pdf.arguments import Arguments
from pgn2pdf import document
from pgn2pdf.game import ChessGame
from pgn2pdf.piece import ReplayError
from pgn2pdf.pgn import (
    ParseError,
    annotate,
    get_diagram,
    get_title,
    initial_nodes,
    read_games,
    variation_lines,
)

from chess.pgn import Game

import os
import sys
import tempfile
import asyncio
import logging
import webbrowser
from asyncio import Semaphore
from asyncio.subprocess import DEVNULL, PIPE
from pathlib import Path

__all__ = ["ChessGame", "convert", "main"]


class RenderError(Exception):
    def __init__(self, output: str, reason: str) -> None:
        super().__init__(f"Failed to render {output}: {reason}")


def main() -> None:
    args = Arguments.parse()
    logging.basicConfig(level=args.log.upper())

    try:
        outputs = asyncio.run(convert(args))
    except ParseError as error:
        logging.error(error)
        sys.exit(1)

    if not outputs:
        logging.error("No PDF was produced")
        sys.exit(1)

    if args.preview:
        for output in outputs:
            open_pdf_viewer(output)


async def convert(args: Arguments) -> list[str]:
    logging.info(f"Converting {args.filename}")
    games = read_games(args.filename)
    selected = list(enumerate(games, start=1))
    if args.game is not None:
        if args.game > len(games):
            raise ParseError(args.filename, f"there is no game {args.game}")
        selected = [selected[args.game - 1]]

    outputs = output_paths(args.filename, args.output, args.preview, len(selected))
    limit = Semaphore(args.jobs)
    with tempfile.TemporaryDirectory(prefix="pgn2pdf") as tempdir:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(
                    convert_game(index, game, tempdir, output, args, limit)
                )
                for (index, game), output in zip(selected, outputs)
            ]

    return [output for task in tasks if (output := task.result()) is not None]


async def convert_game(
    index: int,
    game: Game,
    tempdir: str,
    output: str,
    args: Arguments,
    limit: Semaphore,
) -> str | None:
    try:
        source = write_asciidoc(index, game, tempdir, args)
        async with limit:
            await run_asciidoc(args.asciidoctor, source, output)
    except (ReplayError, RenderError, OSError) as error:
        logging.error(f"Skipping game {index}: {error}")
        return None

    logging.info(f"Wrote game {index} to {output}")
    return output


def output_paths(
    filename: str, output: str | None, preview: bool, count: int
) -> list[str]:
    if output is None:
        name = Path(filename).with_suffix(".pdf").name
        output = os.path.join(tempfile.gettempdir(), name) if preview else name
    if count == 1:
        return [output]
    path = Path(output)
    return [
        str(path.with_name(f"{path.stem}-{index}{path.suffix}"))
        for index in range(1, count + 1)
    ]


def write_asciidoc(index: int, game: Game, tempdir: str, args: Arguments) -> str:
    nodes = initial_nodes(game)
    diagram = get_diagram(game, nodes)
    moves = [annotate(node) for node in nodes]
    branch = nodes[-1] if nodes else game
    lines = [[annotate(node) for node in line] for line in variation_lines(branch)]

    text = document.render(
        get_title(game),
        args.theme_dir,
        diagram,
        document.move_list(moves, args.language),
        document.variations_table(lines, args.language),
        document.comments(moves, args.language),
    )
    path = os.path.join(tempdir, f"{Path(args.filename).stem}-{index}.adoc")
    with open(path, "w", encoding="utf-8") as file:
        file.write(text)
    logging.debug(f"Wrote {path}")
    return path


async def run_asciidoc(command: str, source: str, output: str) -> None:
    try:
        process = await asyncio.create_subprocess_exec(
            command, source, "-o", output, stdout=DEVNULL, stderr=PIPE
        )
    except OSError as error:
        raise RenderError(output, str(error)) from error

    _, stderr = await process.communicate()
    if process.returncode != 0:
        reason = stderr.decode(errors="replace").strip()
        raise RenderError(output, reason or f"exit status {process.returncode}")


def open_pdf_viewer(output: str) -> None:
    if not webbrowser.open(Path(output).resolve().as_uri()):
        logging.error(f"Failed to open a viewer for {output}")
