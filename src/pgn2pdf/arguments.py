from __future__ import annotations
import argparse
from enum import StrEnum, auto
import os
from pathlib import Path
from typing import NamedTuple
from pgn2pdf.notation import Language


THEME_DIR_VARIABLE = "PGN2PDF_THEME_DIR"
ASCIIDOCTOR_VARIABLE = "PGN2PDF_ASCIIDOCTOR"
DEFAULT_THEME_DIR = str(Path(__file__).parent / "themes")
DEFAULT_ASCIIDOCTOR = "asciidoctor-pdf"


class LogLevel(StrEnum):
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()
    CRITICAL = auto()


class Arguments(NamedTuple):
    filename: str
    output: str | None
    preview: bool
    game: int | None
    jobs: int
    log: LogLevel
    language: Language
    theme_dir: str
    asciidoctor: str

    @staticmethod
    def parse(argv: list[str] | None = None) -> Arguments:
        parser = argparse.ArgumentParser(
            prog="pgn2pdf", description="PGN to PDF converter."
        )

        parser.add_argument(
            "filename",
            type=str,
            metavar="FILENAME",
            help="The PGN file to convert",
        )

        destination = parser.add_mutually_exclusive_group()
        destination.add_argument(
            "-o",
            "--output",
            type=str,
            metavar="OUTPUT",
            help="Set output file",
        )
        destination.add_argument(
            "-p",
            "--preview",
            action="store_true",
            help="Preview the file in the system PDF viewer instead of saving it to a file",
        )

        parser.add_argument(
            "-g",
            "--game",
            type=int,
            metavar="INDEX",
            help="Only convert the INDEXth game of the file, starting from 1",
        )

        parser.add_argument(
            "-j",
            "--jobs",
            type=int,
            default=4,
            metavar="COUNT",
            help="Run at most COUNT PDF renderers at once",
        )

        parser.add_argument(
            "-l",
            "--log",
            type=str,
            choices=["debug", "info", "warn", "error", "critical"],
            default="info",
            metavar="LEVEL",
            help="Sets the logging verbosity level",
        )

        parser.add_argument(
            "--language",
            type=str,
            choices=["english", "french"],
            default="english",
            help="The language of the piece letters in the move list",
        )

        parser.add_argument(
            "--theme-dir",
            type=str,
            default=os.environ.get(THEME_DIR_VARIABLE, DEFAULT_THEME_DIR),
            metavar="PATH",
            help=f"The directory holding chess-theme.yml, defaults to ${THEME_DIR_VARIABLE}",
        )

        parser.add_argument(
            "--asciidoctor",
            type=str,
            default=os.environ.get(ASCIIDOCTOR_VARIABLE, DEFAULT_ASCIIDOCTOR),
            metavar="COMMAND",
            help=f"The asciidoctor-pdf executable, defaults to ${ASCIIDOCTOR_VARIABLE}",
        )

        args = parser.parse_args(argv)

        match (
            args.filename,
            args.output,
            args.preview,
            args.game,
            args.jobs,
            args.log,
            args.language,
            args.theme_dir,
            args.asciidoctor,
        ):
            case (
                str() as filename,
                (str() | None) as output,
                bool() as preview,
                (int() | None) as game,
                int() as jobs,
                str() as log,
                str() as language,
                str() as theme_dir,
                str() as asciidoctor,
            ):
                if game is not None and game < 1:
                    parser.error("--game starts from 1")
                if jobs < 1:
                    parser.error("--jobs must be at least 1")
                return Arguments(
                    filename,
                    output,
                    preview,
                    game,
                    jobs,
                    LogLevel(log),
                    Language(language),
                    theme_dir,
                    asciidoctor,
                )
            case _:
                raise Exception("Invalid program arguments")
