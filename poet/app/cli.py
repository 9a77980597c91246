"""Command line entry point: ``poet -q WORD``, ``poet -i FILE`` or ``poet -s``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from poet import __version__
from poet.config import Settings
from poet.core import LexiconParseError
from poet.utils.logging_config import configure_logging
from poet.utils.observability import get_logger

from .app import PoetApp

_logger = get_logger(__name__).bind(component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poet",
        description="Look up pronunciations and rhymes, and check poems against verse forms.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-d",
        "--dict",
        metavar="FILE",
        help="Path to a cmudict.dict file (default: the bundled CMU dictionary).",
    )
    parser.add_argument(
        "-u",
        "--userdict",
        metavar="FILE",
        help="Path to a user dictionary whose entries take precedence.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-q", "--query", metavar="WORD", help="Look up WORD and list its rhymes.")
    mode.add_argument("-i", "--input", metavar="FILE", help="Analyze the stanzas in FILE.")
    mode.add_argument("-s", "--server", action="store_true", help="Launch the web UI.")
    parser.add_argument("--host", default="127.0.0.1", help="Web UI host (with --server).")
    parser.add_argument("--port", type=int, default=7860, help="Web UI port (with --server).")
    parser.add_argument(
        "--remote",
        action="store_true",
        default=None,
        help="Ask the Datamuse API about words missing from the dictionaries.",
    )
    parser.add_argument(
        "--max-interpretations",
        type=int,
        metavar="N",
        help="Stop checking a stanza after N interpretations.",
    )
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or WARNING.")
    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    settings = base or Settings.from_env()
    if args.dict:
        settings.cmudict_path = Path(args.dict)
    if args.userdict:
        settings.userdict_path = Path(args.userdict)
    if args.remote is not None:
        settings.remote_lookups = args.remote
    if args.max_interpretations is not None:
        settings.max_interpretations = args.max_interpretations
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.log_level)

    try:
        app = PoetApp(settings)
    except (OSError, LexiconParseError) as exc:
        _logger.error("Failed to load dictionaries", context={"error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.query is not None:
        result = app.service.lookup(args.query)
        print(app.formatter.format_lookup(result))
        return 0 if result.found else 1

    if args.input is not None:
        try:
            text = Path(args.input).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(app.analyze(text))
        return 0

    app.serve(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
