"""
Command-line interface for the wordnet-ls language server.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from wordnet_ls import __version__
from wordnet_ls.config import load_config_file
from wordnet_ls.exceptions import ExitBeforeShutdownError, WordnetLsError
from wordnet_ls.server import start
from wordnet_ls.transport import Connection

logger = logging.getLogger("wordnet_ls")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the wordnet-ls command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.stdio:
        parser.error("No connection mode given, e.g. --stdio")

    try:
        defaults = load_config_file(args.config) if args.config else {}
    except WordnetLsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(
        args.log_level or defaults.get("log_level", "WARNING"), args.log_file
    )
    return run(Connection.stdio(), defaults)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wordnet-ls",
        description="Language server showing WordNet definitions on hover",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Communicate over stdin/stdout",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with default options (wordnet, lexicon, scratch_dir, log_level)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to this file instead of stderr",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def configure_logging(level: str, log_file: Optional[Path] = None) -> None:
    """Send package logs to stderr or a file; stdout carries the protocol."""
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())


def run(connection: Connection, defaults: dict[str, Any]) -> int:
    """Serve one session; return the process exit status."""
    try:
        session = start(connection, defaults)
        session.serve()
    except ExitBeforeShutdownError as e:
        print(e, file=sys.stderr)
        return 1
    except WordnetLsError as e:
        logger.error(f"Fatal: {e}")
        return 1
    return 0
