"""Command-line interface for the Adnkronos RSS reader."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from xml.etree import ElementTree as ET

from .config import AppConfig, parse_app_config
from .feeds import FeedPipeline
from .session import ReaderSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Browse Adnkronos news feeds by category."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an XML configuration file. Built-in defaults apply when omitted.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Upper bound in seconds for each feed request. Overrides config.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    return parser


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Send log records to stderr and, when ``log_file`` is given, to that file.

    The file is opened before the root handlers are replaced, so a path that
    cannot be opened raises ``OSError`` and leaves logging untouched.
    """
    log_level = logging.getLevelName(level_name.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logger.debug(
        "Logging at %s to stderr%s",
        level_name.upper(),
        f" and {log_file}" if log_file else "",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config) if args.config else AppConfig()
        if args.timeout is not None:
            if args.timeout <= 0:
                raise ValueError("--timeout must be positive.")
            app_config.timeout = args.timeout

        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        configure_logging(log_level, log_file)

        pipeline = FeedPipeline.from_config(app_config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, OSError, ET.ParseError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Active configuration: %s", app_config)

    with pipeline:
        try:
            return ReaderSession(pipeline).run()
        except KeyboardInterrupt:
            print()
            return 130
