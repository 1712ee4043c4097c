"""Interactive category selection loop."""

from __future__ import annotations

import logging
import sys
from typing import Mapping, Optional, TextIO

from .categories import CATEGORIES, EXIT_SELECTION, get_category, parse_selection
from .exceptions import InputFormatError, ReaderError
from .feeds import FeedPipeline
from .models import Category
from .renderers import build_feed_text, build_menu_text

logger = logging.getLogger(__name__)


class ReaderSession:
    """Prompt for a category, fetch its feed, print it, repeat.

    The loop ends when the user selects ``0`` or the input stream is
    exhausted. Reader errors are reported on the output stream and the
    menu is shown again.
    """

    def __init__(
        self,
        pipeline: FeedPipeline,
        categories: Mapping[int, Category] = CATEGORIES,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.pipeline = pipeline
        self.categories = categories
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _read_line(self) -> str:
        try:
            return self.stdin.readline()
        except UnicodeDecodeError as exc:
            raise InputFormatError(f"selection is not valid text: {exc.reason}") from exc

    def run(self) -> int:
        """Run until exit is requested; return the process exit code."""
        while True:
            self._write(build_menu_text(self.categories))
            line = ""
            try:
                line = self._read_line()
                if not line:
                    logger.info("Input closed; ending session.")
                    self._write("\n")
                    return 0
                selection = parse_selection(line)
                if selection == EXIT_SELECTION:
                    logger.info("Exit requested.")
                    return 0
                category = get_category(selection, self.categories)
                feed = self.pipeline.fetch(category.url)
            except ReaderError as exc:
                logger.info("Selection %r failed: %s", line.strip(), exc)
                self._write(f"Error: {exc}\n\n")
                continue

            self._write(build_feed_text(feed, self.pipeline.sanitize))
