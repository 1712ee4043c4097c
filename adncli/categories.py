"""Static Adnkronos category table and menu selection helpers."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping

from .exceptions import InputFormatError, UnknownCategoryError
from .models import Category

logger = logging.getLogger(__name__)

EXIT_SELECTION = 0

_FEED_BASE_URL = "https://www.adnkronos.com"

_SELECTION_RE = re.compile(r"[+-]?\d+")


def _category(category_id: int, name: str, slug: str) -> Category:
    return Category(
        id=category_id, name=name, url=f"{_FEED_BASE_URL}/RSS_{slug}.xml"
    )


# Menu order follows insertion order.
CATEGORIES: Mapping[int, Category] = MappingProxyType(
    {
        category.id: category
        for category in (
            _category(1, "Prima Pagina", "PrimaPagina"),
            _category(2, "Ultim'ora", "Ultimora"),
            _category(3, "Politica", "Politica"),
            _category(4, "Esteri", "Esteri"),
            _category(5, "Cronaca", "Cronaca"),
            _category(6, "Economia", "Economia"),
            _category(7, "Finanza", "Finanza"),
            _category(8, "Sport", "Sport"),
        )
    }
)


def parse_selection(line: str) -> int:
    """Parse one line of user input into a category number."""
    value = line.strip()
    if not _SELECTION_RE.fullmatch(value):
        raise InputFormatError(f"expected a category number, got {value!r}")
    return int(value)


def get_category(
    category_id: int, categories: Mapping[int, Category] = CATEGORIES
) -> Category:
    """Return the category registered under ``category_id``."""
    try:
        category = categories[category_id]
    except KeyError:
        raise UnknownCategoryError(category_id) from None
    logger.debug("Selected category %d (%s)", category.id, category.name)
    return category
