"""Rendering helpers for terminal output."""

from __future__ import annotations

from typing import Callable, Mapping

from .models import Category, Feed
from .templating import get_environment


def build_menu_text(categories: Mapping[int, Category]) -> str:
    """Render the category menu followed by the selection prompt."""
    env = get_environment()
    template = env.get_template("menu.txt.j2")
    return template.render(categories=list(categories.values()))


def build_feed_text(feed: Feed, sanitize: Callable[[str], str]) -> str:
    """Render channel metadata and every item, cleaning item descriptions."""
    env = get_environment()
    template = env.get_template("feed.txt.j2")
    items = [
        {
            "title": item.title,
            "link": item.link,
            "description": sanitize(item.description),
            "pub_date": item.pub_date,
        }
        for item in feed.items
    ]
    return template.render(feed=feed, items=items)
