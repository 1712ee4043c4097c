"""Shared data models for adncli."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Category:
    """A numbered news section mapped to its RSS feed."""

    id: int
    name: str
    url: str


@dataclass
class Item:
    """A single <item> entry of an RSS channel."""

    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass
class Feed:
    """Parsed <channel> metadata and its items in document order."""

    title: str = ""
    description: str = ""
    link: str = ""
    items: List[Item] = field(default_factory=list)
