"""Activity stream contract - an Atom feed and its entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Link:
    href: str
    rel: str = ""


@dataclass
class Person:
    name: str = ""
    uri: str = ""
    email: str = ""
    #raw markup of the author element, including tracker-specific extensions
    inner_xml: str = ""


@dataclass
class Text:
    type: str = ""
    body: str = ""


@dataclass
class Category:
    term: str = ""


@dataclass
class ActivityItem:
    """A single entry of the activity stream."""

    title: str = ""
    id: str = ""
    links: list[Link] = field(default_factory=list)
    updated: datetime | None = None
    author: Person = field(default_factory=Person)
    summary: Text = field(default_factory=Text)
    category: Category = field(default_factory=Category)


@dataclass
class ActivityFeed:
    """The feed envelope. Lives for a single decode; nothing is persisted."""

    title: str = ""
    id: str = ""
    links: list[Link] = field(default_factory=list)
    updated: datetime | None = None
    author: Person = field(default_factory=Person)
    entries: list[ActivityItem] = field(default_factory=list)
