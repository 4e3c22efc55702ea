"""Decode the Jira activity stream (Atom 1.0) into ActivityFeed dataclasses."""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from datetime import datetime
from xml.sax.saxutils import escape, quoteattr

from tracker_client_interface.activity import ActivityFeed, ActivityItem, Category, Link, Person, Text

ATOM_NS = "http://www.w3.org/2005/Atom"
_FEED_TAG = f"{{{ATOM_NS}}}feed"

#fractional seconds of any precision, e.g. ".1" or ".123456789"
_FRACTION = re.compile(r"\.(\d+)")


def _local(tag: str) -> str:
    #"{namespace}name" -> "name"
    return tag.rsplit("}", 1)[-1]


def _qualified(tag: str, prefixes: dict[str, str]) -> str:
    """Return tag as written in the document: bare for default namespaces, else prefix:name."""
    if not tag.startswith("{"):
        return tag
    uri, local = tag[1:].split("}", 1)
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _markup(elem: ET.Element, prefixes: dict[str, str]) -> str:
    name = _qualified(elem.tag, prefixes)
    attrs = "".join(f" {_qualified(k, prefixes)}={quoteattr(v)}" for k, v in elem.attrib.items())
    inner = _inner_markup(elem, prefixes)
    if not inner:
        return f"<{name}{attrs}/>"
    return f"<{name}{attrs}>{inner}</{name}>"


def _inner_markup(elem: ET.Element, prefixes: dict[str, str]) -> str:
    """Markup between the start and end tags of elem."""
    parts = [escape(elem.text or "")]
    for child in elem:
        parts.append(_markup(child, prefixes))
        parts.append(escape(child.tail or ""))
    return "".join(parts)


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    """Direct children matched by local name, the way the tracker mixes namespaces."""
    return [child for child in elem if isinstance(child.tag, str) and _local(child.tag) == name]


def _child(elem: ET.Element, name: str) -> ET.Element | None:
    found = _children(elem, name)
    return found[0] if found else None


def _child_text(elem: ET.Element, name: str) -> str:
    child = _child(elem, name)
    if child is None:
        return ""
    return "".join(child.itertext())


def _chardata(elem: ET.Element) -> str:
    """Character data directly inside elem, skipping the text of nested elements."""
    parts = [elem.text or ""]
    parts.extend(child.tail or "" for child in elem)
    return "".join(parts)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp as used by Atom ``updated`` elements.

    Raises:
        ValueError: If value is not empty and not a valid timestamp.
    """
    value = value.strip()
    if not value:
        return None
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    #fromisoformat before 3.11 only takes 3 or 6 fraction digits
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return datetime.fromisoformat(value)


def _links(elem: ET.Element) -> list[Link]:
    return [Link(href=link.get("href", ""), rel=link.get("rel", "")) for link in _children(elem, "link")]


def _person(elem: ET.Element | None, prefixes: dict[str, str]) -> Person:
    if elem is None:
        return Person()
    inner = _inner_markup(elem, prefixes)
    return Person(
        name=_child_text(elem, "name"),
        uri=_child_text(elem, "uri"),
        email=_child_text(elem, "email"),
        inner_xml=inner,
    )


def _text_construct(elem: ET.Element | None) -> Text:
    if elem is None:
        return Text()
    return Text(type=elem.get("type", ""), body=_chardata(elem))


def _category(elem: ET.Element | None) -> Category:
    if elem is None:
        return Category()
    return Category(term=elem.get("term", ""))


def _item(entry: ET.Element, prefixes: dict[str, str]) -> ActivityItem:
    return ActivityItem(
        title=_child_text(entry, "title"),
        id=_child_text(entry, "id"),
        links=_links(entry),
        updated=parse_timestamp(_child_text(entry, "updated")),
        author=_person(_child(entry, "author"), prefixes),
        summary=_text_construct(_child(entry, "summary")),
        category=_category(_child(entry, "category")),
    )


def parse_activity_feed(contents: bytes | str) -> ActivityFeed:
    """Decode an Atom document into an ActivityFeed.

    Args:
        contents: The raw response body.

    Raises:
        xml.etree.ElementTree.ParseError: If contents is not well-formed XML.
        ValueError: If the root is not an Atom feed or a timestamp is invalid.
    """
    if isinstance(contents, str):
        contents = contents.encode("utf-8")

    #namespace URI -> prefix as declared in the document, used to rebuild inner markup
    prefixes = {"http://www.w3.org/XML/1998/namespace": "xml"}
    events = ET.iterparse(io.BytesIO(contents), events=("start-ns",))
    for _, (prefix, uri) in events:
        prefixes.setdefault(uri, prefix)
    root = events.root

    if root.tag != _FEED_TAG:
        raise ValueError(f"expected element type <feed> in namespace {ATOM_NS} but have <{root.tag}>")

    #the feed timestamp is an element in Atom 1.0; some streams also carry it as an attribute
    updated_elem = _child(root, "updated")
    if updated_elem is not None:
        updated = parse_timestamp("".join(updated_elem.itertext()))
    else:
        updated = parse_timestamp(root.get("updated", ""))

    return ActivityFeed(
        title=_child_text(root, "title"),
        id=_child_text(root, "id"),
        links=_links(root),
        updated=updated,
        author=_person(_child(root, "author"), prefixes),
        entries=[_item(entry, prefixes) for entry in _children(root, "entry")],
    )
