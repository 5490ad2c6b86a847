"""OPML reading.

The stories database is exported from an outliner as OPML. Every
``<outline>`` element becomes an :class:`OutlineNode` whose label is the
element's ``text`` attribute.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from hanzi_stories.observability.logging import get_logger
from hanzi_stories.outline.nodes import OutlineNode

if TYPE_CHECKING:
    from pathlib import Path

log = get_logger(__name__)


class OutlineLoadError(Exception):
    """Raised when an OPML document can't be read or has no outline body."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load outline from {source}: {reason}")


def _to_node(element: ET.Element) -> OutlineNode:
    return OutlineNode(
        text=element.get("text", ""),
        children=tuple(_to_node(child) for child in element.findall("outline")),
    )


def parse_opml(text: str, *, source: str = "<string>") -> OutlineNode:
    """Parse OPML text and return the first top-level outline under ``<body>``.

    Args:
        text: OPML document contents.
        source: Name used in error messages.

    Returns:
        The root outline node (the pronunciation list).

    Raises:
        OutlineLoadError: If the XML is malformed or has no body outline.
    """
    try:
        document = ET.fromstring(text)
    except ET.ParseError as e:
        raise OutlineLoadError(source, f"malformed XML ({e})") from e

    body = document.find("body")
    if body is None:
        raise OutlineLoadError(source, "missing <body> element")

    root = body.find("outline")
    if root is None:
        raise OutlineLoadError(source, "<body> contains no <outline> element")

    node = _to_node(root)
    log.debug("opml_parsed", source=source, root=node.text, children=len(node.children))
    return node


def load_opml(path: Path) -> OutlineNode:
    """Read an OPML file from disk.

    Raises:
        OutlineLoadError: If the file is missing, unreadable or malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise OutlineLoadError(str(path), str(e)) from e
    return parse_opml(text, source=str(path))
