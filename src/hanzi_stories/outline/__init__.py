"""Outline document model and OPML loading."""

from hanzi_stories.outline.nodes import OutlineNode
from hanzi_stories.outline.opml import OutlineLoadError, load_opml, parse_opml

__all__ = [
    "OutlineLoadError",
    "OutlineNode",
    "load_opml",
    "parse_opml",
]
