"""Outline node value type."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutlineNode:
    """One node of an outline document.

    Attributes:
        text: The node's label.
        children: Ordered child nodes (possibly empty).
    """

    text: str
    children: tuple[OutlineNode, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, text: str, *children: OutlineNode | str) -> OutlineNode:
        """Build a node, promoting bare strings to leaf nodes."""
        return cls(
            text=text,
            children=tuple(c if isinstance(c, OutlineNode) else cls(c) for c in children),
        )
