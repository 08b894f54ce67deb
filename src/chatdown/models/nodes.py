"""Document tree nodes produced by the parser adapter."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class Text:
    """A literal text node (entities already decoded)."""

    content: str

    @property
    def is_whitespace(self) -> bool:
        """True when the node holds nothing but whitespace (including nbsp)."""
        return not self.content.strip()


@dataclass
class Element:
    """
    An element node.

    Tag names are lowercase. Attribute values are plain strings, so
    ``class`` stays the raw space-separated value.

    Example:
        element = Element("a", {"href": "https://example.com"}, [Text("link")])
        element.get_attribute("href")  # "https://example.com"
        element.text                   # "link"
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def element_children(self) -> Iterator[Element]:
        """Iterate over child elements, skipping text nodes."""
        for child in self.children:
            if isinstance(child, Element):
                yield child

    @property
    def text(self) -> str:
        """Concatenated text content of all descendants."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.content)
            else:
                parts.append(child.text)
        return "".join(parts)


Node = Union[Element, Text]
