"""Parser adapter turning raw HTML into the chatdown node tree."""

from __future__ import annotations

import html
import logging

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

from ..models.nodes import Element, Node, Text

logger = logging.getLogger(__name__)

# Elements whose content is kept as a single opaque text node
OPAQUE_TEXT_TAGS = frozenset({"code", "noscript", "script", "style"})

ROOT_TAG = "[document]"

# Open elements closed implicitly when the keyed tag starts
IMPLIED_END_TAGS = {
    "li": frozenset({"li"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "td": frozenset({"td", "th"}),
    "th": frozenset({"td", "th"}),
    "tr": frozenset({"tr", "td", "th"}),
}


class _ImpliedEndTagSoup(BeautifulSoup):
    """
    BeautifulSoup tree that ends list items, description terms and table
    cells when a sibling of the same family opens (html.parser leaves
    optional end tags open).
    """

    def handle_starttag(self, name, *args, **kwargs):
        closes = IMPLIED_END_TAGS.get(name)
        while closes and self.currentTag.name in closes:
            self.handle_endtag(self.currentTag.name)
        return super().handle_starttag(name, *args, **kwargs)


def _convert_tag(tag: Tag) -> Element:
    """Convert a BeautifulSoup tag (and its subtree) to an Element."""
    attributes = {name: value if isinstance(value, str) else " ".join(value) for name, value in tag.attrs.items()}
    element = Element(tag=tag.name.lower(), attributes=attributes)

    if element.tag in OPAQUE_TEXT_TAGS:
        raw = tag.decode_contents()
        if raw:
            element.children.append(Text(html.unescape(raw)))
        return element

    for child in tag.children:
        node = _convert_node(child)
        if node is not None:
            element.children.append(node)
    return element


def _convert_node(node: object) -> Node | None:
    # Comments, doctypes, CDATA and processing instructions are dropped
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return Text(str(node))
    if isinstance(node, Tag):
        return _convert_tag(node)
    return None


def parse_html(raw: str) -> Element:
    """
    Parse raw HTML into an Element tree.

    Uses BeautifulSoup's html.parser backend, which does not insert implied
    elements (no synthetic ``<html>``, ``<body>`` or ``<tbody>``), so the tree
    mirrors the markup as written. Omitted ``li``, ``dt``/``dd``, ``td``/``th``
    and ``tr`` end tags are closed when the next sibling of that family opens.

    Args:
        raw: HTML source

    Returns:
        Root element (tag ``[document]``) holding the parsed nodes
    """
    soup = _ImpliedEndTagSoup(raw, "html.parser", multi_valued_attributes=None)
    root = _convert_tag(soup)
    root.tag = ROOT_TAG
    logger.debug(f"Parsed {len(raw)} characters of HTML into {len(root.children)} top-level nodes")
    return root
