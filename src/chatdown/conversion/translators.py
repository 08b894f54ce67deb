"""Per-tag element translators and the registry that dispatches to them."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

from ..exceptions import MissingAttributeError
from ..models.nodes import Element
from ..models.results import ImageRef, TranslationResult
from .escape import ZERO_WIDTH_SPACE, unbold, unitalic
from .protocols import ElementTranslator, WalkFunction
from .tables import DEFAULT_TABLE_WIDTH, render_table

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"[\r\n]{1,2}")
_WHITESPACE_RUN = re.compile(r"\s+")


def _quote_lines(text: str) -> str:
    """Prefix every non-blank line with "> "."""
    lines = (line.strip() for line in _LINE_BREAK.split(text))
    return "\n".join(f"> {line}" for line in lines if line)


def _collapse(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text.strip())


class BaseTranslator:
    """
    Default inline flag and tag set for translators.

    Subclasses provide ``translate()``; the contract is ElementTranslator.
    """

    inline: bool = True
    tags: frozenset[str] = frozenset()


class ChildTranslator(BaseTranslator):
    """Translator that renders its element's children through the walker."""

    def __init__(self, walk: WalkFunction):
        self._walk = walk

    def translate_children(self, element: Element) -> TranslationResult:
        return self._walk(element, True)


# ----------------------------------------------------------------------
# Pass-through wrappers
# ----------------------------------------------------------------------


class _DelimitedTranslator(ChildTranslator):
    """Wraps the children's markdown in a fixed delimiter."""

    delimiter = ""

    def prepare(self, markdown: str) -> str:
        return markdown

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        markdown = f"{self.delimiter}{self.prepare(result.markdown or '')}{self.delimiter}"
        return TranslationResult(markdown, result.images)


class BoldTranslator(_DelimitedTranslator):
    tags = frozenset({"b", "dt", "mark", "strong"})
    delimiter = "**"

    def prepare(self, markdown: str) -> str:
        return unbold(markdown)


class ItalicTranslator(_DelimitedTranslator):
    tags = frozenset({"cite", "dfn", "em", "i", "small"})
    delimiter = "*"

    def prepare(self, markdown: str) -> str:
        return unitalic(markdown)


class DeletedTranslator(_DelimitedTranslator):
    tags = frozenset({"del", "s", "strike"})
    delimiter = "~~"


class UnderlineTranslator(_DelimitedTranslator):
    tags = frozenset({"ins", "u"})
    delimiter = "__"


class InlineCodeTranslator(_DelimitedTranslator):
    tags = frozenset({"code", "kbd", "samp", "var"})
    delimiter = "`"


class BlockItalicTranslator(ChildTranslator):
    """Address and figure captions: italic, trimmed, still joined inline."""

    tags = frozenset({"address", "figcaption"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        return TranslationResult(f"*{unitalic(result.markdown or '').strip()}*", result.images)


class SpanTranslator(ChildTranslator):
    tags = frozenset({"span"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        return TranslationResult((result.markdown or "").strip(), result.images)


class AbbreviationTranslator(ChildTranslator):
    tags = frozenset({"abbr"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        markdown = result.markdown or ""
        if element.has_attribute("title"):
            markdown = f"{markdown} ({element.get_attribute('title')})"
        return TranslationResult(markdown, result.images)


class AnchorTranslator(ChildTranslator):
    """Links render as [text](href); empty anchors show the href as text."""

    tags = frozenset({"a"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        markdown = result.markdown or ""

        href = element.get_attribute("href")
        if href is None:
            return TranslationResult(markdown, result.images)

        if not markdown:
            return TranslationResult(f"[{href}]({href})", result.images)
        return TranslationResult(f"[{markdown}]({href})", result.images)


class InlineQuoteTranslator(ChildTranslator):
    tags = frozenset({"q"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        markdown = f"`{result.markdown or ''}`"
        if element.has_attribute("cite"):
            markdown += f" ([Source]({element.get_attribute('cite')}))"
        return TranslationResult(markdown.strip(), result.images)


# ----------------------------------------------------------------------
# Block elements
# ----------------------------------------------------------------------


class ParagraphTranslator(ChildTranslator):
    inline = False
    tags = frozenset({"p"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        return TranslationResult((result.markdown or "").strip(), result.images)


class HeadingTranslator(ChildTranslator):
    """
    Headings render as bold text.

    The leading zero-width space keeps the chat client from applying its
    own heading syntax to the line.
    """

    inline = False
    tags = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

    def translate(self, element: Element) -> TranslationResult:
        result = self.translate_children(element)
        return TranslationResult(f"{ZERO_WIDTH_SPACE}**{unbold(result.markdown or '')}**", result.images)


class BlockCodeTranslator(BaseTranslator):
    """
    Preformatted text renders as a fenced code block.

    The language comes from the ``lang`` attribute of the ``pre`` element,
    overridden by the ``lang`` of a direct ``code`` child.
    """

    inline = False
    tags = frozenset({"pre"})

    def translate(self, element: Element) -> TranslationResult:
        code = element.text
        language = element.get_attribute("lang", "")

        for child in element.element_children():
            if child.tag == "code" and child.has_attribute("lang"):
                language = child.get_attribute("lang", "")

        return TranslationResult(f"```{language}\n{code.strip()}\n```")


class BlockQuoteTranslator(BaseTranslator):
    inline = False
    tags = frozenset({"blockquote"})

    def translate(self, element: Element) -> TranslationResult:
        markdown = _quote_lines(element.text)
        if element.has_attribute("cite"):
            markdown += f"\n[Source]({element.get_attribute('cite')})"
        return TranslationResult(markdown)


# ----------------------------------------------------------------------
# Structural collections
# ----------------------------------------------------------------------


class OrderedListTranslator(ChildTranslator):
    inline = False
    tags = frozenset({"ol"})

    def translate(self, element: Element) -> TranslationResult:
        markdown = ""
        images: list[ImageRef] = []

        for index, child in enumerate(element.element_children(), start=1):
            result = self.translate_children(child)
            markdown += f"{index}. {result.markdown}\n"
            images.extend(result.images)

        return TranslationResult(markdown.rstrip(), images)


class UnorderedListTranslator(ChildTranslator):
    inline = False
    tags = frozenset({"ul"})

    def translate(self, element: Element) -> TranslationResult:
        markdown = ""
        images: list[ImageRef] = []

        for child in element.element_children():
            result = self.translate_children(child)
            markdown += f" • {(result.markdown or '').strip()}\n"
            images.extend(result.images)

        return TranslationResult(markdown.rstrip(), images)


class DescriptionListTranslator(ChildTranslator):
    """Terms render bold; details render as an indented quotation."""

    inline = False
    tags = frozenset({"dl"})

    def translate(self, element: Element) -> TranslationResult:
        markdown = ""
        images: list[ImageRef] = []

        for child in element.element_children():
            result = self.translate_children(child)
            if child.tag == "dt":
                markdown += f"**{unbold(result.markdown or '')}**\n"
            else:
                markdown += _quote_lines(result.markdown or "") + "\n"
            images.extend(result.images)

        return TranslationResult(markdown.rstrip(), images)


class TableTranslator(BaseTranslator):
    """
    Tables render as a fixed-width grid inside a code fence.

    Rows are read from ``tr`` children of the table and of its ``thead``,
    ``tbody`` and ``tfoot`` groups; a ``caption`` becomes a centered title.
    """

    inline = False
    tags = frozenset({"table"})
    ROW_GROUPS = frozenset({"thead", "tbody", "tfoot"})
    CELL_TAGS = frozenset({"td", "th"})

    def __init__(self, width: int = DEFAULT_TABLE_WIDTH):
        self._width = width

    def _extract_row(self, row: Element) -> list[str]:
        return [_collapse(cell.text) for cell in row.element_children() if cell.tag in self.CELL_TAGS]

    def translate(self, element: Element) -> TranslationResult:
        header: Optional[str] = None
        rows: list[list[str]] = []

        for child in element.element_children():
            if child.tag == "caption":
                header = _collapse(child.text)
            elif child.tag in self.ROW_GROUPS:
                rows.extend(self._extract_row(row) for row in child.element_children() if row.tag == "tr")
            elif child.tag == "tr":
                rows.append(self._extract_row(child))

        grid = render_table(rows, header=header, width=self._width)
        if not grid:
            logger.debug("Skipping table without cells")
            return TranslationResult()

        return TranslationResult(f"```\n{grid}\n```")


# ----------------------------------------------------------------------
# Void elements
# ----------------------------------------------------------------------


class LineBreakTranslator(BaseTranslator):
    tags = frozenset({"br", "hr"})

    def translate(self, element: Element) -> TranslationResult:
        return TranslationResult("\n")


class ImageTranslator(BaseTranslator):
    """Images contribute no text, only an entry in the image side-channel."""

    tags = frozenset({"img"})

    def translate(self, element: Element) -> TranslationResult:
        src = element.get_attribute("src")
        if src is None:
            raise MissingAttributeError(element.tag, "src", "Image element must provide source (src)!")

        return TranslationResult(images=[ImageRef(src=src, alt=element.get_attribute("alt"))])


# ----------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------


class TranslatorRegistry:
    """
    Read-only mapping from tag name to translator.

    Built from an ordered list; when two translators claim the same tag,
    the first one keeps it.

    Example:
        registry = TranslatorRegistry(default_translators(walker.walk))
        registry.lookup("strong")  # BoldTranslator
        registry.lookup("div")     # None
    """

    def __init__(self, translators: Iterable[ElementTranslator]):
        by_tag: dict[str, ElementTranslator] = {}
        for translator in translators:
            for tag in translator.tags:
                if tag in by_tag:
                    logger.debug(f"Tag {tag!r} already handled by {type(by_tag[tag]).__name__}")
                    continue
                by_tag[tag] = translator
        self._by_tag: Mapping[str, ElementTranslator] = MappingProxyType(by_tag)

    def lookup(self, tag: str) -> Optional[ElementTranslator]:
        return self._by_tag.get(tag)

    @property
    def tags(self) -> frozenset[str]:
        return frozenset(self._by_tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __len__(self) -> int:
        return len(self._by_tag)


def default_translators(walk: WalkFunction, table_width: int = DEFAULT_TABLE_WIDTH) -> list[ElementTranslator]:
    """Create the standard translator set bound to a walk function."""
    return [
        AbbreviationTranslator(walk),
        AnchorTranslator(walk),
        HeadingTranslator(walk),
        BlockCodeTranslator(),
        BlockItalicTranslator(walk),
        ParagraphTranslator(walk),
        BlockQuoteTranslator(),
        DeletedTranslator(walk),
        DescriptionListTranslator(walk),
        ImageTranslator(),
        BoldTranslator(walk),
        InlineCodeTranslator(walk),
        ItalicTranslator(walk),
        SpanTranslator(walk),
        InlineQuoteTranslator(walk),
        LineBreakTranslator(),
        OrderedListTranslator(walk),
        TableTranslator(table_width),
        UnderlineTranslator(walk),
        UnorderedListTranslator(walk),
    ]
