"""Recursive, whitespace-aware translation of an element's children."""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..models.nodes import Element, Text
from ..models.results import ImageRef, TranslationResult
from .escape import markdown_escape
from .tables import DEFAULT_TABLE_WIDTH
from .translators import TranslatorRegistry, default_translators

logger = logging.getLogger(__name__)

_END_NEWLINE = re.compile(r"[\r\n]$")
_END_WHITESPACE = re.compile(r"\s$")
_NON_SPACE = re.compile(r"\S")
_INLINE_SPACE = re.compile(r"[^\S\r\n]")
_WHITESPACE_RUN = re.compile(r"\s+")


def trim_text(text: str) -> str:
    """
    Trim surrounding whitespace, keeping a single space at either edge
    when the whitespace touching the content there is a space or tab.

    A line break next to the content is dropped entirely, so text that
    starts on a fresh source line does not gain a leading space.

    Example:
        trim_text("  foo \\n")  # " foo "
        trim_text("\\nfoo\\n")  # "foo"
    """
    match = _NON_SPACE.search(text)
    if match is None:
        return ""
    start = match.start()
    end = len(text) - 1
    while not _NON_SPACE.match(text[end]):
        end -= 1

    leading = " " if start > 0 and _INLINE_SPACE.match(text[start - 1]) else ""
    trailing = " " if end < len(text) - 1 and _INLINE_SPACE.match(text[end + 1]) else ""
    return f"{leading}{text[start : end + 1]}{trailing}"


class TreeWalker:
    """
    Translates element trees to chat markdown.

    Every child element is looked up in the registry. Inline results are
    joined with a single space unless the text so far already ends in
    whitespace; block results always start and end on their own line.
    Elements with no translator are walked transparently, so their
    recognized descendants and text still come through.

    Example:
        walker = TreeWalker()
        result = walker.walk(parse_html("<p>Hello <b>world</b></p>"), plaintext=True)
        result.markdown  # "\\nHello **world**\\n"
    """

    def __init__(
        self,
        registry: Optional[TranslatorRegistry] = None,
        table_width: int = DEFAULT_TABLE_WIDTH,
    ):
        """
        Initialize the walker.

        Args:
            registry: Translator registry (default set bound to this walker if None)
            table_width: Maximum width of rendered tables
        """
        if registry is None:
            registry = TranslatorRegistry(default_translators(self.walk, table_width))
        self.registry = registry

    def walk(self, element: Element, plaintext: bool) -> TranslationResult:
        """
        Translate the children of an element.

        Args:
            element: Element whose children are translated
            plaintext: Whether untagged literal text is captured

        Returns:
            Result with markdown (always a string) and images in document order
        """
        markdown = ""
        images: list[ImageRef] = []

        for node in element.children:
            if isinstance(node, Element):
                translator = self.registry.lookup(node.tag)

                if translator is None:
                    logger.debug(f"No translator for <{node.tag}>, walking its children")
                    result = self.walk(node, plaintext)
                    markdown += result.markdown or ""
                    images.extend(result.images)
                    continue

                result = translator.translate(node)
                if result.markdown is not None:
                    if translator.inline:
                        if not _END_WHITESPACE.search(markdown):
                            markdown += " "
                        markdown += result.markdown
                    else:
                        if not _END_NEWLINE.search(markdown):
                            markdown += "\n"
                        markdown += result.markdown
                        if not _END_NEWLINE.search(result.markdown):
                            markdown += "\n"
                images.extend(result.images)

            elif plaintext and isinstance(node, Text) and not node.is_whitespace:
                markdown += markdown_escape(_WHITESPACE_RUN.sub(" ", trim_text(node.content)))

        return TranslationResult(markdown, images)
