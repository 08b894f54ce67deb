"""HTML to chat markdown entry point."""

from __future__ import annotations

import logging

from ..models.config import ConversionConfig
from ..models.results import TranslationResult
from .parser import parse_html
from .tables import DEFAULT_TABLE_WIDTH
from .walker import TreeWalker

logger = logging.getLogger(__name__)


class ChatMarkdownConverter:
    """
    Converts HTML documents to chat markdown plus a list of images.

    The walker and its translator registry are built once and never
    modified afterwards, so one converter can serve concurrent callers.

    Example:
        converter = ChatMarkdownConverter()
        result = converter.convert("<h1>ls</h1><p>list directory contents</p>")
        print(result.markdown)
    """

    def __init__(self, table_width: int = DEFAULT_TABLE_WIDTH, plaintext: bool = False):
        """
        Initialize the converter.

        Args:
            table_width: Maximum width of rendered tables
            plaintext: Default for capturing untagged top-level text
        """
        self._walker = TreeWalker(table_width=table_width)
        self._plaintext = plaintext

    @classmethod
    def from_config(cls, config: ConversionConfig) -> ChatMarkdownConverter:
        return cls(table_width=config.table_width, plaintext=config.plaintext)

    def convert(self, html: str, plaintext: bool | None = None) -> TranslationResult:
        """
        Convert HTML to chat markdown.

        Args:
            html: Raw HTML
            plaintext: Capture untagged top-level text (converter default if None)

        Returns:
            Trimmed markdown and the extracted images

        Raises:
            MissingAttributeError: If an image element has no source
        """
        if plaintext is None:
            plaintext = self._plaintext

        root = parse_html(html)
        result = self._walker.walk(root, plaintext)
        result.markdown = (result.markdown or "").strip()

        logger.debug(
            f"Converted {len(html)} characters of HTML to {len(result.markdown)} characters "
            f"of markdown and {len(result.images)} images"
        )
        return result


_default_converter = ChatMarkdownConverter()


def translate(html: str, plaintext: bool = False) -> TranslationResult:
    """
    Translate raw HTML to chat markdown.

    Args:
        html: Raw HTML
        plaintext: Whether to capture untagged top-level text

    Returns:
        Result with trimmed markdown and images in document order
    """
    return _default_converter.convert(html, plaintext)
