"""Content conversion for chatdown (HTML to chat markdown)."""

from .converter import ChatMarkdownConverter, translate
from .escape import markdown_escape, unbold, unitalic
from .parser import parse_html
from .protocols import ElementTranslator, WalkFunction
from .tables import render_table
from .translators import TranslatorRegistry, default_translators
from .walker import TreeWalker

__all__ = [
    # Protocols
    "ElementTranslator",
    "WalkFunction",
    # Implementations
    "ChatMarkdownConverter",
    "TranslatorRegistry",
    "TreeWalker",
    "default_translators",
    # Functions
    "markdown_escape",
    "parse_html",
    "render_table",
    "translate",
    "unbold",
    "unitalic",
]
