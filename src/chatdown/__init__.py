"""
chatdown - Convert HTML documents and manual pages to chat markdown.

Usage:
    from chatdown import translate

    result = translate('<p>Hello <b>world</b> <img src="logo.png"></p>')
    print(result.markdown)  # Hello **world**
    print(result.images)    # [ImageRef(src='logo.png', alt=None)]
"""

__version__ = "1.0.0"

from .conversion import ChatMarkdownConverter, TranslatorRegistry, TreeWalker, parse_html, translate
from .exceptions import (
    ChatdownError,
    InvalidManPageRequest,
    ManPageError,
    ManPageNotFound,
    MissingAttributeError,
    RenderError,
)
from .manpages import ManPageLocator, ManPageService, PandocRenderer
from .models import (
    ChatdownConfig,
    ConversionConfig,
    Element,
    ImageRef,
    ManualConfig,
    ServerConfig,
    Text,
    TranslationResult,
)

__all__ = [
    "__version__",
    # Core
    "translate",
    "ChatMarkdownConverter",
    "TreeWalker",
    "TranslatorRegistry",
    "parse_html",
    # Results and tree
    "TranslationResult",
    "ImageRef",
    "Element",
    "Text",
    # Config
    "ChatdownConfig",
    "ConversionConfig",
    "ManualConfig",
    "ServerConfig",
    # Manual pages
    "ManPageLocator",
    "ManPageService",
    "PandocRenderer",
    # Errors
    "ChatdownError",
    "MissingAttributeError",
    "ManPageError",
    "InvalidManPageRequest",
    "ManPageNotFound",
    "RenderError",
]
