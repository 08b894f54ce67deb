"""Chatdown document, result and configuration models."""

from .config import ChatdownConfig, ConversionConfig, ManualConfig, ServerConfig
from .nodes import Element, Node, Text
from .results import ImageRef, TranslationResult

__all__ = [
    # Config
    "ChatdownConfig",
    "ConversionConfig",
    "ManualConfig",
    "ServerConfig",
    # Document tree
    "Element",
    "Node",
    "Text",
    # Results
    "ImageRef",
    "TranslationResult",
]
