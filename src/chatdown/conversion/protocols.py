"""Protocol definitions for element translation."""

from typing import Callable, Protocol

from ..models.nodes import Element
from ..models.results import TranslationResult

# Translates an element's children: (element, plaintext) -> result
WalkFunction = Callable[[Element, bool], TranslationResult]


class ElementTranslator(Protocol):
    """
    Protocol for per-tag element translators.

    Implementations declare whether their output is inline (joined into
    the surrounding sentence) or block (placed on its own lines), and the
    lowercase tag names they handle.
    """

    inline: bool
    tags: frozenset[str]

    def translate(self, element: Element) -> TranslationResult:
        """
        Translate an element.

        Args:
            element: Element whose tag is one of ``tags``

        Returns:
            Result with optional markdown and any extracted images
        """
        ...
