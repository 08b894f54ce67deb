"""Escaping of literal text and stripping of nested emphasis delimiters."""

import re

ZERO_WIDTH_SPACE = "\u200b"

# Characters the chat renderer would otherwise treat as markup
_SPECIAL_CHARS = re.compile(r"([*#/()\[\]_`])")

# "**" not already escaped
_BOLD_DELIMITER = re.compile(r"(?<!\\)\*\*")

# A lone "*" that is not escaped and not part of "**" (but "***" still matches)
_ITALIC_DELIMITER = re.compile(r"(?<![\\*])\*(?!\*(?!\*))")


def markdown_escape(text: str) -> str:
    """
    Escape markdown-significant characters in literal text.

    Each of ``* # / ( ) [ ] _`` and backtick gets a leading backslash;
    zero-width spaces are removed.

    Example:
        markdown_escape("a_b (c)")  # "a\\_b \\(c\\)"
    """
    return _SPECIAL_CHARS.sub(r"\\\1", text).replace(ZERO_WIDTH_SPACE, "")


def unbold(text: str) -> str:
    """Remove bold delimiters so the text can be re-wrapped in bold."""
    return _BOLD_DELIMITER.sub("", text)


def unitalic(text: str) -> str:
    """Remove italic delimiters so the text can be re-wrapped in italics."""
    return _ITALIC_DELIMITER.sub("", text)
