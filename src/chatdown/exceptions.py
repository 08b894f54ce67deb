"""Exception types raised by chatdown."""

from __future__ import annotations


class ChatdownError(Exception):
    """Base class for all chatdown errors."""


class MissingAttributeError(ChatdownError, ValueError):
    """
    Raised when an element lacks an attribute it cannot be translated without.

    Example:
        try:
            translate("<img>")
        except MissingAttributeError as e:
            print(e.tag, e.attribute)  # img src
    """

    def __init__(self, tag: str, attribute: str, message: str | None = None):
        self.tag = tag
        self.attribute = attribute
        super().__init__(message or f"<{tag}> element must provide {attribute}")


class ManPageError(ChatdownError):
    """Base class for manual page lookup and rendering errors."""


class InvalidManPageRequest(ManPageError):
    """The requested section or page name is not acceptable."""


class ManPageNotFound(ManPageError):
    """No compressed manual page exists for the request."""


class RenderError(ManPageError):
    """The external document converter failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
