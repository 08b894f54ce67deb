"""Lookup of compressed manual pages on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..exceptions import InvalidManPageRequest, ManPageNotFound


@dataclass
class ManPageLookupResult:
    """Result of validating a manual page request."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> ManPageLookupResult:
        """Create a valid result."""
        return ManPageLookupResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> ManPageLookupResult:
        """Create an invalid result with reason."""
        return ManPageLookupResult(is_valid=False, rejection_reason=reason)


class ManPageLocator:
    """
    Resolves (section, page) requests to gzip-compressed man page files.

    Requests containing path separators are rejected so that a request can
    never escape the man page tree.

    Example:
        locator = ManPageLocator(Path("/usr/share/man"))
        path = locator.resolve("1", "ls")  # /usr/share/man/man1/ls.1.gz
    """

    DEFAULT_ROOT = Path("/usr/share/man")
    PATH_SEPARATORS = ("/", "\\")

    def __init__(self, root: Path | None = None, logger: logging.Logger | None = None):
        self.root = root or self.DEFAULT_ROOT
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, section: str, page: str) -> ManPageLookupResult:
        """
        Validate a request without touching the filesystem.

        Args:
            section: Manual section (e.g. "1", "3p")
            page: Page name (e.g. "ls")

        Returns:
            ManPageLookupResult with is_valid and optional rejection_reason
        """
        if not section or not page:
            return ManPageLookupResult.invalid("Section and page are required")

        if any(sep in section + page for sep in self.PATH_SEPARATORS):
            return ManPageLookupResult.invalid("Path separators are not allowed")

        return ManPageLookupResult.valid()

    def path_for(self, section: str, page: str) -> Path:
        return self.root / f"man{section}" / f"{page}.{section}.gz"

    def resolve(self, section: str, page: str) -> Path:
        """
        Resolve a request to an existing file.

        Raises:
            InvalidManPageRequest: If the request is rejected by validate()
            ManPageNotFound: If no such page exists
        """
        validation = self.validate(section, page)
        if not validation.is_valid:
            self.logger.info(f"Rejected man page request {section!r}/{page!r}: {validation.rejection_reason}")
            raise InvalidManPageRequest(validation.rejection_reason or "Invalid request")

        path = self.path_for(section, page)
        if not path.is_file():
            raise ManPageNotFound(f"No manual entry for {page}({section})")
        return path
