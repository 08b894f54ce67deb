"""Manual page lookup and rendering for chatdown."""

from .locator import ManPageLocator, ManPageLookupResult
from .renderer import ManPageService, PandocRenderer

__all__ = [
    "ManPageLocator",
    "ManPageLookupResult",
    "ManPageService",
    "PandocRenderer",
]
