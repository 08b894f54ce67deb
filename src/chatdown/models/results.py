"""Translation result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ImageRef:
    """An image pulled out of the document."""

    src: str
    alt: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        data = {"src": self.src}
        if self.alt is not None:
            data["alt"] = self.alt
        return data


@dataclass
class TranslationResult:
    """
    Output of a translator, the tree walker, or a whole conversion.

    ``markdown`` is None when the node contributes no text (images only,
    for instance). ``images`` holds the side-channel in document order.

    Example:
        result = translate('<p>Hi <img src="a.png" alt="A"></p>')
        result.markdown  # "Hi"
        result.images    # [ImageRef(src="a.png", alt="A")]
    """

    markdown: Optional[str] = None
    images: list[ImageRef] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "markdown": self.markdown,
            "images": [image.to_dict() for image in self.images],
        }
