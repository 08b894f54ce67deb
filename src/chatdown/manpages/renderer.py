"""Rendering of compressed manual pages to HTML and chat markdown."""

from __future__ import annotations

import asyncio
import gzip
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ..conversion.converter import ChatMarkdownConverter
from ..exceptions import RenderError
from ..models.config import ManualConfig
from ..models.results import TranslationResult
from .locator import ManPageLocator

logger = logging.getLogger(__name__)

DEFAULT_PANDOC_ARGS = ("-r", "man", "-t", "html")


def _read_gzip(path: Path) -> bytes:
    with gzip.open(path, "rb") as f:
        return f.read()


class PandocRenderer:
    """
    Renders gzip-compressed roff manual pages to HTML with pandoc.

    Example:
        renderer = PandocRenderer()
        html = await renderer.render(Path("/usr/share/man/man1/ls.1.gz"))
    """

    def __init__(self, command: str = "pandoc", args: Sequence[str] = DEFAULT_PANDOC_ARGS):
        """
        Initialize the renderer.

        Args:
            command: Converter executable
            args: Arguments reading roff from stdin and writing HTML to stdout
        """
        self._command = command
        self._args = list(args)

    async def render(self, path: Path) -> str:
        """
        Decompress a manual page and convert it to HTML.

        Args:
            path: Path to the .gz manual page

        Returns:
            HTML produced by the converter

        Raises:
            RenderError: If the file is not valid gzip, the executable is
                missing, or it exits with a non-zero status
        """
        try:
            source = await asyncio.to_thread(_read_gzip, path)
        except (OSError, EOFError) as e:
            raise RenderError(f"Could not decompress {path}: {e}") from e

        try:
            process = await asyncio.create_subprocess_exec(
                self._command,
                *self._args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise RenderError(f"Converter executable not found: {self._command}") from e

        stdout, stderr = await process.communicate(source)
        if process.returncode != 0:
            error_output = stderr.decode("utf-8", errors="replace")
            raise RenderError(
                f"exit code {process.returncode}\n{error_output}",
                returncode=process.returncode,
                stderr=error_output,
            )

        logger.debug(f"Rendered {path} to {len(stdout)} bytes of HTML")
        return stdout.decode("utf-8", errors="replace")


class ManPageService:
    """
    Looks up, renders and translates manual pages.

    Example:
        service = ManPageService.from_config(ManualConfig())
        result = await service.render_markdown("1", "ls")
        print(result.markdown)
    """

    def __init__(
        self,
        locator: Optional[ManPageLocator] = None,
        renderer: Optional[PandocRenderer] = None,
        converter: Optional[ChatMarkdownConverter] = None,
    ):
        self.locator = locator or ManPageLocator()
        self.renderer = renderer or PandocRenderer()
        self.converter = converter or ChatMarkdownConverter()

    @classmethod
    def from_config(
        cls,
        config: ManualConfig,
        converter: Optional[ChatMarkdownConverter] = None,
    ) -> ManPageService:
        return cls(
            locator=ManPageLocator(config.root),
            renderer=PandocRenderer(config.pandoc_command, config.pandoc_args),
            converter=converter,
        )

    async def render_markdown(self, section: str, page: str) -> TranslationResult:
        """
        Render a manual page to chat markdown.

        Raises:
            InvalidManPageRequest: If the request contains path separators
            ManPageNotFound: If the page does not exist
            RenderError: If conversion to HTML fails
            MissingAttributeError: If the HTML holds an image without source
        """
        path = self.locator.resolve(section, page)
        html = await self.renderer.render(path)
        return self.converter.convert(html)

    def render_markdown_blocking(self, section: str, page: str) -> TranslationResult:
        """Synchronous wrapper around render_markdown()."""
        return asyncio.run(self.render_markdown(section, page))
