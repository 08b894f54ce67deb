"""HTTP service rendering manual pages as chat markdown."""

from __future__ import annotations

import logging
from typing import Optional

from aiohttp import web

from . import __version__
from .conversion.converter import ChatMarkdownConverter
from .exceptions import InvalidManPageRequest, ManPageNotFound
from .manpages.renderer import ManPageService
from .models.config import ChatdownConfig

logger = logging.getLogger(__name__)

HOMEPAGE = "https://github.com/chatdown/chatdown"

SERVICE_KEY = web.AppKey("service", ManPageService)

INDEX_HTML = (
    '<!doctype html><html style="color-scheme:light dark">'
    '<meta name="viewport" content="width=device-width, initial-scale=1" />'
    'chatdown v{version} - <a href="{homepage}">Source</a></html>'
)


async def index(request: web.Request) -> web.Response:
    return web.Response(
        text=INDEX_HTML.format(version=__version__, homepage=HOMEPAGE),
        content_type="text/html",
    )


async def manpage(request: web.Request) -> web.Response:
    """Render /{section}/{page} as chat markdown."""
    section = request.match_info["section"]
    page = request.match_info["page"]
    service = request.app[SERVICE_KEY]

    try:
        result = await service.render_markdown(section, page)
    except InvalidManPageRequest:
        return web.Response(status=400)
    except ManPageNotFound:
        logger.info(f"Man page not found: {page}({section})")
        return web.Response(status=404, text="not found")
    except Exception:
        logger.exception(f"Failed to render man page {page}({section})")
        return web.Response(status=500, text="error rendering manpage")

    logger.info(f"Rendered {page}({section}): {len(result.markdown or '')} characters")
    return web.Response(text=result.markdown or "", content_type="text/plain", charset="utf-8")


def create_app(
    config: Optional[ChatdownConfig] = None,
    service: Optional[ManPageService] = None,
) -> web.Application:
    """
    Create the aiohttp application.

    Args:
        config: Service configuration (defaults if None)
        service: Man page service (built from config if None)

    Returns:
        Configured application
    """
    config = config or ChatdownConfig()
    if service is None:
        converter = ChatMarkdownConverter.from_config(config.conversion)
        service = ManPageService.from_config(config.manual, converter=converter)

    app = web.Application()
    app[SERVICE_KEY] = service
    app.router.add_get("/", index)
    app.router.add_get("/{section}/{page}", manpage)
    return app


def run_server(config: Optional[ChatdownConfig] = None) -> None:
    """Run the HTTP service until interrupted."""
    config = config or ChatdownConfig()
    app = create_app(config)
    logger.info(f"Listening on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
