"""
HTTP server for the OCR API.

Routes:
    POST /api/ocr  - screenshot extraction
    GET  /health   - health check
    GET  /         - health check
"""

import time
from typing import Optional

from aiohttp import web

from roast_ocr.api.health import START_TIME_KEY, health_handler
from roast_ocr.api.ocr import FALLBACK_CHAIN_KEY, ocr_handler
from roast_ocr.config import config
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.fallback import FallbackChain

logger = get_logger(__name__)

# Server state
_runner: Optional[web.AppRunner] = None
_site: Optional[web.TCPSite] = None


def create_app(chain: Optional[FallbackChain] = None) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        chain: Optional FallbackChain shared by all requests; when omitted
            each request builds one from the current config

    Returns:
        web.Application
    """
    app = web.Application(client_max_size=(config.MAX_IMAGE_SIZE_MB * 2) * 1024 * 1024)
    app[START_TIME_KEY] = time.time()
    if chain is not None:
        app[FALLBACK_CHAIN_KEY] = chain

    app.router.add_get("/", health_handler)
    app.router.add_get("/health", health_handler)
    app.router.add_post("/api/ocr", ocr_handler)
    return app


async def start_server(app: Optional[web.Application] = None) -> None:
    """Start the HTTP server."""
    global _runner, _site

    _runner = web.AppRunner(app or create_app())
    await _runner.setup()

    _site = web.TCPSite(_runner, config.API_HOST, config.API_PORT)
    await _site.start()

    logger.info("OCR server started", host=config.API_HOST, port=config.API_PORT)


async def stop_server() -> None:
    """Stop the HTTP server."""
    global _runner, _site

    if _runner:
        await _runner.cleanup()
        _runner = None
        _site = None
        logger.info("OCR server stopped")
