"""
Health check endpoint for monitoring.

Provides /health endpoint for external health checks (Render.com, etc.)
"""

import time

from aiohttp import web

from roast_ocr.config import config
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.factory import VisionProviderFactory

logger = get_logger(__name__)

START_TIME_KEY = web.AppKey("start_time", float)


async def health_handler(request: web.Request) -> web.Response:
    """Handle health check requests."""
    start_time = request.app.get(START_TIME_KEY)
    status = {
        "status": "ok",
        "uptime_seconds": int(time.time() - start_time) if start_time else 0,
        "environment": config.ENVIRONMENT,
    }

    # Report which vision providers have credentials, never the keys
    try:
        status["vision_providers"] = [
            provider_config.identifier
            for provider_config in VisionProviderFactory.build_provider_configs()
            if provider_config.is_configured
        ]
    except Exception as e:
        status["vision_providers"] = "unknown"
        logger.debug("Health check: provider config error", error=str(e))

    return web.json_response(status)
