"""
RoastMyPost Screenshot OCR Service - Main Entry Point

An asynchronous HTTP service that:
- Accepts LinkedIn post/profile screenshots as base64
- Extracts their text with a vision model (OpenRouter, falling back to Anthropic)
- Returns the post text or normalized profile fields as JSON
"""

import asyncio
import signal
import sys

from roast_ocr.api.server import start_server, stop_server
from roast_ocr.config import config
from roast_ocr.utils.logger import get_logger, setup_logging
from roast_ocr.vision.factory import VisionProviderFactory

# Initialize logging
setup_logging(config.LOG_LEVEL, config.ENVIRONMENT)
logger = get_logger(__name__)


async def main():
    """
    Main entry point for the service.

    Initialization sequence:
    1. Setup logging
    2. Report configured vision providers
    3. Start the HTTP server
    4. Run until interrupted
    """
    configured = [
        provider_config.identifier
        for provider_config in VisionProviderFactory.build_provider_configs()
        if provider_config.is_configured
    ]
    logger.info("Starting RoastMyPost OCR service",
                environment=config.ENVIRONMENT,
                vision_providers=config.vision_provider_list,
                configured_providers=configured)

    if not configured:
        logger.warning("No vision provider API key set; extraction requests will fail "
                       "until OPENROUTER_API_KEY or ANTHROPIC_API_KEY is configured")

    try:
        await start_server()
        # Keep running until cancelled
        await asyncio.Event().wait()

    except asyncio.CancelledError:
        logger.info("Shutdown requested")
    except Exception as e:
        logger.error("Fatal error", error=str(e), exc_info=True)
        raise
    finally:
        logger.info("Shutting down...")
        await stop_server()
        logger.info("Shutdown complete")


def handle_shutdown(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info("Received shutdown signal", signal=signum)
    sys.exit(0)


def run():
    """Console entry point."""
    # Register signal handlers for graceful shutdown
    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)

    # Run the service
    asyncio.run(main())


if __name__ == "__main__":
    run()
