#!/usr/bin/env python3
"""
Run the OCR pipeline on a local screenshot and print the JSON outcome.

Uses the vision provider keys from .env, exactly like the HTTP service.

Usage:
    python scripts/extract_screenshot.py post.png --mode post
    python scripts/extract_screenshot.py profile.jpg --mode profile --providers anthropic
"""

import argparse
import asyncio
import base64
import json
import mimetypes
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from roast_ocr.config import config
from roast_ocr.extraction.pipeline import run_extraction
from roast_ocr.utils.logger import setup_logging
from roast_ocr.vision.factory import VisionProviderFactory
from roast_ocr.vision.fallback import FallbackChain


def parse_args():
    parser = argparse.ArgumentParser(description="Extract text from a LinkedIn screenshot")
    parser.add_argument("image", type=Path, help="Path to the screenshot")
    parser.add_argument("--mode", choices=["post", "profile"], default="post")
    parser.add_argument(
        "--providers",
        help="Comma-separated provider order, overrides VISION_PROVIDERS"
    )
    return parser.parse_args()


async def main():
    args = parse_args()
    setup_logging("DEBUG", "development")

    if not args.image.is_file():
        print(f"File not found: {args.image}")
        sys.exit(1)

    media_type = mimetypes.guess_type(args.image.name)[0] or "image/png"
    image_base64 = base64.b64encode(args.image.read_bytes()).decode("utf-8")

    settings = config
    if args.providers:
        settings = config.model_copy(update={"VISION_PROVIDERS": args.providers})

    chain = FallbackChain(
        VisionProviderFactory.from_env_config(settings),
        timeout_sec=settings.vision_timeout
    )
    print(f"Providers: {chain.available_providers or 'none configured'}")
    print(f"Image: {args.image} ({media_type}, {len(image_base64)} base64 chars)")

    outcome = await run_extraction(
        {"image_base64": image_base64, "media_type": media_type, "mode": args.mode},
        chain=chain
    )

    print(f"\nStatus: {outcome.status}")
    print(json.dumps(outcome.body, indent=2, ensure_ascii=False))
    sys.exit(0 if outcome.success else 1)


if __name__ == "__main__":
    asyncio.run(main())
