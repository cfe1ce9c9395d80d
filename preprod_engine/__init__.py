"""Pre-production extraction engine: language-model text → typed records."""

from loguru import logger

from preprod_engine.extraction.engine import extract, extract_content, extract_props_and_wardrobe

logger.disable("preprod_engine")

__all__ = [
    "extract",
    "extract_content",
    "extract_props_and_wardrobe",
]
