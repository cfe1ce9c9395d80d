"""Structured-payload tier: trust embedded JSON only under a known alias key."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

ALIAS_KEYS: Dict[str, Tuple[str, ...]] = {
    "script": ("elements", "scenes", "screenplay"),
    "storyboard": ("shots", "storyboard", "scenes"),
    "location": ("locations", "sets"),
    "props": ("props", "wardrobe", "costumes"),
}


def parse_payload(text: str) -> Optional[Dict[str, Any]]:
    """Parse *text*, or the outermost {...} span embedded in it, as a JSON object.

    Returns None when neither parses to an object; the failure is logged and
    never raised.
    """
    candidates = [text]
    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end and (start > 0 or end < len(text) - 1):
        candidates.append(text[start:end + 1])
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError) as exc:
            logger.debug(f"[Payload] JSON parse failed, falling back to text parsing: {exc}")
            continue
        if isinstance(data, dict):
            return data
    return None


def first_alias(data: Dict[str, Any], keys: Sequence[str]) -> Optional[List[Any]]:
    """Records under the first alias key holding a list, else None."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, list):
            logger.debug(f"[Payload] Using {len(value)} records under '{key}'")
            return value
    return None


def payload_records(domain: str, text: str) -> Optional[List[Any]]:
    """Tier-1 result for *domain*, or None to fall through to the pattern tier."""
    data = parse_payload(text)
    if data is None:
        return None
    return first_alias(data, ALIAS_KEYS[domain])
