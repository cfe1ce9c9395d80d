"""Degenerate fallback tier: progressively looser chunking of cleaned text.

Strategies run in order (paragraphs, sentences, dash-delimited segments).  A
strategy is taken when it actually splits the text and at least one piece
survives the minimum-length filter.  When none qualifies, the whole text is
the single chunk, so non-empty input always yields at least one chunk.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern, Sequence

from loguru import logger

_SPLITTERS: Dict[str, Pattern[str]] = {
    "paragraph": re.compile(r"\n[ \t]*\n+"),
    "sentence": re.compile(r"(?<=[.!?])\s+(?=\S)"),
    "dash": re.compile(r"\s+[-–—]{1,3}\s+|^[ \t]*-{3,}[ \t]*$", re.MULTILINE),
}

DEFAULT_STRATEGIES = ("paragraph", "sentence", "dash")


def split_chunks(
    text: str,
    min_length: int,
    strategies: Sequence[str] = DEFAULT_STRATEGIES,
    extra_separator: Optional[Pattern[str]] = None,
) -> List[str]:
    """Split *text* into record-sized chunks.

    Args:
        text:            Normalized text.
        min_length:      Chunks no longer than this (after strip) are dropped.
        strategies:      Names from DEFAULT_STRATEGIES, tried in the given order.
        extra_separator: Additional domain delimiters applied together with the
                         paragraph strategy.

    Returns:
        Stripped chunks in source order; [] only for blank text.
    """
    text = text.strip()
    if not text:
        return []
    for name in strategies:
        pieces = _SPLITTERS[name].split(text)
        if name == "paragraph" and extra_separator is not None:
            pieces = [part for piece in pieces for part in extra_separator.split(piece)]
        pieces = [p.strip() for p in pieces if p and p.strip()]
        if len(pieces) < 2:
            continue
        survivors = [p for p in pieces if len(p) > min_length]
        if survivors:
            logger.debug(f"[Fallback] {name} split kept {len(survivors)} of {len(pieces)} chunks")
            return survivors
    logger.debug("[Fallback] No split qualified, wrapping the whole text")
    return [text]
