"""Storyboard extractor: split shot descriptions into numbered StoryboardShots.

Three marker families are tried in order and the first one that matches any
line wins:

    1. explicit labels: "Shot 4:", "### Panel 2", "3. ..."
    2. camera sizes: "WIDE: ...", "CLOSE-UP - ...", "Medium shot: ..."
    3. bold markers: "**Opening frame** ..." (read before emphasis is stripped)

Shots are numbered by extraction order.  A number in the source stays in the
description as a hint and never becomes the index.
"""
from __future__ import annotations

import re
from typing import List, Optional, Pattern

from loguru import logger

from preprod_engine.extraction.fields import first_rule
from preprod_engine.extraction.models import StoryboardShot
from preprod_engine.extraction.normalizer import normalize
from preprod_engine.extraction.structure import StructureSignature
from preprod_engine.extraction.vocabulary import SHOT_MARKER_KEYWORDS, SHOT_SIZES
from preprod_engine.settings import DEFAULT_SETTINGS, ExtractionSettings

DEFAULT_SHOT_TYPE = "medium"

_SIZE_WORDS = "|".join(re.escape(k) for k in sorted(SHOT_MARKER_KEYWORDS, key=len, reverse=True))

_LABEL_MARKER_RE = re.compile(
    r"^(?:#{1,6}\s*)?(?:(?:shot|panel|frame)\s*#?\s*\d+\b|\d{1,3}[.)](?=\s))",
    re.IGNORECASE,
)
_SIZE_MARKER_RES: List[Pattern[str]] = [
    re.compile(rf"^(?:#{{1,6}}\s*)?(?:{_SIZE_WORDS})(?:\s+SHOT)?\b(?![-'])"),
    re.compile(rf"^(?:#{{1,6}}\s*)?(?:{_SIZE_WORDS})\s+shot\b", re.IGNORECASE),
]
_BOLD_MARKER_RE = re.compile(r"^\s*(?:#{1,6}\s*)?(?:\d{1,3}[.)]\s*)?\*\*[^*\n]+\*\*")
_WHITESPACE_RE = re.compile(r"\s+")
_HEADER_HASHES_RE = re.compile(r"^\s*#{1,6}\s*")


def _matches(line: str, patterns: List[Pattern[str]]) -> bool:
    return any(p.match(line) for p in patterns)


def _segments(lines: List[str], patterns: List[Pattern[str]]) -> List[List[str]]:
    """Group *lines* into blocks, each opened by a marker line.

    Lines before the first marker belong to no shot.
    """
    blocks: List[List[str]] = []
    for line in lines:
        if _matches(line, patterns):
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)
    return blocks


def _description(block: List[str]) -> str:
    text = " ".join(_HEADER_HASHES_RE.sub("", line) for line in block)
    return _WHITESPACE_RE.sub(" ", text).strip()


def build_shot(number: int, description: str) -> StoryboardShot:
    """A shot with the placeholder camera fields and a keyword-derived type."""
    return StoryboardShot(
        number=number,
        shot_type=first_rule(SHOT_SIZES, description, DEFAULT_SHOT_TYPE),
        description=description,
    )


def extract_storyboard_shots(
    text: str,
    signature: Optional[StructureSignature] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    raw: str = "",
) -> List[StoryboardShot]:
    """Pattern tier over normalized *text*; *raw* feeds the bold-marker family."""
    lines = [ln.strip() for ln in text.split("\n") if ln.strip()]
    families = (
        ("label", [_LABEL_MARKER_RE]),
        ("camera-size", _SIZE_MARKER_RES),
    )
    for name, patterns in families:
        blocks = _segments(lines, patterns)
        if blocks:
            logger.debug(f"[Storyboard] {name} markers matched {len(blocks)} shots")
            return [build_shot(i, _description(b)) for i, b in enumerate(blocks, start=1)]

    if "**" in raw:
        emphasized = normalize(raw, keep_emphasis=True)
        bold_lines = [ln.strip() for ln in emphasized.split("\n") if ln.strip()]
        blocks = _segments(bold_lines, [_BOLD_MARKER_RE])
        if blocks:
            logger.debug(f"[Storyboard] bold markers matched {len(blocks)} shots")
            return [
                build_shot(i, normalize(_description(b)))
                for i, b in enumerate(blocks, start=1)
            ]
    return []


def shots_from_chunks(chunks: List[str]) -> List[StoryboardShot]:
    """Fallback tier: one shot per chunk, numbered from 1."""
    return [build_shot(i, _description(chunk.split("\n"))) for i, chunk in enumerate(chunks, start=1)]
