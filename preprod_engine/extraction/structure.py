"""Structure detector: one pass over the lines, one fixed feature signature."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict

NUMBERED_ITEM_RE = re.compile(r"^\s*\d{1,3}[.)]\s+\S")
BULLETED_ITEM_RE = re.compile(r"^\s*[-•*+–]\s+\S")
MARKDOWN_HEADER_RE = re.compile(r"^\s*#{1,6}\s+\S")
CAPS_HEADER_RE = re.compile(r"^[A-Z][A-Z0-9 &'/()-]*:$")
SCENE_HEADING_RE = re.compile(
    r"^\s*(?:\d{1,3}[A-Z]?\.?\s+)?"
    r"(?:(?:INT\.?\s*/\s*EXT|EXT\.?\s*/\s*INT|I/E|INT|EXT)\.?|EST\.)(?=\s|$)",
    re.IGNORECASE,
)
CHARACTER_NAME_RE = re.compile(r"^[A-Z][A-Z0-9 ]*[A-Z0-9](?:\s*\([^)]*\))?$")

_MARKDOWN_RE = re.compile(r"\*\*|__|`|^\s*#{1,6}\s|^\s*>\s|\[[^\]]+\]\([^)]+\)", re.MULTILINE)

_HEADER_MAX_LENGTH = 60
_CHARACTER_MAX_LENGTH = 40


@dataclass(frozen=True)
class StructureSignature:
    has_structured_payload: bool = False
    has_markdown: bool = False
    has_numbered_items: bool = False
    has_bulleted_items: bool = False
    has_headers: bool = False
    has_screenplay_headings: bool = False
    has_character_names: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


def is_header_line(line: str, max_length: int = _HEADER_MAX_LENGTH) -> bool:
    """Markdown header, or a short ALL-CAPS label ending in a colon."""
    stripped = line.strip()
    if MARKDOWN_HEADER_RE.match(stripped):
        return True
    return len(stripped) <= max_length and bool(CAPS_HEADER_RE.match(stripped))


def is_character_line(line: str, max_length: int = _CHARACTER_MAX_LENGTH) -> bool:
    stripped = line.strip()
    return 2 <= len(stripped) <= max_length and bool(CHARACTER_NAME_RE.match(stripped))


def detect(text: str) -> StructureSignature:
    """Compute the StructureSignature of normalized *text*."""
    if not text:
        return StructureSignature()
    lines = [ln for ln in text.split("\n") if ln.strip()]
    return StructureSignature(
        has_structured_payload="{" in text and "}" in text,
        has_markdown=bool(_MARKDOWN_RE.search(text)),
        has_numbered_items=any(NUMBERED_ITEM_RE.match(ln) for ln in lines),
        has_bulleted_items=any(BULLETED_ITEM_RE.match(ln) for ln in lines),
        has_headers=any(is_header_line(ln) for ln in lines),
        has_screenplay_headings=any(SCENE_HEADING_RE.match(ln) for ln in lines),
        has_character_names=any(is_character_line(ln) for ln in lines),
    )
