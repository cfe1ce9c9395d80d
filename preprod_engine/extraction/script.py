"""Script extractor: classify screenplay lines into ScriptElements.

Lines are classified one at a time with exclusive precedence:

    1. scene heading: begins with INT./EXT./INT/EXT/I/E/EST.
    2. transition: CUT TO:, FADE IN:, DISSOLVE TO: ...
    3. character cue: short ALL-CAPS name, optional (age) / (V.O.) suffix
    4. parenthetical: the whole line wrapped in parentheses
    5. dialogue/action: dialogue when the previous element is a cue,
       parenthetical or dialogue; action otherwise

Dialogue names its speaker by scanning back over the elements produced so
far, so the extractor keeps no state outside its output list.
"""
from __future__ import annotations

import re
from typing import List, Optional

from loguru import logger

from preprod_engine.extraction.models import ScriptElement
from preprod_engine.extraction.structure import SCENE_HEADING_RE, StructureSignature
from preprod_engine.extraction.vocabulary import CHARACTER_EXTENSIONS, NON_CONTENT_MARKERS, TRANSITIONS
from preprod_engine.settings import DEFAULT_SETTINGS, ExtractionSettings


def _alternation(words) -> str:
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


_CENTER_TAG_RE = re.compile(r"</?\s*center\s*>", re.IGNORECASE)
_HEADER_HASHES_RE = re.compile(r"^#{1,6}\s+")
_TRANSITION_RE = re.compile(rf"^(?:{_alternation(TRANSITIONS)})\s*:", re.IGNORECASE)
_CHARACTER_RE = re.compile(
    rf"^(?P<name>[A-Z][A-Z0-9 ]*[A-Z0-9])"
    rf"(?:\s*\((?:\d{{1,3}}|{_alternation(CHARACTER_EXTENSIONS)})\))?$"
)
_PARENTHETICAL_RE = re.compile(r"^\(.*\)$")
_DELIMITER_RE = re.compile(r"^[=\-*_#~]{3,}$")
_SCENE_LABEL_RE = re.compile(r"^SCENE\s+\d+[A-Z]?\s*[:.]?$", re.IGNORECASE)
_BANNER_RE = re.compile(
    rf"^[\[(=\-*#<\s]*(?:{_alternation(NON_CONTENT_MARKERS)})\b.*$",
    re.IGNORECASE,
)

_SPEECH_CONTEXT = frozenset({"character", "parenthetical", "dialogue"})


def is_non_content(line: str) -> bool:
    """Guidance banners and scene delimiters that carry no screenplay text."""
    return bool(
        _DELIMITER_RE.match(line) or _SCENE_LABEL_RE.match(line) or _BANNER_RE.match(line)
    )


def character_name(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> Optional[str]:
    """The cue name if *line* is a character cue, else None."""
    if len(line) > settings.character_max_length:
        return None
    match = _CHARACTER_RE.match(line)
    if not match:
        return None
    name = match.group("name").strip()
    if len(name.split()) > settings.character_max_words or not any(c.isalpha() for c in name):
        return None
    return name


def _nearest_character(elements: List[ScriptElement]) -> Optional[str]:
    for element in reversed(elements):
        if element.type == "character":
            return element.character
    return None


def classify_line(
    line: str,
    elements: List[ScriptElement],
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> ScriptElement:
    """Classify one cleaned, non-empty line given the elements before it."""
    if SCENE_HEADING_RE.match(line):
        return ScriptElement(type="scene_heading", content=line)
    if _TRANSITION_RE.match(line):
        return ScriptElement(type="transition", content=line)
    name = character_name(line, settings)
    if name is not None:
        return ScriptElement(type="character", content=line, character=name)
    if _PARENTHETICAL_RE.match(line):
        return ScriptElement(type="parenthetical", content=line)
    if elements and elements[-1].type in _SPEECH_CONTEXT:
        return ScriptElement(type="dialogue", content=line, character=_nearest_character(elements))
    return ScriptElement(type="action", content=line)


def extract_script_elements(
    text: str,
    signature: Optional[StructureSignature] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[ScriptElement]:
    """Pattern tier: one element per content line of normalized *text*."""
    elements: List[ScriptElement] = []
    skipped = 0
    for raw_line in text.split("\n"):
        line = _HEADER_HASHES_RE.sub("", _CENTER_TAG_RE.sub("", raw_line).strip()).strip()
        if not line:
            continue
        if is_non_content(line):
            skipped += 1
            continue
        elements.append(classify_line(line, elements, settings))
    if signature is not None and not signature.has_screenplay_headings:
        logger.debug("[Script] No scene headings detected; lines classified without scene context")
    logger.debug(f"[Script] {len(elements)} elements, {skipped} non-content lines skipped")
    return elements


def script_elements_from_chunks(chunks: List[str]) -> List[ScriptElement]:
    """Fallback tier: each chunk becomes an action element."""
    return [ScriptElement(type="action", content=chunk) for chunk in chunks]
