"""Props & wardrobe extractor: inventory lists → Prop and WardrobeItem records.

Section headers ("Props:", "## Wardrobe", "Character: Maya", "Jason:") move
a small state machine between props, wardrobe and character sections and set
the character that wardrobe items belong to.  Bulleted or numbered lines are
items; each is built as a Prop or a WardrobeItem by this precedence:

    1. props section, or the item itself says "prop"          → Prop
    2. wardrobe/character section, or a wardrobe keyword      → WardrobeItem
    3. any clothing piece named                               → WardrobeItem
    4. otherwise                                              → Prop

A line that is both a prop and a garment resolves by section, not content.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from loguru import logger

from preprod_engine.extraction.fields import (
    attributed_character,
    classify_importance,
    classify_procurement,
    classify_prop_category,
    is_wardrobe_text,
    keyword_pattern,
    list_pieces,
    match_color,
    match_style,
    mentions_clothing,
    parse_cost,
    parse_quantity,
    parse_scene_numbers,
)
from preprod_engine.extraction.models import (
    Procurement,
    Prop,
    PropsAndWardrobe,
    WardrobeItem,
)
from preprod_engine.extraction.payload import first_alias, parse_payload
from preprod_engine.extraction.structure import StructureSignature
from preprod_engine.extraction.vocabulary import SECTION_KEYWORDS
from preprod_engine.settings import DEFAULT_SETTINGS, ExtractionSettings

_ITEM_RE = re.compile(r"^(?:[-•*+–]|\d{1,3}[.)])\s*")
_NAME_SPLIT_RE = re.compile(r"\s+[-–—]\s+|:|,|\(")
_HEADER_HASHES_RE = re.compile(r"^#{1,6}\s*")
_CHARACTER_LABEL_RE = re.compile(r"^characters?\b\s*[:\-–]?\s*(?P<name>.*?)\s*:?$", re.IGNORECASE)
_NAME_HEADER_RE = re.compile(
    r"^(?P<name>[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?|[A-Z][A-Z]+(?:\s+[A-Z][A-Z]+)?)(?:\s*\([^)]*\))?:$"
)
_POSSESSIVE_RE = re.compile(r"^(?P<name>[A-Z][a-z]+)['’]s\b")
_PROP_WORD_RE = keyword_pattern(("prop",))
_SECTION_RES = {name: keyword_pattern(words) for name, words in SECTION_KEYWORDS.items()}

_Section = Tuple[str, Optional[str]]


def section_header(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> Optional[_Section]:
    """(section, character) when *line* is a section header, else None.

    character is None when the header does not name one.
    """
    heading = _HEADER_HASHES_RE.sub("", line).strip()
    if not heading or len(heading) > settings.header_max_length:
        return None
    label = _CHARACTER_LABEL_RE.match(heading)
    if label:
        return "character", label.group("name") or None
    possessive = _POSSESSIVE_RE.match(heading)
    for section, pattern in _SECTION_RES.items():
        if pattern.search(heading):
            if section == "wardrobe":
                return section, (possessive.group("name") if possessive else attributed_character(heading))
            return section, None
    named = _NAME_HEADER_RE.match(heading)
    if named:
        return "character", named.group("name").strip()
    return None


def item_name(text: str) -> str:
    """Leading label of an item: "Coffee mug - chipped, scene 3" → "Coffee mug"."""
    head = _NAME_SPLIT_RE.split(text, maxsplit=1)[0].strip()
    return head or text.strip()


def build_prop(text: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> Prop:
    return Prop(
        name=item_name(text),
        category=classify_prop_category(text),
        description=text,
        quantity=parse_quantity(text),
        importance=classify_importance(text),
        scenes=parse_scene_numbers(text, settings.max_scene_range),
        procurement=Procurement(
            source=classify_procurement(text),
            estimated_cost=parse_cost(text),
        ),
    )


def build_wardrobe_item(
    text: str,
    character: str = "",
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> WardrobeItem:
    return WardrobeItem(
        character=character or attributed_character(text) or "Unknown",
        outfit=item_name(text),
        pieces=list_pieces(text),
        color=match_color(text) or "unspecified",
        style=match_style(text) or "casual",
        scenes=parse_scene_numbers(text, settings.max_scene_range),
    )


def classify_item(
    text: str,
    section: str,
    character: str,
    inventory: PropsAndWardrobe,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> None:
    """Build *text* as a Prop or WardrobeItem and add it to *inventory*."""
    if section == "props" or _PROP_WORD_RE.search(text):
        inventory.props.append(build_prop(text, settings))
    elif section in ("wardrobe", "character") or is_wardrobe_text(text):
        inventory.wardrobe.append(build_wardrobe_item(text, character, settings))
    elif mentions_clothing(text):
        inventory.wardrobe.append(build_wardrobe_item(text, character, settings))
    else:
        inventory.props.append(build_prop(text, settings))


def scan_inventory(
    text: str,
    signature: Optional[StructureSignature] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> PropsAndWardrobe:
    """Pattern tier: section-aware scan of bulleted and numbered items."""
    inventory = PropsAndWardrobe()
    if signature is not None and not (signature.has_bulleted_items or signature.has_numbered_items):
        logger.debug("[Props] No list items detected; skipping the line scan")
        return inventory
    section = ""
    character = ""
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if _ITEM_RE.match(line):
            item = _ITEM_RE.sub("", line).strip()
            if item:
                classify_item(item, section, character, inventory, settings)
            continue
        header = section_header(line, settings)
        if header is not None:
            section, named = header
            if named:
                character = named
            logger.debug(f"[Props] Section '{section}' (character={character or 'none'})")
    logger.debug(f"[Props] {len(inventory.props)} props, {len(inventory.wardrobe)} wardrobe items")
    return inventory


def inventory_from_payload(text: str) -> Optional[PropsAndWardrobe]:
    """Tier 1: the payload's props and wardrobe/costumes lists, untouched."""
    data = parse_payload(text)
    if data is None:
        return None
    props = first_alias(data, ("props",))
    wardrobe = first_alias(data, ("wardrobe", "costumes"))
    if props is None and wardrobe is None:
        return None
    return PropsAndWardrobe(props=props or [], wardrobe=wardrobe or [])


def inventory_from_chunks(
    chunks: List[str],
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> PropsAndWardrobe:
    """Fallback tier: each chunk is classified as an item with no section."""
    inventory = PropsAndWardrobe()
    for chunk in chunks:
        text = " ".join(part.strip() for part in chunk.split("\n") if part.strip())
        classify_item(text, "", "", inventory, settings)
    return inventory
