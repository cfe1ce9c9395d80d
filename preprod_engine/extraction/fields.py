"""Field sub-extractors shared by the domain extractors.

Each helper reads one field out of a line or segment of text.  All are pure
and stateless; a helper that finds nothing returns its documented default
rather than raising.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Sequence

from preprod_engine.extraction.vocabulary import (
    CLOTHING_PIECES,
    COLORS,
    IMPORTANCE_RULES,
    PERMIT_RULES,
    PROCUREMENT_RULES,
    PROP_CATEGORIES,
    SHOT_SIZES,
    STYLES,
    TIME_OF_DAY,
    WARDROBE_KEYWORDS,
    KeywordRule,
)


def keyword_pattern(keywords: Iterable[str], plurals: bool = True) -> Pattern[str]:
    """Whole-word, case-insensitive alternation; longer keywords win ties."""
    ordered = sorted(set(keywords), key=len, reverse=True)
    suffix = r"(?:s|es)?" if plurals else ""
    body = "|".join(re.escape(k) for k in ordered)
    return re.compile(rf"(?<![\w-])(?:{body}){suffix}(?![\w-])", re.IGNORECASE)


def first_rule(rules: Sequence[KeywordRule], text: str, default: str) -> str:
    """Value of the first rule (table order) with a keyword present in *text*."""
    for rule in rules:
        if _RULE_PATTERNS[rule].search(text):
            return rule.value
    return default


_ALL_RULES: List[KeywordRule] = [
    *PROP_CATEGORIES,
    *IMPORTANCE_RULES,
    *PROCUREMENT_RULES,
    *PERMIT_RULES,
    *SHOT_SIZES,
]
_RULE_PATTERNS = {rule: keyword_pattern(rule.keywords) for rule in _ALL_RULES}

_WARDROBE_RE = keyword_pattern(WARDROBE_KEYWORDS)
_PIECES_RE = keyword_pattern(CLOTHING_PIECES)
_COLOR_RE = keyword_pattern(COLORS, plurals=False)
_STYLE_PATTERNS = [(style, keyword_pattern([style], plurals=False)) for style in STYLES]
_TIME_RE = keyword_pattern(TIME_OF_DAY, plurals=False)


# ── Scene numbers ─────────────────────────────────────────────────────────────

# Digit runs are bounded; a longer run is not read as a number.
_NUM_ITEM = r"\d{1,5}(?!\d)(?:\s*(?:-|–|—|to|through|thru)\s*\d{1,5}(?!\d))?"
_SCENE_LIST_RE = re.compile(
    rf"\b(?:scenes?|sc\.?)\s*[:#]?\s*({_NUM_ITEM}(?:\s*(?:,|&|;|\band\b)\s*{_NUM_ITEM})*)",
    re.IGNORECASE,
)
_SCENE_ITEM_RE = re.compile(r"(\d{1,5})(?:\s*(?:-|–|—|to|through|thru)\s*(\d{1,5}))?", re.IGNORECASE)


def parse_scene_numbers(text: str, max_range: int = 500) -> List[int]:
    """Scene numbers referenced as "scene 4", "Scenes: 1-3, 7" or "sc. 2 and 5".

    Returns de-duplicated ascending integers.  A range wider than
    *max_range* contributes only its two endpoints.
    """
    match = _SCENE_LIST_RE.search(text or "")
    if not match:
        return []
    scenes = set()
    for item in _SCENE_ITEM_RE.finditer(match.group(1)):
        start = int(item.group(1))
        if item.group(2) is None:
            scenes.add(start)
            continue
        end = int(item.group(2))
        if start > end:
            start, end = end, start
        if end - start + 1 > max_range:
            scenes.update((start, end))
        else:
            scenes.update(range(start, end + 1))
    return sorted(scenes)


# ── Quantity and cost ─────────────────────────────────────────────────────────

_QUANTITY_RES = (
    re.compile(r"\b(\d{1,6})\s*(?:pcs?|pieces?|items?|units?|sets? of|copies)\b", re.IGNORECASE),
    re.compile(r"\b(?:qty|quantity)\s*[:=]?\s*(\d{1,6})(?!\d)", re.IGNORECASE),
    re.compile(r"(?:^|\s|\()(?:x|×)\s*(\d{1,6})\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,6})\s*(?:x|×)(?=\s|$|\))", re.IGNORECASE),
)
_COST_RE = re.compile(
    r"\$\s*\d[\d,]*(?:\.\d+)?(?:\s*[-–]\s*\$?\s*\d[\d,]*(?:\.\d+)?)?"
    r"|\b\d[\d,]*(?:\.\d+)?(?:\s*[-–]\s*\d[\d,]*(?:\.\d+)?)?\s*(?:dollars?|usd)\b",
    re.IGNORECASE,
)


def parse_quantity(text: str) -> int:
    """Item count from "3 pcs", "qty: 2", "x4" or "2x"; 1 when absent."""
    for pattern in _QUANTITY_RES:
        match = pattern.search(text or "")
        if match:
            return max(1, int(match.group(1)))
    return 1


def parse_cost(text: str) -> Optional[str]:
    """Monetary text such as "$50", "$100-200" or "300 dollars", verbatim."""
    match = _COST_RE.search(text or "")
    return match.group(0).strip() if match else None


# ── Wardrobe ──────────────────────────────────────────────────────────────────


def is_wardrobe_text(text: str) -> bool:
    return bool(_WARDROBE_RE.search(text or ""))


def mentions_clothing(text: str) -> bool:
    return bool(_PIECES_RE.search(text or ""))


def list_pieces(text: str) -> List[str]:
    """Garments named in *text*, in order of appearance; ["outfit"] if none."""
    pieces: List[str] = []
    for match in _PIECES_RE.finditer(text or ""):
        piece = _singular(match.group(0).lower())
        if piece not in pieces:
            pieces.append(piece)
    return pieces or ["outfit"]


def _singular(word: str) -> str:
    if word in CLOTHING_PIECES:
        return word
    for suffix in ("es", "s"):
        if word.endswith(suffix) and word[: -len(suffix)] in CLOTHING_PIECES:
            return word[: -len(suffix)]
    return word


def match_color(text: str) -> Optional[str]:
    match = _COLOR_RE.search(text or "")
    return match.group(0).lower() if match else None


def match_style(text: str) -> Optional[str]:
    for style, pattern in _STYLE_PATTERNS:
        if pattern.search(text or ""):
            return style
    return None


_FOR_NAME_RE = re.compile(r"\bfor\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\b")


def attributed_character(text: str) -> Optional[str]:
    """Name in a "... for Jason" phrase, if the item names its wearer."""
    match = _FOR_NAME_RE.search(text or "")
    return match.group(1) if match else None


# ── Props ─────────────────────────────────────────────────────────────────────


def classify_prop_category(text: str) -> str:
    return first_rule(PROP_CATEGORIES, text or "", "hand-prop")


def classify_importance(text: str) -> str:
    return first_rule(IMPORTANCE_RULES, text or "", "supporting")


def classify_procurement(text: str) -> str:
    return first_rule(PROCUREMENT_RULES, text or "", "purchase")


# ── Locations ─────────────────────────────────────────────────────────────────

_INT_EXT_RE = re.compile(
    r"\b(?:int\.?\s*/\s*ext|ext\.?\s*/\s*int|i/e|interior\s*/\s*exterior|interior and exterior)\b",
    re.IGNORECASE,
)
_EXTERIOR_RE = re.compile(r"(?<!\w)(?:ext\.|exterior|outdoors?|outside)(?!\w)", re.IGNORECASE)
_INTERIOR_RE = re.compile(r"(?<!\w)(?:int\.|interior|indoors?|inside)(?!\w)", re.IGNORECASE)


def classify_location_type(text: str) -> str:
    """interior / exterior / interior-exterior; interior when unstated."""
    text = text or ""
    if _INT_EXT_RE.search(text):
        return "interior-exterior"
    if _EXTERIOR_RE.search(text):
        return "exterior"
    if _INTERIOR_RE.search(text):
        return "interior"
    return "interior"


def match_times_of_day(text: str) -> List[str]:
    """Time-of-day tags in order of appearance, lower-cased, de-duplicated."""
    tags: List[str] = []
    for match in _TIME_RE.finditer(text or ""):
        tag = match.group(0).lower()
        if tag not in tags:
            tags.append(tag)
    return tags


def classify_permit(text: str) -> str:
    """Permit status named on a permit line.

    A permit mentioned with no status word is taken as required.
    """
    return first_rule(PERMIT_RULES, text or "", "required")


_PARKING_RE = re.compile(r"(?<!\d)(\d{1,6})\s*(?:parking\s+)?(?:spaces?|spots?|cars?|vehicles?)", re.IGNORECASE)


def parse_parking_spaces(text: str) -> Optional[int]:
    match = _PARKING_RE.search(text or "")
    return int(match.group(1)) if match else None
