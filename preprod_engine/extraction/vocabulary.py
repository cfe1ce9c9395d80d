"""Keyword tables shared by the extractors.

Tables are immutable and ordered: where a lookup returns the first hit, the
table order is the precedence.  Extend a table here rather than adding
literals to extractor control flow.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class KeywordRule:
    """Maps any of *keywords* (whole-word, case-insensitive) to *value*."""

    value: str
    keywords: Tuple[str, ...]


# ── Normalizer ────────────────────────────────────────────────────────────────

PREAMBLE_OPENERS: Tuple[str, ...] = (
    "certainly",
    "sure",
    "of course",
    "absolutely",
    "great",
    "okay",
    "ok",
)

PREAMBLE_LEADS: Tuple[str, ...] = (
    "here is",
    "here are",
    "here's",
    "below is",
    "below are",
    "i'll create",
    "i will create",
    "i've created",
    "i have created",
    "i'll provide",
    "i will provide",
    "i've prepared",
    "i have prepared",
    "i'll generate",
    "i've generated",
    "i'd be happy to",
    "i would be happy to",
    "let me create",
    "let me provide",
)

CLOSING_LEADS: Tuple[str, ...] = (
    "let me know if",
    "i hope this helps",
    "feel free to",
    "would you like me to",
)

# ── Script ────────────────────────────────────────────────────────────────────

TRANSITIONS: Tuple[str, ...] = (
    "SMASH CUT TO",
    "MATCH CUT TO",
    "JUMP CUT TO",
    "CUT TO",
    "CUT TO BLACK",
    "DISSOLVE TO",
    "FADE TO BLACK",
    "FADE TO",
    "FADE IN",
    "FADE OUT",
    "WIPE TO",
    "IRIS OUT",
    "TIME CUT",
    "INTERCUT",
    "BACK TO",
)

CHARACTER_EXTENSIONS: Tuple[str, ...] = ("V.O.", "O.S.", "O.C.", "CONT'D", "CONT’D")

# Banners an orchestration prompt leaves in the draft; never screenplay content.
NON_CONTENT_MARKERS: Tuple[str, ...] = (
    "ENGINE GUIDANCE",
    "ENGINE NOTES",
    "GENERATION NOTES",
    "END OF SCENE",
    "END OF SCRIPT",
    "END OF EPISODE",
    "SCENE BREAK",
)

# ── Storyboard ────────────────────────────────────────────────────────────────

SHOT_SIZES: Tuple[KeywordRule, ...] = (
    KeywordRule("extreme-close-up", ("extreme close-up", "extreme close up", "ecu", "xcu")),
    KeywordRule("close-up", ("close-up", "close up", "closeup")),
    KeywordRule("medium-close-up", ("medium close-up", "medium close up", "mcu")),
    KeywordRule("over-the-shoulder", ("over the shoulder", "over-the-shoulder", "ots")),
    KeywordRule("establishing", ("establishing",)),
    KeywordRule("extreme-wide", ("extreme wide", "extreme long")),
    KeywordRule("wide", ("wide", "long shot", "full shot")),
    KeywordRule("medium", ("medium", "mid shot")),
    KeywordRule("pov", ("pov", "point of view")),
    KeywordRule("insert", ("insert",)),
    KeywordRule("aerial", ("aerial", "drone", "bird's eye", "birds eye")),
    KeywordRule("tracking", ("tracking",)),
    KeywordRule("two-shot", ("two shot", "two-shot")),
)

# Line-leading keywords that open a storyboard shot block.
SHOT_MARKER_KEYWORDS: Tuple[str, ...] = (
    "EXTREME CLOSE-UP",
    "EXTREME CLOSE UP",
    "EXTREME WIDE",
    "MEDIUM CLOSE-UP",
    "MEDIUM CLOSE UP",
    "OVER THE SHOULDER",
    "OVER-THE-SHOULDER",
    "ESTABLISHING",
    "CLOSE-UP",
    "CLOSE UP",
    "CLOSEUP",
    "CLOSE",
    "WIDE",
    "MEDIUM",
    "POV",
    "INSERT",
    "AERIAL",
    "TRACKING",
    "TWO SHOT",
    "TWO-SHOT",
    "ECU",
    "MCU",
)

# ── Location ──────────────────────────────────────────────────────────────────

LOCATION_NOUNS: Tuple[str, ...] = (
    "building",
    "office",
    "house",
    "studio",
    "park",
    "location",
    "room",
    "space",
    "shop",
    "store",
    "cafe",
    "restaurant",
    "bar",
    "apartment",
    "warehouse",
    "street",
    "alley",
    "beach",
    "station",
    "hospital",
    "school",
    "church",
    "garage",
    "kitchen",
    "hall",
    "lobby",
    "rooftop",
)

TIME_OF_DAY: Tuple[str, ...] = (
    "golden hour",
    "magic hour",
    "morning",
    "afternoon",
    "evening",
    "night",
    "midnight",
    "midday",
    "noon",
    "dawn",
    "dusk",
    "sunrise",
    "sunset",
    "day",
)

# Checked in order; negations first so "no permit required" is not "required".
PERMIT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule("not-required", ("not required", "not needed", "no permit", "no license", "none", "n/a", "unnecessary")),
    KeywordRule("obtained", ("obtained", "approved", "secured", "granted", "issued")),
    KeywordRule("pending", ("pending", "applied", "in progress", "submitted", "awaiting")),
    KeywordRule("required", ("required", "needed", "necessary", "must")),
)

# ── Props & wardrobe ──────────────────────────────────────────────────────────

PROP_CATEGORIES: Tuple[KeywordRule, ...] = (
    KeywordRule("furniture", ("furniture", "table", "chair", "sofa", "couch", "desk", "bed", "bench", "stool", "shelf")),
    KeywordRule("vehicle", ("car", "vehicle", "bike", "bicycle", "motorcycle", "truck", "van", "bus", "boat", "scooter")),
    KeywordRule("weapon", ("weapon", "gun", "pistol", "rifle", "knife", "sword", "dagger", "bat", "axe")),
    KeywordRule("technology", ("phone", "smartphone", "computer", "laptop", "tablet", "tech", "monitor", "camera", "radio", "tv", "television")),
    KeywordRule("consumable", ("food", "drink", "consumable", "coffee", "wine", "beer", "cake", "bottle", "cigarette", "meal")),
    KeywordRule("set-decoration", ("decoration", "set", "decor", "poster", "painting", "plant", "lamp", "curtain", "rug")),
)

IMPORTANCE_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule("hero", ("important", "key", "main", "essential", "hero", "critical", "crucial")),
    KeywordRule("background", ("minor", "background", "optional", "filler", "dressing")),
)

PROCUREMENT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule("rent", ("rent", "rental", "rented", "hire")),
    KeywordRule("borrow", ("borrow", "borrowed", "loan", "loaned")),
    KeywordRule("build", ("build", "built", "custom", "fabricate", "fabricated", "handmade", "make")),
    KeywordRule("owned", ("owned", "in stock", "in-house", "existing")),
)

# Primary wardrobe test for an item line.
WARDROBE_KEYWORDS: Tuple[str, ...] = (
    "shirt",
    "dress",
    "pants",
    "jacket",
    "shoes",
    "hat",
    "outfit",
    "costume",
    "clothing",
    "suit",
    "jeans",
    "blouse",
    "skirt",
    "sweater",
    "coat",
)

# Individual garments recognised as pieces; also the secondary wardrobe test.
CLOTHING_PIECES: Tuple[str, ...] = (
    "shirt",
    "t-shirt",
    "dress",
    "pants",
    "trousers",
    "jacket",
    "blazer",
    "shoes",
    "boots",
    "sneakers",
    "heels",
    "hat",
    "cap",
    "suit",
    "jeans",
    "blouse",
    "skirt",
    "sweater",
    "hoodie",
    "coat",
    "vest",
    "tie",
    "belt",
    "scarf",
    "gloves",
    "uniform",
)

COLORS: Tuple[str, ...] = (
    "black",
    "white",
    "red",
    "blue",
    "green",
    "yellow",
    "brown",
    "gray",
    "grey",
    "silver",
    "gold",
    "dark",
    "light",
    "bright",
    "navy",
    "beige",
    "tan",
    "pink",
    "purple",
    "orange",
)

STYLES: Tuple[str, ...] = (
    "vintage",
    "modern",
    "casual",
    "formal",
    "elegant",
    "rustic",
    "professional",
    "sporty",
)

SECTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "props": ("props", "prop list", "property", "properties"),
    "wardrobe": ("wardrobe", "costume", "costumes"),
}
