"""Text → typed record extraction for script, storyboard, location and props."""

from preprod_engine.extraction.engine import extract, extract_content, extract_props_and_wardrobe
from preprod_engine.extraction.models import (
    DOMAINS,
    Location,
    LocationLogistics,
    LocationRequirements,
    Procurement,
    Prop,
    PropsAndWardrobe,
    RawContent,
    ScriptElement,
    StoryboardShot,
    WardrobeItem,
)
from preprod_engine.extraction.normalizer import normalize
from preprod_engine.extraction.structure import StructureSignature, detect

__all__ = [
    "extract",
    "extract_content",
    "extract_props_and_wardrobe",
    "normalize",
    "detect",
    "StructureSignature",
    "DOMAINS",
    "RawContent",
    "ScriptElement",
    "StoryboardShot",
    "Location",
    "LocationRequirements",
    "LocationLogistics",
    "Prop",
    "Procurement",
    "WardrobeItem",
    "PropsAndWardrobe",
]
