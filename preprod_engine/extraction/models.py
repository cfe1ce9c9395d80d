"""Typed pre-production records produced by the extraction engine.

Every field carries a default so a record is always constructible from a
partial accumulator.  extra="ignore" on all models lets callers hand back
records enriched by other layers without the engine rejecting them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Domain = Literal["script", "storyboard", "location", "props"]
DOMAINS = ("script", "storyboard", "location", "props")

ElementType = Literal[
    "scene_heading", "transition", "character", "parenthetical", "dialogue", "action",
]
LocationType = Literal["interior", "exterior", "interior-exterior"]
PermitStatus = Literal["required", "not-required", "pending", "obtained"]
PropCategory = Literal[
    "furniture",
    "vehicle",
    "weapon",
    "technology",
    "consumable",
    "set-decoration",
    "hand-prop",
]
PropImportance = Literal["hero", "supporting", "background"]


class RawContent(BaseModel):
    """Language-model output handed over by the orchestration layer."""

    model_config = ConfigDict(extra="ignore")

    domain: Domain
    text: str = ""


# ── Script ────────────────────────────────────────────────────────────────────


class ScriptElement(BaseModel):
    """One classified screenplay line.

    character is only set on character cues and dialogue; for dialogue it
    names the nearest preceding cue and is not a structural link.
    """

    model_config = ConfigDict(extra="ignore")

    type: ElementType = "action"
    content: str = ""
    character: Optional[str] = None


# ── Storyboard ────────────────────────────────────────────────────────────────


class StoryboardShot(BaseModel):
    """A storyboard panel.

    number is the 1-based extraction order.  The camera fields are
    placeholders for a later enrichment pass, not inferred from content.
    """

    model_config = ConfigDict(extra="ignore")

    number: int = Field(default=1, ge=1)
    shot_type: str = "medium"
    camera_angle: str = "eye-level"
    camera_movement: str = "static"
    composition: str = "rule-of-thirds"
    lighting: str = "natural"
    duration: str = "5-10s"
    description: str = ""


# ── Location ──────────────────────────────────────────────────────────────────


class LocationRequirements(BaseModel):
    model_config = ConfigDict(extra="ignore")

    features: List[str] = []
    accessibility: str = ""


class LocationLogistics(BaseModel):
    model_config = ConfigDict(extra="ignore")

    permits: PermitStatus = "not-required"
    parking_spaces: Optional[int] = Field(default=None, ge=0)
    estimated_cost: Optional[str] = None
    address: Optional[str] = None


class Location(BaseModel):
    """A shooting location with scouting requirements and logistics."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    type: LocationType = "interior"
    description: str = ""
    scenes: List[int] = []
    time_of_day: List[str] = []
    requirements: LocationRequirements = Field(default_factory=LocationRequirements)
    logistics: LocationLogistics = Field(default_factory=LocationLogistics)


# ── Props & wardrobe ──────────────────────────────────────────────────────────


class Procurement(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: str = "purchase"
    estimated_cost: Optional[str] = None


class Prop(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    category: PropCategory = "hand-prop"
    description: str = ""
    quantity: int = Field(default=1, ge=1)
    importance: PropImportance = "supporting"
    scenes: List[int] = []
    procurement: Procurement = Field(default_factory=Procurement)


class WardrobeItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    character: str = "Unknown"
    outfit: str = ""
    pieces: List[str] = ["outfit"]
    color: str = "unspecified"
    style: str = "casual"
    scenes: List[int] = []


@dataclass
class PropsAndWardrobe:
    """Inventory split the way the props department consumes it.

    A plain container so payload dicts stay dicts instead of being coerced.
    """

    props: List[Union[Prop, Dict[str, Any]]] = field(default_factory=list)
    wardrobe: List[Union[WardrobeItem, Dict[str, Any]]] = field(default_factory=list)

    def records(self) -> List[Union[Prop, WardrobeItem, Dict[str, Any]]]:
        return [*self.props, *self.wardrobe]

    def __len__(self) -> int:
        return len(self.props) + len(self.wardrobe)


# A structured payload that matched an alias key is handed back untouched,
# so a record list may hold plain dicts next to models.
Record = Union[ScriptElement, StoryboardShot, Location, Prop, WardrobeItem, Dict[str, Any]]

RECORD_TYPES: Dict[str, Any] = {
    "script": ScriptElement,
    "storyboard": StoryboardShot,
    "location": Location,
    "props": Union[Prop, WardrobeItem],
}
