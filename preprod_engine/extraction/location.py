"""Location extractor: scouting notes → Location records.

The scan keeps at most one open location.  A heading line closes it and
opens the next; end of input closes the last one.  Every other line updates
exactly one field of the open location, chosen by keyword, and anything
unrecognised is appended to its description.

Heading forms:
    Location 3: Harbor Warehouse
    INT. COFFEE SHOP - DAY
    2. Riverside Park
    ## Rooftop Bar
    CITY HALL
    Greenfield Community Center Building
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Set

from loguru import logger

from preprod_engine.extraction.fields import (
    classify_location_type,
    classify_permit,
    keyword_pattern,
    match_times_of_day,
    parse_parking_spaces,
    parse_scene_numbers,
)
from preprod_engine.extraction.models import Location, LocationLogistics, LocationRequirements
from preprod_engine.extraction.structure import SCENE_HEADING_RE, StructureSignature
from preprod_engine.extraction.vocabulary import LOCATION_NOUNS, TIME_OF_DAY
from preprod_engine.settings import DEFAULT_SETTINGS, ExtractionSettings

_LOCATION_LABEL_RE = re.compile(r"^location\s*#?\s*\d+\s*[:.\-–—)]\s*", re.IGNORECASE)
_NUMBERED_RE = re.compile(r"^\d{1,3}[.)]\s*(?=[A-Z])")
_MARKDOWN_HEADER_RE = re.compile(r"^#{1,6}\s+(?=\S)")
_CAPS_LINE_RE = re.compile(r"^[A-Z][A-Z0-9 &'/,.\-]*[A-Z0-9]:?$")
_NOUN_SUFFIX_RE = re.compile(
    r"^[A-Z][\w'&,.\- ]*?\b(?i:" + "|".join(re.escape(n) for n in LOCATION_NOUNS) + r")s?:?$"
)
_FIELD_WORDS = (
    r"(?:type|category|requirements?|features?|access\w*|permission|permits?|licen[cs]es?|"
    r"scenes?|shots?|time\w*|hours?|cost|budget|address|parking|description|notes?)"
)
_FIELD_LABEL_RE = re.compile(rf"^{_FIELD_WORDS}\s*:", re.IGNORECASE)
_FIELD_WORD_RE = re.compile(rf"^{_FIELD_WORDS}\b", re.IGNORECASE)
_BULLET_RE = re.compile(r"^[-•*+–]\s+")
_TIME_SUFFIX_RE = re.compile(
    r"\s+[-–—]\s+((?:" + "|".join(re.escape(t) for t in TIME_OF_DAY) + r")\b.*)$",
    re.IGNORECASE,
)
FALLBACK_SEPARATOR_RE = re.compile(r"^[ \t]*-{3,}[ \t]*$|(?=^#{1,3}\s)", re.MULTILINE)

_TYPE_RE = keyword_pattern(("type", "category"), plurals=False)
_REQUIREMENT_RE = keyword_pattern(("requirement",))
_ACCESS_RE = re.compile(r"\b(?:access\w*|permission)\b", re.IGNORECASE)
_PERMIT_RE = keyword_pattern(("permit", "license", "licence"))
_SCENE_RE = keyword_pattern(("scene", "shot"))
_TIME_RE = keyword_pattern(("time", "hour"))
_COST_RE = keyword_pattern(("cost", "budget"))
_ADDRESS_RE = keyword_pattern(("address",))
_PARKING_RE = keyword_pattern(("parking",), plurals=False)


@dataclass
class _OpenLocation:
    """Mutable accumulator for the location currently being read."""

    name: str
    type: str
    time_of_day: List[str] = field(default_factory=list)
    description: List[str] = field(default_factory=list)
    scenes: Set[int] = field(default_factory=set)
    features: List[str] = field(default_factory=list)
    accessibility: str = ""
    permits: str = "not-required"
    parking_spaces: Optional[int] = None
    estimated_cost: Optional[str] = None
    address: Optional[str] = None

    def close(self) -> Location:
        return Location(
            name=self.name,
            type=self.type,
            description=" ".join(self.description),
            scenes=sorted(self.scenes),
            time_of_day=self.time_of_day,
            requirements=LocationRequirements(
                features=self.features,
                accessibility=self.accessibility,
            ),
            logistics=LocationLogistics(
                permits=self.permits,
                parking_spaces=self.parking_spaces,
                estimated_cost=self.estimated_cost,
                address=self.address,
            ),
        )


_TITLE_CONNECTORS = frozenset({"of", "the", "and", "at", "on", "in", "a", "an", "by", "de", "&"})


def _is_title(line: str) -> bool:
    """Title Case words only, e.g. "Harbor View Office", not a sentence."""
    words = line.rstrip(":").split()
    return len(words) <= 6 and all(
        w[0].isupper() or not w[0].isalpha() or w.lower() in _TITLE_CONNECTORS for w in words
    )


def heading_text(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> Optional[str]:
    """The raw name portion if *line* opens a new location, else None."""
    if _BULLET_RE.match(line) or _FIELD_LABEL_RE.match(_NUMBERED_RE.sub("", line)):
        return None
    if _LOCATION_LABEL_RE.match(line):
        return _LOCATION_LABEL_RE.sub("", line)
    if SCENE_HEADING_RE.match(line):
        return SCENE_HEADING_RE.sub("", line)
    if _NUMBERED_RE.match(line):
        return _NUMBERED_RE.sub("", line)
    if _MARKDOWN_HEADER_RE.match(line):
        return _MARKDOWN_HEADER_RE.sub("", line)
    if len(line) <= settings.location_heading_max_length:
        if _CAPS_LINE_RE.match(line) and len(line) >= 3 and not _FIELD_WORD_RE.match(line):
            return line
        if _NOUN_SUFFIX_RE.match(line) and _is_title(line):
            return line
    return None


def _open(line: str, name_text: str, index: int) -> _OpenLocation:
    name = name_text.strip().rstrip(":").strip()
    time_of_day: List[str] = []
    suffix = _TIME_SUFFIX_RE.search(name)
    if suffix:
        time_of_day = match_times_of_day(suffix.group(1))
        name = name[: suffix.start()].strip()
    if len(name) < 3:
        name = f"Location {index}"
    return _OpenLocation(name=name, type=classify_location_type(line), time_of_day=time_of_day)


def _value(line: str) -> str:
    """Text after the first colon, or the whole line when there is none."""
    _, sep, rest = line.partition(":")
    return rest.strip() if sep else line.strip()


def _apply_line(current: _OpenLocation, line: str, settings: ExtractionSettings) -> None:
    """Update exactly one field of *current* from *line*."""
    value = _value(line)
    if _TYPE_RE.search(line) and ":" in line:
        current.type = "interior-exterior" if "both" in value.lower() else classify_location_type(value)
    elif _REQUIREMENT_RE.search(line):
        if value:
            current.features.append(value)
    elif _ACCESS_RE.search(line):
        current.accessibility = value
    elif _PERMIT_RE.search(line):
        current.permits = classify_permit(value)
    elif _SCENE_RE.search(line) and parse_scene_numbers(line, settings.max_scene_range):
        current.scenes.update(parse_scene_numbers(line, settings.max_scene_range))
    elif _TIME_RE.search(line) and match_times_of_day(line):
        for tag in match_times_of_day(line):
            if tag not in current.time_of_day:
                current.time_of_day.append(tag)
    elif _COST_RE.search(line):
        current.estimated_cost = value
    elif _ADDRESS_RE.search(line):
        current.address = value
    elif _PARKING_RE.search(line) and parse_parking_spaces(line) is not None:
        current.parking_spaces = parse_parking_spaces(line)
    else:
        current.description.append(line)


def extract_locations(
    text: str,
    signature: Optional[StructureSignature] = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[Location]:
    """Pattern tier: heading-delimited scan of normalized *text*."""
    locations: List[Location] = []
    current: Optional[_OpenLocation] = None
    orphaned = 0
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        name_text = heading_text(line, settings)
        if name_text is not None:
            if current is not None:
                locations.append(current.close())
            current = _open(line, name_text, len(locations) + 1)
            continue
        if current is None:
            orphaned += 1
            continue
        _apply_line(current, _BULLET_RE.sub("", line), settings)
    if current is not None:
        locations.append(current.close())
    if orphaned:
        logger.debug(f"[Location] {orphaned} lines before the first heading were ignored")
    logger.debug(f"[Location] {len(locations)} locations from headings")
    return locations


def locations_from_chunks(
    chunks: List[str],
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> List[Location]:
    """Fallback tier: one location per chunk, named by its first line.

    A single chunk means nothing split, and becomes "Primary Location".
    """
    if len(chunks) == 1:
        return [Location(name="Primary Location", description=chunks[0])]
    locations = []
    for index, chunk in enumerate(chunks, start=1):
        first_line = chunk.split("\n")[0].strip()
        if len(first_line) < settings.location_name_max_length:
            name = _NUMBERED_RE.sub("", _MARKDOWN_HEADER_RE.sub("", first_line)).rstrip(":").strip()
        else:
            name = f"Location {index}"
        locations.append(
            Location(
                name=name or f"Location {index}",
                type=classify_location_type(first_line),
                description=chunk,
                scenes=parse_scene_numbers(chunk, settings.max_scene_range),
            )
        )
    return locations

