"""Extraction engine: raw model text + domain tag → typed records.

Pipeline for every domain:

    raw text → normalize() → detect() → tier 1 (payload)
                                       → tier 2 (domain patterns)
                                       → tier 3 (fallback chunks)

The first tier that yields any record wins.  A tier that raises is logged
and treated as empty, so extract() never raises for any text input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence

from loguru import logger

from preprod_engine.extraction.fallback import DEFAULT_STRATEGIES, split_chunks
from preprod_engine.extraction.location import (
    FALLBACK_SEPARATOR_RE,
    extract_locations,
    locations_from_chunks,
)
from preprod_engine.extraction.models import DOMAINS, PropsAndWardrobe, RawContent, Record
from preprod_engine.extraction.normalizer import normalize
from preprod_engine.extraction.payload import payload_records
from preprod_engine.extraction.props import (
    inventory_from_chunks,
    inventory_from_payload,
    scan_inventory,
)
from preprod_engine.extraction.script import extract_script_elements, script_elements_from_chunks
from preprod_engine.extraction.storyboard import extract_storyboard_shots, shots_from_chunks
from preprod_engine.extraction.structure import StructureSignature, detect
from preprod_engine.settings import DEFAULT_SETTINGS, ExtractionSettings


@dataclass(frozen=True)
class DomainExtractor:
    """The three tiers for one domain.

    payload(text)                           → records or None (no alias key)
    pattern(text, signature, settings, raw) → records, possibly empty
    chunks(chunks, settings)                → records from fallback chunks

    Records are a list, or a PropsAndWardrobe for the props domain.
    """

    payload: Callable[[str], Any]
    pattern: Callable[[str, StructureSignature, ExtractionSettings, str], Any]
    chunks: Callable[[List[str], ExtractionSettings], Any]
    strategies: Sequence[str] = DEFAULT_STRATEGIES
    separator: Optional[Pattern[str]] = None


EXTRACTORS: Dict[str, DomainExtractor] = {
    "script": DomainExtractor(
        payload=lambda text: payload_records("script", text),
        pattern=lambda text, sig, settings, raw: extract_script_elements(text, sig, settings),
        chunks=lambda chunks, settings: script_elements_from_chunks(chunks),
    ),
    "storyboard": DomainExtractor(
        payload=lambda text: payload_records("storyboard", text),
        pattern=extract_storyboard_shots,
        chunks=lambda chunks, settings: shots_from_chunks(chunks),
    ),
    "location": DomainExtractor(
        payload=lambda text: payload_records("location", text),
        pattern=lambda text, sig, settings, raw: extract_locations(text, sig, settings),
        chunks=locations_from_chunks,
        strategies=("paragraph", "dash"),
        separator=FALLBACK_SEPARATOR_RE,
    ),
    "props": DomainExtractor(
        payload=inventory_from_payload,
        pattern=lambda text, sig, settings, raw: scan_inventory(text, sig, settings),
        chunks=inventory_from_chunks,
    ),
}


def _run_tiers(domain: str, raw_text: str, settings: ExtractionSettings) -> Any:
    """Records for *domain* from the first productive tier, or None."""
    extractor = EXTRACTORS[domain]
    text = normalize(raw_text)
    if not text:
        return None
    signature = detect(text)

    if signature.has_structured_payload:
        try:
            records = extractor.payload(text)
        except Exception as exc:
            logger.warning(f"[Engine] {domain} payload tier failed: {exc!r}")
            records = None
        if records is not None:
            logger.debug(f"[Engine] {domain}: structured payload, {len(records)} records")
            return records

    try:
        records = extractor.pattern(text, signature, settings, raw_text)
    except Exception as exc:
        logger.warning(f"[Engine] {domain} pattern tier failed: {exc!r}")
        records = None
    if records:
        logger.debug(f"[Engine] {domain}: pattern tier, {len(records)} records")
        return records

    logger.debug(f"[Engine] {domain}: no pattern matches, chunking")
    try:
        chunks = split_chunks(
            text,
            settings.min_chunk_length,
            strategies=extractor.strategies,
            extra_separator=extractor.separator,
        )
        return extractor.chunks(chunks, settings)
    except Exception as exc:
        logger.warning(f"[Engine] {domain} fallback tier failed: {exc!r}")
        return None


def extract(
    domain: str,
    raw_text: Optional[str],
    settings: Optional[ExtractionSettings] = None,
) -> List[Record]:
    """Typed records for *domain* extracted from language-model *raw_text*.

    Never raises.  Empty input and unknown domains give [].  For "props" the
    result holds every Prop followed by every WardrobeItem.
    """
    if domain not in EXTRACTORS:
        logger.error(f"[Engine] Unknown domain '{domain}', expected one of {', '.join(DOMAINS)}")
        return []
    if not isinstance(raw_text, str):
        return []
    records = _run_tiers(domain, raw_text, settings or DEFAULT_SETTINGS)
    if records is None:
        return []
    if isinstance(records, PropsAndWardrobe):
        return records.records()
    return list(records)


def extract_props_and_wardrobe(
    raw_text: Optional[str],
    settings: Optional[ExtractionSettings] = None,
) -> PropsAndWardrobe:
    """Props-domain extraction with props and wardrobe kept apart."""
    if not isinstance(raw_text, str):
        return PropsAndWardrobe()
    records = _run_tiers("props", raw_text, settings or DEFAULT_SETTINGS)
    return records if records is not None else PropsAndWardrobe()


def extract_content(
    content: RawContent,
    settings: Optional[ExtractionSettings] = None,
) -> List[Record]:
    return extract(content.domain, content.text, settings)
