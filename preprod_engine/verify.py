"""preprod-engine verify — self-check over built-in sample model outputs."""
from __future__ import annotations

from typing import Dict, List, Tuple

from loguru import logger

from preprod_engine.contract_validate import validate_records_contract
from preprod_engine.extraction.engine import extract
from preprod_engine.schemas.records_v1 import canonical_json_bytes
from preprod_engine.validators import validate_record

# ── Sample model outputs, one structured and one degenerate per domain ────────

SAMPLES: Tuple[Tuple[str, str, str], ...] = (
    ("script/screenplay", "script", (
        "Certainly! Here is the scene you asked for:\n\n"
        "```\n"
        "INT. OFFICE - DAY\n\n"
        "JOHN\n"
        "(quietly)\n"
        "Hello there.\n\n"
        "MARY (V.O.)\n"
        "You're late.\n\n"
        "John drops his bag on the desk.\n\n"
        "CUT TO:\n"
        "```"
    )),
    ("script/prose", "script", "A lighthouse keeper watches the storm roll in over the bay."),
    ("storyboard/labels", "storyboard", (
        "Shot 1: Wide establishing view of the harbor at dawn.\n"
        "Shot 2: Close-up on the keeper's weathered hands.\n"
        "Shot 3: Tracking shot along the pier as gulls scatter."
    )),
    ("storyboard/paragraphs", "storyboard", (
        "The harbor lies still under a pale morning sky.\n\n"
        "A fishing boat drifts past the lighthouse, engine idling.\n\n"
        "The keeper climbs the spiral stairs, lantern in hand."
    )),
    ("location/notes", "location", (
        "Location 1: Harbor Warehouse\n"
        "Type: interior\n"
        "Scenes: 1-3, 5\n"
        "Permits: pending with the port authority\n"
        "Parking: 12 spaces behind the loading dock\n"
        "Large open floor with exposed brick.\n\n"
        "EXT. LIGHTHOUSE - NIGHT\n"
        "Scene 4\n"
        "Requirements: generator access\n"
        "Budget: $1,500 per day"
    )),
    ("location/prose", "location", "A quiet seaside town with narrow streets and old stone houses."),
    ("props/inventory", "props", (
        "## Props\n"
        "- Brass lantern (hero prop), scene 3\n"
        "- 2x coffee mugs, rental\n\n"
        "## Wardrobe\n"
        "Character: Maya\n"
        "- Navy wool coat, formal, scenes 1-2\n"
        "- Black leather jacket for Jason, scene 2"
    )),
    ("props/prose", "props", "The keeper needs an old radio and a weathered oilskin coat."),
)


def _run_samples() -> Dict[str, bytes]:
    """Extract every sample → {key: canonical bytes}, checking each record."""
    results: Dict[str, bytes] = {}
    for key, domain, text in SAMPLES:
        records = extract(domain, text)
        if not records:
            raise AssertionError(f"{key}: no records extracted")
        errors: List[str] = []
        for i, record in enumerate(records):
            errors.extend(f"{key}[{i}]: {e}" for e in validate_record(domain, record))
        if errors:
            raise AssertionError("; ".join(errors))
        validate_records_contract(domain, records)
        results[key] = canonical_json_bytes(domain, records)
    return results


def run_verify() -> bool:
    """Run every sample twice; return True only if every check passes.

    Checks (in order):
      1. Each sample yields at least one record and every record validates.
      2. Every record conforms to its JSON Schema contract.
      3. Run-1 artifacts == Run-2 artifacts (byte-by-byte determinism across runs).
    """
    try:
        run1 = _run_samples()
        run2 = _run_samples()
    except Exception as exc:
        logger.error(f"[Verify] {exc}")
        return False
    if run1 != run2:
        logger.error("[Verify] Extraction output differs between runs")
        return False
    return True
