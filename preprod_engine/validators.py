"""Record validators (validate command).

Shape checks only: a required field is present and has the right primitive
type.  Callers use the verdict to decide whether to show a record as-is or
a placeholder; extraction never validates its own output.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

from pydantic import BaseModel

_ELEMENT_TYPES = frozenset(
    {"scene_heading", "transition", "character", "parenthetical", "dialogue", "action"}
)
_LOCATION_TYPES = frozenset({"interior", "exterior", "interior-exterior"})
_PERMIT_STATUSES = frozenset({"required", "not-required", "pending", "obtained"})


def _as_dict(record: Any) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump()
    return record


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_text(data: dict, key: str, errors: List[str], allow_empty: bool = False) -> None:
    value = data.get(key)
    if not isinstance(value, str):
        errors.append(f"{key} must be a string, got {value!r}")
    elif not allow_empty and not value.strip():
        errors.append(f"{key} must not be empty")


def _check_scenes(data: dict, errors: List[str]) -> None:
    scenes = data.get("scenes", [])
    if not isinstance(scenes, list) or not all(_is_int(s) for s in scenes):
        errors.append("scenes must be a list of integers")


def validate_script_element_rules(record: Any) -> List[str]:
    """Returns a list of human-readable error strings; empty list means valid."""
    data = _as_dict(record)
    if not isinstance(data, dict):
        return ["record must be an object"]
    errors: List[str] = []
    element_type = data.get("type")
    if element_type not in _ELEMENT_TYPES:
        errors.append(f"type must be one of {sorted(_ELEMENT_TYPES)}, got {element_type!r}")
    _require_text(data, "content", errors)
    character = data.get("character")
    if character is not None and not isinstance(character, str):
        errors.append(f"character must be a string or null, got {character!r}")
    if element_type == "character" and not character:
        errors.append("character element missing 'character'")
    return errors


def validate_storyboard_shot_rules(record: Any) -> List[str]:
    data = _as_dict(record)
    if not isinstance(data, dict):
        return ["record must be an object"]
    errors: List[str] = []
    number = data.get("number")
    if not _is_int(number) or number < 1:
        errors.append(f"number must be a positive integer, got {number!r}")
    _require_text(data, "description", errors)
    for key in ("shot_type", "camera_angle", "camera_movement", "composition", "lighting", "duration"):
        _require_text(data, key, errors)
    return errors


def validate_location_rules(record: Any) -> List[str]:
    data = _as_dict(record)
    if not isinstance(data, dict):
        return ["record must be an object"]
    errors: List[str] = []
    _require_text(data, "name", errors)
    if data.get("type") not in _LOCATION_TYPES:
        errors.append(f"type must be one of {sorted(_LOCATION_TYPES)}, got {data.get('type')!r}")
    _require_text(data, "description", errors, allow_empty=True)
    _check_scenes(data, errors)
    times = data.get("time_of_day", [])
    if not isinstance(times, list) or not all(isinstance(t, str) for t in times):
        errors.append("time_of_day must be a list of strings")

    requirements = data.get("requirements", {})
    if not isinstance(requirements, dict):
        errors.append("requirements must be an object")
    else:
        features = requirements.get("features", [])
        if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
            errors.append("requirements.features must be a list of strings")

    logistics = data.get("logistics", {})
    if not isinstance(logistics, dict):
        errors.append("logistics must be an object")
    else:
        permits = logistics.get("permits", "not-required")
        if permits not in _PERMIT_STATUSES:
            errors.append(f"logistics.permits must be one of {sorted(_PERMIT_STATUSES)}, got {permits!r}")
        parking = logistics.get("parking_spaces")
        if parking is not None and (not _is_int(parking) or parking < 0):
            errors.append(f"logistics.parking_spaces must be a non-negative integer, got {parking!r}")
    return errors


def validate_prop_rules(record: Any) -> List[str]:
    data = _as_dict(record)
    if not isinstance(data, dict):
        return ["record must be an object"]
    errors: List[str] = []
    _require_text(data, "name", errors)
    _require_text(data, "category", errors)
    _require_text(data, "importance", errors)
    quantity = data.get("quantity", 1)
    if not _is_int(quantity) or quantity < 1:
        errors.append(f"quantity must be a positive integer, got {quantity!r}")
    _check_scenes(data, errors)
    procurement = data.get("procurement", {})
    if not isinstance(procurement, dict) or not isinstance(procurement.get("source", "purchase"), str):
        errors.append("procurement must be an object with a string source")
    return errors


def validate_wardrobe_item_rules(record: Any) -> List[str]:
    data = _as_dict(record)
    if not isinstance(data, dict):
        return ["record must be an object"]
    errors: List[str] = []
    _require_text(data, "character", errors)
    _require_text(data, "outfit", errors)
    pieces = data.get("pieces")
    if not isinstance(pieces, list) or not pieces or not all(isinstance(p, str) for p in pieces):
        errors.append("pieces must be a non-empty list of strings")
    _require_text(data, "color", errors)
    _require_text(data, "style", errors)
    _check_scenes(data, errors)
    return errors


def _validate_props_rules(record: Any) -> List[str]:
    data = _as_dict(record)
    if isinstance(data, dict) and ("character" in data or "outfit" in data):
        return validate_wardrobe_item_rules(data)
    return validate_prop_rules(data)


_RULES: Dict[str, Callable[[Any], List[str]]] = {
    "script": validate_script_element_rules,
    "storyboard": validate_storyboard_shot_rules,
    "location": validate_location_rules,
    "props": _validate_props_rules,
}


def validate_record(domain: str, record: Any) -> List[str]:
    """Errors for one record of *domain*; a dict or a model is accepted."""
    rules = _RULES.get(domain)
    if rules is None:
        return [f"unknown domain {domain!r}"]
    return rules(record)


def is_valid_record(domain: str, record: Any) -> bool:
    return not validate_record(domain, record)


def is_valid_script_element(record: Any) -> bool:
    return not validate_script_element_rules(record)


def is_valid_storyboard_shot(record: Any) -> bool:
    return not validate_storyboard_shot_rules(record)


def is_valid_location(record: Any) -> bool:
    return not validate_location_rules(record)


def is_valid_prop(record: Any) -> bool:
    return not validate_prop_rules(record)


def is_valid_wardrobe_item(record: Any) -> bool:
    return not validate_wardrobe_item_rules(record)


def validate_records_file(records_path: Path, domain: str) -> List[str]:
    """Load a record list or record document from *records_path* and validate it.

    Errors are prefixed with the record index, e.g. "records[2]: name must
    not be empty".

    Raises:
        ValueError: if the file is missing or contains invalid JSON.
    """
    try:
        raw = records_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"Records file not found: {records_path}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {records_path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise ValueError("Records must be a JSON list or a record document")

    errors: List[str] = []
    for i, record in enumerate(data):
        errors.extend(f"records[{i}]: {e}" for e in validate_record(domain, record))
    return errors
