"""Record document schema v1.0.0 — load, dump, validate.

A record document wraps one extraction result for the persistence layer:

    {"schema_version": "1.0.0", "domain": "location", "records": [...]}

Canonical JSON (sort_keys=True, indent=2) makes identical record lists
serialize to identical bytes.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from preprod_engine.extraction.models import (
    DOMAINS,
    Location,
    Prop,
    Record,
    ScriptElement,
    StoryboardShot,
    WardrobeItem,
)

SCHEMA_VERSION = "1.0.0"

_MODELS: Dict[str, Type[BaseModel]] = {
    "script": ScriptElement,
    "storyboard": StoryboardShot,
    "location": Location,
}


def record_model(domain: str, data: Dict[str, Any]) -> Type[BaseModel]:
    """Model class for one serialized record; props split on wardrobe keys."""
    if domain == "props":
        return WardrobeItem if ("character" in data or "outfit" in data) else Prop
    return _MODELS[domain]


def record_to_dict(record: Record) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    return json.loads(json.dumps(record))


def _document(domain: str, records: Sequence[Record]) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "domain": domain,
        "records": [record_to_dict(r) for r in records],
    }


def dump_records(domain: str, records: Sequence[Record], *, indent: int = 2) -> str:
    """Serialize *records* to a canonical JSON record document."""
    return json.dumps(_document(domain, records), sort_keys=True, indent=indent, ensure_ascii=False)


def canonical_json_bytes(domain: str, records: Sequence[Record]) -> bytes:
    """Canonical UTF-8 bytes of the record document, as dump_records() with indent=2."""
    return dump_records(domain, records).encode("utf-8")


def load_records(source: Union[str, bytes, dict, Path]) -> Tuple[str, List[BaseModel]]:
    """Parse a record document from JSON string, bytes, dict, or file Path.

    Returns (domain, typed records).

    Raises:
        ValueError: not a record document, or an unknown domain.
        ValidationError: a record does not conform to its model.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    if not isinstance(data, dict) or not isinstance(data.get("records"), list):
        raise ValueError("Record document must be an object with a 'records' list")
    domain = data.get("domain")
    if domain not in DOMAINS:
        raise ValueError(f"Record document has unknown domain {domain!r}")
    records = []
    for item in data["records"]:
        if not isinstance(item, dict):
            raise ValueError("Each record must be a JSON object")
        records.append(record_model(domain, item).model_validate(item))
    return domain, records


def validate_records(data: dict) -> List[str]:
    """Validate a raw record document dict.

    Returns a list of human-readable error strings (empty list = valid).
    Does not raise.
    """
    try:
        load_records(data)
        return []
    except ValidationError as exc:
        return [f"{e['loc']}: {e['msg']}" for e in exc.errors()]
    except ValueError as exc:
        return [str(exc)]
