"""Versioned record document loaders and validators."""

from preprod_engine.schemas.records_v1 import (
    canonical_json_bytes,
    dump_records,
    load_records,
    validate_records,
)

__all__ = [
    "canonical_json_bytes",
    "dump_records",
    "load_records",
    "validate_records",
]
