import json
from functools import lru_cache

import jsonschema
from pydantic import TypeAdapter

from .extraction.models import RECORD_TYPES
from .schemas.records_v1 import canonical_json_bytes


@lru_cache(maxsize=None)
def record_schema(domain: str) -> dict:
    """JSON Schema of one *domain* record, generated from its pydantic model.

    Raises KeyError for an unknown domain.
    """
    return TypeAdapter(RECORD_TYPES[domain]).json_schema()


def validate_record_contract(domain: str, data: dict) -> None:
    """Validate one serialized record against the *domain* record schema.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, record_schema(domain))


def validate_records_contract(domain: str, records) -> None:
    """Validate a record list (models or dicts) against the *domain* contract.

    Records are projected through canonical JSON first, so models and the
    dicts they dump to are checked identically.

    Raises jsonschema.ValidationError on the first non-conformant record.
    """
    document = json.loads(canonical_json_bytes(domain, records).decode("utf-8"))
    for record in document["records"]:
        validate_record_contract(domain, record)
