"""preprod-engine CLI entry point."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from preprod_engine.extraction.models import DOMAINS


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="preprod-engine",
        description="Pre-production extraction engine: language-model text to typed records",
    )
    parser.add_argument(
        "--settings", metavar="settings.json",
        help="Path to an ExtractionSettings JSON file",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log tier decisions to stderr",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    extract_parser = sub.add_parser("extract", help="Extract typed records from raw model text")
    extract_parser.add_argument("--domain", required=True, choices=DOMAINS)
    extract_parser.add_argument(
        "--input", required=True, metavar="raw.txt",
        help="Path to the raw language-model output",
    )
    extract_parser.add_argument(
        "--output", metavar="records.json",
        help="Destination path for the record document (default: stdout)",
    )
    validate_parser = sub.add_parser("validate", help="Validate a records JSON file")
    validate_parser.add_argument("--domain", required=True, choices=DOMAINS)
    validate_parser.add_argument(
        "--records", required=True, metavar="records.json",
        help="Path to a record list or record document",
    )
    validate_parser.add_argument(
        "--contract", action="store_true",
        help="Also check records against the JSON Schema contract",
    )
    detect_parser = sub.add_parser("detect", help="Print the structure signature of raw text")
    detect_parser.add_argument("--input", required=True, metavar="raw.txt")
    normalize_parser = sub.add_parser("normalize", help="Print raw text with model artifacts removed")
    normalize_parser.add_argument("--input", required=True, metavar="raw.txt")
    sub.add_parser("verify", help="Run the built-in extraction self-check")
    args = parser.parse_args()

    _configure_logging(args.verbose)

    if args.command == "extract":
        try:
            settings = _load_settings(args.settings)
            raw = _read_input(Path(args.input))
        except ValueError as exc:
            print(str(exc))
            sys.exit(1)
        extract_records(args.domain, raw, settings, Path(args.output) if args.output else None)
        sys.exit(0)
    elif args.command == "validate":
        from preprod_engine.validators import validate_records_file
        try:
            errors = validate_records_file(Path(args.records), args.domain)
        except ValueError as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        if errors:
            for error in errors:
                print(f"ERROR: {error}")
            sys.exit(1)
        if args.contract:
            import jsonschema
            try:
                validate_records_contract_file(Path(args.records), args.domain)
            except jsonschema.ValidationError as exc:
                print(f"ERROR: records violate the {args.domain} contract: {exc.message}")
                sys.exit(1)
        print(f"OK: {args.domain} records are valid")
        sys.exit(0)
    elif args.command == "detect":
        from preprod_engine.extraction import detect, normalize
        try:
            raw = _read_input(Path(args.input))
        except ValueError as exc:
            print(str(exc))
            sys.exit(1)
        print(json.dumps(detect(normalize(raw)).as_dict(), sort_keys=True, indent=2))
        sys.exit(0)
    elif args.command == "normalize":
        from preprod_engine.extraction import normalize
        try:
            raw = _read_input(Path(args.input))
        except ValueError as exc:
            print(str(exc))
            sys.exit(1)
        print(normalize(raw))
        sys.exit(0)
    elif args.command == "verify":
        from preprod_engine.verify import run_verify
        if run_verify():
            print("OK: preprod-engine verified")
            sys.exit(0)
        else:
            print("ERROR: preprod-engine verification failed")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    logger.enable("preprod_engine")


def _load_settings(path):
    from preprod_engine.settings import DEFAULT_SETTINGS, load_settings

    if path is None:
        return DEFAULT_SETTINGS
    return load_settings(Path(path))


def _read_input(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValueError(f"ERROR: cannot read input {path}") from exc


def extract_records(domain: str, raw: str, settings, output_path=None) -> str:
    """Extract *domain* records from *raw* and emit the canonical record document.

    Writes to *output_path* when given, otherwise prints to stdout.
    Returns the document text.
    """
    from preprod_engine.extraction.engine import extract
    from preprod_engine.schemas.records_v1 import dump_records

    records = extract(domain, raw, settings)
    document = dump_records(domain, records)
    if output_path is None:
        print(document)
    else:
        output_path.write_text(document, encoding="utf-8")
        print(f"OK: {len(records)} {domain} records written to {output_path}")
    return document


def validate_records_contract_file(records_path: Path, domain: str) -> None:
    """Load a records JSON file and validate it against the *domain* contract.

    Raises ``jsonschema.ValidationError`` if any record does not conform.
    """
    from preprod_engine.contract_validate import validate_records_contract

    data = json.loads(records_path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("records", [])
    validate_records_contract(domain, data)
