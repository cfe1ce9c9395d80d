"""Engine tests: tier order, payload pass-through, never-raises, fallback guarantee."""
from __future__ import annotations

import dataclasses
import json
import random

import pytest

from preprod_engine.extraction import engine
from preprod_engine.extraction.engine import extract, extract_content
from preprod_engine.extraction.models import DOMAINS, Location, RawContent, ScriptElement
from preprod_engine.extraction.normalizer import normalize
from preprod_engine.settings import ExtractionSettings

_FUZZ_ALPHABET = (
    "abcXYZ019 \n\n\t{}[]\":,-*_#`>()/.!?"
    "INT EXT SHOT Scene scene props wardrobe "
    "éßø漢字🎬—–•"
)


def _fuzz_inputs(count: int = 300):
    rng = random.Random(20260219)
    for _ in range(count):
        length = rng.randint(0, 200)
        yield "".join(rng.choice(_FUZZ_ALPHABET) for _ in range(length))


class TestEmptyInput:
    @pytest.mark.parametrize("domain", DOMAINS)
    def test_empty_text_gives_no_records(self, domain):
        assert extract(domain, "") == []

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_blank_text_gives_no_records(self, domain):
        assert extract(domain, "  \n\n\t ") == []

    def test_none_gives_no_records(self):
        assert extract("script", None) == []

    def test_unknown_domain_gives_no_records(self):
        assert extract("music", "INT. OFFICE - DAY") == []


class TestPayloadTier:
    @pytest.mark.parametrize("domain, key", [
        ("script", "elements"),
        ("script", "screenplay"),
        ("storyboard", "shots"),
        ("location", "locations"),
        ("location", "sets"),
        ("props", "props"),
    ])
    def test_alias_records_returned_unmodified(self, domain, key):
        records = [{"name": "Loft", "custom_field": [1, 2]}, {"anything": True}]
        assert extract(domain, json.dumps({key: records})) == records

    def test_payload_embedded_in_prose(self):
        text = 'Here you go\n{"sets": [{"name": "Loft"}]}\nEnjoy the shoot'
        assert extract("location", text) == [{"name": "Loft"}]

    def test_fenced_payload(self):
        text = '```json\n{"shots": [{"number": 1}]}\n```'
        assert extract("storyboard", text) == [{"number": 1}]

    def test_empty_alias_list_is_an_answer(self):
        assert extract("location", '{"locations": []}') == []

    def test_unrecognised_keys_fall_through(self):
        records = extract("location", '{"foo": [1]}')
        assert len(records) == 1
        assert isinstance(records[0], Location)

    def test_malformed_payload_falls_through(self):
        records = extract("location", '{"locations": [')
        assert len(records) >= 1


class TestNeverRaises:
    @pytest.mark.parametrize("domain", DOMAINS)
    def test_fuzzed_input(self, domain):
        for text in _fuzz_inputs():
            records = extract(domain, text)
            assert isinstance(records, list)
            if normalize(text):
                assert records, f"no records for {text!r}"

    @pytest.mark.parametrize("text", [
        "{{{{", "}}}}", "**unclosed bold", "```", "# ", "- ", "1. ", "\x00\x01", "{" * 500,
    ])
    def test_degenerate_input(self, text):
        for domain in DOMAINS:
            assert isinstance(extract(domain, text), list)

    def test_failing_tier_falls_through(self, monkeypatch):
        def boom(*args):
            raise RuntimeError("pattern tier broke")

        broken = dataclasses.replace(engine.EXTRACTORS["location"], pattern=boom)
        monkeypatch.setitem(engine.EXTRACTORS, "location", broken)
        records = extract("location", "Location 1: Loft\nBright space with big windows.")
        assert [r.name for r in records] == ["Primary Location"]


class TestFallbackGuarantee:
    @pytest.mark.parametrize("domain", DOMAINS)
    def test_unmatched_text_still_yields_a_record(self, domain):
        assert len(extract(domain, "nothing structured at all")) == 1

    def test_min_chunk_length_setting(self):
        text = "One.\n\nTwo.\n\nThree."
        assert len(extract("storyboard", text)) == 1
        settings = ExtractionSettings(min_chunk_length=1)
        assert len(extract("storyboard", text, settings)) == 3

    def test_oversized_numbers_do_not_empty_the_fallback(self):
        nines = "9" * 5000
        assert extract("props", f"- Lantern qty {nines}")
        text = (
            f"A quiet harbour warehouse with old brick walls, scene {nines}\n\n"
            "Second long paragraph describing the lighthouse cliffs."
        )
        assert extract("location", text)


class TestEntryPoints:
    def test_extract_content(self):
        content = RawContent(domain="script", text="INT. OFFICE - DAY")
        assert extract_content(content) == [
            ScriptElement(type="scene_heading", content="INT. OFFICE - DAY"),
        ]

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_deterministic(self, domain):
        text = "Location 1: Loft\n- Blue jacket\nShot 1: Wide.\nJOHN\nHi."
        assert extract(domain, text) == extract(domain, text)
