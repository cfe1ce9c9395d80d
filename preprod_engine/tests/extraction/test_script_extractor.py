"""Script extractor tests: line precedence, speaker lookback, skipped banners."""
from __future__ import annotations

from preprod_engine.extraction.engine import extract
from preprod_engine.extraction.models import ScriptElement
from preprod_engine.extraction.script import (
    character_name,
    extract_script_elements,
    is_non_content,
    script_elements_from_chunks,
)
from preprod_engine.settings import ExtractionSettings


def _types(elements):
    return [e.type for e in elements]


class TestClassification:
    def test_heading_character_dialogue(self):
        elements = extract("script", "INT. OFFICE - DAY\nJOHN\nHello there.")
        assert elements == [
            ScriptElement(type="scene_heading", content="INT. OFFICE - DAY"),
            ScriptElement(type="character", content="JOHN", character="JOHN"),
            ScriptElement(type="dialogue", content="Hello there.", character="JOHN"),
        ]

    def test_transitions(self):
        elements = extract_script_elements("FADE IN:\nINT. OFFICE - DAY\nCUT TO:")
        assert _types(elements) == ["transition", "scene_heading", "transition"]

    def test_action_after_heading(self):
        elements = extract_script_elements("EXT. PIER - NIGHT\nRain hammers the boards.")
        assert _types(elements) == ["scene_heading", "action"]

    def test_character_with_age_suffix(self):
        elements = extract_script_elements("SARAH (30)\nWhere were you?")
        assert elements[0].character == "SARAH"
        assert elements[1].type == "dialogue"

    def test_character_with_extension(self):
        elements = extract_script_elements("MARY (V.O.)\nYou're late.")
        assert elements[0].type == "character"
        assert elements[1].character == "MARY"

    def test_parenthetical_then_dialogue_keeps_speaker(self):
        elements = extract_script_elements("SARAH\n(whispering)\nOver here.\nQuick!")
        assert _types(elements) == ["character", "parenthetical", "dialogue", "dialogue"]
        assert elements[2].character == "SARAH"
        assert elements[3].character == "SARAH"

    def test_speaker_changes_with_next_cue(self):
        elements = extract_script_elements("JOHN\nHi.\nMARY\nHello.")
        assert [e.character for e in elements if e.type == "dialogue"] == ["JOHN", "MARY"]

    def test_long_caps_line_is_action(self):
        line = "THE ROOM EXPLODES INTO A FLURRY OF MOTION AND NOISE"
        assert _types(extract_script_elements(line)) == ["action"]

    def test_markdown_heading_hashes_dropped(self):
        elements = extract_script_elements("## INT. OFFICE - DAY")
        assert elements == [ScriptElement(type="scene_heading", content="INT. OFFICE - DAY")]

    def test_center_tags_stripped(self):
        elements = extract_script_elements("<center>JOHN</center>\nHello.")
        assert elements[0] == ScriptElement(type="character", content="JOHN", character="JOHN")


class TestNonContent:
    def test_banners_and_delimiters_skipped(self):
        text = (
            "INT. OFFICE - DAY\n"
            "---\n"
            "SCENE 2\n"
            "[ENGINE GUIDANCE: keep it tight]\n"
            "Rain hits the glass.\n"
            "END OF SCENE"
        )
        elements = extract_script_elements(text)
        assert _types(elements) == ["scene_heading", "action"]

    def test_is_non_content(self):
        assert is_non_content("=====") is True
        assert is_non_content("Rain hits the glass.") is False


class TestCharacterLimits:
    def test_word_limit_from_settings(self):
        settings = ExtractionSettings(character_max_words=1)
        assert character_name("OLD MAN", settings) is None
        assert character_name("OLD MAN") == "OLD MAN"

    def test_digits_only_is_not_a_name(self):
        assert character_name("42") is None


class TestChunks:
    def test_chunks_become_action_elements(self):
        elements = script_elements_from_chunks(["First beat.", "Second beat."])
        assert _types(elements) == ["action", "action"]
        assert elements[1].content == "Second beat."
