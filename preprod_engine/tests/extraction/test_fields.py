"""Field sub-extractor tests."""
from __future__ import annotations

import pytest

from preprod_engine.extraction import fields


class TestSceneNumbers:
    @pytest.mark.parametrize("text, expected", [
        ("Scenes: 1-3", [1, 2, 3]),
        ("scenes 1-3, 5 and 7", [1, 2, 3, 5, 7]),
        ("Scene 5-3", [3, 4, 5]),
        ("scenes 2, 2, 1", [1, 2]),
        ("scenes 2 through 4", [2, 3, 4]),
        ("sc. 4", [4]),
        ("used in scene 12", [12]),
    ])
    def test_parsed_as_sorted_unique(self, text, expected):
        assert fields.parse_scene_numbers(text) == expected

    def test_no_scene_reference(self):
        assert fields.parse_scene_numbers("A quiet street") == []

    def test_scene_word_without_numbers(self):
        assert fields.parse_scene_numbers("great for exterior scenes") == []

    def test_wide_range_keeps_endpoints_only(self):
        assert fields.parse_scene_numbers("scenes 1-1000", max_range=500) == [1, 1000]

    def test_oversized_scene_number_ignored(self):
        assert fields.parse_scene_numbers("scene " + "9" * 5000) == []


class TestQuantityAndCost:
    @pytest.mark.parametrize("text, expected", [
        ("3 pcs", 3),
        ("qty: 2", 2),
        ("Wooden chair x4", 4),
        ("2x coffee mugs", 2),
        ("Coffee mug", 1),
        ("0 pcs", 1),
        ("qty " + "9" * 5000, 1),
        ("9" * 5000 + " pcs", 1),
    ])
    def test_quantity(self, text, expected):
        assert fields.parse_quantity(text) == expected

    @pytest.mark.parametrize("text, expected", [
        ("$50", "$50"),
        ("Budget: $100-200", "$100-200"),
        ("about 300 dollars", "300 dollars"),
        ("free", None),
    ])
    def test_cost(self, text, expected):
        assert fields.parse_cost(text) == expected


class TestWardrobeFields:
    def test_pieces_in_order_of_appearance(self):
        assert fields.list_pieces("Black leather jacket and boots") == ["jacket", "boots"]

    def test_plural_pieces_singularized(self):
        assert fields.list_pieces("two shirts and three dresses") == ["shirt", "dress"]

    def test_hyphenated_piece_kept_whole(self):
        assert fields.list_pieces("white t-shirt") == ["t-shirt"]

    def test_no_pieces_defaults_to_outfit(self):
        assert fields.list_pieces("umbrella") == ["outfit"]

    def test_color_is_lowercased(self):
        assert fields.match_color("Navy wool coat") == "navy"
        assert fields.match_color("plain coat") is None

    def test_style_follows_table_order(self):
        assert fields.match_style("formal vintage suit") == "vintage"
        assert fields.match_style("plain suit") is None

    def test_for_name_attribution(self):
        assert fields.attributed_character("jacket for Jason, scene 2") == "Jason"
        assert fields.attributed_character("a dress for the party") is None

    def test_wardrobe_and_clothing_checks(self):
        assert fields.is_wardrobe_text("Denim jacket") is True
        assert fields.is_wardrobe_text("Silk scarf") is False
        assert fields.mentions_clothing("Silk scarf") is True


class TestPropFields:
    @pytest.mark.parametrize("text, expected", [
        ("Wooden chair", "furniture"),
        ("Vintage car", "vehicle"),
        ("Kitchen knife", "weapon"),
        ("Smartphone", "technology"),
        ("Bottle of wine", "consumable"),
        ("Movie poster", "set-decoration"),
        ("Notebook", "hand-prop"),
    ])
    def test_category(self, text, expected):
        assert fields.classify_prop_category(text) == expected

    @pytest.mark.parametrize("text, expected", [
        ("hero prop", "hero"),
        ("background dressing", "background"),
        ("umbrella", "supporting"),
    ])
    def test_importance(self, text, expected):
        assert fields.classify_importance(text) == expected

    @pytest.mark.parametrize("text, expected", [
        ("rental", "rent"),
        ("borrowed from a museum", "borrow"),
        ("custom built", "build"),
        ("in stock", "owned"),
        ("umbrella", "purchase"),
    ])
    def test_procurement_source(self, text, expected):
        assert fields.classify_procurement(text) == expected


class TestLocationFields:
    @pytest.mark.parametrize("text, expected", [
        ("INT./EXT. CAR", "interior-exterior"),
        ("EXT. PARK", "exterior"),
        ("Outdoor market", "exterior"),
        ("INT. KITCHEN", "interior"),
        ("Cafe", "interior"),
    ])
    def test_location_type(self, text, expected):
        assert fields.classify_location_type(text) == expected

    def test_times_of_day(self):
        assert fields.match_times_of_day("Shoot at night and dawn") == ["night", "dawn"]
        assert fields.match_times_of_day("Day/Night") == ["day", "night"]
        assert fields.match_times_of_day("midday") == ["midday"]

    @pytest.mark.parametrize("text, expected", [
        ("pending", "pending"),
        ("no permit required", "not-required"),
        ("approved by the city", "obtained"),
        ("yes", "required"),
    ])
    def test_permit_status(self, text, expected):
        assert fields.classify_permit(text) == expected

    def test_parking_spaces(self):
        assert fields.parse_parking_spaces("12 spaces") == 12
        assert fields.parse_parking_spaces("street parking only") is None
        assert fields.parse_parking_spaces("9" * 5000 + " spaces") is None


class TestKeywordPattern:
    def test_whole_words_only(self):
        pattern = fields.keyword_pattern(["hat"])
        assert pattern.search("that") is None
        assert pattern.search("two hats") is not None

    def test_plurals_can_be_disabled(self):
        assert fields.keyword_pattern(["hat"], plurals=False).search("hats") is None
