"""Record model tests: total defaults, bounds, extra keys."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from preprod_engine.extraction.models import (
    Location,
    Prop,
    PropsAndWardrobe,
    RawContent,
    ScriptElement,
    StoryboardShot,
    WardrobeItem,
)


class TestDefaults:
    def test_every_record_constructible_without_arguments(self):
        for model in (ScriptElement, StoryboardShot, Location, Prop, WardrobeItem):
            model()

    def test_wardrobe_defaults(self):
        item = WardrobeItem()
        assert item.character == "Unknown"
        assert item.pieces == ["outfit"]
        assert item.color == "unspecified"
        assert item.style == "casual"

    def test_location_defaults(self):
        location = Location()
        assert location.logistics.permits == "not-required"
        assert location.logistics.parking_spaces is None
        assert location.requirements.features == []

    def test_list_defaults_not_shared(self):
        first = Location()
        first.scenes.append(1)
        assert Location().scenes == []


class TestBounds:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Prop(quantity=0)

    def test_shot_number_starts_at_one(self):
        with pytest.raises(ValidationError):
            StoryboardShot(number=0)

    def test_parking_spaces_non_negative(self):
        with pytest.raises(ValidationError):
            Location.model_validate({"logistics": {"parking_spaces": -1}})

    def test_permit_status_enum(self):
        with pytest.raises(ValidationError):
            Location.model_validate({"logistics": {"permits": "maybe"}})

    def test_unknown_domain_rejected(self):
        with pytest.raises(ValidationError):
            RawContent(domain="music", text="x")


class TestExtraKeys:
    def test_extra_keys_ignored(self):
        element = ScriptElement.model_validate({"type": "action", "content": "x", "mood": "tense"})
        assert element.model_dump() == {"type": "action", "content": "x", "character": None}


class TestPropsAndWardrobe:
    def test_records_lists_props_first(self):
        inventory = PropsAndWardrobe(props=[Prop(name="Lamp")], wardrobe=[WardrobeItem(outfit="Coat")])
        assert [type(r) for r in inventory.records()] == [Prop, WardrobeItem]
        assert len(inventory) == 2

    def test_empty_inventory_is_falsy(self):
        assert not PropsAndWardrobe()
