"""Profile model / codec tests"""

from __future__ import annotations

import pytest

from item_factory.core.profile import (
    FieldType,
    FieldValidation,
    ItemProfile,
    PlayerStatField,
    PlayerStatSection,
    ProfileField,
    RelationshipConstraint,
    type_slug,
)
from item_factory.core.profile.codec import (
    player_profile_from_dict,
    player_profile_to_dict,
    profile_from_dict,
    profile_to_dict,
)


class TestFieldType:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("string", FieldType.STRING),
            ("Integer", FieldType.INTEGER),
            ("int", FieldType.INTEGER),
            ("double", FieldType.FLOAT),
            ("bool", FieldType.BOOLEAN),
            ("array", FieldType.ARRAY),
            ("object", FieldType.OBJECT),
            ("", FieldType.STRING),
            ("vector3", FieldType.STRING),
        ],
    )
    def test_parse(self, text: str, expected: FieldType) -> None:
        assert FieldType.parse(text) is expected

    def test_numeric_and_length_groups(self) -> None:
        assert FieldType.INTEGER.is_numeric and FieldType.FLOAT.is_numeric
        assert not FieldType.BOOLEAN.is_numeric
        assert FieldType.STRING.has_length and FieldType.ARRAY.has_length
        assert not FieldType.OBJECT.has_length


class TestFieldValidation:
    def test_allowed_values_deduplicated_in_order(self) -> None:
        v = FieldValidation(allowed_values=["Rare", "Common", "Rare", "Epic"])
        assert v.allowed_values == ["Rare", "Common", "Epic"]

    def test_zero_bounds_mean_unbounded(self) -> None:
        v = FieldValidation(min_value=0, max_value=100)
        assert not v.has_min_value
        assert v.has_max_value


class TestItemProfile:
    def _profile(self) -> ItemProfile:
        return ItemProfile(
            id="p",
            item_type_name="Weapon Component",
            fields=[
                ProfileField("b", display_order=5, category="Stats"),
                ProfileField("a", display_order=1, category="Identity"),
                ProfileField("c", display_order=5, category="Stats"),
            ],
        )

    def test_sorted_fields_stable_on_ties(self) -> None:
        names = [f.name for f in self._profile().sorted_fields()]
        assert names == ["a", "b", "c"]

    def test_lookup_helpers(self) -> None:
        profile = self._profile()
        assert profile.has_field("a")
        assert profile.get_field("zzz") is None
        assert [f.name for f in profile.fields_by_category("Stats")] == ["b", "c"]

    def test_type_slug(self) -> None:
        assert self._profile().type_slug == "weaponcomponent"
        assert type_slug("Food & Drink!") == "fooddrink"

    def test_empty_profile_is_sentinel(self) -> None:
        assert ItemProfile().is_empty


class TestPlayerStatSection:
    def test_fields_sorted_by_display_order(self) -> None:
        section = PlayerStatSection(
            name="s",
            fields=[PlayerStatField("y", display_order=2), PlayerStatField("x", display_order=1)],
        )
        assert [f.name for f in section.sorted_fields()] == ["x", "y"]


class TestProfileCodec:
    RAW = {
        "id": "custom_food",
        "displayName": "Custom Food",
        "description": "desc",
        "itemTypeName": "Food",
        "version": 3,
        "isDefault": False,
        "customContext": "Post-apocalyptic wasteland.",
        "fields": [
            {
                "name": "hungerRestore",
                "displayName": "Hunger",
                "description": "",
                "category": "Effects",
                "displayOrder": 10,
                "type": "int",
                "defaultValue": 5,
                "validation": {
                    "isRequired": True,
                    "minLength": 0,
                    "maxLength": 0,
                    "minValue": 0,
                    "maxValue": 100,
                    "allowedValues": [],
                    "relationshipConstraints": [
                        {
                            "description": "hunger first",
                            "operator": ">=",
                            "targetField": "thirstRestore",
                            "offset": 5,
                        }
                    ],
                    "customConstraint": "",
                },
            }
        ],
        "metadata": {"author": "test"},
    }

    def test_from_dict(self) -> None:
        profile = profile_from_dict(self.RAW)
        assert profile.version == 3
        assert profile.custom_context.startswith("Post")
        f = profile.fields[0]
        assert f.type is FieldType.INTEGER
        assert f.default_value == 5
        assert f.validation.required is True
        assert f.validation.relationship_constraints == [
            RelationshipConstraint(">=", "thirstRestore", "hunger first", 5.0)
        ]

    def test_to_dict_uses_file_keys(self) -> None:
        data = profile_to_dict(profile_from_dict(self.RAW))
        assert data["itemTypeName"] == "Food"
        field = data["fields"][0]
        assert field["type"] == "integer"
        assert field["validation"]["isRequired"] is True
        assert field["validation"]["relationshipConstraints"][0]["targetField"] == "thirstRestore"
        assert "regexPattern" not in field["validation"]

    def test_wrong_types_raise(self) -> None:
        with pytest.raises(TypeError):
            profile_from_dict({"id": "x", "fields": {"not": "a list"}})

    def test_player_profile_keys(self) -> None:
        raw = {
            "id": "hardcore",
            "displayName": "Hardcore",
            "playerSettings": {"maxHunger": 80},
            "statSections": [
                {
                    "name": "survival",
                    "displayOrder": 1,
                    "fields": [{"name": "hunger", "value": 80, "displayOrder": 0}],
                }
            ],
        }
        profile = player_profile_from_dict(raw)
        assert profile.player_settings.max_hunger == 80
        assert profile.player_settings.max_thirst == 100
        assert profile.stat_sections[0].fields[0].value == 80
        assert player_profile_to_dict(profile)["playerSettings"]["maxWeight"] == 50000
