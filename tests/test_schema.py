"""Tests for setting definitions."""

import pytest

from extension_settings.errors import InvalidDefinitionError
from extension_settings.settings import OrderedListOption, SettingDefinition, definition_from_dict


class TestSettingDefinition:
    def test_kinds(self):
        assert SettingDefinition("a", "A", values=["x"]).kind == "cycle"
        assert SettingDefinition("a", "A", options=[OrderedListOption("x", "X")]).kind == "ordered"
        assert SettingDefinition("a", "A").kind == "text"

    def test_empty_values_mean_text(self):
        definition = SettingDefinition("a", "A", values=[])
        assert definition.values is None
        assert definition.kind == "text"

    def test_empty_id_rejected(self):
        with pytest.raises(InvalidDefinitionError):
            SettingDefinition("", "A")

    def test_values_and_options_exclusive(self):
        with pytest.raises(InvalidDefinitionError, match="mutually exclusive"):
            SettingDefinition("a", "A", values=["x"], options=[OrderedListOption("x", "X")])

    def test_duplicate_option_ids(self):
        with pytest.raises(ValueError, match="unique"):
            SettingDefinition(
                "a", "A", options=[OrderedListOption("x", "X"), OrderedListOption("x", "Y")]
            )

    def test_duplicate_values_rejected(self):
        with pytest.raises(InvalidDefinitionError, match="values must be unique"):
            SettingDefinition("mode", "Mode", "b", values=["a", "a", "b"])

    @pytest.mark.parametrize("option_id", ["", "a,b", " c", "d "])
    def test_option_ids_must_survive_comma_list(self, option_id):
        with pytest.raises(InvalidDefinitionError, match="invalid option id"):
            SettingDefinition("a", "A", options=[OrderedListOption(option_id, "Label")])

    def test_validate(self):
        definition = SettingDefinition("mode", "Mode", values=["fast", "slow"])
        assert definition.validate("fast") is None
        assert "must be one of" in definition.validate("medium")
        assert definition.validate(3) is not None

    def test_validation_callable_returning_false(self):
        definition = SettingDefinition("n", "Number", validation=str.isdigit)
        assert definition.validate("12") is None
        assert definition.validate("x") == "Invalid value for Number"

    def test_validation_callable_raising(self):
        def check(value):
            raise ValueError("nope")

        definition = SettingDefinition("n", "Number", validation=check)
        assert definition.validate("1") == "nope"


class TestDefinitionFromDict:
    def test_cycle_definition(self):
        definition = definition_from_dict(
            {"id": "timeout", "label": "Timeout", "default": 30, "values": [10, 30, 60]}
        )
        assert definition.default == "30"
        assert definition.values == ["10", "30", "60"]

    def test_boolean_default(self):
        definition = definition_from_dict(
            {"id": "debug", "label": "Debug", "default": False, "values": ["true", "false"]}
        )
        assert definition.default == "false"

    def test_options(self):
        definition = definition_from_dict(
            {
                "id": "providers",
                "label": "Providers",
                "options": [{"id": "github", "label": "GitHub"}, "gitlab"],
            }
        )
        assert definition.options == [
            OrderedListOption("github", "GitHub"),
            OrderedListOption("gitlab", "gitlab"),
        ]

    def test_missing_label(self):
        with pytest.raises(InvalidDefinitionError, match="label"):
            definition_from_dict({"id": "x"})

    def test_not_a_mapping(self):
        with pytest.raises(InvalidDefinitionError):
            definition_from_dict(["x"])
