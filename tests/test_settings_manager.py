"""Tests for the SettingsManager.

Tests the core settings management functionality including:
- Namespace registration and sealing
- Value get/set with defaults
- Validation
- Persistence to YAML
- Change events
"""

import pytest
import yaml

from extension_settings.errors import NamespaceAlreadyRegisteredError, RegistrationClosedError
from extension_settings.settings import (
    SettingDefinition,
    SettingsManager,
    get_settings_manager,
    init_settings_manager,
)


class TestRegistration:
    """Tests for the registration phase."""

    def test_register_namespace(self, settings_manager, sample_definitions):
        """Test registering a settings namespace."""
        settings_manager.register("test", sample_definitions, display_name="Test", order=10)

        assert settings_manager.is_registered("test")
        namespaces = settings_manager.get_namespaces()
        assert len(namespaces) == 1
        assert namespaces[0].name == "test"
        assert namespaces[0].display_name == "Test"

    def test_display_name_defaults_to_namespace(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        assert settings_manager.get_namespace("test").display_name == "test"

    def test_duplicate_namespace_raises(self, settings_manager, sample_definitions):
        """Test that registering duplicate namespace raises error."""
        settings_manager.register("test", sample_definitions)

        with pytest.raises(NamespaceAlreadyRegisteredError, match="already registered"):
            settings_manager.register("test", sample_definitions)

    def test_register_after_seal_raises(self, settings_manager, sample_definitions):
        """Test that the registration phase closes on seal."""
        settings_manager.register("first", sample_definitions)
        settings_manager.seal()
        settings_manager.seal()  # idempotent

        assert settings_manager.is_sealed
        with pytest.raises(RegistrationClosedError):
            settings_manager.register("late", sample_definitions)
        assert not settings_manager.is_registered("late")

    def test_namespaces_sorted_by_order_then_name(self, settings_manager):
        definition = [SettingDefinition("x", "X")]
        settings_manager.register("zeta", definition)
        settings_manager.register("alpha", definition)
        settings_manager.register("first", definition, order=1)

        names = [ns.name for ns in settings_manager.get_namespaces()]
        assert names == ["first", "alpha", "zeta"]

    def test_get_definitions(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)

        assert settings_manager.get_definitions("test") == sample_definitions
        assert settings_manager.get_definition("test", "timeout").label == "Timeout"
        assert settings_manager.get_definition("test", "missing") is None
        assert settings_manager.get_definition("missing", "timeout") is None

        with pytest.raises(KeyError):
            settings_manager.get_definitions("missing")


class TestValues:
    """Tests for get/set."""

    def test_defaults(self, settings_manager, sample_definitions):
        """Test the fallback chain: stored, caller default, registered default."""
        settings_manager.register("test", sample_definitions)

        assert settings_manager.get("test", "timeout") == "30"
        assert settings_manager.get("test", "timeout", "10") == "10"
        assert settings_manager.get("test", "unknown") is None
        assert settings_manager.get("test", "unknown", "fallback") == "fallback"

    def test_set_and_get(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)

        assert settings_manager.set("test", "timeout", "60") is None
        assert settings_manager.get("test", "timeout") == "60"
        assert settings_manager.get("test", "timeout", "10") == "60"

    def test_get_all(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        settings_manager.set("test", "projectName", "demo")

        values = settings_manager.get_all("test")
        assert values == {"timeout": "30", "projectName": "demo", "providers": "github"}

    def test_unregistered_namespace_values(self, settings_manager):
        """Test that values without definitions are stored as-is."""
        assert settings_manager.set("loose", "key", "value") is None
        assert settings_manager.get("loose", "key") == "value"

    def test_cycle_value_validation(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)

        error = settings_manager.set("test", "timeout", "45")

        assert error is not None
        assert "must be one of" in error.lower()
        assert settings_manager.get("test", "timeout") == "30"

    def test_ordered_value_validation(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)

        assert settings_manager.set("test", "providers", "gitlab,github") is None
        assert settings_manager.set("test", "providers", "github,github") is not None
        assert settings_manager.get("test", "providers") == "gitlab,github"

    def test_custom_validation(self, settings_manager):
        settings_manager.register(
            "test",
            [
                SettingDefinition(
                    "name",
                    "Name",
                    validation=lambda v: len(v) <= 3 or "Too long",
                )
            ],
        )

        assert settings_manager.set("test", "name", "abc") is None
        assert settings_manager.set("test", "name", "abcd") == "Too long"
        assert settings_manager.get("test", "name") == "abc"

    def test_external_validator(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        settings_manager.register_validator(
            "test", "projectName", lambda v: None if v.isidentifier() else "Not an identifier"
        )

        assert settings_manager.set("test", "projectName", "ok_name") is None
        assert settings_manager.set("test", "projectName", "not ok") == "Not an identifier"

    def test_skip_validation(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)

        assert settings_manager.set("test", "timeout", "45", skip_validation=True) is None
        assert settings_manager.get("test", "timeout") == "45"

    def test_reset_to_default(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        settings_manager.set("test", "timeout", "60")

        settings_manager.reset_to_default("test", "timeout")

        assert settings_manager.get("test", "timeout") == "30"

    def test_reset_namespace(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        settings_manager.set("test", "timeout", "60")
        settings_manager.set("test", "projectName", "demo")

        settings_manager.reset_namespace("test")

        assert settings_manager.get("test", "timeout") == "30"
        assert settings_manager.get("test", "projectName") == ""


class TestChangeEvents:
    def test_change_events(self, settings_manager, sample_definitions):
        """Test that change events are emitted."""
        settings_manager.register("test", sample_definitions)

        received_events = []
        settings_manager.on_change(lambda ns, key, val: received_events.append((ns, key, val)))
        settings_manager.set("test", "timeout", "60")

        assert received_events == [("test", "timeout", "60")]

    def test_no_event_when_unchanged_or_rejected(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        received_events = []
        settings_manager.on_change(lambda ns, key, val: received_events.append(val))

        settings_manager.set("test", "timeout", "30")
        settings_manager.set("test", "timeout", "45")

        assert received_events == []

    def test_failing_listener_does_not_block_others(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        received_events = []

        def broken(ns, key, val):
            raise RuntimeError("boom")

        settings_manager.on_change(broken)
        settings_manager.on_change(lambda ns, key, val: received_events.append(val))

        assert settings_manager.set("test", "timeout", "60") is None
        assert received_events == ["60"]

    def test_remove_listener(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        received_events = []

        def listener(ns, key, val):
            received_events.append(val)

        settings_manager.on_change(listener)
        settings_manager.remove_listener(listener)
        settings_manager.set("test", "timeout", "60")

        assert received_events == []


class TestPersistence:
    def test_values_survive_restart(self, temp_config_dir, sample_definitions):
        manager = SettingsManager(temp_config_dir)
        manager.register("test", sample_definitions)
        manager.set("test", "timeout", "60")

        reloaded = SettingsManager(temp_config_dir)
        reloaded.register("test", sample_definitions)

        assert reloaded.get("test", "timeout") == "60"

    def test_file_layout(self, settings_manager, sample_definitions):
        settings_manager.register("test", sample_definitions)
        settings_manager.set("test", "providers", "gitlab,github")

        data = yaml.safe_load(settings_manager.storage_path.read_text())
        assert data == {"test": {"providers": "gitlab,github"}}
        assert settings_manager.storage_path.name == "settings-extensions.yaml"

    def test_manual_save(self, temp_config_dir, sample_definitions):
        manager = SettingsManager(temp_config_dir, auto_save=False)
        manager.register("test", sample_definitions)
        manager.set("test", "timeout", "60")

        assert not manager.storage_path.exists()

        manager.save()
        assert SettingsManager(temp_config_dir).get("test", "timeout") == "60"

    def test_reload_discards_unsaved(self, temp_config_dir, sample_definitions):
        manager = SettingsManager(temp_config_dir, auto_save=False)
        manager.register("test", sample_definitions)
        manager.set("test", "timeout", "60")

        manager.reload()

        assert manager.get("test", "timeout") == "30"


class TestGlobalManager:
    def test_init_and_get(self, temp_config_dir):
        manager = init_settings_manager(temp_config_dir, auto_save=False)
        assert get_settings_manager() is manager
