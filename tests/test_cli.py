"""Tests for the extension-settings command line."""

import pytest
import yaml

from extension_settings.cli.__main__ import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    main,
    parse_args,
)
from extension_settings.settings import registration

DEFINITIONS_YAML = """\
my-extension:
  - id: timeout
    label: Timeout
    default: "30"
    values: ["10", "30", "60"]
  - id: projectName
    label: Project Name
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Isolated working directory with no installed registrations."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXTENSION_SETTINGS_CONFIG", raising=False)
    monkeypatch.setattr(registration, "entry_points", lambda group: [])
    return tmp_path


@pytest.fixture
def with_definitions(workdir):
    (workdir / "definitions.yaml").write_text(DEFINITIONS_YAML)
    return workdir


def run_cli(workdir, *args):
    return main(["--config", str(workdir / "config.yaml"), "--config-dir", str(workdir), *args])


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.command is None
        assert args.verbose is False

    def test_set_command(self):
        args = parse_args(["set", "ext", "key", "value"])
        assert (args.command, args.namespace, args.key, args.value) == ("set", "ext", "key", "value")


class TestCommands:
    def test_list_without_settings(self, workdir, capsys):
        assert run_cli(workdir, "list") == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "No extensions have registered settings"

    def test_list(self, with_definitions, capsys):
        assert run_cli(with_definitions, "list") == EXIT_SUCCESS

        out = capsys.readouterr().out.splitlines()
        assert out == ["[my-extension]", "  timeout = 30", "  projectName = "]

    def test_get(self, with_definitions, capsys):
        assert run_cli(with_definitions, "get", "my-extension", "timeout") == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "30"

    def test_get_unknown(self, with_definitions, capsys):
        assert run_cli(with_definitions, "get", "my-extension", "missing") == EXIT_ERROR
        assert "Unknown setting" in capsys.readouterr().err

    def test_set_persists(self, with_definitions, capsys):
        assert run_cli(with_definitions, "set", "my-extension", "timeout", "60") == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "my-extension.timeout = 60"

        data = yaml.safe_load((with_definitions / "settings-extensions.yaml").read_text())
        assert data == {"my-extension": {"timeout": "60"}}

        run_cli(with_definitions, "get", "my-extension", "timeout")
        assert capsys.readouterr().out.strip() == "60"

    def test_set_rejected(self, with_definitions, capsys):
        assert run_cli(with_definitions, "set", "my-extension", "timeout", "45") == EXIT_ERROR
        assert "must be one of" in capsys.readouterr().err
        assert not (with_definitions / "settings-extensions.yaml").exists()

    def test_invalid_config(self, workdir, capsys):
        (workdir / "config.yaml").write_text("ui: [unclosed\n")

        assert run_cli(workdir, "list") == EXIT_CONFIG_ERROR
        assert "Failed to load config" in capsys.readouterr().err

    def test_invalid_definitions(self, workdir, capsys):
        (workdir / "definitions.yaml").write_text("ext:\n  - id: x\n")

        assert run_cli(workdir, "list") == EXIT_CONFIG_ERROR
        assert "label is required" in capsys.readouterr().err

    def test_config_sets_storage(self, workdir, capsys):
        storage_dir = workdir / "store"
        storage_dir.mkdir()
        (storage_dir / "defs.yaml").write_text(DEFINITIONS_YAML)
        (workdir / "config.yaml").write_text(
            f"storage:\n  dir: {storage_dir}\n  definitions: defs.yaml\n  filename: values.yaml\n"
        )

        assert main(["--config", str(workdir / "config.yaml"), "set", "my-extension", "projectName", "demo"]) == EXIT_SUCCESS
        assert (storage_dir / "values.yaml").exists()
