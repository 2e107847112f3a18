import tempfile
from pathlib import Path

import pytest

from extension_settings.config import reset_config
from extension_settings.settings import SettingDefinition, SettingsManager
from extension_settings.settings.schema import OrderedListOption
from extension_settings.tui import SettingsListTheme, set_editor_keybindings

# Raw terminal tokens
UP = "\x1b[A"
DOWN = "\x1b[B"
LEFT = "\x1b[D"
HOME = "\x1b[H"
SHIFT_UP = "\x1b[1;2A"
SHIFT_DOWN = "\x1b[1;2B"
ENTER = "\r"
ESCAPE = "\x1b"
SPACE = " "
BACKSPACE = "\x7f"
CTRL_C = "\x03"


@pytest.fixture(autouse=True)
def _reset_globals():
    """Restore process-wide keybindings and config between tests."""
    set_editor_keybindings(None)
    reset_config()
    yield
    set_editor_keybindings(None)
    reset_config()


@pytest.fixture
def temp_config_dir():
    """Create a temporary config directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings_manager(temp_config_dir):
    """Create a SettingsManager with a temp config directory."""
    return SettingsManager(config_dir=temp_config_dir)


@pytest.fixture
def plain_theme():
    """Unstyled theme so rendered lines can be compared directly."""
    return SettingsListTheme()


@pytest.fixture
def sample_definitions():
    """Definitions covering every editor kind."""
    return [
        SettingDefinition(
            id="timeout",
            label="Timeout",
            default="30",
            description="Seconds to wait",
            values=["10", "30", "60"],
        ),
        SettingDefinition(id="projectName", label="Project Name", default=""),
        SettingDefinition(
            id="providers",
            label="Providers",
            default="github",
            options=[
                OrderedListOption("github", "GitHub"),
                OrderedListOption("gitlab", "GitLab"),
                OrderedListOption("bitbucket", "Bitbucket"),
            ],
        ),
    ]
