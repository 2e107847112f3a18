"""Configuration models using Pydantic."""

from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..tui.keybindings import DEFAULT_KEYBINDINGS, EditorAction


class StorageConfig(BaseModel):
    """Where setting values and definitions live."""
    dir: str = "~/.config/extension-settings"
    filename: str = "settings-extensions.yaml"
    definitions: str = "definitions.yaml"  # Relative to dir unless absolute

    @property
    def path(self) -> Path:
        """Resolved directory."""
        return Path(self.dir).expanduser()


class UIConfig(BaseModel):
    """Settings menu appearance."""
    max_visible: int = Field(default=20, ge=1)
    enable_search: bool = True
    color: bool = True
    cursor: str = "→ "


def _default_keys(action: EditorAction):
    return Field(default_factory=lambda: list(DEFAULT_KEYBINDINGS[action]))


class KeybindingsConfig(BaseModel):
    """Key ids per editor action (e.g. "up", "c-p", "shift+tab")."""
    select_up: List[str] = _default_keys(EditorAction.SELECT_UP)
    select_down: List[str] = _default_keys(EditorAction.SELECT_DOWN)
    select_confirm: List[str] = _default_keys(EditorAction.SELECT_CONFIRM)
    select_cancel: List[str] = _default_keys(EditorAction.SELECT_CANCEL)
    cursor_left: List[str] = _default_keys(EditorAction.CURSOR_LEFT)
    cursor_right: List[str] = _default_keys(EditorAction.CURSOR_RIGHT)
    cursor_line_start: List[str] = _default_keys(EditorAction.CURSOR_LINE_START)
    cursor_line_end: List[str] = _default_keys(EditorAction.CURSOR_LINE_END)
    delete_char_backward: List[str] = _default_keys(EditorAction.DELETE_CHAR_BACKWARD)
    delete_char_forward: List[str] = _default_keys(EditorAction.DELETE_CHAR_FORWARD)
    delete_word_backward: List[str] = _default_keys(EditorAction.DELETE_WORD_BACKWARD)
    delete_to_line_start: List[str] = _default_keys(EditorAction.DELETE_TO_LINE_START)
    delete_to_line_end: List[str] = _default_keys(EditorAction.DELETE_TO_LINE_END)


class AppConfig(BaseModel):
    """Root configuration model."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields in config file

    storage: StorageConfig = Field(default_factory=StorageConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    keybindings: KeybindingsConfig = Field(default_factory=KeybindingsConfig)
