"""Command line interface for extension settings."""

from .settings_menu import SettingsMenu, build_items, run_interactive_menu

__all__ = ["SettingsMenu", "build_items", "run_interactive_menu"]
