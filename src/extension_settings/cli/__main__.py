"""extension-settings CLI entry point.

Usage:
    extension-settings                          # Interactive menu
    extension-settings list                     # Print every setting
    extension-settings get my-ext timeout       # Print one value
    extension-settings set my-ext timeout 60    # Change one value
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config import AppConfig, load_config
from ..errors import ConfigError, ExtensionSettingsError
from ..settings import SettingsManager, register_entry_points, register_from_file
from ..tui import EditorKeybindings, set_editor_keybindings
from .settings_menu import NO_SETTINGS_MESSAGE, run_interactive_menu

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 3


def configure_logging(verbose: bool, log_file: Path | None = None) -> None:
    """Configure logging based on flags.

    The interactive menu owns the terminal, so logs only reach stderr when
    verbose is set; a log file always receives them.

    Args:
        verbose: Log at DEBUG level (and to stderr when no log file is set).
        log_file: Optional log file path.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handlers = []

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    elif verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    if handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )

    # Suppress noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="extension-settings",
        description="Browse and edit settings registered by extensions.",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file path (default: $EXTENSION_SETTINGS_CONFIG or "
        "~/.config/extension-settings/config.yaml).",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding the settings and definitions files "
        "(default: storage.dir from the config).",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to this file.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("menu", help="Open the interactive settings menu (default).")
    subparsers.add_parser("list", help="Print every registered setting and its value.")

    get_parser = subparsers.add_parser("get", help="Print one setting value.")
    get_parser.add_argument("namespace", help="Extension name.")
    get_parser.add_argument("key", help="Setting id.")

    set_parser = subparsers.add_parser("set", help="Change one setting value.")
    set_parser.add_argument("namespace", help="Extension name.")
    set_parser.add_argument("key", help="Setting id.")
    set_parser.add_argument("value", help="New value.")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = _build_parser()
    return parser.parse_args(argv)


def build_manager(config: AppConfig, config_dir: Path | None = None) -> SettingsManager:
    """Create the settings manager and run the registration phase.

    Definitions come from the definitions file and from installed entry
    points. The returned manager is sealed.

    Args:
        config: Application config.
        config_dir: Overrides config.storage.dir.

    Raises:
        ExtensionSettingsError: If a definition is malformed or registered twice.
    """
    storage_dir = Path(config_dir).expanduser() if config_dir else config.storage.path
    manager = SettingsManager(storage_dir, filename=config.storage.filename)

    definitions = Path(config.storage.definitions).expanduser()
    if not definitions.is_absolute():
        definitions = storage_dir / definitions

    register_from_file(manager, definitions)
    register_entry_points(manager)
    manager.seal()
    return manager


def _print_list(manager: SettingsManager) -> int:
    namespaces = manager.get_namespaces()
    if not namespaces:
        print(NO_SETTINGS_MESSAGE)
        return EXIT_SUCCESS

    for namespace in namespaces:
        print(f"[{namespace.display_name}]")
        for definition in namespace.definitions:
            value = manager.get(namespace.name, definition.id)
            print(f"  {definition.id} = {value}")
    return EXIT_SUCCESS


def _get(manager: SettingsManager, namespace: str, key: str) -> int:
    if manager.get_definition(namespace, key) is None:
        print(f"Error: Unknown setting {namespace}.{key}", file=sys.stderr)
        return EXIT_ERROR
    print(manager.get(namespace, key))
    return EXIT_SUCCESS


def _set(manager: SettingsManager, namespace: str, key: str, value: str) -> int:
    if manager.get_definition(namespace, key) is None:
        print(f"Error: Unknown setting {namespace}.{key}", file=sys.stderr)
        return EXIT_ERROR

    error = manager.set(namespace, key, value)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_ERROR
    print(f"{namespace}.{key} = {value}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.
    """
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    set_editor_keybindings(EditorKeybindings(config.keybindings.model_dump()))

    try:
        manager = build_manager(config, args.config_dir)
    except ExtensionSettingsError as e:
        logger.error(f"Registration failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    command = args.command or "menu"
    if command == "list":
        return _print_list(manager)
    if command == "get":
        return _get(manager, args.namespace, args.key)
    if command == "set":
        return _set(manager, args.namespace, args.key, args.value)

    try:
        return run_interactive_menu(manager, config)
    except KeyboardInterrupt:
        return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
