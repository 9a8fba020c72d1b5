"""
Config command for idf-tools CLI.

Usage:
    idf-tools config --show     Show effective configuration with sources
    idf-tools config --init     Create template config file
    idf-tools config --paths    Show config file paths
"""

import argparse
import sys
from pathlib import Path

from idf_tools.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)
from idf_tools.exceptions import ConfigurationError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for config command."""
    parser = argparse.ArgumentParser(
        prog="idf-tools config",
        description="Manage idf-tools configuration",
    )
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        "--show", action="store_true", help="Show effective configuration with sources"
    )
    action_group.add_argument(
        "--init", action="store_true", help="Create template config file in current directory"
    )
    action_group.add_argument("--paths", action="store_true", help="Show config file paths")

    args = parser.parse_args(argv)

    try:
        if args.init:
            return _init_config()
        elif args.paths:
            return _show_paths()
        return _show_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective idf-tools configuration")
    for section in ("defaults", "rewrite", "geometry"):
        print()
        print(f"[{section}]")
        values = getattr(config, section)
        for key, value in vars(values).items():
            _print_value(key, value, config.get_source(f"{section}.{key}"))

    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    if isinstance(value, str):
        formatted = f'"{value}"'
    elif isinstance(value, bool):
        formatted = "true" if value else "false"
    else:
        formatted = str(value)

    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print(f"User config: {USER_CONFIG_PATH}")
    print(f"  Status: {'exists' if paths['user'] else 'not found'}")
    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config() -> int:
    """Create a template config file in the current directory."""
    target = Path.cwd() / CONFIG_FILENAMES[0]

    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        return 1

    try:
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
