"""
Configuration file support for idf-tools.

Provides hierarchical configuration loading from:
1. Project config: .idf-tools.toml or idf-tools.toml in project root
2. User config: ~/.config/idf-tools/config.toml

Project config overrides user config. Settings only affect the client
helpers (logging, document rewrites, geometry comparison); the IDF decoder
and encoder always behave the same.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".idf-tools.toml", "idf-tools.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "idf-tools" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose", "quiet"},
    "rewrite": {"source_prefix", "remove_test_points", "part_numbers_from", "dedupe_definitions"},
    "geometry": {"tolerance_mm"},
}

PART_NUMBER_SOURCES = ("keep", "package", "geometry")


@dataclass
class DefaultsConfig:
    """Logging defaults."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class RewriteConfig:
    """Transformations applied by :func:`idf_tools.operations.apply_rewrite`."""

    source_prefix: str = ""
    remove_test_points: bool = False
    part_numbers_from: str = "keep"
    dedupe_definitions: bool = False


@dataclass
class GeometryConfig:
    """Outline comparison settings."""

    tolerance_mm: float = 1e-4


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file.

    Returns:
        Parsed TOML data, or None when no TOML parser is available

    Raises:
        ConfigurationError: If the file is unreadable or not valid TOML
    """
    if tomllib is None:
        warnings.warn(
            "tomli package not installed. Config file support requires 'pip install tomli' for Python < 3.11.",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}: {e}", context={"file": str(path)}
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}", context={"file": str(path)}
        ) from e


def _set(
    target: Any,
    section: str,
    key: str,
    value: Any,
    expected: type | tuple[type, ...],
    source: str,
    sources: dict[str, str],
) -> None:
    # bool is an int subclass; keep it out of numeric settings
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        raise ConfigurationError(
            f"Config key '{section}.{key}' has the wrong type",
            context={"file": source, "value": repr(value)},
        )
    setattr(target, key, value)
    sources[f"{section}.{key}"] = source


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "defaults" in data:
        defaults_data = data["defaults"]
        _warn_unknown_keys(defaults_data, KNOWN_KEYS["defaults"], "defaults", source)

        for key in ("verbose", "quiet"):
            if key in defaults_data:
                _set(config.defaults, "defaults", key, defaults_data[key], bool, source, sources)

    if "rewrite" in data:
        rewrite_data = data["rewrite"]
        _warn_unknown_keys(rewrite_data, KNOWN_KEYS["rewrite"], "rewrite", source)

        if "source_prefix" in rewrite_data:
            _set(
                config.rewrite, "rewrite", "source_prefix",
                rewrite_data["source_prefix"], str, source, sources,
            )
        for key in ("remove_test_points", "dedupe_definitions"):
            if key in rewrite_data:
                _set(config.rewrite, "rewrite", key, rewrite_data[key], bool, source, sources)
        if "part_numbers_from" in rewrite_data:
            value = rewrite_data["part_numbers_from"]
            if value not in PART_NUMBER_SOURCES:
                raise ConfigurationError(
                    f"Invalid rewrite.part_numbers_from: {value!r}",
                    context={"file": source, "available": ", ".join(PART_NUMBER_SOURCES)},
                )
            _set(config.rewrite, "rewrite", "part_numbers_from", value, str, source, sources)

    if "geometry" in data:
        geometry_data = data["geometry"]
        _warn_unknown_keys(geometry_data, KNOWN_KEYS["geometry"], "geometry", source)

        if "tolerance_mm" in geometry_data:
            _set(
                config.geometry, "geometry", "tolerance_mm",
                geometry_data["tolerance_mm"], (int, float), source, sources,
            )


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# idf-tools configuration file
# Place as .idf-tools.toml in project root or ~/.config/idf-tools/config.toml for user defaults

[defaults]
# Log every decoded section
# verbose = false

# Only log errors
# quiet = false

[rewrite]
# Prepended to the header source when rewriting a document
# source_prefix = ""

# Drop placements whose designator starts with TP
# remove_test_points = false

# Where part numbers come from: keep, package (placements), geometry (library definitions)
# part_numbers_from = "keep"

# Keep only the first library definition per geometry name
# dedupe_definitions = false

[geometry]
# Tolerance for outline comparison in mm
# tolerance_mm = 0.0001
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
