#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the scrapbox2review CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON format, and validating their keys against
the conversion options.
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from scrapbox2review.constants import CONFIG_FILENAMES, DEFAULT_BASE_HEADING_LEVEL, PYPROJECT_TOOL_SECTION

# Config keys and the types they accept
CONFIG_KEYS: Dict[str, type] = {
    "has_title": bool,
    "base_heading_level": int,
    "link_base_url": str,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.scrapbox2review] section from a pyproject.toml file.

    Returns
    -------
    dict
        Configuration dictionary from the section, or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)

        config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise argparse.ArgumentTypeError(
                f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
                f"got {type(config).__name__}"
            )
        return config

    except argparse.ArgumentTypeError:
        raise
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except Exception as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root. In
    each directory the dedicated config files are checked first, then a
    pyproject.toml with a [tool.scrapbox2review] section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # Invalid pyproject.toml, keep searching
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent directories of ``start_dir`` are searched first, then the
    user's home directory (dedicated config files only).

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".scrapbox2review.toml")
    >>> config.get("base_heading_level")
    4

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    # An empty YAML document is an empty configuration
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check config keys and value types and normalize the heading level.

    A ``base_heading_level`` of None or 0 selects the default.

    Parameters
    ----------
    config : dict
        Loaded configuration

    Returns
    -------
    dict
        Configuration ready to pass as option keyword arguments

    Raises
    ------
    argparse.ArgumentTypeError
        For unknown keys or values of the wrong type

    Examples
    --------
    >>> validate_config({"base_heading_level": 0})
    {'base_heading_level': 3}

    """
    unknown = sorted(set(config) - set(CONFIG_KEYS))
    if unknown:
        raise argparse.ArgumentTypeError(
            f"Unknown configuration keys: {', '.join(unknown)}. Valid keys: {', '.join(CONFIG_KEYS)}"
        )

    validated: Dict[str, Any] = {}
    for key, value in config.items():
        if key == "base_heading_level" and not value:
            validated[key] = DEFAULT_BASE_HEADING_LEVEL
            continue
        expected = CONFIG_KEYS[key]
        # bool is a subclass of int and must not pass as a heading level
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise argparse.ArgumentTypeError(
                f"Configuration key '{key}' must be {expected.__name__}, got {type(value).__name__}"
            )
        if key == "base_heading_level" and value < 1:
            raise argparse.ArgumentTypeError(f"Configuration key 'base_heading_level' must be at least 1, got {value}")
        validated[key] = value
    return validated


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (SCRAPBOX2REVIEW_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Validated configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded, or is invalid

    """
    if explicit_path:
        return validate_config(load_config_file(explicit_path))

    if env_var_path:
        return validate_config(load_config_file(env_var_path))

    discovered_path = discover_config_file()
    if discovered_path:
        return validate_config(load_config_file(discovered_path))

    return {}
