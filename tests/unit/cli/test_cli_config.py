"""Unit tests for scrapbox2review CLI configuration management.

This module tests the configuration system including file discovery, loading,
validation, and priority handling.
"""

import argparse
import json
from pathlib import Path

import pytest
import yaml

from scrapbox2review.cli.config import (
    _load_pyproject_section,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    validate_config,
)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_discover_config_in_cwd(self, isolated_config) -> None:
        """Test discovering a config file in the working directory."""
        config_file = isolated_config / ".scrapbox2review.toml"
        config_file.write_text("base_heading_level = 4\n")

        discovered = discover_config_file()

        assert discovered is not None
        assert discovered.resolve() == config_file.resolve()

    def test_discover_config_in_parent(self, isolated_config) -> None:
        """Test discovering a config file in a parent directory."""
        config_file = isolated_config / ".scrapbox2review.json"
        config_file.write_text('{"has_title": false}')
        nested = isolated_config / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config_file.resolve()

    def test_discover_config_in_home(self, isolated_config) -> None:
        """Test falling back to the home directory."""
        home = Path.home()
        config_file = home / ".scrapbox2review.yaml"
        config_file.write_text("has_title: false\n")

        assert discover_config_file() == config_file

    def test_no_config_found(self, isolated_config) -> None:
        """Test that nothing is discovered in empty directories."""
        assert discover_config_file() is None

    def test_dedicated_file_preferred_over_pyproject(self, isolated_config) -> None:
        """Test that a dedicated config file wins over pyproject.toml in the same directory."""
        (isolated_config / "pyproject.toml").write_text("[tool.scrapbox2review]\nhas_title = false\n")
        config_file = isolated_config / ".scrapbox2review.yml"
        config_file.write_text("has_title: true\n")

        assert find_config_in_parents(isolated_config) == config_file.resolve()

    def test_pyproject_with_section_discovered(self, isolated_config) -> None:
        """Test discovering pyproject.toml with a tool section."""
        pyproject = isolated_config / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'x'\n\n[tool.scrapbox2review]\nbase_heading_level = 2\n")

        assert find_config_in_parents(isolated_config) == pyproject.resolve()

    def test_pyproject_without_section_skipped(self, isolated_config) -> None:
        """Test that pyproject.toml without a tool section is ignored."""
        (isolated_config / "pyproject.toml").write_text("[project]\nname = 'x'\n")

        assert find_config_in_parents(isolated_config) is None

    def test_invalid_pyproject_skipped(self, isolated_config) -> None:
        """Test that a broken pyproject.toml does not stop discovery."""
        (isolated_config / "pyproject.toml").write_text("[tool.scrapbox2review\n")

        assert find_config_in_parents(isolated_config) is None


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading configuration files in each supported format."""

    def test_load_toml(self, tmp_path) -> None:
        """Test loading a TOML config file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('base_heading_level = 4\nlink_base_url = "https://cosen.se"\n')

        assert load_config_file(config_file) == {"base_heading_level": 4, "link_base_url": "https://cosen.se"}

    def test_load_yaml(self, tmp_path) -> None:
        """Test loading a YAML config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"has_title": False}))

        assert load_config_file(str(config_file)) == {"has_title": False}

    def test_load_empty_yaml(self, tmp_path) -> None:
        """Test that an empty YAML file is an empty configuration."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("")

        assert load_config_file(config_file) == {}

    def test_load_json(self, tmp_path) -> None:
        """Test loading a JSON config file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"base_heading_level": 2}))

        assert load_config_file(config_file) == {"base_heading_level": 2}

    def test_load_pyproject_section(self, tmp_path) -> None:
        """Test loading only the tool section of pyproject.toml."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'x'\n\n[tool.scrapbox2review]\nhas_title = false\n")

        assert load_config_file(pyproject) == {"has_title": False}
        assert _load_pyproject_section(pyproject) == {"has_title": False}

    def test_pyproject_section_must_be_table(self, tmp_path) -> None:
        """Test that a non-table tool section is rejected."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool]\nscrapbox2review = 3\n")

        with pytest.raises(argparse.ArgumentTypeError, match="must be a table"):
            _load_pyproject_section(pyproject)

    def test_missing_file(self, tmp_path) -> None:
        """Test that a missing config file is an error."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_directory_is_not_a_file(self, tmp_path) -> None:
        """Test that a directory is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path) -> None:
        """Test that unknown extensions are rejected."""
        config_file = tmp_path / "config.ini"
        config_file.write_text("[x]\n")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported config file format"):
            load_config_file(config_file)

    @pytest.mark.parametrize(
        "filename,content,message",
        [
            ("config.toml", "base_heading_level = \n", "Invalid TOML"),
            ("config.json", "{not json", "Invalid JSON"),
            ("config.json", "[1, 2]", "must contain an object"),
            ("config.yaml", "key: [unclosed", "Invalid YAML"),
            ("config.yaml", "- a\n- b\n", "must contain a mapping"),
        ],
    )
    def test_malformed_files(self, tmp_path, filename, content, message) -> None:
        """Test that malformed files raise ArgumentTypeError."""
        config_file = tmp_path / filename
        config_file.write_text(content)

        with pytest.raises(argparse.ArgumentTypeError, match=message):
            load_config_file(config_file)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigValidation:
    """Test validate_config."""

    def test_valid_config(self) -> None:
        """Test that valid values pass through."""
        config = {"has_title": False, "base_heading_level": 4, "link_base_url": "https://cosen.se"}
        assert validate_config(config) == config

    @pytest.mark.parametrize("value", [None, 0])
    def test_falsy_heading_level_uses_default(self, value) -> None:
        """Test that None and 0 select the default heading level."""
        assert validate_config({"base_heading_level": value}) == {"base_heading_level": 3}

    def test_unknown_key(self) -> None:
        """Test that unknown keys are rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="Unknown configuration keys: title"):
            validate_config({"title": True})

    @pytest.mark.parametrize(
        "config",
        [
            {"has_title": "yes"},
            {"base_heading_level": "3"},
            {"base_heading_level": True},
            {"link_base_url": 42},
        ],
    )
    def test_wrong_types(self, config) -> None:
        """Test that values of the wrong type are rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="must be"):
            validate_config(config)

    def test_negative_heading_level(self) -> None:
        """Test that a negative heading level is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="at least 1"):
            validate_config({"base_heading_level": -1})


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test load_config_with_priority."""

    def test_explicit_path_wins(self, isolated_config, tmp_path) -> None:
        """Test that an explicit path beats the environment and discovery."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"base_heading_level": 5}')
        env = tmp_path / "env.json"
        env.write_text('{"base_heading_level": 6}')
        (isolated_config / ".scrapbox2review.json").write_text('{"base_heading_level": 7}')

        assert load_config_with_priority(str(explicit), str(env)) == {"base_heading_level": 5}

    def test_env_path_beats_discovery(self, isolated_config, tmp_path) -> None:
        """Test that the environment variable path beats discovery."""
        env = tmp_path / "env.json"
        env.write_text('{"base_heading_level": 6}')
        (isolated_config / ".scrapbox2review.json").write_text('{"base_heading_level": 7}')

        assert load_config_with_priority(None, str(env)) == {"base_heading_level": 6}

    def test_discovered_config(self, isolated_config) -> None:
        """Test that a discovered config is validated and returned."""
        (isolated_config / ".scrapbox2review.json").write_text('{"base_heading_level": 0}')

        assert load_config_with_priority() == {"base_heading_level": 3}

    def test_no_config(self, isolated_config) -> None:
        """Test the empty result without any config file."""
        assert load_config_with_priority() == {}

    def test_invalid_explicit_config(self, tmp_path) -> None:
        """Test that an invalid explicit config raises."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"unknown": 1}')

        with pytest.raises(argparse.ArgumentTypeError):
            load_config_with_priority(str(explicit))
