"""Tests for the configuration loader."""

import pytest

from cosmictag.config import (
    ConfigCycleError,
    ConfigIncludeError,
    ConfigOperationError,
    ConfigPathError,
    load_config,
    load_config_file,
)
from cosmictag.config.operations import deep_merge, parse_value, set_nested_value


class TestConfigLoader:
    """Test suite for the YAML config loader."""

    def test_basic_load(self, tmp_path):
        """Test basic YAML loading without any special features."""
        config_file = tmp_path / "basic.yaml"
        config_file.write_text(
            """
base:
  verbosity: info
io:
  reader:
    name: csv
    file_keys: data/*
"""
        )

        cfg = load_config_file(str(config_file))

        assert cfg["base"]["verbosity"] == "info"
        assert cfg["io"]["reader"]["name"] == "csv"

    def test_empty(self):
        """An empty configuration is an empty dictionary."""
        assert load_config("") == {}

    def test_include(self, tmp_path):
        """Test including another YAML file at the top level."""
        (tmp_path / "geo.yaml").write_text(
            """
geo:
  half_width: 128.175
  half_height: 116.5
post:
  cosmic_pca_tagger:
    x_margin: 5
"""
        )
        main_config = tmp_path / "main.yaml"
        main_config.write_text(
            """
include: geo

post:
  cosmic_pca_tagger:
    y_margin: 10
"""
        )

        cfg = load_config_file(str(main_config))

        assert cfg["geo"]["half_width"] == 128.175
        assert cfg["post"]["cosmic_pca_tagger"] == {"x_margin": 5, "y_margin": 10}

    def test_include_list(self, tmp_path):
        """Later includes take precedence over earlier ones."""
        (tmp_path / "a.yaml").write_text("base:\n  log_step: 1\n  verbosity: info\n")
        (tmp_path / "b.yaml").write_text("base:\n  log_step: 10\n")

        cfg = load_config("include: [a.yaml, b.yaml]", root_dir=str(tmp_path))

        assert cfg["base"] == {"log_step": 10, "verbosity": "info"}

    def test_nested_include_dir(self, tmp_path):
        """Nested includes are resolved relative to the including file."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "inner.yaml").write_text("geo:\n  length: 1036.8\n")
        (tmp_path / "sub" / "outer.yaml").write_text("include: inner.yaml\n")

        cfg = load_config("include: sub/outer.yaml", root_dir=str(tmp_path))

        assert cfg["geo"]["length"] == 1036.8

    def test_search_path(self, tmp_path, monkeypatch):
        """Includes are also searched in the configuration path."""
        (tmp_path / "shared.yaml").write_text("geo:\n  length: 10.0\n")
        monkeypatch.setenv("COSMICTAG_CONFIG_PATH", str(tmp_path))

        cfg = load_config("include: shared.yaml", root_dir=str(tmp_path / "other"))

        assert cfg["geo"]["length"] == 10.0

    def test_override_and_remove(self, tmp_path):
        """Test dot-notation overrides and removals."""
        (tmp_path / "base.yaml").write_text(
            "base:\n  verbosity: info\n  log_step: 1\nio:\n  writer:\n    name: csv\n"
        )
        cfg = load_config(
            """
include: base.yaml
override:
  base.verbosity: debug
  post.cosmic_pca_tagger.x_margin: 10
remove: io.writer
""",
            root_dir=str(tmp_path),
        )

        assert cfg["base"] == {"verbosity": "debug", "log_step": 1}
        assert cfg["post"]["cosmic_pca_tagger"]["x_margin"] == 10
        assert "writer" not in cfg["io"]

    def test_missing_include(self, tmp_path):
        """Missing includes raise a typed error."""
        with pytest.raises(ConfigIncludeError):
            load_config("include: missing.yaml", root_dir=str(tmp_path))

    def test_missing_file(self, tmp_path):
        """Missing configuration files raise a typed error."""
        with pytest.raises(ConfigIncludeError):
            load_config_file(str(tmp_path / "missing.yaml"))

    def test_cycle(self, tmp_path):
        """Circular includes are detected."""
        (tmp_path / "a.yaml").write_text("include: b.yaml\n")
        (tmp_path / "b.yaml").write_text("include: a.yaml\n")

        with pytest.raises(ConfigCycleError) as exc:
            load_config_file(str(tmp_path / "a.yaml"))

        assert len(exc.value.cycle_path) == 3

    def test_bad_directives(self):
        """Malformed directives raise a typed error."""
        with pytest.raises(ConfigOperationError):
            load_config("include: 3")
        with pytest.raises(ConfigOperationError):
            load_config("override: [a, b]")
        with pytest.raises(ConfigOperationError):
            load_config("- a\n- b\n")

    def test_bad_removal(self):
        """Removing a non-existent key raises."""
        with pytest.raises(ConfigPathError):
            load_config("base: {}\nremove: base.verbosity")

    def test_invalid_yaml(self):
        """Invalid YAML raises a typed error."""
        with pytest.raises(ConfigIncludeError):
            load_config("base: [1, 2")


class TestOperations:
    """Test the dictionary operations."""

    def test_deep_merge(self):
        """Nested dictionaries are merged, other values replaced."""
        base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}
        merged = deep_merge(base, {"a": {"c": [3]}, "e": 2})

        assert merged == {"a": {"b": 1, "c": [3]}, "d": 1, "e": 2}
        assert base == {"a": {"b": 1, "c": [1, 2]}, "d": 1}

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10", 10),
            ("2.5", 2.5),
            ("true", True),
            ("[1, 2]", [1, 2]),
            ("csv", "csv"),
            (3, 3),
        ],
    )
    def test_parse_value(self, value, expected):
        """Strings are parsed as YAML values."""
        assert parse_value(value) == expected

    def test_set_nested_value(self):
        """Test setting a nested value, creating parents on the way."""
        cfg = set_nested_value({}, "io.writer.file_name", "out.csv")
        assert cfg == {"io": {"writer": {"file_name": "out.csv"}}}

        with pytest.raises(ConfigPathError):
            set_nested_value({"io": 1}, "io.writer", 2)
