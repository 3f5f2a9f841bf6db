"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: defaults < global < project < env < kwargs
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from nexusops.config.loader import (
    PROJECT_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    load_config,
)
from nexusops.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """No user-level config file and no NEXUSOPS__ env vars leak in."""
    for key in list(os.environ):
        if key.upper().startswith("NEXUSOPS__"):
            monkeypatch.delenv(key)
    with patch("nexusops.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global.yaml"):
        yield


def _project(tmp_path: Path, text: str) -> Path:
    root = tmp_path / "project"
    config_file = root / PROJECT_CONFIG_NAME
    config_file.parent.mkdir(parents=True)
    config_file.write_text(text)
    return root


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("parse:\n  language: kotlin\n")

        assert _load_yaml(yaml_file) == {"parse": {"language": "kotlin"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("parse:\n  language:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_merge(self) -> None:
        base = {"emit": {"output_dir": "out", "indent": 2}}
        override = {"emit": {"indent": 4}}

        assert _deep_merge(base, override) == {"emit": {"output_dir": "out", "indent": 4}}

    def test_base_not_mutated(self) -> None:
        base = {"emit": {"indent": 2}}
        _deep_merge(base, {"emit": {"indent": 4}})

        assert base == {"emit": {"indent": 2}}


class TestLoadConfig:
    """load_config precedence and error handling."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.parse.language == "java"
        assert config.emit.output_dir == "output"

    def test_project_yaml(self, tmp_path: Path) -> None:
        root = _project(tmp_path, "emit:\n  output_dir: trees\n  max_workers: 2\n")

        config = load_config(root)

        assert config.emit.output_dir == "trees"
        assert config.emit.max_workers == 2
        assert config.emit.indent == 2

    def test_project_overrides_global(self, tmp_path: Path) -> None:
        (tmp_path / "global.yaml").write_text("emit:\n  indent: 4\n  output_dir: g\n")
        root = _project(tmp_path, "emit:\n  output_dir: p\n")

        config = load_config(root)

        assert config.emit.output_dir == "p"
        assert config.emit.indent == 4

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = _project(tmp_path, "parse:\n  language: csharp\n")
        monkeypatch.setenv("NEXUSOPS__PARSE__LANGUAGE", "kotlin")

        config = load_config(root)

        assert config.parse.language == "kotlin"

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEXUSOPS__EMIT__MAX_WORKERS", "3")

        config = load_config(tmp_path, emit={"max_workers": 8})

        assert config.emit.max_workers == 8

    def test_invalid_value(self, tmp_path: Path) -> None:
        root = _project(tmp_path, "emit:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(root)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "max_workers" in exc_info.value.message

    def test_walk_section(self, tmp_path: Path) -> None:
        root = _project(
            tmp_path, "walk:\n  use_default_excludes: false\n  exclude_dirs: [gen, tmp]\n"
        )

        config = load_config(root)

        assert config.walk.use_default_excludes is False
        assert config.walk.exclude_dirs == ["gen", "tmp"]

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = _project(tmp_path, "parse:\n  max_depth: 50\n")
        monkeypatch.chdir(root)

        assert load_config().parse.max_depth == 50
