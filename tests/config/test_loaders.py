# topmark:header:start
#
#   project      : EnvCodec
#   file         : test_loaders.py
#   file_relpath : tests/config/test_loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for loading codec options from TOML (`envcodec.config.loaders`)."""

from __future__ import annotations

import logging
import textwrap
from typing import TYPE_CHECKING

import pytest

from envcodec.config.loaders import (
    ConfigError,
    extract_codec_table,
    load_options,
    load_toml_dict,
    options_from_table,
)
from envcodec.mapper import underscore_mapper, upper_mapper
from envcodec.options import Options

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, content: str) -> Path:
    """Helper: write dedented content to a file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


def test_load_standalone_file(tmp_path: Path) -> None:
    """``envcodec.toml`` keeps its keys at the top level."""
    path: Path = _write(
        tmp_path / "envcodec.toml",
        """
        prefix = "APP__"
        separator = "."
        slice_separator = ";"
        mapper = "upper"
        """,
    )
    opts: Options = load_options(path)
    assert opts == Options(prefix="APP__", separator=".", slice_separator=";", mapper=upper_mapper)


def test_load_pyproject_tool_table(tmp_path: Path) -> None:
    """``pyproject.toml`` keeps its keys under ``[tool.envcodec]``."""
    path: Path = _write(
        tmp_path / "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.envcodec]
        mapper = "underscore"
        """,
    )
    opts: Options = load_options(path)
    assert opts.mapper is underscore_mapper
    assert opts.prefix == ""


def test_pyproject_without_tool_table_is_empty(tmp_path: Path) -> None:
    """A ``pyproject.toml`` without the tool table leaves the base untouched."""
    path: Path = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
    base = Options(prefix="KEEP_")
    assert load_options(path, base) == base


def test_file_keys_layer_onto_base(tmp_path: Path) -> None:
    """Only keys present in the file replace base values."""
    path: Path = _write(tmp_path / "envcodec.toml", 'separator = "::"\n')
    opts = load_options(path, Options(prefix="P_", mapper=upper_mapper))
    assert opts == Options(prefix="P_", separator="::", mapper=upper_mapper)


def test_unknown_keys_are_ignored(caplog: pytest.LogCaptureFixture) -> None:
    """Unknown keys produce a warning, not an error."""
    with caplog.at_level(logging.WARNING):
        opts: Options = options_from_table({"prefix": "A_", "colour": "blue"})
    assert opts.prefix == "A_"
    assert "colour" in caplog.text


def test_unknown_mapper_is_config_error() -> None:
    """Mapper names must come from the registry."""
    with pytest.raises(ConfigError, match="kebab"):
        options_from_table({"mapper": "kebab"})


def test_non_string_value_is_config_error() -> None:
    """All codec keys are strings."""
    with pytest.raises(ConfigError, match="separator"):
        options_from_table({"separator": 2})


def test_invalid_toml_yields_empty_table(tmp_path: Path) -> None:
    """Malformed TOML is logged and treated as an empty document."""
    path: Path = _write(tmp_path / "envcodec.toml", "prefix = \n")
    assert load_toml_dict(path) == {}
    assert load_options(path) == Options()


def test_non_utf8_file_yields_empty_table(tmp_path: Path) -> None:
    """A file that is not UTF-8 is logged and treated as an empty document."""
    path: Path = tmp_path / "envcodec.toml"
    path.write_bytes(b"prefix = \"\xff\"\n")
    assert load_toml_dict(path) == {}
    assert load_options(path) == Options()


def test_missing_file_yields_empty_table(tmp_path: Path) -> None:
    """An unreadable file is logged and treated as an empty document."""
    assert load_toml_dict(tmp_path / "missing.toml") == {}


def test_extract_codec_table_nested_lookup() -> None:
    """The pyproject lookup walks ``tool`` then ``envcodec``."""
    data = {"tool": {"envcodec": {"prefix": "X"}, "other": {}}}
    assert extract_codec_table(data, is_pyproject=True) == {"prefix": "X"}
    assert extract_codec_table(data, is_pyproject=False) is data
    assert extract_codec_table({"tool": "oops"}, is_pyproject=True) == {}
