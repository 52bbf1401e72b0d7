# topmark:header:start
#
#   project      : EnvCodec
#   file         : loaders.py
#   file_relpath : src/envcodec/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load codec `Options` from TOML sources.

Two layouts are understood:
- ``envcodec.toml``: the keys live at the top level of the document.
- ``pyproject.toml``: the keys live in the ``[tool.envcodec]`` table.

Parsing is done with `tomlkit` and returned as plain `dict` structures before
being converted to an immutable `Options`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from envcodec.config.keys import Toml
from envcodec.config.logging import get_logger
from envcodec.constants import PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION
from envcodec.mapper import resolve_mapper
from envcodec.options import Options

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from envcodec.config.logging import EnvCodecLogger

TomlTable = dict[str, Any]

logger: EnvCodecLogger = get_logger(__name__)


class ConfigError(ValueError):
    """A configuration value is present but invalid."""


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except (TomlkitParseError, UnicodeDecodeError) as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_codec_table(data: TomlTable, *, is_pyproject: bool) -> TomlTable:
    """Return the table holding the codec keys.

    Args:
        data (TomlTable): A parsed TOML document.
        is_pyproject (bool): Look under ``[tool.envcodec]`` instead of the top level.

    Returns:
        TomlTable: The codec table (empty when absent).
    """
    if not is_pyproject:
        return data
    table: Any = data
    for part in PYPROJECT_TOOL_SECTION.split("."):
        table = table.get(part) if isinstance(table, dict) else None
    return cast("TomlTable", table) if isinstance(table, dict) else {}


def options_from_table(table: Mapping[str, Any], base: Options | None = None) -> Options:
    """Overlay the keys of a TOML table onto ``base`` (or blank `Options`).

    Unknown keys are logged and ignored.

    Raises:
        ConfigError: If a value has the wrong type or names an unknown mapper.
    """
    options: Options = base or Options()
    updates: dict[str, Any] = {}

    for key, value in table.items():
        if key not in Toml.ALL_KEYS:
            logger.warning("Ignoring unknown configuration key %r", key)
            continue
        if not isinstance(value, str):
            raise ConfigError(f"Configuration key {key!r} must be a string, got {value!r}")
        if key == Toml.KEY_MAPPER:
            try:
                updates["mapper"] = resolve_mapper(value)
            except KeyError as exc:
                raise ConfigError(str(exc.args[0])) from exc
        else:
            updates[key] = value

    logger.debug("Options from TOML: %s", ", ".join(sorted(updates)) or "<none>")
    return replace(options, **updates)


def load_options(path: Path, base: Options | None = None) -> Options:
    """Read `Options` from ``envcodec.toml`` or ``pyproject.toml`` at ``path``.

    Args:
        path (Path): The configuration file.
        base (Options | None): Options the file's keys are layered onto.

    Returns:
        Options: ``base`` overlaid with the file's keys (defaults not applied).
    """
    data: TomlTable = load_toml_dict(path)
    table: TomlTable = extract_codec_table(data, is_pyproject=path.name == PYPROJECT_TOML_NAME)
    return options_from_table(table, base)
