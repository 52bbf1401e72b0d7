# topmark:header:start
#
#   file         : options.py
#   file_relpath : src/envcodec/cli/options.py
#   project      : EnvCodec
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the EnvCodec CLI.

This module centralizes reusable options (verbosity, codec options) and their
resolution logic, so commands and groups can stay thin.

Codec options are layered: defaults < ``--config`` TOML file < explicit flags.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar

import click

from envcodec.cli.cli_types import EnumChoiceParam
from envcodec.cli.errors import (
    EnvCodecConfigError,
    EnvCodecFileNotFoundError,
    EnvCodecUsageError,
)
from envcodec.config.loaders import ConfigError, load_options
from envcodec.config.logging import get_logger
from envcodec.mapper import MAPPERS, resolve_mapper
from envcodec.options import Options

if TYPE_CHECKING:
    from envcodec.config.logging import EnvCodecLogger

P = ParamSpec("P")
R = TypeVar("R")

logger: EnvCodecLogger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Output formats of the ``decode`` and ``version`` commands."""

    DEFAULT = "default"
    JSON = "json"
    ENV = "env"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from the ``-v``/``-q`` counts.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        EnvCodecUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise EnvCodecUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count if verbose_count else -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --no-color option to a command."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)
    return f


def common_codec_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply the options that build `envcodec.Options`.

    Adds ``--config``, ``--prefix``, ``--separator``, ``--slice-separator`` and
    ``--mapper``.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "--mapper",
        "mapper_name",
        type=click.Choice(sorted(MAPPERS), case_sensitive=False),
        default=None,
        help="Naming policy mapping field names to key fragments.",
    )(f)
    f = click.option(
        "--slice-separator",
        "slice_separator",
        default=None,
        help="Separator between sequence elements within one value (default ',').",
    )(f)
    f = click.option(
        "--separator",
        "separator",
        default=None,
        help="Separator between the path segments of nested fields (default '__').",
    )(f)
    f = click.option(
        "--prefix",
        "prefix",
        default=None,
        help="Only keys starting with this prefix are decoded; it is stripped first.",
    )(f)
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Read options from envcodec.toml or [tool.envcodec] in pyproject.toml.",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --format option to a command."""
    f = click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    return f


def resolve_codec_options(
    *,
    config_path: Path | None,
    prefix: str | None,
    separator: str | None,
    slice_separator: str | None,
    mapper_name: str | None,
) -> Options:
    """Build `Options` from an optional TOML file and explicit flags.

    Raises:
        EnvCodecFileNotFoundError: If ``config_path`` does not exist.
        EnvCodecConfigError: If the TOML file holds invalid values.
    """
    options = Options()
    if config_path is not None:
        if not config_path.is_file():
            raise EnvCodecFileNotFoundError(f"Configuration file not found: {config_path}")
        try:
            options = load_options(config_path, options)
        except ConfigError as exc:
            raise EnvCodecConfigError(f"{config_path}: {exc}") from exc

    overrides: dict[str, Any] = {
        key: value
        for key, value in (
            ("prefix", prefix),
            ("separator", separator),
            ("slice_separator", slice_separator),
        )
        if value is not None
    }
    if mapper_name is not None:
        overrides["mapper"] = resolve_mapper(mapper_name)
    if overrides:
        options = replace(options, **overrides)
    logger.debug("Effective codec options: %r", options)
    return options
