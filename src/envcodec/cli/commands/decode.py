# topmark:header:start
#
#   project      : EnvCodec
#   file         : decode.py
#   file_relpath : src/envcodec/cli/commands/decode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec `decode` command.

Decodes ``KEY=VALUE`` lines (the process environment, an ``.env`` file or
STDIN) into a fresh instance of a dataclass and prints the result, either as
JSON or as normalized ``KEY=VALUE`` lines.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from envcodec.cli.errors import EnvCodecUnexpectedError
from envcodec.cli.io import read_env_text
from envcodec.cli.options import (
    OutputFormat,
    common_codec_options,
    output_format_option,
    resolve_codec_options,
)
from envcodec.cli.targets import load_record_type, new_decodable_record
from envcodec.decoder import unmarshal, unmarshal_env
from envcodec.encoder import marshal
from envcodec.errors import UnsupportedKindError
from envcodec.fields import schema_for
from envcodec.utils.introspection import is_record_instance

if TYPE_CHECKING:
    from pathlib import Path

    from envcodec.cli.console import ConsoleLike
    from envcodec.options import Options


@click.command(
    name="decode",
    help=(
        "Decode KEY=VALUE lines into the dataclass TARGET ('module:Class') and print it. "
        "Reads the process environment unless --file is given."
    ),
)
@click.argument("target")
@click.option(
    "--file",
    "-f",
    "env_file",
    type=str,  # Ensure '-' passes through untouched
    default=None,
    help="Read KEY=VALUE lines from this file (use '-' for STDIN).",
)
@output_format_option
@common_codec_options
def decode_command(
    *,
    target: str,
    env_file: str | None,
    output_format: OutputFormat | None,
    config_path: Path | None,
    prefix: str | None,
    separator: str | None,
    slice_separator: str | None,
    mapper_name: str | None,
) -> None:
    """Decode KEY=VALUE lines into TARGET and print the record."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    options: Options = resolve_codec_options(
        config_path=config_path,
        prefix=prefix,
        separator=separator,
        slice_separator=slice_separator,
        mapper_name=mapper_name,
    )
    record: Any = new_decodable_record(load_record_type(target))

    if env_file is None:
        unmarshal_env(record, options)
    else:
        unmarshal(read_env_text(env_file), record, options)

    if ctx.obj.get("verbosity_level", 0) > 0:
        console.warn(f"Decoded {'environment' if env_file is None else env_file} into {target}")

    if output_format == OutputFormat.JSON:
        console.print(json.dumps(_public_dict(record), indent=2, default=str))
    else:
        try:
            text: str = marshal(record, options)
        except UnsupportedKindError as exc:
            raise EnvCodecUnexpectedError(f"Cannot encode {target}: {exc}") from exc
        console.print(text)


def _public_dict(record: Any) -> dict[str, Any]:
    """Return the public fields of ``record`` as JSON-ready data (private fields omitted)."""
    return {
        spec.name: _jsonable(getattr(record, spec.name))
        for spec in schema_for(type(record)).public_fields()
    }


def _jsonable(value: Any) -> Any:
    to_text = getattr(value, "to_text", None)
    if callable(to_text):
        return to_text()
    if is_record_instance(value):
        return _public_dict(value)
    if isinstance(value, tuple):
        return list(value)
    return value
