# topmark:header:start
#
#   project      : EnvCodec
#   file         : encode.py
#   file_relpath : src/envcodec/cli/commands/encode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec `encode` command.

Prints the ``KEY=VALUE`` lines of a default instance of a dataclass, which
makes a ready-to-edit ``.env`` template. ``--set KEY=VALUE`` entries are
decoded into the instance first (same key syntax and options as ``decode``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from envcodec.cli.errors import EnvCodecUnexpectedError
from envcodec.cli.options import common_codec_options, resolve_codec_options
from envcodec.cli.targets import load_record_type, new_decodable_record, new_record
from envcodec.decoder import unmarshal_lines
from envcodec.encoder import marshal
from envcodec.errors import UnsupportedKindError

if TYPE_CHECKING:
    from pathlib import Path

    from envcodec.cli.console import ConsoleLike
    from envcodec.options import Options


@click.command(
    name="encode",
    help="Print the KEY=VALUE lines of a default instance of the dataclass TARGET.",
)
@click.argument("target")
@click.option(
    "--set",
    "-s",
    "assignments",
    multiple=True,
    metavar="KEY=VALUE",
    help="Decode this entry into the record before encoding (repeatable).",
)
@common_codec_options
def encode_command(
    *,
    target: str,
    assignments: tuple[str, ...],
    config_path: Path | None,
    prefix: str | None,
    separator: str | None,
    slice_separator: str | None,
    mapper_name: str | None,
) -> None:
    """Print the KEY=VALUE lines of TARGET."""
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
    record_type: type = load_record_type(target)
    record: Any = new_decodable_record(record_type) if assignments else new_record(record_type)
    if assignments:
        unmarshal_lines(assignments, record, options)

    try:
        text: str = marshal(record, options)
    except UnsupportedKindError as exc:
        raise EnvCodecUnexpectedError(f"Cannot encode {target}: {exc}") from exc
    console.print(text)
