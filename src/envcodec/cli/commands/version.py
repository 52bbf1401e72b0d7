# topmark:header:start
#
#   project      : EnvCodec
#   file         : version.py
#   file_relpath : src/envcodec/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec `version` command.

Prints the current EnvCodec version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from envcodec.cli.options import OutputFormat, output_format_option
from envcodec.constants import ENVCODEC_VERSION

if TYPE_CHECKING:
    from envcodec.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of EnvCodec.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of EnvCodec.

    Args:
        output_format (OutputFormat | None): Optional output format (plain text or JSON).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format == OutputFormat.JSON:
        console.print(json.dumps({"version": ENVCODEC_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("EnvCodec version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(ENVCODEC_VERSION, bold=True)}")
    else:
        console.print(console.styled(ENVCODEC_VERSION, bold=True))
