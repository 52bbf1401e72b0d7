# topmark:header:start
#
#   project      : EnvCodec
#   file         : main.py
#   file_relpath : src/envcodec/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec CLI entry point.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the console and verbosity from there. Internal
logging is configured from ``ENVCODEC_LOG_LEVEL``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envcodec.cli.commands.decode import decode_command
from envcodec.cli.commands.encode import encode_command
from envcodec.cli.commands.version import version_command
from envcodec.cli.console import ClickConsole
from envcodec.cli.options import common_color_options, common_verbose_options, resolve_verbosity
from envcodec.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from envcodec.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="EnvCodec CLI: map KEY=VALUE environments onto dataclasses and back.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the EnvCodec CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'envcodec decode module:Class' to decode the environment.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(decode_command)

cli.add_command(encode_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
