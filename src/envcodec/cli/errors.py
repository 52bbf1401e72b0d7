# topmark:header:start
#
#   project      : EnvCodec
#   file         : errors.py
#   file_relpath : src/envcodec/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the EnvCodec CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from envcodec.cli.exit_codes import ExitCode


class EnvCodecCliError(click.ClickException):
    """Base class for all EnvCodec CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class EnvCodecUsageError(EnvCodecCliError):
    """Error for command-line invocation errors (invalid flags/args/targets)."""

    exit_code = ExitCode.USAGE_ERROR


class EnvCodecConfigError(EnvCodecCliError):
    """Error for configuration errors (invalid values in a TOML source)."""

    exit_code = ExitCode.CONFIG_ERROR


class EnvCodecFileNotFoundError(EnvCodecCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class EnvCodecIOError(EnvCodecCliError):
    """Error for I/O errors reading input files."""

    exit_code = ExitCode.IO_ERROR


class EnvCodecEncodingError(EnvCodecCliError):
    """Error for input that is not valid UTF-8."""

    exit_code = ExitCode.DATA_ERROR


class EnvCodecUnexpectedError(EnvCodecCliError):
    """Error for failures that indicate a bug or an unusable record class."""

    exit_code = ExitCode.UNEXPECTED_ERROR
