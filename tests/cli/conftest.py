# topmark:header:start
#
#   project      : EnvCodec
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for invoking EnvCodec through Click's test runner.

Record targets used by the CLI tests live in `tests.records` and are addressed
as ``tests.records:<Class>``; the repository root is on ``sys.path`` through
the pytest ``pythonpath`` setting.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from envcodec.cli.exit_codes import ExitCode
from envcodec.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

SETTINGS_TARGET = "tests.records:Settings"


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
    env: Mapping[str, str | None] | None = None,
) -> Result:
    """Invoke the CLI in-process.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["version"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.
        env (Mapping[str, str | None] | None): Environment overrides for the
            duration of the call (``None`` values unset a variable).

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["decode", SETTINGS_TARGET], env={"workers": "2"})
        assert result.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text, env=env)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``.

    Args:
        result (Result): The Result object returned by `run_cli`.
        code (ExitCode): The expected exit code.
    """
    assert result.exit_code == code, result.output
