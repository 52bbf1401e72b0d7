# topmark:header:start
#
#   project      : EnvCodec
#   file         : test_cli_encode.py
#   file_relpath : tests/cli/test_cli_encode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `envcodec encode`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from envcodec.cli.exit_codes import ExitCode
from tests.cli.conftest import SETTINGS_TARGET, assert_exit, assert_SUCCESS, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_encode_default_template() -> None:
    """A default instance prints as an ``.env`` template."""
    result: Result = run_cli(["encode", SETTINGS_TARGET])
    assert_SUCCESS(result)
    assert result.stdout == (
        "debug=false\n"
        "workers=4\n"
        "database__host=localhost\n"
        "database__port=5432\n"
        "database__replicas=\n"
    )


@mark_cli
def test_encode_with_assignments() -> None:
    """``--set`` entries are decoded into the record before encoding."""
    result: Result = run_cli(
        [
            "encode",
            SETTINGS_TARGET,
            "--prefix",
            "APP_",
            "--mapper",
            "upper",
            "--set",
            "APP_WORKERS=16",
            "-s",
            "APP_CACHE__TTL_SECONDS=0.5",
            "-s",
            "IGNORED=1",
        ]
    )
    assert_SUCCESS(result)
    lines: list[str] = result.stdout.splitlines()
    assert "APP_WORKERS=16" in lines
    assert lines[-1] == "APP_CACHE__TTL_SECONDS=0.5"
    assert not any(line.startswith("IGNORED") for line in lines)


@mark_cli
def test_encode_slice_separator() -> None:
    """Sequences are joined with the configured slice separator."""
    result: Result = run_cli(
        [
            "encode",
            SETTINGS_TARGET,
            "--slice-separator",
            ";",
            "-s",
            "database__replicas=a;b",
        ]
    )
    assert_SUCCESS(result)
    assert "database__replicas=a;b" in result.stdout.splitlines()


@mark_cli
def test_encode_pyproject_config(tmp_path: Path) -> None:
    """Options are read from ``[tool.envcodec]`` in ``pyproject.toml``."""
    config: Path = tmp_path / "pyproject.toml"
    config.write_text('[tool.envcodec]\nprefix = "SVC__"\n', encoding="utf-8")
    result: Result = run_cli(["encode", SETTINGS_TARGET, "--config", str(config)])
    assert_SUCCESS(result)
    assert all(line.startswith("SVC__") for line in result.stdout.splitlines())


@mark_cli
def test_encode_bad_target() -> None:
    """Targets that are not dataclasses are usage errors."""
    result: Result = run_cli(["--no-color", "encode", "envcodec.options:resolve_options"])
    assert_exit(result, ExitCode.USAGE_ERROR)
    assert "not a dataclass" in result.output


@mark_cli
def test_encode_unencodable_field_is_unexpected_error() -> None:
    """A record holding a value without a text form aborts with the last-resort code."""
    result: Result = run_cli(["--no-color", "encode", "tests.records:Scalars"])
    assert_exit(result, ExitCode.UNEXPECTED_ERROR)
    assert "dict" in result.output


@mark_cli
def test_encode_frozen_target() -> None:
    """Frozen targets can be encoded, but not combined with ``--set``."""
    result: Result = run_cli(["--no-color", "encode", "tests.records:Frozen"])
    assert_SUCCESS(result)
    assert result.stdout.strip() == "value="

    result = run_cli(["--no-color", "encode", "tests.records:Frozen", "--set", "value=x"])
    assert_exit(result, ExitCode.USAGE_ERROR)
    assert "frozen" in result.output
