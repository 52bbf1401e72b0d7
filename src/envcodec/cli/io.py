# topmark:header:start
#
#   project      : EnvCodec
#   file         : io.py
#   file_relpath : src/envcodec/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input helpers for CLI commands: read ``KEY=VALUE`` text from files or STDIN."""

from __future__ import annotations

import sys
from pathlib import Path

from envcodec.cli.errors import (
    EnvCodecEncodingError,
    EnvCodecFileNotFoundError,
    EnvCodecIOError,
)
from envcodec.config.logging import get_logger

logger = get_logger(__name__)


def read_env_text(source: str) -> str:
    """Return the text of an ``.env`` file, or of STDIN when ``source`` is ``-``.

    Raises:
        EnvCodecFileNotFoundError: If the file does not exist.
        EnvCodecEncodingError: If the content is not valid UTF-8.
        EnvCodecIOError: For other read errors.
    """
    if source == "-":
        logger.debug("Reading KEY=VALUE lines from STDIN")
        data: bytes = sys.stdin.buffer.read()
        origin: str = "<stdin>"
    else:
        path = Path(source)
        if not path.is_file():
            raise EnvCodecFileNotFoundError(f"File not found: {source}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise EnvCodecIOError(f"Cannot read {source}: {exc}") from exc
        origin = source

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EnvCodecEncodingError(f"{origin} is not valid UTF-8: {exc}") from exc
