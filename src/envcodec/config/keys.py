# topmark:header:start
#
#   project      : EnvCodec
#   file         : keys.py
#   file_relpath : src/envcodec/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for EnvCodec configuration.

Keys defined here represent *external configuration API* (``envcodec.toml``
and ``[tool.envcodec]`` in ``pyproject.toml``). Renaming or removing a key is a
breaking change. CLI option names are kept separately in the CLI modules.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by EnvCodec configuration."""

    KEY_PREFIX: Final[str] = "prefix"
    KEY_SEPARATOR: Final[str] = "separator"
    KEY_SLICE_SEPARATOR: Final[str] = "slice_separator"
    KEY_MAPPER: Final[str] = "mapper"

    ALL_KEYS: Final[frozenset[str]] = frozenset(
        {KEY_PREFIX, KEY_SEPARATOR, KEY_SLICE_SEPARATOR, KEY_MAPPER}
    )
