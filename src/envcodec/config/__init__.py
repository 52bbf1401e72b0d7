# topmark:header:start
#
#   project      : EnvCodec
#   file         : __init__.py
#   file_relpath : src/envcodec/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient configuration for EnvCodec: logging setup and TOML option loading.

Submodules:
    - `envcodec.config.logging`: TRACE level, colored formatter, logger factory.
    - `envcodec.config.keys`: canonical TOML key names.
    - `envcodec.config.loaders`: read `Options` from ``envcodec.toml`` or
      ``[tool.envcodec]`` in ``pyproject.toml``.
"""

from __future__ import annotations
