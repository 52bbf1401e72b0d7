# topmark:header:start
#
#   project      : EnvCodec
#   file         : __init__.py
#   file_relpath : src/envcodec/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec CLI subcommands."""

from __future__ import annotations
