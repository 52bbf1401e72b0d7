# topmark:header:start
#
#   project      : EnvCodec
#   file         : __init__.py
#   file_relpath : src/envcodec/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for EnvCodec.

The CLI is thin wiring over the codec: it loads a record class from a
``module:Class`` reference, resolves `envcodec.Options` from a TOML file and
flags, and runs `envcodec.unmarshal*` / `envcodec.marshal` on it.
"""

from __future__ import annotations
