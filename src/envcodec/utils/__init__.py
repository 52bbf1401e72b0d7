# topmark:header:start
#
#   project      : EnvCodec
#   file         : __init__.py
#   file_relpath : src/envcodec/utils/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Internal helpers shared by the codec modules."""

from __future__ import annotations
