# topmark:header:start
#
#   project      : EnvCodec
#   file         : __init__.py
#   file_relpath : src/envcodec/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec package.

EnvCodec maps flat ``KEY=VALUE`` text (process environments, ``.env`` files)
onto nested dataclass records and back. Nested fields are addressed with
separator-joined keys (``DATABASE__PORT=5432``), sequences are packed into a
single value (``HOSTS=a,b,c``), and field names can be rewritten through a
pluggable naming policy.

Typical use:

```python
from dataclasses import dataclass, field

import envcodec


@dataclass
class Database:
    host: str = "localhost"
    port: int = 5432


@dataclass
class Settings:
    debug: bool = False
    database: Database = field(default_factory=Database)


settings = Settings()
envcodec.unmarshal_env(settings, envcodec.Options(prefix="APP__"))
```
"""

from __future__ import annotations

from envcodec.decoder import (
    Decoder,
    decode_string,
    unmarshal,
    unmarshal_env,
    unmarshal_lines,
)
from envcodec.encoder import Encoder, encode_string, marshal, marshal_lines
from envcodec.errors import (
    EnvCodecError,
    InvalidDestinationError,
    RecordAllocationError,
    UnsupportedKindError,
)
from envcodec.lines import LineWriter
from envcodec.mapper import (
    MAPPERS,
    identity_mapper,
    resolve_mapper,
    underscore_mapper,
    upper_mapper,
)
from envcodec.options import (
    DEFAULT_MAPPER,
    DEFAULT_SEPARATOR,
    DEFAULT_SLICE_SEPARATOR,
    Options,
)
from envcodec.types import TextMarshaler, TextUnmarshaler

__all__ = [
    "DEFAULT_MAPPER",
    "DEFAULT_SEPARATOR",
    "DEFAULT_SLICE_SEPARATOR",
    "MAPPERS",
    "Decoder",
    "Encoder",
    "EnvCodecError",
    "InvalidDestinationError",
    "LineWriter",
    "Options",
    "RecordAllocationError",
    "TextMarshaler",
    "TextUnmarshaler",
    "UnsupportedKindError",
    "decode_string",
    "encode_string",
    "identity_mapper",
    "marshal",
    "marshal_lines",
    "resolve_mapper",
    "underscore_mapper",
    "unmarshal",
    "unmarshal_env",
    "unmarshal_lines",
    "upper_mapper",
]
