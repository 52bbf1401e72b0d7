# topmark:header:start
#
#   project      : EnvCodec
#   file         : options.py
#   file_relpath : src/envcodec/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Codec options shared by the decoder and the encoder.

`Options` is immutable. Unset values (empty strings, ``None`` mapper) are
filled by `Options.with_defaults`, which never overwrites a value the caller
provided and returns an equal object when applied twice.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from envcodec.constants import DEFAULT_SEPARATOR, DEFAULT_SLICE_SEPARATOR
from envcodec.mapper import identity_mapper

if TYPE_CHECKING:
    from envcodec.mapper import NamingPolicy

DEFAULT_MAPPER: Final[NamingPolicy] = identity_mapper

__all__ = [
    "DEFAULT_MAPPER",
    "DEFAULT_SEPARATOR",
    "DEFAULT_SLICE_SEPARATOR",
    "Options",
]


@dataclass(frozen=True)
class Options:
    """Immutable codec configuration.

    Attributes:
        prefix (str): Keys not starting with this prefix are ignored on decode;
            it is stripped before the key is split into path segments and
            prepended to every key on encode. Empty means "no prefix".
        separator (str): Joins/splits the path segments of nested fields.
            Empty means `DEFAULT_SEPARATOR` (``"__"``).
        slice_separator (str): Joins/splits sequence elements within one value.
            Empty means `DEFAULT_SLICE_SEPARATOR` (``","``).
        mapper (NamingPolicy | None): Maps field names to key fragments.
            ``None`` means `DEFAULT_MAPPER` (identity).
    """

    prefix: str = ""
    separator: str = ""
    slice_separator: str = ""
    mapper: NamingPolicy | None = None

    def with_defaults(self) -> Options:
        """Return a copy with every unset option filled with its default."""
        return replace(
            self,
            separator=self.separator or DEFAULT_SEPARATOR,
            slice_separator=self.slice_separator or DEFAULT_SLICE_SEPARATOR,
            mapper=self.mapper or DEFAULT_MAPPER,
        )

    def map_name(self, name: str) -> str:
        """Apply the naming policy to a field name."""
        return (self.mapper or DEFAULT_MAPPER)(name)


def resolve_options(options: Options | None) -> Options:
    """Return ``options`` (or a blank `Options`) with defaults applied."""
    return (options or Options()).with_defaults()
