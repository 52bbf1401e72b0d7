# topmark:header:start
#
#   project      : EnvCodec
#   file         : types.py
#   file_relpath : src/envcodec/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Field annotation helpers and text capabilities.

This module hosts stable, import-friendly definitions that the codec modules
depend on without risk of circular imports.

Exports:
    - Fixed-width numeric aliases (`Int8` ... `UInt64`, `Float32`, `Float64`):
      ``typing.Annotated`` types that make decoding honor a bit width. Plain
      ``int`` is unbounded and plain ``float`` is 64-bit.
    - `TextUnmarshaler`: leaf types that parse themselves from text.
    - `TextMarshaler`: leaf values that render themselves as text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Protocol, runtime_checkable


@dataclass(frozen=True)
class IntWidth:
    """Bit width and signedness of an integer field."""

    bits: int
    signed: bool = True

    @property
    def min_value(self) -> int:
        """Smallest representable value."""
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        """Largest representable value."""
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatWidth:
    """Bit width of a floating-point field (32 or 64)."""

    bits: int


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]
UInt = Annotated[int, IntWidth(64, signed=False)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]
Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]


@runtime_checkable
class TextUnmarshaler(Protocol):
    """A leaf type that builds itself from its text form.

    When a field's type (or the type wrapped by ``Optional``) defines
    ``from_text``, the decoder calls it instead of any built-in rule, even if
    the type is itself a dataclass.
    """

    @classmethod
    def from_text(cls, text: str) -> TextUnmarshaler:
        """Build an instance from ``text``."""
        ...


@runtime_checkable
class TextMarshaler(Protocol):
    """A leaf value that renders itself as text for the encoder."""

    def to_text(self) -> str:
        """Return the text form of this value."""
        ...


def is_text_unmarshaler(tp: object) -> bool:
    """Return True if ``tp`` is a class that defines a ``from_text`` hook."""
    return isinstance(tp, type) and callable(getattr(tp, "from_text", None))
