# topmark:header:start
#
#   project      : EnvCodec
#   file         : errors.py
#   file_relpath : src/envcodec/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the EnvCodec codec.

Only structural problems are errors. Value-level anomalies (unknown keys,
unparseable scalars, keys outside the configured prefix) are never raised:
they degrade to "ignored" or to the target type's zero value and are reported
through logging only.
"""

from __future__ import annotations


class EnvCodecError(Exception):
    """Base class for all EnvCodec errors."""


class InvalidDestinationError(EnvCodecError, TypeError):
    """The decode destination or encode source is not a dataclass instance."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        kind: str = (
            f"class {value.__name__}" if isinstance(value, type) else type(value).__name__
        )
        super().__init__(reason or f"Expected a dataclass instance, got {kind}")


class UnsupportedKindError(EnvCodecError, TypeError):
    """A value reached the scalar encoder although it has no text form."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot encode value of type {type(value).__name__}: {value!r}")


class RecordAllocationError(EnvCodecError, TypeError):
    """An optional record slot could not be allocated with a no-argument constructor."""

    def __init__(self, record_type: type, reason: Exception) -> None:
        self.record_type = record_type
        self.reason = reason
        super().__init__(
            f"Cannot allocate {record_type.__qualname__}() for an unset optional field: {reason}"
        )
