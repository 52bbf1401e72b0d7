# topmark:header:start
#
#   project      : EnvCodec
#   file         : fields.py
#   file_relpath : src/envcodec/fields.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Field registry for record types.

A record is a ``@dataclass``. The first time the codec meets a record class it
builds a `RecordSchema`: the ordered list of the class's fields, each tagged
with a `FieldKind` derived from its annotation. The path resolver and the
encoder only ever look at this registry; they never inspect annotations
themselves.

Kinds:
    - ``SCALAR``: ``str``, ``bool``, ``int``, ``float`` (optionally width-annotated,
      see `envcodec.types`), or any class with a ``from_text`` hook.
    - ``SEQUENCE``: ``list[T]`` or ``tuple[T, ...]``.
    - ``RECORD``: a nested dataclass.
    - ``OPTIONAL_RECORD``: ``R | None`` for a dataclass ``R``; allocated on demand.
    - ``UNSUPPORTED``: anything else; ignored on decode.

Fields whose name starts with an underscore are private and are skipped in
both directions.
"""

from __future__ import annotations

import dataclasses
import functools
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, get_type_hints

from envcodec.config.logging import get_logger
from envcodec.errors import InvalidDestinationError
from envcodec.types import is_text_unmarshaler
from envcodec.utils.introspection import (
    is_frozen_record,
    is_record_instance,
    is_record_type,
    sequence_info,
    strip_annotated,
    strip_optional,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from envcodec.config.logging import EnvCodecLogger
    from envcodec.options import Options

logger: EnvCodecLogger = get_logger(__name__)

SCALAR_TYPES: Final[tuple[type, ...]] = (str, bool, int, float)


class FieldKind(str, Enum):
    """How the codec treats a record field."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    RECORD = "record"
    OPTIONAL_RECORD = "optional_record"
    UNSUPPORTED = "unsupported"

    @property
    def is_record(self) -> bool:
        """True for nested (possibly optional) records."""
        return self in (FieldKind.RECORD, FieldKind.OPTIONAL_RECORD)


@dataclass(frozen=True)
class FieldSpec:
    """Descriptor of one record field.

    Attributes:
        name (str): Attribute name on the record.
        annotation (Any): Resolved type annotation (``Annotated`` extras kept).
        kind (FieldKind): Codec treatment of the field.
        record_type (type | None): Nested record class for record kinds.
    """

    name: str
    annotation: Any
    kind: FieldKind
    record_type: type | None = None

    @property
    def public(self) -> bool:
        """Private (underscore-prefixed) fields never take part in the codec."""
        return not self.name.startswith("_")


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field registry of a record class."""

    record_type: type
    fields: tuple[FieldSpec, ...]

    def public_fields(self) -> Iterator[FieldSpec]:
        """Yield the public fields in declaration order."""
        return (spec for spec in self.fields if spec.public)

    def find(self, segment: str, options: Options) -> FieldSpec | None:
        """Return the public field whose mapped name equals ``segment``.

        A segment matching several fields (two names collapsing to the same
        key under the naming policy) resolves to nothing.
        """
        matches: list[FieldSpec] = [
            spec for spec in self.public_fields() if options.map_name(spec.name) == segment
        ]
        if len(matches) == 1:
            return matches[0]
        if matches:
            logger.debug(
                "Key segment %r is ambiguous in %s: %s",
                segment,
                self.record_type.__qualname__,
                ", ".join(spec.name for spec in matches),
            )
        return None


def classify(annotation: Any) -> tuple[FieldKind, type | None]:
    """Derive the `FieldKind` (and nested record class) of an annotation."""
    tp: Any = annotation
    optional: bool = False
    while True:
        if is_text_unmarshaler(tp):
            return FieldKind.SCALAR, None
        inner, _meta = strip_annotated(tp)
        if inner is not tp:
            tp = inner
            continue
        inner, was_optional = strip_optional(tp)
        if was_optional:
            optional = True
            tp = inner
            continue
        break

    if is_record_type(tp):
        return (FieldKind.OPTIONAL_RECORD if optional else FieldKind.RECORD), tp
    if sequence_info(tp) is not None:
        return FieldKind.SEQUENCE, None
    if tp in SCALAR_TYPES:
        return FieldKind.SCALAR, None
    return FieldKind.UNSUPPORTED, None


@functools.cache
def schema_for(record_type: type) -> RecordSchema:
    """Return the (cached) field registry of a dataclass.

    Args:
        record_type (type): A dataclass.

    Returns:
        RecordSchema: Fields in declaration order.
    """
    hints: dict[str, Any] = get_type_hints(record_type, include_extras=True)
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(record_type):
        annotation: Any = hints.get(f.name, f.type)
        kind, nested = classify(annotation)
        specs.append(FieldSpec(name=f.name, annotation=annotation, kind=kind, record_type=nested))
    schema = RecordSchema(record_type=record_type, fields=tuple(specs))
    logger.trace(
        "Registered record %s: %s",
        record_type.__qualname__,
        ", ".join(f"{s.name}:{s.kind.value}" for s in schema.fields),
    )
    return schema


def ensure_record(value: Any, *, mutable: bool = False) -> None:
    """Check that ``value`` can serve as the root of a traversal.

    Args:
        value (Any): The decode destination or encode source.
        mutable (bool): Also require a non-frozen dataclass (decode destinations).

    Raises:
        InvalidDestinationError: If ``value`` is not a (mutable) dataclass instance.
    """
    if not is_record_instance(value):
        raise InvalidDestinationError(value)
    if mutable and is_frozen_record(value):
        raise InvalidDestinationError(
            value, f"Cannot decode into frozen dataclass {type(value).__qualname__}"
        )
