# topmark:header:start
#
#   project      : EnvCodec
#   file         : resolver.py
#   file_relpath : src/envcodec/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path resolver: walk a record along the segments of a flat key.

Each segment selects the public field whose mapped name equals it. Nested
records are descended into; an unset (``None``) optional record slot is filled
with a fresh default instance whenever a segment names it, so ``POINTER__X=8``
materializes ``record.pointer`` before setting ``x``. `check_record_type`
confirms before decoding starts that every such allocation can succeed. A
segment that matches nothing, or that tries to descend into a leaf, makes the
whole key unresolvable.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from envcodec.config.logging import get_logger
from envcodec.errors import InvalidDestinationError, RecordAllocationError
from envcodec.fields import FieldKind, FieldSpec, schema_for
from envcodec.utils.introspection import is_frozen_record, is_record_instance

if TYPE_CHECKING:
    from collections.abc import Sequence

    from envcodec.config.logging import EnvCodecLogger
    from envcodec.options import Options

logger: EnvCodecLogger = get_logger(__name__)


@dataclass(frozen=True)
class Slot:
    """Storage location of a resolved field: an owning record and a field descriptor."""

    owner: Any
    spec: FieldSpec

    def get(self) -> Any:
        """Return the current field value."""
        return getattr(self.owner, self.spec.name)

    def set(self, value: Any) -> None:
        """Store ``value`` in the field."""
        setattr(self.owner, self.spec.name, value)


def allocate(record_type: type) -> Any:
    """Create an empty record for an unset optional slot.

    Raises:
        RecordAllocationError: If ``record_type`` cannot be built without arguments.
    """
    try:
        return record_type()
    except TypeError as exc:
        raise RecordAllocationError(record_type, exc) from exc


@functools.cache
def check_record_type(record_type: type) -> None:
    """Verify up front that decoding into ``record_type`` cannot fail halfway.

    Walks every nested record type reachable from ``record_type``. Each optional
    record must be buildable without arguments, and no nested record may be
    frozen. Successful checks are cached per root type.

    Raises:
        RecordAllocationError: If an optional record has required constructor
            arguments.
        InvalidDestinationError: If a nested record is a frozen dataclass.
    """
    seen: set[type] = set()
    pending: list[type] = [record_type]
    while pending:
        current: type = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        for spec in schema_for(current).public_fields():
            nested: type | None = spec.record_type
            if nested is None:
                continue
            if is_frozen_record(nested):
                raise InvalidDestinationError(
                    nested,
                    f"Cannot decode into frozen dataclass {nested.__qualname__}"
                    f" (field {current.__qualname__}.{spec.name})",
                )
            if spec.kind is FieldKind.OPTIONAL_RECORD:
                allocate(nested)
            pending.append(nested)
    logger.trace("Checked record type %s (%d nested)", record_type.__qualname__, len(seen) - 1)


def resolve(record: Any, path: Sequence[str], options: Options) -> Slot | None:
    """Find the field addressed by ``path`` inside ``record``.

    Args:
        record (Any): The root record (a dataclass instance).
        path (Sequence[str]): Key segments, already split on the separator.
        options (Options): Codec options with defaults applied.

    Returns:
        Slot | None: The target slot, or None if the path does not resolve.
    """
    cur: Any = record
    last: int = len(path) - 1
    for i, segment in enumerate(path):
        spec: FieldSpec | None = schema_for(type(cur)).find(segment, options)
        if spec is None:
            logger.trace("No field %r in %s", segment, type(cur).__qualname__)
            return None

        if (
            spec.kind is FieldKind.OPTIONAL_RECORD
            and spec.record_type is not None
            and getattr(cur, spec.name) is None
        ):
            setattr(cur, spec.name, allocate(spec.record_type))
            logger.trace("Allocated %s for %r", spec.record_type.__qualname__, spec.name)

        if i == last:
            return Slot(owner=cur, spec=spec)

        if not spec.kind.is_record:
            logger.trace("Cannot descend into %s field %r", spec.kind.value, spec.name)
            return None

        child: Any = getattr(cur, spec.name)
        if not is_record_instance(child):
            logger.debug("Field %r holds a non-record %s", spec.name, type(child).__qualname__)
            return None
        cur = child

    return None
