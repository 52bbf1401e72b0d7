# topmark:header:start
#
#   project      : EnvCodec
#   file         : introspection.py
#   file_relpath : src/envcodec/utils/introspection.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type annotation introspection helpers for EnvCodec.

These helpers peel ``Annotated[...]`` and ``Optional[...]`` wrappers off field
annotations and recognize the container shapes the codec understands. They
never look at values, only at types.
"""

from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class Unwrapped:
    """An annotation with its ``Annotated`` metadata and ``Optional`` wrapper removed.

    Attributes:
        base (Any): The innermost annotation.
        metadata (tuple[Any, ...]): ``Annotated`` metadata collected on the way in.
        optional (bool): True if at least one ``Optional`` wrapper was removed.
    """

    base: Any
    metadata: tuple[Any, ...] = ()
    optional: bool = False

    def find(self, kind: type) -> Any | None:
        """Return the first metadata item that is an instance of ``kind``."""
        for item in self.metadata:
            if isinstance(item, kind):
                return item
        return None


def strip_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return ``(inner, metadata)`` for ``Annotated[inner, *metadata]``, else ``(tp, ())``."""
    if get_origin(tp) is Annotated:
        return tp.__origin__, tuple(tp.__metadata__)
    return tp, ()


def strip_optional(tp: Any) -> tuple[Any, bool]:
    """Return ``(inner, True)`` for ``inner | None``, else ``(tp, False)``.

    Unions of more than one non-None member are left alone: heterogeneous
    fields are not part of the codec's type model.
    """
    if get_origin(tp) in (Union, types.UnionType):
        args: tuple[Any, ...] = get_args(tp)
        members: list[Any] = [a for a in args if a is not _NONE_TYPE]
        if len(members) == 1 and len(members) < len(args):
            return members[0], True
    return tp, False


def unwrap(tp: Any) -> Unwrapped:
    """Peel every ``Annotated`` and ``Optional`` layer off ``tp``."""
    metadata: tuple[Any, ...] = ()
    optional: bool = False
    while True:
        inner, meta = strip_annotated(tp)
        if inner is not tp:
            metadata += meta
            tp = inner
            continue
        inner, was_optional = strip_optional(tp)
        if was_optional:
            optional = True
            tp = inner
            continue
        return Unwrapped(base=tp, metadata=metadata, optional=optional)


def sequence_info(tp: Any) -> tuple[type, Any] | None:
    """Recognize ``list[T]`` and ``tuple[T, ...]``.

    Returns:
        ``(container, element_annotation)`` or None if ``tp`` is not a
        homogeneous sequence annotation.
    """
    origin = get_origin(tp)
    args: tuple[Any, ...] = get_args(tp)
    if origin is list and len(args) == 1:
        return list, args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, args[0]
    return None


def is_record_type(tp: Any) -> bool:
    """Return True if ``tp`` is a dataclass *class*."""
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def is_record_instance(obj: Any) -> bool:
    """Return True if ``obj`` is a dataclass *instance*."""
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_frozen_record(tp: Any) -> bool:
    """Return True for a frozen dataclass class or instance."""
    params: Any = getattr(tp, "__dataclass_params__", None)
    return params is not None and bool(params.frozen)


def format_type(tp: Any) -> str:
    """Return a short human-friendly name for an annotation (used in log messages)."""
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
