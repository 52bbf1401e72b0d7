# topmark:header:start
#
#   project      : EnvCodec
#   file         : targets.py
#   file_relpath : src/envcodec/cli/targets.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve ``module:Class`` references to record classes and instances."""

from __future__ import annotations

import importlib
from typing import Any

from envcodec.cli.errors import EnvCodecUsageError
from envcodec.config.logging import get_logger
from envcodec.errors import EnvCodecError, RecordAllocationError
from envcodec.resolver import allocate, check_record_type
from envcodec.utils.introspection import is_frozen_record, is_record_type

logger = get_logger(__name__)


def load_record_type(target: str) -> type:
    """Import the dataclass named by ``target`` (``package.module:Class``).

    Nested classes may be addressed with dots after the colon
    (``package.module:Outer.Inner``).

    Raises:
        EnvCodecUsageError: If the reference is malformed, cannot be imported,
            or does not name a dataclass.
    """
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise EnvCodecUsageError(f"Invalid target {target!r}: expected 'module:Class'.")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise EnvCodecUsageError(f"Cannot import module {module_name!r}: {exc}") from exc

    for attr in qualname.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise EnvCodecUsageError(f"{module_name!r} has no attribute {qualname!r}") from exc

    if not is_record_type(obj):
        raise EnvCodecUsageError(f"Target {target!r} is not a dataclass.")
    logger.debug("Loaded record type %s", target)
    return obj


def new_record(record_type: type) -> Any:
    """Instantiate ``record_type`` with its defaults.

    Raises:
        EnvCodecUsageError: If the class needs constructor arguments.
    """
    try:
        return allocate(record_type)
    except RecordAllocationError as exc:
        raise EnvCodecUsageError(str(exc)) from exc


def new_decodable_record(record_type: type) -> Any:
    """Instantiate ``record_type`` after checking that values can be decoded into it.

    Raises:
        EnvCodecUsageError: If the class is frozen, needs constructor arguments,
            or holds a nested record the decoder could not fill.
    """
    if is_frozen_record(record_type):
        raise EnvCodecUsageError(f"Cannot decode into frozen dataclass {record_type.__qualname__}.")
    try:
        check_record_type(record_type)
    except EnvCodecError as exc:
        raise EnvCodecUsageError(str(exc)) from exc
    return new_record(record_type)
