# topmark:header:start
#
#   project      : EnvCodec
#   file         : scalars.py
#   file_relpath : src/envcodec/scalars.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scalar transcoder: leaf values to and from their text form.

Decoding is lenient. Text that does not parse yields the target type's zero
value (``0``, ``0.0``, ``False``); annotations the codec does not understand
yield `NOT_DECODED`, which callers treat as "leave the field unchanged".

Encoding is strict: a value with no text form raises
`envcodec.errors.UnsupportedKindError`, since only values reachable through a
record traversal are ever passed in.
"""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final

from envcodec.config.logging import get_logger
from envcodec.errors import UnsupportedKindError
from envcodec.types import FloatWidth, IntWidth, is_text_unmarshaler
from envcodec.utils.introspection import (
    Unwrapped,
    format_type,
    sequence_info,
    strip_annotated,
    strip_optional,
    unwrap,
)

if TYPE_CHECKING:
    from envcodec.config.logging import EnvCodecLogger
    from envcodec.options import Options

logger: EnvCodecLogger = get_logger(__name__)


class _NotDecoded:
    """Marker for "no decoding rule applies to this annotation"."""

    def __repr__(self) -> str:
        return "NOT_DECODED"


NOT_DECODED: Final[_NotDecoded] = _NotDecoded()

_TRUE_TOKENS: Final[frozenset[str]] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS: Final[frozenset[str]] = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Leading-zero literals ("017") are octal, as in C.
_LEGACY_OCTAL_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?0[0-7_]+\Z")
_HEX_FLOAT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?0[xX]")


# --- Decoding ---


def parse_bool(text: str) -> bool:
    """Parse a conventional boolean token; anything else is False."""
    if text in _TRUE_TOKENS:
        return True
    if text not in _FALSE_TOKENS:
        logger.trace("Not a boolean: %r", text)
    return False


def parse_int(text: str, width: IntWidth | None = None) -> int:
    """Parse an integer literal, honoring ``width`` when given.

    Base prefixes (``0x``, ``0o``, ``0b``, leading-zero octal) and ``_`` digit
    separators are accepted. Out-of-range values clamp to the width's bounds;
    anything unparseable (including a sign on an unsigned width) is ``0``.

    Args:
        text (str): The literal.
        width (IntWidth | None): Target width; None means unbounded.

    Returns:
        int: The parsed value.
    """
    if width is not None and not width.signed and text.startswith(("+", "-")):
        logger.trace("Signed literal %r for unsigned target", text)
        return 0
    try:
        if _LEGACY_OCTAL_RE.match(text):
            value = int(text, 8)
        else:
            value = int(text, 0)
    except ValueError:
        logger.trace("Not an integer: %r", text)
        return 0

    if width is None:
        return value
    if value < width.min_value:
        return width.min_value
    if value > width.max_value:
        return width.max_value
    return value


def to_float32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_float(text: str, width: FloatWidth | None = None) -> float:
    """Parse a floating-point literal; unparseable text is ``0.0``."""
    try:
        value = float(text)
    except ValueError:
        if not _HEX_FLOAT_RE.match(text):
            logger.trace("Not a float: %r", text)
            return 0.0
        try:
            value = float.fromhex(text)
        except ValueError:
            logger.trace("Not a hex float: %r", text)
            return 0.0

    if width is not None and width.bits == 32:
        return to_float32(value)
    return value


def decode_scalar(text: str, annotation: Any, options: Options) -> Any:
    """Decode ``text`` for a field annotated with ``annotation``.

    A ``from_text`` hook on the target class wins over every built-in rule; it
    is looked for before and after each ``Annotated``/``Optional`` layer is
    removed.

    Args:
        text (str): The (already trimmed) value text.
        annotation (Any): The target annotation.
        options (Options): Codec options with defaults applied.

    Returns:
        Any: The decoded value, or `NOT_DECODED` if no rule applies.
    """
    tp: Any = annotation
    metadata: tuple[Any, ...] = ()
    while True:
        if is_text_unmarshaler(tp):
            try:
                return tp.from_text(text)
            except ValueError as exc:
                logger.debug("%s.from_text(%r) failed: %s", format_type(tp), text, exc)
                return NOT_DECODED
        inner, meta = strip_annotated(tp)
        if inner is not tp:
            metadata += meta
            tp = inner
            continue
        inner, was_optional = strip_optional(tp)
        if was_optional:
            tp = inner
            continue
        break

    seq = sequence_info(tp)
    if seq is not None:
        container, element = seq
        return _decode_sequence(text, container, element, options)

    if tp is str:
        return text
    if tp is bool:
        return parse_bool(text)
    if tp is int:
        return parse_int(text, Unwrapped(tp, metadata).find(IntWidth))
    if tp is float:
        return parse_float(text, Unwrapped(tp, metadata).find(FloatWidth))

    logger.trace("No decoding rule for %s", format_type(annotation))
    return NOT_DECODED


def _decode_sequence(text: str, container: type, element: Any, options: Options) -> Any:
    text = text.strip()
    if not text:
        return container()
    items: list[Any] = []
    for part in text.split(options.slice_separator):
        item = decode_scalar(part.strip(), element, options)
        if item is NOT_DECODED:
            return NOT_DECODED
        items.append(item)
    return container(items)


# --- Encoding ---


def format_float(value: float, width: FloatWidth | None = None) -> str:
    """Render a float in its shortest round-trip positional form.

    ``5.4`` -> ``"5.4"``, ``3.0`` -> ``"3"``, ``1e16`` -> ``"10000000000000000"``.
    Infinities and NaN render as ``+Inf``, ``-Inf`` and ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    if width is not None and width.bits == 32:
        single: float = to_float32(value)
        digits: str = repr(single)
        for precision in range(1, 10):
            candidate: str = f"{single:.{precision}g}"
            if to_float32(float(candidate)) == single:
                digits = candidate
                break
    else:
        digits = repr(value)

    text: str = format(Decimal(digits), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode_scalar(value: Any, options: Options, annotation: Any = None) -> str:
    """Render a leaf value as text.

    Args:
        value (Any): The value. Sequences (``list``/``tuple``) are rendered
            element by element and joined with the slice separator.
        options (Options): Codec options with defaults applied.
        annotation (Any): The declared annotation, used to pick up float widths
            and sequence element annotations. Optional.

    Returns:
        str: The text form.

    Raises:
        UnsupportedKindError: If ``value`` has no text form.
    """
    to_text = getattr(value, "to_text", None)
    if callable(to_text):
        return str(to_text())
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value, unwrap(annotation).find(FloatWidth))
    if isinstance(value, (list, tuple)):
        seq = sequence_info(unwrap(annotation).base)
        element: Any = seq[1] if seq is not None else None
        return options.slice_separator.join(encode_scalar(v, options, element) for v in value)

    raise UnsupportedKindError(value)
