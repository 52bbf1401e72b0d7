# topmark:header:start
#
#   project      : EnvCodec
#   file         : encoder.py
#   file_relpath : src/envcodec/encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder: flatten a record into ``KEY=VALUE`` lines.

Public fields are visited depth-first in declaration order. A field's key is
the parent key plus its mapped name; nested records extend the parent key with
``Options.separator`` and emit no line of their own. Every other field emits
exactly one line, sequences included (elements joined with
``Options.slice_separator``). Fields holding ``None`` are omitted.

Lines are separated by ``\\n``; no newline follows the last one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from envcodec.config.logging import get_logger
from envcodec.fields import ensure_record, schema_for
from envcodec.lines import LineWriter
from envcodec.options import resolve_options
from envcodec.scalars import encode_scalar
from envcodec.utils.introspection import is_record_instance

if TYPE_CHECKING:
    from _typeshed import SupportsWrite

    from envcodec.config.logging import EnvCodecLogger
    from envcodec.options import Options

logger: EnvCodecLogger = get_logger(__name__)


class Encoder:
    """Writes the ``KEY=VALUE`` form of records to a text stream.

    Args:
        stream (SupportsWrite[str]): Destination text stream.
        options (Options | None): Codec options; defaults are applied once here.
    """

    def __init__(self, stream: SupportsWrite[str], options: Options | None = None) -> None:
        self._stream: SupportsWrite[str] = stream
        self._options: Options = resolve_options(options)
        self._first: bool = True

    @property
    def options(self) -> Options:
        """The effective (defaulted) options."""
        return self._options

    def encode(self, src: Any) -> None:
        """Write every public leaf of ``src`` to the stream.

        Args:
            src (Any): The record to encode (a dataclass instance).

        Raises:
            InvalidDestinationError: If ``src`` is not a dataclass instance.
            UnsupportedKindError: If a field value has no text form.
        """
        ensure_record(src)
        self._first = True
        self._encode_record(src, self._options.prefix)

    def _encode_record(self, record: Any, prefix: str) -> None:
        opts: Options = self._options
        for spec in schema_for(type(record)).public_fields():
            value: Any = getattr(record, spec.name)
            key: str = prefix + opts.map_name(spec.name)

            if value is None:
                logger.trace("Omitting unset field %r", key)
                continue

            if is_record_instance(value) and not callable(getattr(value, "to_text", None)):
                self._encode_record(value, key + opts.separator)
                continue

            self._emit(key, encode_scalar(value, opts, spec.annotation))

    def _emit(self, key: str, value: str) -> None:
        line: str = f"{key}={value}"
        self._stream.write(line if self._first else "\n" + line)
        self._first = False


def marshal_lines(src: Any, options: Options | None = None) -> list[str]:
    """Return the ``KEY=VALUE`` lines of ``src`` in declaration order."""
    with LineWriter() as writer:
        Encoder(writer, options).encode(src)
    return writer.data()


def marshal(src: Any, options: Options | None = None) -> str:
    """Return the ``.env`` text of ``src`` (lines joined with ``\\n``)."""
    return "\n".join(marshal_lines(src, options))


def encode_string(value: Any, options: Options | None = None) -> str:
    """Return the text form of a single leaf value.

    Raises:
        UnsupportedKindError: If ``value`` has no text form.
    """
    return encode_scalar(value, resolve_options(options))
