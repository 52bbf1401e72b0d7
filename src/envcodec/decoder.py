# topmark:header:start
#
#   project      : EnvCodec
#   file         : decoder.py
#   file_relpath : src/envcodec/decoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decoder: stream ``KEY=VALUE`` lines into a record.

A `Decoder` consumes one line per `Decoder.decode` call, so callers control
the pace:

```python
decoder = Decoder(open(".env", encoding="utf-8"), Options(prefix="APP__"))
while decoder.more():
    decoder.decode(settings)
```

Each line is split on the first ``=`` (a missing ``=`` means an empty value),
filtered and stripped by ``Options.prefix``, split into path segments on
``Options.separator``, resolved against the record and transcoded into the
target field. Later lines overwrite earlier ones for the same field. Unknown
keys and unparseable values are not errors. Structural problems with the
destination type are, and they are raised before the first line is read.
"""

from __future__ import annotations

import io
import os
from typing import TYPE_CHECKING, Any, Final, cast

from envcodec.config.logging import get_logger
from envcodec.fields import ensure_record
from envcodec.options import resolve_options
from envcodec.resolver import check_record_type, resolve
from envcodec.scalars import NOT_DECODED, decode_scalar

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from envcodec.config.logging import EnvCodecLogger
    from envcodec.options import Options
    from envcodec.resolver import Slot

logger: EnvCodecLogger = get_logger(__name__)

_UNREAD: Final[object] = object()


def strip_line_ending(line: str) -> str:
    """Drop one trailing ``\\n`` or ``\\r\\n`` from ``line``."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class Decoder:
    """Reads ``KEY=VALUE`` lines from a source and stores them in records.

    The decoder reads one line ahead so that `more` turns False as soon as the
    final line has been consumed. Decoding a line from an interactive stream
    therefore waits until the following line (or end of input) is available.

    Args:
        source (Iterable[str]): Ordered lines, with or without line endings
            (a text file object, a list of ``KEY=VALUE`` entries, ...).
        options (Options | None): Codec options; defaults are applied once here.
    """

    def __init__(self, source: Iterable[str], options: Options | None = None) -> None:
        self._lines: Iterator[str] = iter(source)
        self._options: Options = resolve_options(options)
        self._more: bool = True
        self._next: object = _UNREAD

    @property
    def options(self) -> Options:
        """The effective (defaulted) options."""
        return self._options

    def more(self) -> bool:
        """Return False once the final input line has been consumed."""
        return self._more

    def decode(self, dest: Any) -> None:
        """Consume the next line and store its value in ``dest``.

        Args:
            dest (Any): The destination record (a mutable dataclass instance).

        Raises:
            InvalidDestinationError: If ``dest`` is not a mutable dataclass
                instance, or nests a frozen one. No input is consumed in that case.
            RecordAllocationError: If an optional record reachable from ``dest``
                cannot be built without arguments. No input is consumed either.
        """
        ensure_record(dest, mutable=True)
        check_record_type(type(dest))
        line: str | None = self._read_line()
        if line is None:
            return
        self._decode_line(dest, line)

    def _read_line(self) -> str | None:
        if self._next is _UNREAD:
            self._next = next(self._lines, None)
        line = self._next
        self._next = next(self._lines, None) if line is not None else None
        if self._next is None:
            self._more = False
        return None if line is None else strip_line_ending(cast("str", line))

    def _decode_line(self, dest: Any, line: str) -> None:
        opts: Options = self._options
        key, _sep, value = line.partition("=")

        if opts.prefix:
            if not key.startswith(opts.prefix):
                logger.trace("Skipping %r: no prefix %r", key, opts.prefix)
                return
            key = key[len(opts.prefix) :]

        slot: Slot | None = resolve(dest, key.split(opts.separator), opts)
        if slot is None:
            logger.trace("Dropping unknown key %r", key)
            return

        decoded: Any = decode_scalar(value.strip(), slot.spec.annotation, opts)
        if decoded is NOT_DECODED:
            logger.trace("Leaving %r unchanged", key)
            return
        slot.set(decoded)
        logger.trace("Set %s.%s from %r", type(slot.owner).__qualname__, slot.spec.name, key)


def unmarshal_lines(lines: Iterable[str], dest: Any, options: Options | None = None) -> None:
    """Decode every line of ``lines`` into ``dest``.

    Raises:
        InvalidDestinationError: If ``dest`` is not a mutable dataclass instance.
        RecordAllocationError: If an optional record reachable from ``dest``
            cannot be built without arguments.
    """
    ensure_record(dest, mutable=True)
    check_record_type(type(dest))
    decoder = Decoder(lines, options)
    count: int = 0
    while decoder.more():
        decoder.decode(dest)
        count += 1
    logger.debug("Decoded %d line(s) into %s", count, type(dest).__qualname__)


def unmarshal(data: str | bytes, dest: Any, options: Options | None = None) -> None:
    """Decode ``.env``-style text (``str`` or UTF-8 ``bytes``) into ``dest``.

    Raises:
        InvalidDestinationError: If ``dest`` is not a mutable dataclass instance.
    """
    text: str = data.decode("utf-8") if isinstance(data, bytes) else data
    # newline="\n": split on LF only; CRLF endings are stripped per line
    unmarshal_lines(io.StringIO(text, newline="\n"), dest, options)


def unmarshal_env(
    dest: Any,
    options: Options | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Decode the process environment (or ``environ``) into ``dest``.

    Every variable is presented to the decoder as one ``KEY=VALUE`` entry, in
    the mapping's iteration order.

    Raises:
        InvalidDestinationError: If ``dest`` is not a mutable dataclass instance.
    """
    env: Mapping[str, str] = os.environ if environ is None else environ
    unmarshal_lines([f"{k}={v}" for k, v in env.items()], dest, options)


def decode_string(
    text: str,
    target_type: Any,
    options: Options | None = None,
    default: Any = None,
) -> Any:
    """Decode a single value for ``target_type``.

    Args:
        text (str): The value text (not trimmed).
        target_type (Any): Any annotation a record field may carry.
        options (Options | None): Codec options (the slice separator matters).
        default (Any): Returned when no decoding rule applies to ``target_type``.

    Returns:
        Any: The decoded value.
    """
    decoded: Any = decode_scalar(text, target_type, resolve_options(options))
    return default if decoded is NOT_DECODED else decoded
