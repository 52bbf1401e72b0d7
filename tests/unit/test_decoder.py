# topmark:header:start
#
#   project      : EnvCodec
#   file         : test_decoder.py
#   file_relpath : tests/unit/test_decoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the streaming decoder and the `unmarshal*` helpers."""

from __future__ import annotations

import io
from typing import Any

import pytest

from envcodec.decoder import (
    Decoder,
    strip_line_ending,
    unmarshal,
    unmarshal_env,
    unmarshal_lines,
)
from envcodec.errors import InvalidDestinationError, RecordAllocationError
from envcodec.mapper import underscore_mapper, upper_mapper
from envcodec.options import Options
from envcodec.scalars import to_float32
from tests.conftest import parametrize
from tests.records import (
    Cache,
    Celsius,
    Database,
    Float,
    Frozen,
    HoldsFrozen,
    HoldsNeedsArgs,
    IntWrapper,
    Nested,
    PointerTarget,
    Scalars,
    Settings,
    Simple,
)


def test_decode_single_line() -> None:
    """A plain ``KEY=VALUE`` line sets the matching field."""
    v = Simple()
    unmarshal_lines(["String=string"], v)
    assert v.String == "string"
    assert v._hidden == ""


def test_decode_nested_records() -> None:
    """Nested and optional records are reached through the separator."""
    dest = Nested()
    data = b"""
Inside__X=hello
Inside__Y=something
Inside__y=else
Inside___y=private
Pointer__X=8
Deeper__EvenDeeper__X=true
"""
    unmarshal(data, dest)

    assert dest.Inside.X == "hello"
    assert dest.Inside._y == ""
    assert dest.Pointer == PointerTarget(X=8)
    assert dest.Deeper.EvenDeeper.X is True


def test_decode_prefix_filters_and_strips() -> None:
    """Only prefixed keys are decoded, with the prefix removed first."""
    dest = Simple()
    unmarshal("prefix__String=hello\nString=ignored", dest, Options(prefix="prefix__"))
    assert dest.String == "hello"


def test_decode_prefix_mismatch_is_ignored() -> None:
    """Keys outside the prefix never touch the record."""
    dest = Simple(String="kept")
    unmarshal("OTHER__String=hello", dest, Options(prefix="prefix__"))
    assert dest.String == "kept"


def test_decode_with_mapper() -> None:
    """Keys are matched against policy-mapped field names."""
    dest = Simple()
    unmarshal("string=hello", dest, Options(mapper=underscore_mapper))
    assert dest.String == "hello"


def test_decode_with_custom_separator() -> None:
    """The path separator is configurable."""
    dest = Settings()
    unmarshal("database.port=6543", dest, Options(separator="."))
    assert dest.database.port == 6543


def test_decode_last_write_wins() -> None:
    """Later lines overwrite earlier ones for the same field."""
    dest = Settings()
    unmarshal("workers=2\nworkers=9", dest)
    assert dest.workers == 9


def test_decode_handles_crlf() -> None:
    """CRLF line endings are stripped before parsing."""
    dest = Settings()
    unmarshal("workers=3\r\ndatabase__host=db\r\n", dest)
    assert dest.workers == 3
    assert dest.database.host == "db"


def test_decode_value_is_trimmed_but_key_is_not() -> None:
    """Whitespace around the value is removed; keys must match exactly."""
    dest = Settings()
    unmarshal("workers =  7\ndatabase__host=  db  ", dest)
    assert dest.workers == 4
    assert dest.database.host == "db"


def test_decode_splits_on_first_equals() -> None:
    """Values may contain ``=``."""
    dest = Simple()
    unmarshal("String=a=b=c", dest)
    assert dest.String == "a=b=c"


def test_decode_line_without_equals_sets_empty_value() -> None:
    """A bare key assigns the empty value (zero value for non-strings)."""
    dest = Settings(debug=True, workers=5)
    unmarshal("debug\nworkers", dest)
    assert dest.debug is False
    assert dest.workers == 0


def test_decode_leniency() -> None:
    """Unparseable scalars become zero values; unknown keys are dropped."""
    dest = Settings(workers=5)
    unmarshal("workers=many\nunknown=1\n=x\n\n", dest)
    assert dest.workers == 0
    assert dest == Settings(workers=0)


def test_decode_all_scalar_kinds() -> None:
    """Every scalar kind, sequences and text hooks decode from one document."""
    dest = Scalars(Mapping={"keep": "me"})
    unmarshal(
        "\n".join(
            [
                "Text=hello world",
                "Count=0x10",
                "Small=1000",
                "Byte=-1",
                "Ratio=2.5",
                "Single=5.4",
                "Enabled=T",
                "Numbers=1, 2, 3",
                "Names=a,b",
                "Maybe=7",
                "Wrapped=12",
                "MaybeWrapped=0x0f",
                "Temperature=21.5C",
                "Mapping=a=b",
            ]
        ),
        dest,
    )
    assert dest.Text == "hello world"
    assert dest.Count == 16
    assert dest.Small == 127
    assert dest.Byte == 0
    assert dest.Ratio == 2.5
    assert dest.Single == to_float32(5.4)
    assert dest.Enabled is True
    assert dest.Numbers == [1, 2, 3]
    assert dest.Names == ("a", "b")
    assert dest.Maybe == 7
    assert dest.Wrapped == IntWrapper(12)
    assert dest.MaybeWrapped == IntWrapper(15)
    assert dest.Temperature == Celsius(21.5)
    assert dest.Mapping == {"keep": "me"}


def test_decode_failing_text_hook_leaves_field() -> None:
    """A text hook rejecting its input leaves the previous value in place."""
    dest = Scalars(Temperature=Celsius(3.0))
    unmarshal("Temperature=warm", dest)
    assert dest.Temperature == Celsius(3.0)


def test_decode_final_record_segment_allocates_only() -> None:
    """A key that stops at a nested record assigns nothing but fills an unset slot."""
    dest = Settings()
    unmarshal("database=postgres://x\ncache=on", dest)
    assert dest.database == Database()
    assert dest.cache == Cache()


def test_decode_unbuildable_optional_record_fails_before_any_line() -> None:
    """Structural errors surface before the first line changes the destination."""
    dest = HoldsNeedsArgs()
    with pytest.raises(RecordAllocationError):
        unmarshal("label=applied\nchild__value=1\n", dest)
    assert dest == HoldsNeedsArgs()


def test_decoder_checks_destination_before_reading() -> None:
    """A rejected destination leaves the line source untouched."""
    source = io.StringIO("label=applied\n")
    decoder = Decoder(source)
    with pytest.raises(InvalidDestinationError, match="frozen"):
        decoder.decode(HoldsFrozen())
    assert decoder.more()
    assert source.tell() == 0


def test_decode_environment_mapping() -> None:
    """`unmarshal_env` reads an explicit mapping as ``KEY=VALUE`` entries."""
    dest = Settings()
    environ: dict[str, str] = {
        "APP_DEBUG": "true",
        "APP_DATABASE_HOST": "db.internal",
        "APP_DATABASE_REPLICAS": "r1,r2",
        "APP_CACHE_TTL_SECONDS": "1.5",
        "HOME": "/root",
    }
    unmarshal_env(dest, Options(prefix="APP_", separator="_", mapper=upper_mapper), environ)
    assert dest.debug is True
    assert dest.database.host == "db.internal"
    assert dest.database.replicas == ["r1", "r2"]
    # "_" also splits TTL_SECONDS: the cache record is allocated, its field is not found
    assert dest.cache == Cache()


def test_decode_environment_with_double_underscore() -> None:
    """The default separator keeps snake-case names unambiguous."""
    dest = Settings()
    environ: dict[str, str] = {
        "APP__DEBUG": "1",
        "APP__DATABASE__REPLICAS": "r1,r2",
        "APP__CACHE__TTL_SECONDS": "1.5",
    }
    unmarshal_env(dest, Options(prefix="APP__", mapper=upper_mapper), environ)
    assert dest.debug is True
    assert dest.database.replicas == ["r1", "r2"]
    assert dest.cache is not None and dest.cache.ttl_seconds == 1.5


def test_decode_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit mapping the process environment is used."""
    monkeypatch.setenv("ENVCODEC_TEST__workers", "11")
    dest = Settings()
    unmarshal_env(dest, Options(prefix="ENVCODEC_TEST__"))
    assert dest.workers == 11


@parametrize("dest", [None, 1, "x", Settings, [Settings()], Frozen()])
def test_invalid_destination(dest: Any) -> None:
    """Non-dataclass-instance and frozen destinations are rejected up front."""
    with pytest.raises(InvalidDestinationError):
        unmarshal("value=x", dest)


def test_invalid_destination_consumes_nothing() -> None:
    """A rejected destination does not advance the decoder."""
    decoder = Decoder(["workers=2"])
    with pytest.raises(InvalidDestinationError):
        decoder.decode(object())
    dest = Settings()
    decoder.decode(dest)
    assert dest.workers == 2
    assert decoder.more() is False


def test_decoder_more_protocol() -> None:
    """`more()` turns False once the final line has been consumed."""
    decoder = Decoder(io.StringIO("workers=1\ndebug=true\n"))
    dest = Settings()
    calls: int = 0
    while decoder.more():
        decoder.decode(dest)
        calls += 1
    assert calls == 2
    assert dest.workers == 1
    assert dest.debug is True

    decoder.decode(dest)
    assert decoder.more() is False


def test_decoder_empty_source() -> None:
    """An empty source needs one (no-op) decode call to report exhaustion."""
    decoder = Decoder([])
    assert decoder.more() is True
    dest = Settings()
    decoder.decode(dest)
    assert decoder.more() is False
    assert dest == Settings()


def test_decoder_options_are_defaulted() -> None:
    """The decoder exposes its effective options."""
    decoder = Decoder([], Options(prefix="P_"))
    assert decoder.options.prefix == "P_"
    assert decoder.options.separator == "__"


def test_decoder_records_can_change_between_calls() -> None:
    """Each decode call may target a different record."""
    decoder = Decoder(["workers=1", "workers=2"])
    first, second = Settings(), Settings()
    decoder.decode(first)
    decoder.decode(second)
    assert (first.workers, second.workers) == (1, 2)


@parametrize(
    "line, expected",
    [
        ("a=b\n", "a=b"),
        ("a=b\r\n", "a=b"),
        ("a=b", "a=b"),
        ("a=b\r", "a=b\r"),
        ("a=b\n\n", "a=b\n"),
    ],
)
def test_strip_line_ending(line: str, expected: str) -> None:
    """Exactly one LF or CRLF terminator is removed."""
    assert strip_line_ending(line) == expected


def test_unmarshal_rejects_invalid_utf8() -> None:
    """Byte input must be UTF-8."""
    with pytest.raises(UnicodeDecodeError):
        unmarshal(b"String=\xff", Simple())


def test_float32_field_from_text_document() -> None:
    """Width annotations are honoured for fields declared with the aliases."""
    dest = Float()
    unmarshal("Float32=5.4", dest)
    assert dest.Float32 == to_float32(5.4)
