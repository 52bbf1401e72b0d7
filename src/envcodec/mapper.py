# topmark:header:start
#
#   project      : EnvCodec
#   file         : mapper.py
#   file_relpath : src/envcodec/mapper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Naming policies: map a record field name to its external key fragment.

A naming policy is any pure ``Callable[[str], str]``. Three are provided:

- `identity_mapper`: the field name is the key fragment.
- `underscore_mapper`: ``CamelCase`` / ``mixedCase`` names become
  ``lower_snake_case``, keeping acronym runs together
  (``ONETwo`` -> ``one_two``).
- `upper_mapper`: `underscore_mapper` followed by upper-casing, the usual
  shape of environment variable names for snake_case dataclass fields.

`MAPPERS` names them for configuration files and the CLI.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Final

# A naming policy maps a field name to its external key fragment.
NamingPolicy = Callable[[str], str]


def identity_mapper(name: str) -> str:
    """Return ``name`` unchanged."""
    return name


def underscore_mapper(name: str) -> str:
    """Convert a camel-case identifier to its lower snake-case counterpart.

    The scan keeps the last two consumed characters. An uppercase character
    after a lowercase one starts a new segment; a non-uppercase character after
    two uppercase ones splits off the last buffered character, which starts the
    next word (``IDFoo`` -> ``id_foo``).

    Args:
        name (str): The identifier to convert.

    Returns:
        str: The converted identifier, e.g. ``oneTWO`` -> ``one_two``.
    """
    parts: list[str] = []
    cur: list[str] = []
    prev2: str = ""
    prev1: str = ""

    for c in name:
        if c.isupper():
            if prev1 and prev1.islower():
                parts.append("".join(cur))
                cur = []
            cur.append(c.lower())
        else:
            if prev2 and prev1 and prev2.isupper() and prev1.isupper():
                parts.append("".join(cur[:-1]))
                cur = cur[-1:]
            cur.append(c)

        prev2, prev1 = prev1, c

    if cur:
        parts.append("".join(cur))

    return "_".join(parts)


def upper_mapper(name: str) -> str:
    """Convert a field name to an upper snake-case environment key.

    ``database_url`` -> ``DATABASE_URL``, ``maxConns`` -> ``MAX_CONNS``.
    """
    return underscore_mapper(name).upper()


MAPPERS: Final[Mapping[str, NamingPolicy]] = {
    "identity": identity_mapper,
    "underscore": underscore_mapper,
    "upper": upper_mapper,
}


def resolve_mapper(name: str) -> NamingPolicy:
    """Look up a naming policy by its configuration name.

    Args:
        name (str): One of the keys of `MAPPERS` (case-insensitive).

    Returns:
        NamingPolicy: The naming policy.

    Raises:
        KeyError: If ``name`` is not a known policy.
    """
    key: str = name.strip().lower()
    if key not in MAPPERS:
        raise KeyError(f"Unknown mapper {name!r}. Must be one of: {', '.join(MAPPERS)}")
    return MAPPERS[key]
