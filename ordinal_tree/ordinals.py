"""Ordinal prefix codec.

Ordered siblings carry a zero-padded numeric prefix followed by ``_``, e.g.
``0007_notes.md``. Everything after the first underscore is the base name.
"""

from __future__ import annotations

import re
from typing import NamedTuple

ORDINAL_WIDTH = 4
ORDINAL_SEPARATOR = "_"
ORDINAL_NAME_PATTERN = re.compile(r"^\d{4,}_.*$", re.DOTALL)


class ParsedName(NamedTuple):
    """An entry name split into its ordinal and base name."""

    ordinal: int | None
    base: str


def parse_name(name: str) -> ParsedName:
    """Split ``name`` on its first underscore.

    The ordinal is None when there is no underscore or the prefix is not
    purely numeric; the base is then the whole name.
    """
    prefix, sep, rest = name.partition(ORDINAL_SEPARATOR)
    if not sep or not (prefix.isascii() and prefix.isdigit()):
        return ParsedName(None, name)
    return ParsedName(int(prefix), rest)


def format_ordinal(n: int) -> str:
    """Return ``n`` zero-padded to the ordinal width, with the separator."""
    if n < 0:
        raise ValueError(f"Ordinal must be non-negative, got {n}")
    return f"{n:0{ORDINAL_WIDTH}d}{ORDINAL_SEPARATOR}"


def is_ordinal_name(name: str) -> bool:
    return bool(ORDINAL_NAME_PATTERN.match(name))


def ordinal_of(name: str, default: int = 0) -> int:
    ordinal = parse_name(name).ordinal
    return default if ordinal is None else ordinal


def with_ordinal(name: str, n: int) -> str:
    """Replace (or add) the ordinal prefix of ``name``."""
    return format_ordinal(n) + parse_name(name).base
