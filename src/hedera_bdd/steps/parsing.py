"""Step text parsers shared by the step definition modules."""

from __future__ import annotations

import parse
from pytest_bdd import parsers

ORDINALS: dict[str, int] = {"first": 0, "second": 1, "third": 2, "fourth": 3}


@parse.with_pattern(r"first|second|third|fourth")
def parse_ordinal(text: str) -> str:
    return text.lower()


_EXTRA_TYPES = {"Ordinal": parse_ordinal}


def step(text: str) -> parsers.parse:
    """Build a case-insensitive step parser that understands ``{x:Ordinal}``."""
    return parsers.parse(text, extra_types=_EXTRA_TYPES)
