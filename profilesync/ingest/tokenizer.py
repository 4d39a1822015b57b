"""Single-line CSV tokenizer with quoted-segment support."""

from __future__ import annotations

import re
from typing import List


_EDGE_QUOTES = re.compile(r'^"|"\Z')


def _clean(value: str) -> str:
    return _EDGE_QUOTES.sub("", value).strip()


def tokenize_line(line: str) -> List[str]:
    """
    Split one CSV line into field values.

    A double quote toggles the quoted state and is never emitted, so commas
    inside quotes are kept. Doubled quotes are not an escape: ``""`` toggles
    twice and contributes nothing. Always returns at least one field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))

    return [_clean(value) for value in fields]
