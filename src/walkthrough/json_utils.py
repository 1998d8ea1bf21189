"""JSON scanning helpers that tolerate malformed model output.

None of these parse JSON. They walk the raw text, skip over string
literals, and hand back indices or substrings so later stages can
salvage whatever structure survived.
"""

from __future__ import annotations

import json
import re
from typing import Iterator

CLOSERS = {"{": "}", "[": "]"}


def iter_unquoted(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """
    Yield (index, char) for every character outside a string literal.
    Quote characters themselves are not yielded.
    """
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue
        if ch == "\"":
            in_string = True
            continue
        yield i, ch


def find_unquoted(text: str, target: str, start: int = 0) -> int | None:
    for i, ch in iter_unquoted(text, start):
        if ch == target:
            return i
    return None


def find_balanced_end(text: str, start: int) -> int | None:
    """
    Return the index of the delimiter closing the one at `start`, or None
    when the text ends first. Nesting is counted for the same delimiter pair.
    """
    opener = text[start]
    closer = CLOSERS.get(opener)
    if closer is None:
        raise ValueError(f"Expected '{{' or '[' at index {start}, got {opener!r}.")

    depth = 0
    for i, ch in iter_unquoted(text, start):
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return None


def slice_objects(array_text: str) -> list[str]:
    """
    Cut the top-level `{...}` members out of an array without parsing them.
    Nested arrays and objects stay inside their slice verbatim. An object
    left open at the end of the text is returned as the remainder.
    """
    objects: list[str] = []
    pos = 0
    while pos < len(array_text):
        start = find_unquoted(array_text, "{", pos)
        if start is None:
            break
        end = find_balanced_end(array_text, start)
        if end is None:
            objects.append(array_text[start:])
            break
        objects.append(array_text[start : end + 1])
        pos = end + 1
    return objects


def split_quoted_items(inner: str) -> list[str]:
    """
    Split array content on commas outside quotes, then trim and unquote.
    '"C#", "ASP.NET, Core"' -> ['C#', 'ASP.NET, Core']
    """
    raw_items: list[str] = []
    current: list[str] = []
    in_quotes = False
    escape = False
    for ch in inner:
        if escape:
            escape = False
        elif ch == "\\" and in_quotes:
            escape = True
        elif ch == "\"":
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            raw_items.append("".join(current))
            current = []
            continue
        current.append(ch)
    raw_items.append("".join(current))

    items: list[str] = []
    for raw in raw_items:
        item = raw.strip()
        if not item:
            continue
        if len(item) >= 2 and item.startswith("\"") and item.endswith("\""):
            item = unescape_json_string(item[1:-1])
        else:
            item = item.strip("\"").strip()
        if item:
            items.append(item)
    return items


def unescape_json_string(raw: str) -> str:
    try:
        return json.loads(f"\"{raw}\"", strict=False)
    except json.JSONDecodeError:
        # Invalid escape sequence; keep what the model wrote.
        return raw


def _key_pattern(key: str) -> str:
    return rf"\"{re.escape(key)}\"\s*:\s*"


def string_property(text: str, key: str) -> str:
    """First `"key": "value"` anywhere in text, unescaped; "" when absent."""
    match = re.search(_key_pattern(key) + r"\"((?:[^\"\\]|\\.)*)\"", text, re.DOTALL)
    if match is None:
        return ""
    return unescape_json_string(match.group(1))


def number_property(text: str, key: str) -> str:
    """First `"key": 123` anywhere in text as a string; "0" when absent."""
    match = re.search(_key_pattern(key) + r"(-?\d+)", text)
    if match is None:
        return "0"
    return match.group(1)


def int_or_zero(digits: str) -> int:
    """int() for recovered numeric text; 0 when it does not convert."""
    try:
        return int(digits)
    except ValueError:
        # Includes integers past the interpreter's digit limit.
        return 0


def array_span(text: str, key: str) -> str | None:
    """
    Text of the array value for `key`, brackets included. When the closing
    bracket never arrives the remainder of the text is returned.
    """
    match = re.search(_key_pattern(key) + r"\[", text)
    if match is None:
        return None
    start = match.end() - 1
    end = find_balanced_end(text, start)
    if end is None:
        return text[start:]
    return text[start : end + 1]


def string_array(text: str, key: str) -> list[str]:
    span = array_span(text, key)
    if span is None:
        return []
    inner = span[1:-1] if span.endswith("]") else span[1:]
    return split_quoted_items(inner)
