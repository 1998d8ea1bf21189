"""Structural repairs for almost-JSON candidates."""

from __future__ import annotations

import logging

from walkthrough.json_utils import CLOSERS, iter_unquoted

logger = logging.getLogger(__name__)


def balance_delimiters(text: str) -> str:
    """
    Append the closers a truncated candidate is missing.

    The deficit for each pair is opens minus closes outside string literals,
    computed independently. Closers are emitted innermost-first following the
    still-open nesting; any deficit left over is appended braces then brackets.
    Stray closers are left alone.
    """
    counts = {"{": 0, "}": 0, "[": 0, "]": 0}
    stack: list[str] = []
    for _, ch in iter_unquoted(text):
        if ch not in counts:
            continue
        counts[ch] += 1
        if ch in CLOSERS:
            stack.append(ch)
        elif stack and CLOSERS[stack[-1]] == ch:
            stack.pop()

    deficit = {
        "}": max(counts["{"] - counts["}"], 0),
        "]": max(counts["["] - counts["]"], 0),
    }
    if not deficit["}"] and not deficit["]"]:
        return text

    suffix: list[str] = []
    for opener in reversed(stack):
        closer = CLOSERS[opener]
        if deficit[closer]:
            suffix.append(closer)
            deficit[closer] -= 1
    suffix.append("}" * deficit["}"])
    suffix.append("]" * deficit["]"])
    logger.debug("Balanced candidate by appending %r.", "".join(suffix))
    return text + "".join(suffix)


def remove_trailing_commas(text: str) -> str:
    """Drop commas that only have whitespace between them and a `}` or `]`."""
    drop: set[int] = set()
    for i, ch in iter_unquoted(text):
        if ch != ",":
            continue
        j = i + 1
        while j < len(text) and text[j].isspace():
            j += 1
        if j < len(text) and text[j] in "}]":
            drop.add(i)
    if not drop:
        return text
    return "".join(ch for i, ch in enumerate(text) if i not in drop)


def repair_json(candidate: str, error: str | None = None) -> str:
    """
    Apply the repair passes in order. Each pass is idempotent; the result
    is not guaranteed to parse.
    """
    if error:
        logger.debug("Repairing candidate after parse failure: %s", error)
    return remove_trailing_commas(balance_delimiters(candidate))
