"""Locate the JSON-shaped part of a model response."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from walkthrough.json_utils import find_balanced_end
from walkthrough.json_utils import iter_unquoted

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)
# What may follow the last '}' of a response cut off mid-object, once strings are skipped.
JSON_TAIL_RE = re.compile(r"[\s,:\[\]{}0-9.eE+\-]*")
JSON_LITERAL_RE = re.compile(r"true|false|null")


@dataclass(frozen=True)
class AnchorKeys:
    """
    Schema keys a plausible candidate must mention.
    Each group in `required` is satisfied by any one of its keys.
    `relocate_key` is searched for when the first candidate looks wrong.
    """

    relocate_key: str
    required: tuple[tuple[str, ...], ...]

    def matches(self, candidate: str) -> bool:
        return all(any(f"\"{key}\"" in candidate for key in group) for group in self.required)


PLAN_ANCHORS = AnchorKeys(
    relocate_key="title",
    required=(("title",), ("description",), ("categories", "components")),
)
REVIEW_ANCHORS = AnchorKeys(relocate_key="methods", required=(("methods",),))


def find_enclosing_open(text: str, pos: int) -> int | None:
    """Scan backward from pos for the nearest `{` not closed before pos."""
    depth = 0
    for i in range(pos - 1, -1, -1):
        ch = text[i]
        if ch == "}":
            depth += 1
        elif ch == "{":
            if depth == 0:
                return i
            depth -= 1
    return None


def locate_json_candidate(text: str, anchors: AnchorKeys = PLAN_ANCHORS) -> str:
    """
    Best-guess JSON substring of text. Never raises; returns text unchanged
    when there is no `{` at all.
    """
    fenced = FENCED_JSON_RE.search(text)
    if fenced is not None:
        content = fenced.group(1).strip()
        if content:
            logger.debug("Found JSON in a fenced code block (%d chars).", len(content))
            return content

    start = text.find("{")
    if start == -1:
        logger.debug("No '{' in response; returning it unchanged.")
        return text

    end = text.rfind("}")
    if end < start:
        # Truncated before any object closed; let the repairer balance it.
        logger.debug("No closing '}' after position %d; using the remainder.", start)
        return text[start:]

    if not anchors.matches(text[start : end + 1]):
        logger.debug("Candidate %d..%d lacks anchor keys; relocating on %r.", start, end, anchors.relocate_key)
        start = _relocate(text, anchors.relocate_key, start, end)

    if _continues_json(text, end + 1) and find_balanced_end(text, start) is None:
        # The object never closes: the response was cut off after the last '}'.
        logger.debug("Object at %d is unterminated; keeping the truncated tail.", start)
        return text[start:].rstrip()
    return text[start : end + 1]


def _relocate(text: str, key: str, start: int, end: int) -> int:
    anchor_pos = text.find(f"\"{key}\"")
    if anchor_pos == -1:
        return start
    new_start = find_enclosing_open(text, anchor_pos)
    if new_start is None or new_start > end:
        return start
    logger.debug("Relocated candidate to start at position %d.", new_start)
    return new_start


def _continues_json(text: str, pos: int) -> bool:
    """True when text[pos:] reads as more JSON rather than trailing prose."""
    if not text[pos:].strip():
        return False
    residue = "".join(ch for _, ch in iter_unquoted(text, pos))
    return JSON_TAIL_RE.fullmatch(JSON_LITERAL_RE.sub("", residue)) is not None
