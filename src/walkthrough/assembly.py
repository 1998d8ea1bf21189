"""Assemble validated plan and review objects from loosely typed data.

Both assemblers are total: any mapping (or none at all) comes back as a
model satisfying the invariants below, never an exception.

Plan
  - title and description are never blank; placeholders fill the gap
  - techStack, categories and diagnostics are always lists
  - every category has a name, every file entry has a path
FileReview
  - methods is always a list; every method has a name
  - reviewDate is stamped here
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Iterable, Mapping

from walkthrough.json_utils import int_or_zero
from walkthrough.models.file_review import FileReview, MethodEntry
from walkthrough.models.plan import Category, FileEntry, Plan

DEFAULT_TITLE = "Code Review Plan"
DEFAULT_DESCRIPTION = "Generated code review plan for the repository"

INT_RE = re.compile(r"^\s*-?\d+\s*$")


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str) and INT_RE.match(value):
        return int_or_zero(value)
    return 0


def _items(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


def _mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    return None


def _strings(values: Iterable[Any]) -> list[str]:
    return [text for text in (_text(value) for value in values) if text]


def assemble_file_entry(data: Any) -> FileEntry | None:
    entry = _mapping(data)
    if entry is None:
        return None
    path = _text(entry.get("path"))
    if not path.strip():
        return None
    return FileEntry(path=path, reason=_text(entry.get("reason")))


def assemble_category(data: Any) -> Category | None:
    category = _mapping(data)
    if category is None:
        return None
    name = _text(category.get("name"))
    if not name.strip():
        return None
    files = [entry for entry in map(assemble_file_entry, _items(category.get("files"))) if entry is not None]
    return Category(
        name=name,
        priority=_int(category.get("priority")),
        description=_text(category.get("description")),
        files=files,
    )


def assemble_plan(data: Mapping[str, Any] | None, *, diagnostics: Iterable[str] = ()) -> Plan:
    source: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

    title = _text(source.get("title"))
    description = _text(source.get("description"))
    categories = [
        category for category in map(assemble_category, _items(source.get("categories"))) if category is not None
    ]
    pointers = list(dict.fromkeys(_strings(_items(source.get("diagnostics"))) + list(diagnostics)))

    return Plan(
        title=title if title.strip() else DEFAULT_TITLE,
        description=description if description.strip() else DEFAULT_DESCRIPTION,
        tech_stack=_strings(_items(source.get("techStack"))),
        categories=categories,
        diagnostics=pointers,
    )


def assemble_method(data: Any) -> MethodEntry | None:
    method = _mapping(data)
    if method is None:
        return None
    name = _text(method.get("name"))
    if not name.strip():
        return None
    return MethodEntry(name=name, source=_text(method.get("source")))


def assemble_file_review(
    data: Mapping[str, Any] | None,
    file_path: str,
    *,
    reviewed_at: datetime | None = None,
) -> FileReview:
    source: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
    methods = [method for method in map(assemble_method, _items(source.get("methods"))) if method is not None]
    return FileReview(
        file_path=file_path,
        methods=methods,
        review_date=reviewed_at or datetime.now(),
    )
