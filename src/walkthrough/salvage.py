"""Field-by-field recovery for responses that will not parse."""

from __future__ import annotations

import logging
from typing import Any

from walkthrough.json_utils import array_span
from walkthrough.json_utils import int_or_zero
from walkthrough.json_utils import number_property
from walkthrough.json_utils import slice_objects
from walkthrough.json_utils import string_array
from walkthrough.json_utils import string_property

logger = logging.getLogger(__name__)


def salvage_plan_fields(text: str) -> dict[str, Any]:
    """
    Rebuild a plan bundle from whatever fields can still be found.
    Pure function of text: the same input always gives the same bundle.
    """
    bundle: dict[str, Any] = {
        "title": string_property(text, "title"),
        "description": string_property(text, "description"),
        "techStack": string_array(text, "techStack"),
        "categories": salvage_categories(text),
    }
    logger.debug(
        "Salvaged plan fields: title=%r, %d tech stack items, %d categories.",
        bundle["title"],
        len(bundle["techStack"]),
        len(bundle["categories"]),
    )
    return bundle


def salvage_categories(text: str) -> list[dict[str, Any]]:
    span = array_span(text, "categories")
    if span is None:
        return []
    categories: list[dict[str, Any]] = []
    for category_text in slice_objects(span):
        name = string_property(category_text, "name")
        if not name:
            logger.debug("Dropping category without a name: %.60r", category_text)
            continue
        categories.append(
            {
                "name": name,
                "priority": int_or_zero(number_property(category_text, "priority")),
                "description": string_property(category_text, "description"),
                "files": salvage_files(category_text),
            }
        )
    return categories


def salvage_files(category_text: str) -> list[dict[str, str]]:
    span = array_span(category_text, "files")
    if span is None:
        return []
    files: list[dict[str, str]] = []
    for file_text in slice_objects(span):
        path = string_property(file_text, "path")
        if not path:
            continue
        files.append({"path": path, "reason": string_property(file_text, "reason")})
    return files


def salvage_review_fields(text: str) -> dict[str, Any]:
    span = array_span(text, "methods")
    methods: list[dict[str, str]] = []
    if span is not None:
        for method_text in slice_objects(span):
            name = string_property(method_text, "name")
            if not name:
                continue
            methods.append({"name": name, "source": string_property(method_text, "source")})
    return {"methods": methods}


def plan_bundle_is_empty(bundle: dict[str, Any]) -> bool:
    return not (bundle["title"] or bundle["description"] or bundle["techStack"] or bundle["categories"])
