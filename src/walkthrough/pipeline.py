"""Recovery pipeline: unreliable model text in, validated object out.

Stages, first success wins:

  direct    json.loads of the whole response
  located   json.loads of the best candidate substring
  repaired  json.loads after balancing delimiters and dropping trailing commas
  salvaged  field-by-field recovery from the repaired candidate
  fallback  placeholder object carrying diagnostic pointers

Every path ends in the assemblers, so callers always get a renderable
object. Parse failures never propagate past this module.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from walkthrough.assembly import assemble_file_review, assemble_plan
from walkthrough.diagnostics import DiagnosticSink
from walkthrough.locator import PLAN_ANCHORS, REVIEW_ANCHORS, AnchorKeys, locate_json_candidate
from walkthrough.models.file_review import FileReview
from walkthrough.models.plan import Plan
from walkthrough.repair import repair_json
from walkthrough.salvage import plan_bundle_is_empty, salvage_plan_fields, salvage_review_fields

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecoveryStage(str, Enum):
    DIRECT = "direct"
    LOCATED = "located"
    REPAIRED = "repaired"
    SALVAGED = "salvaged"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RecoveryResult(Generic[T]):
    value: T
    stage: RecoveryStage
    errors: tuple[str, ...] = ()
    diagnostics: tuple[str, ...] = ()  # side files actually written


@dataclass
class _Attempt:
    data: dict[str, Any] | None
    stage: RecoveryStage
    candidate: str
    errors: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)


def parse_json_object(text: str, errors: list[str]) -> dict[str, Any] | None:
    """json.loads that records failures instead of raising; only objects count."""
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        errors.append(str(exc) or type(exc).__name__)
        return None
    if not isinstance(parsed, dict):
        errors.append(f"Expected a JSON object, got {type(parsed).__name__}")
        return None
    return parsed


def _save_diagnostics(sink: DiagnosticSink | None, raw: str, candidate: str) -> list[str]:
    if sink is None:
        return []
    written = [sink.save_raw_response(raw), sink.save_candidate(candidate)]
    return [str(path) for path in written if path is not None]


def _escalate(text: str, anchors: AnchorKeys, sink: DiagnosticSink | None) -> _Attempt:
    errors: list[str] = []

    data = parse_json_object(text.strip(), errors)
    if data is not None:
        return _Attempt(data, RecoveryStage.DIRECT, text, errors)
    logger.debug("Direct parse failed: %s", errors[-1])

    candidate = locate_json_candidate(text, anchors)
    written = _save_diagnostics(sink, text, candidate)
    data = parse_json_object(candidate, errors)
    if data is not None:
        return _Attempt(data, RecoveryStage.LOCATED, candidate, errors, written)
    logger.debug("Parse of located candidate failed: %s", errors[-1])

    repaired = repair_json(candidate, errors[-1])
    if repaired != candidate:
        data = parse_json_object(repaired, errors)
        if data is not None:
            return _Attempt(data, RecoveryStage.REPAIRED, repaired, errors, written)
        logger.debug("Parse of repaired candidate failed: %s", errors[-1])

    return _Attempt(None, RecoveryStage.SALVAGED, repaired, errors, written)


def _pointers(attempt: _Attempt) -> list[str]:
    pointers = list(attempt.written)
    if attempt.errors:
        pointers.append(f"parse error: {attempt.errors[-1]}")
    return pointers


def recover_plan(text: str, *, sink: DiagnosticSink | None = None) -> RecoveryResult[Plan]:
    attempt = _escalate(text, PLAN_ANCHORS, sink)

    if attempt.data is not None:
        plan = assemble_plan(attempt.data)
        stage = attempt.stage
    else:
        bundle = salvage_plan_fields(attempt.candidate)
        if plan_bundle_is_empty(bundle):
            plan = assemble_plan(None, diagnostics=_pointers(attempt))
            stage = RecoveryStage.FALLBACK
        else:
            plan = assemble_plan(bundle, diagnostics=_pointers(attempt))
            stage = RecoveryStage.SALVAGED

    if stage in (RecoveryStage.SALVAGED, RecoveryStage.FALLBACK):
        logger.warning("Plan response could not be parsed; %s result with %d categories.", stage.value, len(plan.categories))
    else:
        logger.debug("Plan recovered at stage %s.", stage.value)
    return RecoveryResult(plan, stage, tuple(attempt.errors), tuple(attempt.written))


def recover_file_review(
    text: str,
    file_path: str,
    *,
    sink: DiagnosticSink | None = None,
    reviewed_at: datetime | None = None,
) -> RecoveryResult[FileReview]:
    attempt = _escalate(text, REVIEW_ANCHORS, sink)

    if attempt.data is not None:
        data = attempt.data
        stage = attempt.stage
    else:
        data = salvage_review_fields(attempt.candidate)
        stage = RecoveryStage.SALVAGED if data["methods"] else RecoveryStage.FALLBACK
        logger.warning("Review response for %s could not be parsed; %s result.", file_path, stage.value)

    review = assemble_file_review(data, file_path, reviewed_at=reviewed_at)
    return RecoveryResult(review, stage, tuple(attempt.errors), tuple(attempt.written))
